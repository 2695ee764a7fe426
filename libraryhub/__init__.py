"""Library-management services on SQLite and a Flask JSON gateway in front of them."""

__version__ = "0.1.0"