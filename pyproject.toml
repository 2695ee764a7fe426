[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "libraryhub"
version = "0.1.0"
description = "Library management services (users, authors, books, categories) behind a JSON HTTP gateway with token authentication"
requires-python = ">=3.10"
keywords = ["library", "books", "borrowing", "flask", "jwt", "sqlite", "api-gateway"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]
dependencies = [
    "flask>=2.2",
    "pyjwt>=2.4",
    "bcrypt>=4.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
libraryhub = "libraryhub.gateway:main"

[tool.hatch.build.targets.wheel]
packages = ["libraryhub"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
