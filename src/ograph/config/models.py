"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ograph.toml only contains
overrides. A fresh project needs no file at all and gets a SQLite
database in the working directory.
"""

from __future__ import annotations

from pydantic import BaseModel

DEFAULT_DATABASE_URL = "sqlite:///ograph.db"


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    url: str = DEFAULT_DATABASE_URL
    echo: bool = False


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    json_lines: bool = False
