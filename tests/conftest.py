"""Shared pytest fixtures for ograph tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from ograph.infrastructure.database.engine import create_db_engine, create_schema
from ograph.infrastructure.repositories.graph import GraphRepository
from ograph.services.graph import ObjectGraph


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    """URL of a file-backed SQLite database private to the test."""
    return f"sqlite:///{tmp_path / 'ograph.db'}"


@pytest.fixture
def db_engine(db_url: str) -> Iterator[Engine]:
    """Engine with all tables created."""
    engine = create_db_engine(db_url)
    create_schema(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def repo(db_engine: Engine) -> Iterator[GraphRepository]:
    """Repository on a freshly created, empty schema."""
    r = GraphRepository(db_engine)
    r.drop()
    try:
        yield r
    finally:
        r.close()


@pytest.fixture
def graph(repo: GraphRepository) -> ObjectGraph:
    """Object graph façade bound to ``repo``."""
    return ObjectGraph(repo)
