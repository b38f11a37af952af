# File: tests/conftest.py

import os
import sys

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# 1. Add project root to path
sys.path.append(os.getcwd())
# 2. Make the shared test doubles importable as `fakes`
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from subextract.core.database.base import Base
from fakes import FakeStreamExtractor, InMemoryMetadataStore


@pytest.fixture
def fake_extractor():
    return FakeStreamExtractor()


@pytest.fixture
def memory_store():
    return InMemoryMetadataStore()


@pytest.fixture(scope="function")
def session_factory(tmp_path):
    """
    Fresh SQLite database per test. File-backed so worker threads get their own connections.
    """
    import subextract.features.metadata_link.data.sql_models  # noqa: F401

    engine = create_engine(
        f"sqlite:///{tmp_path / 'metadata.db'}",
        connect_args={"check_same_thread": False, "timeout": 30}
    )
    Base.metadata.create_all(bind=engine)

    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.drop_all(bind=engine)
    engine.dispose()
