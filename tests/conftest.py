"""
Pytest configuration for Clipshare tests
"""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from clipshare.core.config import Settings
from clipshare.core.database import Base, create_db_engine, create_session_factory
from clipshare.main import create_app
from clipshare.models import user, video  # noqa: F401  registers the tables on Base

# Small ceiling so size-limit tests stay fast
TEST_MAX_UPLOAD_BYTES = 64 * 1024


@pytest.fixture
def temp_dir():
    """Temporary directory for test outputs"""
    with tempfile.TemporaryDirectory() as tmpdirname:
        yield Path(tmpdirname)


@pytest.fixture
def settings(temp_dir):
    return Settings(
        database_url=f"sqlite:///{temp_dir / 'test.db'}",
        upload_dir=str(temp_dir / "uploads"),
        max_upload_bytes=TEST_MAX_UPLOAD_BYTES,
        upload_chunk_size=4096,
        bcrypt_rounds=4,
    )


@pytest.fixture
def engine(settings):
    """Engine over a fresh SQLite file with the users and videos tables"""
    engine = create_db_engine(settings)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def app(settings, engine):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client with startup (catalog load) and shutdown run"""
    with TestClient(app) as client:
        yield client
