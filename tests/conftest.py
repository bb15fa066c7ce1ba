"""Test configuration and fixtures."""

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from portfolio_admin.api import app
from portfolio_admin.auth import create_access_token
from portfolio_admin.content.artwork import Artwork, ArtworkCreate
from portfolio_admin.content.services import ArtworkService
from portfolio_admin.db import Base, get_db
from portfolio_admin.db.base import create_db_engine
from portfolio_admin.storage import FileObjectStore, get_object_store


@pytest.fixture
def engine():
    """Fresh in-memory database shared by every session of one test."""
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(tmp_path) -> FileObjectStore:
    return FileObjectStore(
        tmp_path / "storage", public_base_url="https://cdn.example.test/storage"
    )


@pytest.fixture
def client(session_factory, store) -> Generator[TestClient, None, None]:
    """API client wired to the test database and storage."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_object_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict:
    token = create_access_token("user-1", email="artist@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_artwork(db_session) -> Callable[..., Artwork]:
    """Create an artwork through the service; keyword args are ArtworkCreate fields."""
    service = ArtworkService(db_session)

    def _make(**fields) -> Artwork:
        return service.create_artwork(ArtworkCreate(**fields), actor_id="fixture")

    return _make
