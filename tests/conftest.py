"""Shared fixtures: in-memory SQLite database, session and API client."""

from datetime import date, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401  registers tables on Base.metadata
from database import Base, create_db_engine, get_db
from core.catalog_manager import CatalogManager


@pytest.fixture
def engine():
    db_engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=db_engine)
    yield db_engine
    Base.metadata.drop_all(bind=db_engine)
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def file_engine(tmp_path):
    """File-backed SQLite; each connection gives up on a held write lock after 0.2s."""
    db_engine = create_db_engine(
        f"sqlite:///{tmp_path / 'tournament.db'}",
        connect_args={"timeout": 0.2}
    )
    Base.metadata.create_all(bind=db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def file_session_factory(file_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=file_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================================
# Catalog builders
# ============================================================================

@pytest.fixture
def venues(db):
    """Six venues so ids 2 and 6 exist, matching the Boxing scenario."""
    return [
        CatalogManager.create_venue(db, f"Venue {i}", f"City {i}", 1000 * i)
        for i in range(1, 7)
    ]


@pytest.fixture
def boxing(db, venues):
    """Boxing on 2026-03-11 15:00 at venue 2, with its derived schedule."""
    return CatalogManager.create_event(db, "Boxing", date(2026, 3, 11), time(15, 0), venues[1].id)


@pytest.fixture
def adult(db):
    return CatalogManager.create_participant(db, "Sara Ahmed", "Pakistan", 19, "Female")


@pytest.fixture
def minor(db):
    return CatalogManager.create_participant(db, "Young Runner", "Japan", 15, "Male")
