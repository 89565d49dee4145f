"""Tests for the transactional decorator, engine setup and settings."""

import pytest
from sqlalchemy.exc import OperationalError

from models import EventParticipant, Venue
from database import Settings, transactional
from core.exceptions import ConstraintViolation


@transactional
def _add_venue(db, name):
    venue = Venue(name=name, location="Somewhere", capacity=10)
    db.add(venue)
    db.flush()
    return venue


@transactional
def _add_venue_then_fail(db):
    db.add(Venue(name="Ghost", location="Nowhere", capacity=10))
    db.flush()
    raise RuntimeError("second step failed")


@transactional
def _insert_dangling_entry(db):
    db.add(EventParticipant(event_id=999, participant_id=999))
    db.flush()


def test_transactional_commits(db, session_factory):
    _add_venue(db, "Arena")

    other = session_factory()
    try:
        assert other.query(Venue).filter(Venue.name == "Arena").count() == 1
    finally:
        other.close()


def test_transactional_accepts_keyword_session(db):
    _add_venue(db=db, name="Keyword Arena")

    assert db.query(Venue).count() == 1


def test_transactional_rolls_back_on_failure(db):
    with pytest.raises(RuntimeError):
        _add_venue_then_fail(db)

    assert db.query(Venue).count() == 0


def test_transactional_requires_session():
    with pytest.raises(ValueError):
        _add_venue("not a session", "Arena")


def test_foreign_keys_enforced_and_translated(db):
    with pytest.raises(ConstraintViolation):
        _insert_dangling_entry(db)

    assert db.query(EventParticipant).count() == 0


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.min_participant_age == 1
    assert settings.min_event_age == 16
    assert settings.seed_sample_data is False


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("MIN_EVENT_AGE", "18")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")

    settings = Settings(_env_file=None)

    assert settings.min_event_age == 18
    assert settings.database_url == "sqlite:///./other.db"


def test_file_engine_serializes_transactions(file_engine):
    with file_engine.begin() as first:
        first.exec_driver_sql("SELECT 1")

        with pytest.raises(OperationalError):
            with file_engine.connect() as second:
                second.exec_driver_sql("SELECT 1")


def test_file_engine_enforces_foreign_keys(file_session_factory):
    session = file_session_factory()
    try:
        with pytest.raises(ConstraintViolation):
            _insert_dangling_entry(session)
    finally:
        session.close()
