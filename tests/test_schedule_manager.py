"""Tests for schedule derivation on event creation and rescheduling."""

from datetime import date, time

import pytest

from models import Event, Schedule, ScheduleChange
from core.catalog_manager import CatalogManager
from core.schedule_manager import ScheduleManager
from core.exceptions import (
    EventNotFound,
    NotFoundError,
    ConstraintViolation,
    ScheduleAlreadyExists,
    ScheduleNotFound,
    UnknownReference,
)


def test_create_event_derives_matching_schedule(db, boxing, venues):
    event, schedule = boxing

    rows = db.query(Schedule).filter(Schedule.event_id == event.id).all()
    assert len(rows) == 1
    assert rows[0].id == schedule.id
    assert rows[0].scheduled_date == date(2026, 3, 11)
    assert rows[0].scheduled_time == time(15, 0)
    assert rows[0].venue_id == venues[1].id


def test_every_event_gets_exactly_one_schedule(db, venues):
    for day in range(10, 15):
        CatalogManager.create_event(db, "Swimming", date(2026, 3, day), time(9, 0), venues[0].id)

    assert db.query(Event).count() == 5
    assert db.query(Schedule).count() == 5
    event_ids = {e.id for e in db.query(Event).all()}
    assert {s.event_id for s in db.query(Schedule).all()} == event_ids


def test_create_event_unknown_venue_leaves_no_rows(db, venues):
    with pytest.raises(UnknownReference):
        CatalogManager.create_event(db, "Boxing", date(2026, 3, 11), time(15, 0), 999)

    assert db.query(Event).count() == 0
    assert db.query(Schedule).count() == 0


def test_create_event_rolls_back_when_derivation_fails(db, venues, monkeypatch):
    def broken_derive(db, event):
        raise RuntimeError("schedule store unavailable")

    monkeypatch.setattr(ScheduleManager, "derive_schedule_for_new_event", broken_derive)

    with pytest.raises(RuntimeError):
        CatalogManager.create_event(db, "Boxing", date(2026, 3, 11), time(15, 0), venues[1].id)

    assert db.query(Event).count() == 0
    assert db.query(Schedule).count() == 0


def test_deriving_twice_for_same_event_is_rejected(db, boxing):
    event, _ = boxing

    with pytest.raises(ScheduleAlreadyExists) as exc_info:
        ScheduleManager.derive_schedule_for_new_event(db, event)
    db.rollback()

    assert isinstance(exc_info.value, ConstraintViolation)
    assert db.query(Schedule).filter(Schedule.event_id == event.id).count() == 1


def test_boxing_reschedule_scenario(db, boxing, venues):
    event, schedule = boxing

    updated = ScheduleManager.reschedule(
        db, schedule.id, date(2026, 3, 15), time(17, 0), venues[5].id
    )

    assert updated.scheduled_date == date(2026, 3, 15)
    assert updated.scheduled_time == time(17, 0)
    assert updated.venue_id == venues[5].id

    # Event keeps its original plan
    original = db.query(Event).filter(Event.id == event.id).one()
    assert original.event_date == date(2026, 3, 11)
    assert original.event_time == time(15, 0)
    assert original.venue_id == venues[1].id

    changes = db.query(ScheduleChange).all()
    assert len(changes) == 1
    change = changes[0]
    assert change.schedule_id == schedule.id
    assert change.event_id == event.id
    assert (change.old_date, change.old_time, change.old_venue_id) == (
        date(2026, 3, 11), time(15, 0), venues[1].id
    )
    assert (change.new_date, change.new_time, change.new_venue_id) == (
        date(2026, 3, 15), time(17, 0), venues[5].id
    )
    assert change.changed_at is not None


def test_reschedule_unknown_schedule_is_not_found(db, venues):
    with pytest.raises(ScheduleNotFound) as exc_info:
        ScheduleManager.reschedule(db, 404, date(2026, 3, 15), time(17, 0), venues[0].id)

    assert isinstance(exc_info.value, NotFoundError)
    assert db.query(ScheduleChange).count() == 0


def test_reschedule_unknown_venue_is_rejected_without_changes(db, boxing, venues):
    _, schedule = boxing

    with pytest.raises(UnknownReference):
        ScheduleManager.reschedule(db, schedule.id, date(2026, 3, 15), time(17, 0), 999)

    current = db.query(Schedule).filter(Schedule.id == schedule.id).one()
    assert current.scheduled_date == date(2026, 3, 11)
    assert current.venue_id == venues[1].id
    assert db.query(ScheduleChange).count() == 0


def test_reschedule_event_by_event_id(db, boxing, venues):
    event, schedule = boxing

    updated = ScheduleManager.reschedule_event(
        db, event.id, date(2026, 3, 16), time(12, 0), venues[2].id
    )

    assert updated.id == schedule.id
    assert ScheduleManager.get_schedule_for_event(db, event.id).scheduled_date == date(2026, 3, 16)


def test_reschedule_event_unknown_event(db, venues):
    with pytest.raises(EventNotFound):
        ScheduleManager.reschedule_event(db, 77, date(2026, 3, 16), time(12, 0), venues[0].id)


def test_get_schedule_unknown_raises(db):
    with pytest.raises(ScheduleNotFound):
        ScheduleManager.get_schedule(db, 1)
