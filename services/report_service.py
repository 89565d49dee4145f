"""
Tournament report service.

Read-only views joining the live schedule, the catalog and the results
so the API layer can return flat rows without touching the ORM graph.
"""
from datetime import date
from typing import List, Dict, Any, Optional

from sqlalchemy.orm import Session

from models import Event, EventParticipant, Participant, Schedule, ScheduleChange, Venue
from core.audit_logger import AuditLogger
from core.result_recorder import ResultRecorder
from core.schedule_manager import ScheduleManager


def _ranking_order():
    # NULL rankings sort last
    return (EventParticipant.ranking.is_(None), EventParticipant.ranking)


def list_schedule(db: Session, on_date: Optional[date] = None) -> List[Dict[str, Any]]:
    """
    Return the live schedule joined with its event and venue, ordered by
    date then time. When `on_date` is given only that day is returned.
    """
    query = (
        db.query(Schedule, Event, Venue)
        .join(Event, Schedule.event_id == Event.id)
        .join(Venue, Schedule.venue_id == Venue.id)
    )
    if on_date is not None:
        query = query.filter(Schedule.scheduled_date == on_date)

    rows = query.order_by(
        Schedule.scheduled_date, Schedule.scheduled_time, Schedule.id
    ).all()

    return [
        {
            "schedule_id": schedule.id,
            "event_id": event.id,
            "sport_type": event.sport_type,
            "scheduled_date": schedule.scheduled_date,
            "scheduled_time": schedule.scheduled_time,
            "venue_id": venue.id,
            "venue_name": venue.name,
            "venue_location": venue.location,
            "venue_capacity": venue.capacity,
        }
        for schedule, event, venue in rows
    ]


def list_participants_by_nationality(db: Session, nationality: str) -> List[Participant]:
    return (
        db.query(Participant)
        .filter(Participant.nationality == nationality)
        .order_by(Participant.id)
        .all()
    )


def list_event_results(db: Session, event_id: int) -> List[Dict[str, Any]]:
    """
    Results of one event with participant details, best ranking first.
    Raises EventNotFound for an unknown event.
    """
    entries = ResultRecorder.results_for_event(db, event_id)
    return [
        {
            "participant_id": entry.participant_id,
            "participant_name": entry.participant.name,
            "nationality": entry.participant.nationality,
            "score": entry.score,
            "ranking": entry.ranking,
        }
        for entry in entries
    ]


def list_standings_by_sport(db: Session, sport_type: str) -> List[Dict[str, Any]]:
    rows = (
        db.query(EventParticipant, Participant, Event)
        .join(Participant, EventParticipant.participant_id == Participant.id)
        .join(Event, EventParticipant.event_id == Event.id)
        .filter(Event.sport_type == sport_type)
        .order_by(*_ranking_order(), Event.id, Participant.id)
        .all()
    )

    return [
        {
            "event_id": event.id,
            "participant_id": participant.id,
            "participant_name": participant.name,
            "nationality": participant.nationality,
            "score": entry.score,
            "ranking": entry.ranking,
            "sport_type": event.sport_type,
            "event_date": event.event_date,
        }
        for entry, participant, event in rows
    ]


def results_report(db: Session) -> List[Dict[str, Any]]:
    """
    Every result of the tournament, grouped by event and ordered by
    ranking inside each event.
    """
    rows = (
        db.query(EventParticipant, Participant, Event)
        .join(Participant, EventParticipant.participant_id == Participant.id)
        .join(Event, EventParticipant.event_id == Event.id)
        .order_by(Event.id, *_ranking_order(), Participant.id)
        .all()
    )

    return [
        {
            "event_id": event.id,
            "sport_type": event.sport_type,
            "event_date": event.event_date,
            "participant_id": participant.id,
            "participant_name": participant.name,
            "nationality": participant.nationality,
            "gender": participant.gender,
            "score": entry.score,
            "ranking": entry.ranking,
        }
        for entry, participant, event in rows
    ]


def list_schedule_history(db: Session, schedule_id: int) -> List[ScheduleChange]:
    """
    Change log of a schedule in the order the updates happened.
    Raises ScheduleNotFound for an unknown schedule.
    """
    ScheduleManager.get_schedule(db, schedule_id)
    return AuditLogger.history_for_schedule(db, schedule_id)
