"""
資料模型（SQLAlchemy ORM）

Catalog：Venue / Participant / Event（原始規劃，建立後不再修改）
Schedule：每場賽事一筆「有效賽程」，改期只改這裡
ScheduleChange：賽程變更紀錄，只能新增
EventParticipant：選手報名與成績（event_id, participant_id 複合主鍵）
"""
import enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Time,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database import Base


class Gender(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class Venue(Base):
    __tablename__ = "venues"
    __table_args__ = (
        CheckConstraint("capacity >= 0", name="check_venue_capacity_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    location = Column(String(150), nullable=False)
    capacity = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, name={self.name})>"


class Participant(Base):
    __tablename__ = "participants"
    __table_args__ = (
        CheckConstraint("age >= 1", name="check_participant_age_positive"),
        Index("idx_nationality", "nationality"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    nationality = Column(String(60), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(
        SAEnum(Gender, name="gender", values_callable=lambda e: [m.value for m in e]),
        nullable=False
    )

    enrollments = relationship("EventParticipant", back_populates="participant")

    def __repr__(self) -> str:
        return f"<Participant(id={self.id}, name={self.name}, age={self.age})>"


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        Index("idx_event_date", "event_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    sport_type = Column(String(80), nullable=False)
    event_date = Column(Date, nullable=False)
    event_time = Column(Time, nullable=False)
    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False)

    venue = relationship("Venue")
    schedule = relationship("Schedule", back_populates="event", uselist=False)
    entries = relationship("EventParticipant", back_populates="event")

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, sport_type={self.sport_type}, date={self.event_date})>"


class Schedule(Base):
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique：每場賽事只有一筆有效賽程
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, unique=True, index=True)
    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False)
    scheduled_date = Column(Date, nullable=False)
    scheduled_time = Column(Time, nullable=False)

    event = relationship("Event", back_populates="schedule")
    venue = relationship("Venue")
    changes = relationship(
        "ScheduleChange",
        back_populates="schedule",
        order_by="ScheduleChange.id"
    )

    def __repr__(self) -> str:
        return (
            f"<Schedule(id={self.id}, event_id={self.event_id}, "
            f"{self.scheduled_date} {self.scheduled_time} @ venue {self.venue_id})>"
        )


class ScheduleChange(Base):
    __tablename__ = "schedule_changes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    schedule_id = Column(Integer, ForeignKey("schedules.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False)
    old_date = Column(Date)
    new_date = Column(Date)
    old_time = Column(Time)
    new_time = Column(Time)
    old_venue_id = Column(Integer, ForeignKey("venues.id"))
    new_venue_id = Column(Integer, ForeignKey("venues.id"))
    changed_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    schedule = relationship("Schedule", back_populates="changes")


class EventParticipant(Base):
    __tablename__ = "event_participants"

    event_id = Column(Integer, ForeignKey("events.id"), primary_key=True)
    participant_id = Column(Integer, ForeignKey("participants.id"), primary_key=True)
    score = Column(Numeric(7, 2), nullable=True)  # 團體賽或尚未計分時為 NULL
    ranking = Column(Integer, nullable=True)

    event = relationship("Event", back_populates="entries")
    participant = relationship("Participant", back_populates="enrollments")
