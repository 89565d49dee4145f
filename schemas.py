"""
API Request / Response 格式（Pydantic）

年齡、性別、容量的規則不放在這裡，交給 eligibility_service 統一檢查，
讓 API 與直接呼叫 Manager 得到相同的錯誤。
"""
from datetime import date, time, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from models import Gender


# ============ Venue ============

class VenueCreate(BaseModel):
    name: str
    location: str
    capacity: int


class VenueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    location: str
    capacity: int


# ============ Participant ============

class ParticipantCreate(BaseModel):
    name: str
    nationality: str
    age: int
    gender: str


class ParticipantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    nationality: str
    age: int
    gender: Gender


# ============ Event / Schedule ============

class EventCreate(BaseModel):
    sport_type: str
    event_date: date
    event_time: time
    venue_id: int


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sport_type: str
    event_date: date
    event_time: time
    venue_id: int


class ScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    venue_id: int
    scheduled_date: date
    scheduled_time: time


class EventCreatedResponse(BaseModel):
    event: EventResponse
    schedule: ScheduleResponse


class RescheduleRequest(BaseModel):
    scheduled_date: date
    scheduled_time: time
    venue_id: int


class ScheduleListItem(BaseModel):
    schedule_id: int
    event_id: int
    sport_type: str
    scheduled_date: date
    scheduled_time: time
    venue_id: int
    venue_name: str
    venue_location: str
    venue_capacity: int


class ScheduleChangeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    schedule_id: int
    event_id: int
    old_date: Optional[date]
    new_date: Optional[date]
    old_time: Optional[time]
    new_time: Optional[time]
    old_venue_id: Optional[int]
    new_venue_id: Optional[int]
    changed_at: datetime


# ============ Enrollment / Result ============

class EnrollmentRequest(BaseModel):
    participant_id: int


class ResultSubmit(BaseModel):
    score: Optional[Decimal] = None
    ranking: Optional[int] = None


class EntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_id: int
    participant_id: int
    score: Optional[Decimal]
    ranking: Optional[int]


class EventResultItem(BaseModel):
    participant_id: int
    participant_name: str
    nationality: str
    score: Optional[Decimal]
    ranking: Optional[int]


class StandingItem(EventResultItem):
    event_id: int
    sport_type: str
    event_date: date


class ReportItem(StandingItem):
    gender: Gender


class EventResultsResponse(BaseModel):
    event_id: int
    results: List[EventResultItem]
