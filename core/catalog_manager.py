"""
Catalog Manager：場館、選手、賽事的建立與查詢

職責：
1. 建立 Venue（檢查容量）
2. 建立 Participant（檢查年齡、性別）
3. 建立 Event，並在同一個 transaction 內產生有效賽程
4. 查詢 Venue / Participant / Event

Catalog 資料建立後不提供修改與刪除。
"""
from datetime import date, time
from typing import List, Tuple
import logging

from sqlalchemy.orm import Session

from models import Venue, Participant, Event, Schedule
from core.schedule_manager import ScheduleManager
from core.exceptions import (
    VenueNotFound,
    ParticipantNotFound,
    EventNotFound,
    UnknownReference
)
from services.eligibility_service import (
    validate_participant_age,
    validate_gender,
    validate_venue_capacity
)
from database import transactional

logger = logging.getLogger(__name__)


class CatalogManager:
    """主檔資料管理器"""

    @staticmethod
    @transactional
    def create_venue(db: Session, name: str, location: str, capacity: int) -> Venue:
        """
        建立場館

        異常：
            VenueCapacityInvalid: capacity < 0
        """
        validate_venue_capacity(capacity)

        venue = Venue(name=name, location=location, capacity=capacity)
        db.add(venue)
        db.flush()

        logger.info(f"Created venue {venue.id} ({name}, {location})")
        return venue

    @staticmethod
    @transactional
    def create_participant(
        db: Session,
        name: str,
        nationality: str,
        age: int,
        gender
    ) -> Participant:
        """
        建立選手

        前置條件：
        1. age >= 1
        2. gender 屬於 Male / Female / Other

        異常：
            ParticipantAgeInvalid: 年齡不合法
            InvalidGender: 性別不合法

        注意：
            - 驗證在寫入前完成，被拒絕時資料庫不會有任何變動
        """
        validate_participant_age(age)
        gender = validate_gender(gender)

        participant = Participant(
            name=name,
            nationality=nationality,
            age=age,
            gender=gender
        )
        db.add(participant)
        db.flush()

        logger.info(f"Created participant {participant.id} ({name}, {nationality}, age {age})")
        return participant

    @staticmethod
    @transactional
    def create_event(
        db: Session,
        sport_type: str,
        event_date: date,
        event_time: time,
        venue_id: int
    ) -> Tuple[Event, Schedule]:
        """
        建立賽事（含有效賽程）

        流程：
        1. 檢查場館
        2. 建立 Event
        3. 產生 Schedule（複製日期、時間、場館）

        返回：
            (Event, Schedule) tuple

        異常：
            UnknownReference: 場館不存在

        注意：
            - 使用 @transactional，Event 與 Schedule 一起 commit
            - 任何一步失敗都不會留下沒有賽程的賽事
        """
        # 1. 檢查場館
        if not db.query(Venue).filter(Venue.id == venue_id).first():
            raise UnknownReference("Venue", venue_id)

        # 2. 建立 Event
        event = Event(
            sport_type=sport_type,
            event_date=event_date,
            event_time=event_time,
            venue_id=venue_id
        )
        db.add(event)
        db.flush()  # 取得 event.id

        logger.info(f"Created event {event.id} ({sport_type} on {event_date} {event_time})")

        # 3. 產生 Schedule
        schedule = ScheduleManager.derive_schedule_for_new_event(db, event)

        return event, schedule

    @staticmethod
    def get_venue(db: Session, venue_id: int) -> Venue:
        venue = db.query(Venue).filter(Venue.id == venue_id).first()
        if not venue:
            raise VenueNotFound(venue_id)
        return venue

    @staticmethod
    def get_participant(db: Session, participant_id: int) -> Participant:
        participant = db.query(Participant).filter(Participant.id == participant_id).first()
        if not participant:
            raise ParticipantNotFound(participant_id)
        return participant

    @staticmethod
    def get_event(db: Session, event_id: int) -> Event:
        event = db.query(Event).filter(Event.id == event_id).first()
        if not event:
            raise EventNotFound(event_id)
        return event

    @staticmethod
    def list_venues(db: Session) -> List[Venue]:
        return db.query(Venue).order_by(Venue.id).all()

    @staticmethod
    def list_events(db: Session) -> List[Event]:
        return db.query(Event).order_by(Event.event_date, Event.event_time, Event.id).all()
