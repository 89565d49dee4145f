"""
Result Recorder：報名與成績

職責：
1. 報名（通過資格檢查後建立 EventParticipant）
2. 記錄成績（score / ranking 可為空：團體賽或尚未計分）
3. 依名次取出某場賽事的成績

報名與成績寫入都先經過 validate_event_eligibility，
「讀年齡 → 寫入」在同一個 transaction 與同一把鎖內完成。
"""
from decimal import Decimal
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from models import Event, EventParticipant
from core.exceptions import (
    EventNotFound,
    DuplicateEnrollment,
    UnknownReference
)
from services.eligibility_service import validate_event_eligibility
from database import transactional

logger = logging.getLogger(__name__)

# record_result 未傳入的欄位
UNSET = object()


class ResultRecorder:
    """報名與成績管理器"""

    @staticmethod
    def _require_event(db: Session, event_id: int) -> Event:
        event = db.query(Event).filter(Event.id == event_id).first()
        if not event:
            raise UnknownReference("Event", event_id)
        return event

    @staticmethod
    def _get_entry(db: Session, event_id: int, participant_id: int) -> Optional[EventParticipant]:
        return db.query(EventParticipant).filter(
            EventParticipant.event_id == event_id,
            EventParticipant.participant_id == participant_id
        ).first()

    @staticmethod
    @transactional
    def enroll_participant(db: Session, event_id: int, participant_id: int) -> EventParticipant:
        """
        報名賽事

        前置條件：
        1. 賽事存在
        2. 選手存在且年齡 >= 16
        3. 尚未報名

        返回：
            新建立的 EventParticipant（score、ranking 皆為 None）

        異常：
            UnknownReference: 賽事或選手不存在
            EnrollmentAgeInvalid: 選手未滿參賽年齡
            DuplicateEnrollment: 已經報名過
        """
        ResultRecorder._require_event(db, event_id)
        validate_event_eligibility(db, participant_id)

        if ResultRecorder._get_entry(db, event_id, participant_id):
            raise DuplicateEnrollment(event_id, participant_id)

        entry = EventParticipant(event_id=event_id, participant_id=participant_id)
        db.add(entry)
        db.flush()

        logger.info(f"Enrolled participant {participant_id} in event {event_id}")
        return entry

    @staticmethod
    @transactional
    def record_result(
        db: Session,
        event_id: int,
        participant_id: int,
        score=UNSET,
        ranking=UNSET
    ) -> EventParticipant:
        """
        記錄成績

        已報名：只更新有傳入的欄位，沒傳的保留原值
        未報名：通過資格檢查後直接建立含成績的 EventParticipant（沒傳的欄位為 None）

        參數：
            score: 分數（時間、距離、點數），團體賽可為 None；明確傳 None 會清除
            ranking: 名次，可為 None；明確傳 None 會清除

        異常：
            UnknownReference: 賽事或選手不存在
            EnrollmentAgeInvalid: 選手未滿參賽年齡
        """
        ResultRecorder._require_event(db, event_id)
        validate_event_eligibility(db, participant_id)

        entry = ResultRecorder._get_entry(db, event_id, participant_id)
        if entry is None:
            entry = EventParticipant(event_id=event_id, participant_id=participant_id)
            db.add(entry)

        if score is not UNSET:
            entry.score = score
        if ranking is not UNSET:
            entry.ranking = ranking
        db.flush()

        logger.info(
            f"Recorded result for participant {participant_id} in event {event_id}: "
            f"score={entry.score}, ranking={entry.ranking}"
        )
        return entry

    @staticmethod
    def results_for_event(db: Session, event_id: int) -> List[EventParticipant]:
        """
        取得賽事成績，依名次由小到大，沒有名次的排最後

        異常：
            EventNotFound: 賽事不存在
        """
        if not db.query(Event).filter(Event.id == event_id).first():
            raise EventNotFound(event_id)

        return db.query(EventParticipant).filter(
            EventParticipant.event_id == event_id
        ).order_by(
            EventParticipant.ranking.is_(None),
            EventParticipant.ranking,
            EventParticipant.participant_id
        ).all()
