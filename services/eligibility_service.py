"""
資格檢查服務：寫入前的驗證關卡

- 建立選手：年齡 >= 1（純計算，不碰資料庫）
- 報名賽事：年齡 >= 16（讀取選手目前年齡，需在同一個 transaction 內上鎖）
- 性別必須屬於固定列舉
- 場館容量 >= 0

任何一項不通過都拋出 ValidationError 子類別，外層 transaction 整個 rollback，
不會留下部分寫入。
"""
from typing import Optional
import logging

from sqlalchemy.orm import Session

from models import Gender, Participant
from core.locks import with_participant_lock
from core.exceptions import (
    ParticipantAgeInvalid,
    EnrollmentAgeInvalid,
    InvalidGender,
    VenueCapacityInvalid,
    UnknownReference
)
from database import get_settings

logger = logging.getLogger(__name__)


def validate_participant_age(age: int, minimum: Optional[int] = None) -> None:
    """
    檢查新選手的年齡

    參數：
        age: 欲寫入的年齡
        minimum: 最低年齡（預設讀取設定 min_participant_age = 1）

    異常：
        ParticipantAgeInvalid: age < minimum
    """
    if minimum is None:
        minimum = get_settings().min_participant_age

    if age < minimum:
        logger.warning(f"Rejected participant with age {age} (minimum {minimum})")
        raise ParticipantAgeInvalid(age, minimum)


def validate_event_eligibility(
    db: Session,
    participant_id: int,
    minimum: Optional[int] = None
) -> Participant:
    """
    檢查選手是否可以報名賽事

    流程：
    1. 鎖定選手資料列（讀年齡與後續寫入之間不會被改動）
    2. 比對目前年齡與參賽年齡

    參數：
        db: SQLAlchemy Session（必須在外層 transaction 內）
        participant_id: 選手 id
        minimum: 參賽年齡（預設讀取設定 min_event_age = 16）

    返回：
        已鎖定的 Participant

    異常：
        UnknownReference: 選手不存在（報名會產生懸空外鍵）
        EnrollmentAgeInvalid: 年齡 < minimum

    注意：
        - 本身不寫入任何資料
        - 不 commit，鎖會持續到外層 transaction 結束
    """
    if minimum is None:
        minimum = get_settings().min_event_age

    participant = with_participant_lock(participant_id, db).first()
    if not participant:
        raise UnknownReference("Participant", participant_id)

    if participant.age < minimum:
        logger.warning(
            f"Rejected enrollment of participant {participant_id} "
            f"with age {participant.age} (minimum {minimum})"
        )
        raise EnrollmentAgeInvalid(participant_id, participant.age, minimum)

    return participant


def validate_gender(value) -> Gender:
    """
    把輸入轉成 Gender 列舉

    接受 Gender 本身或其字串值（"Male" / "Female" / "Other"）。

    異常：
        InvalidGender: 不在列舉內
    """
    if isinstance(value, Gender):
        return value
    try:
        return Gender(value)
    except ValueError:
        raise InvalidGender(value)


def validate_venue_capacity(capacity: int) -> None:
    """
    場館容量不能是負數

    異常：
        VenueCapacityInvalid: capacity < 0
    """
    if capacity < 0:
        raise VenueCapacityInvalid(capacity)
