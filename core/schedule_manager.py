"""
Schedule Manager：管理有效賽程（live schedule）

職責：
1. 賽事建立時，依賽事原始規劃產生一筆賽程
2. 改期（日期 / 時間 / 場館），不動原始 Event
3. 每次改期都交給 AuditLogger 留下變更紀錄
4. 查詢賽程

原則：
- Event 是原始規劃，建立後不修改；所有臨時異動都只寫在 Schedule
- 改期與變更紀錄在同一個 transaction 內，不會出現「有改期沒紀錄」或「有紀錄沒改期」
- 每場賽事只有一筆有效賽程（schedules.event_id 唯一）
"""
from datetime import date, time
from typing import Optional
import logging

from sqlalchemy.orm import Session

from models import Event, Schedule, Venue
from core.audit_logger import AuditLogger, ScheduleSnapshot
from core.locks import with_schedule_lock
from core.exceptions import (
    EventNotFound,
    ScheduleNotFound,
    ScheduleAlreadyExists,
    UnknownReference
)
from database import transactional

logger = logging.getLogger(__name__)


class ScheduleManager:
    """有效賽程管理器"""

    @staticmethod
    def derive_schedule_for_new_event(db: Session, event: Event) -> Schedule:
        """
        為剛建立的賽事產生賽程

        複製賽事的場館、日期、時間，建立一筆指向該賽事的 Schedule。

        參數：
            db: SQLAlchemy Session
            event: 剛 flush 過、已有 id 的 Event

        返回：
            新建立的 Schedule

        異常：
            ScheduleAlreadyExists: 該賽事已經有賽程（只能在建立賽事時呼叫一次）

        注意：
            - 不 commit，必須由 CatalogManager.create_event 的 transaction 一起提交
        """
        existing = db.query(Schedule).filter(Schedule.event_id == event.id).first()
        if existing:
            raise ScheduleAlreadyExists(event.id)

        schedule = Schedule(
            event_id=event.id,
            venue_id=event.venue_id,
            scheduled_date=event.event_date,
            scheduled_time=event.event_time
        )
        db.add(schedule)
        db.flush()  # 取得 schedule.id

        logger.info(f"Derived schedule {schedule.id} for event {event.id}")
        return schedule

    @staticmethod
    @transactional
    def reschedule(
        db: Session,
        schedule_id: int,
        new_date: date,
        new_time: time,
        new_venue_id: int
    ) -> Schedule:
        """
        改期（更新日期、時間、場館）

        前置條件：
        1. Schedule 必須存在
        2. 新場館必須存在

        流程：
        1. 鎖定 Schedule，讀取改期前狀態
        2. 檢查新場館
        3. 更新 Schedule
        4. 寫入變更紀錄

        參數：
            db: SQLAlchemy Session
            schedule_id: Schedule id
            new_date: 新日期
            new_time: 新時間
            new_venue_id: 新場館 id

        返回：
            更新後的 Schedule

        異常：
            ScheduleNotFound: Schedule 不存在
            UnknownReference: 場館不存在

        注意：
            - 使用 @transactional，更新與變更紀錄一起 commit / rollback
            - 即使新舊值相同也會留下一筆紀錄（每次更新對應一筆）
        """
        # 1. 取得並鎖定 Schedule
        schedule = with_schedule_lock(schedule_id, db).first()
        if not schedule:
            raise ScheduleNotFound(schedule_id)

        # 2. 檢查場館
        if not db.query(Venue).filter(Venue.id == new_venue_id).first():
            raise UnknownReference("Venue", new_venue_id)

        before = ScheduleSnapshot.of(schedule)

        # 3. 更新 Schedule
        schedule.scheduled_date = new_date
        schedule.scheduled_time = new_time
        schedule.venue_id = new_venue_id
        db.flush()

        # 4. 記錄變更
        AuditLogger.record_change(db, schedule, before, ScheduleSnapshot.of(schedule))

        logger.info(
            f"Rescheduled schedule {schedule.id} (event {schedule.event_id}) "
            f"to {new_date} {new_time} @ venue {new_venue_id}"
        )
        return schedule

    @staticmethod
    def reschedule_event(
        db: Session,
        event_id: int,
        new_date: date,
        new_time: time,
        new_venue_id: int
    ) -> Schedule:
        """
        透過賽事 id 改期

        找到賽事的有效賽程後交給 reschedule()。

        異常：
            EventNotFound: 賽事不存在或沒有賽程
        """
        schedule = ScheduleManager.get_schedule_for_event(db, event_id)
        return ScheduleManager.reschedule(db, schedule.id, new_date, new_time, new_venue_id)

    @staticmethod
    def get_schedule(db: Session, schedule_id: int) -> Schedule:
        """
        取得賽程

        異常：
            ScheduleNotFound: Schedule 不存在
        """
        schedule = db.query(Schedule).filter(Schedule.id == schedule_id).first()
        if not schedule:
            raise ScheduleNotFound(schedule_id)
        return schedule

    @staticmethod
    def get_schedule_for_event(db: Session, event_id: int) -> Schedule:
        """
        取得賽事的有效賽程

        異常：
            EventNotFound: 賽事不存在
        """
        schedule: Optional[Schedule] = db.query(Schedule).filter(
            Schedule.event_id == event_id
        ).first()
        if not schedule:
            raise EventNotFound(event_id)
        return schedule
