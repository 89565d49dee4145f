"""
Audit Logger：賽程變更紀錄

職責：
1. 每次改期寫入一筆 ScheduleChange（改期前 / 改期後的日期、時間、場館）
2. 依發生順序取回某筆賽程的所有變更
3. 保證變更紀錄只能新增，不能修改或刪除

Audit Logger 只 flush，不 commit：
紀錄與改期在同一個 transaction 內，一起成功或一起 rollback。
"""
from dataclasses import dataclass
from datetime import date, time
from typing import List
import logging

from sqlalchemy import event
from sqlalchemy.orm import Session

from models import Schedule, ScheduleChange
from core.exceptions import ImmutableAuditRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleSnapshot:
    """賽程在某個時間點的狀態"""
    scheduled_date: date
    scheduled_time: time
    venue_id: int

    @classmethod
    def of(cls, schedule: Schedule) -> "ScheduleSnapshot":
        return cls(
            scheduled_date=schedule.scheduled_date,
            scheduled_time=schedule.scheduled_time,
            venue_id=schedule.venue_id
        )


class AuditLogger:
    """賽程變更紀錄器"""

    @staticmethod
    def record_change(
        db: Session,
        schedule: Schedule,
        before: ScheduleSnapshot,
        after: ScheduleSnapshot
    ) -> ScheduleChange:
        """
        寫入一筆變更紀錄

        參數：
            db: SQLAlchemy Session
            schedule: 被修改的賽程
            before: 改期前狀態
            after: 改期後狀態

        返回：
            新建立的 ScheduleChange（changed_at 由資料庫填入）

        注意：
            - 不 commit，交給外層 transaction
            - 寫入失敗時拋出異常，外層改期會一起 rollback
        """
        change = ScheduleChange(
            schedule_id=schedule.id,
            event_id=schedule.event_id,
            old_date=before.scheduled_date,
            new_date=after.scheduled_date,
            old_time=before.scheduled_time,
            new_time=after.scheduled_time,
            old_venue_id=before.venue_id,
            new_venue_id=after.venue_id
        )
        db.add(change)
        db.flush()  # 取得 change.id

        logger.info(
            f"Recorded change {change.id} for schedule {schedule.id}: "
            f"{before.scheduled_date} {before.scheduled_time} @ {before.venue_id} -> "
            f"{after.scheduled_date} {after.scheduled_time} @ {after.venue_id}"
        )
        return change

    @staticmethod
    def history_for_schedule(db: Session, schedule_id: int) -> List[ScheduleChange]:
        """
        取得某筆賽程的所有變更，依發生順序排列

        id 是遞增序號，同一秒內的多次改期也能正確排序。
        """
        return db.query(ScheduleChange).filter(
            ScheduleChange.schedule_id == schedule_id
        ).order_by(ScheduleChange.id).all()


@event.listens_for(ScheduleChange, "before_update")
def _reject_change_update(mapper, connection, target):
    raise ImmutableAuditRecord(target.id, "update")


@event.listens_for(ScheduleChange, "before_delete")
def _reject_change_delete(mapper, connection, target):
    raise ImmutableAuditRecord(target.id, "delete")
