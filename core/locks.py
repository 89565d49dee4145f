"""
並發控制工具

提供 Database-level 的鎖定機制，防止競態條件（Race Condition）

主要使用 SELECT ... FOR UPDATE 來實現悲觀鎖（Pessimistic Locking）：
- 同一筆賽程的改期必須排隊，每筆變更紀錄才會對應到它真正覆蓋掉的狀態
- 報名時「讀年齡 → 寫報名」必須在同一把鎖內完成

SQLite 會忽略 FOR UPDATE（整個資料庫寫入本來就是序列化的）。
"""
from sqlalchemy.orm import Session, Query

from models import Schedule, Participant


def with_schedule_lock(schedule_id: int, db: Session) -> Query:
    """
    鎖定一筆 Schedule（行級鎖）

    使用場景：
    - 改期時，先鎖定再讀取改期前的狀態
    - 確保兩個同時進行的改期不會寫出遺失的變更紀錄

    範例：
        schedule = with_schedule_lock(schedule_id, db).first()
        if not schedule:
            raise ScheduleNotFound(schedule_id)

    參數：
        schedule_id: Schedule id
        db: SQLAlchemy Session

    返回：
        Query object（需要呼叫 .first() 或 .one() 來取得結果）

    注意：
        - populate_existing() 讓已在 session 內的物件被鎖定後的資料覆蓋
        - 必須在 transaction 內使用（確保有 commit 或 rollback）
    """
    return db.query(Schedule).filter(
        Schedule.id == schedule_id
    ).populate_existing().with_for_update(nowait=False)


def with_participant_lock(participant_id: int, db: Session) -> Query:
    """
    鎖定一位 Participant（行級鎖）

    使用場景：
    - 報名資格檢查：讀取年齡與寫入 EventParticipant 之間不允許年齡被改

    參數：
        participant_id: Participant id
        db: SQLAlchemy Session

    返回：
        Query object（需要呼叫 .first() 或 .one() 來取得結果）
    """
    return db.query(Participant).filter(
        Participant.id == participant_id
    ).populate_existing().with_for_update(nowait=False)
