"""
Schedule API Endpoints

職責：
1. 查詢有效賽程（可指定日期）
2. 改期
3. 查詢賽程變更紀錄
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas import (
    ScheduleResponse,
    ScheduleListItem,
    RescheduleRequest,
    ScheduleChangeResponse
)
from core.schedule_manager import ScheduleManager
from core.exceptions import NotFoundError, ConstraintViolation
from services.report_service import list_schedule, list_schedule_history

router = APIRouter(prefix="/api/schedules", tags=["schedules"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[ScheduleListItem])
def get_schedule_list(
    on_date: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db)
):
    """
    查詢有效賽程

    參數：
        date: 只列出該日的賽程（query parameter，可省略）

    返回：
        依日期、時間排序的賽程，含賽事與場館資訊
    """
    try:
        return [ScheduleListItem(**row) for row in list_schedule(db, on_date)]

    except Exception as e:
        logger.error(f"Failed to list schedule: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{schedule_id}", response_model=ScheduleResponse)
def get_schedule(schedule_id: int, db: Session = Depends(get_db)):
    try:
        return ScheduleResponse.model_validate(ScheduleManager.get_schedule(db, schedule_id))

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to get schedule: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.put("/{schedule_id}", response_model=ScheduleResponse)
def reschedule(
    schedule_id: int,
    reschedule_data: RescheduleRequest,
    db: Session = Depends(get_db)
):
    """
    改期（日期、時間、場館）

    效果：
    - 更新 Schedule，原始 Event 不變
    - 同一個 transaction 內寫入一筆 ScheduleChange

    錯誤：
    - 404：Schedule 不存在
    - 409：場館不存在
    """
    try:
        schedule = ScheduleManager.reschedule(
            db,
            schedule_id,
            reschedule_data.scheduled_date,
            reschedule_data.scheduled_time,
            reschedule_data.venue_id
        )
        return ScheduleResponse.model_validate(schedule)

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConstraintViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to reschedule: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{schedule_id}/history", response_model=List[ScheduleChangeResponse])
def get_schedule_history(schedule_id: int, db: Session = Depends(get_db)):
    """取得賽程變更紀錄（依發生順序）"""
    try:
        changes = list_schedule_history(db, schedule_id)
        return [ScheduleChangeResponse.model_validate(c) for c in changes]

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to get schedule history: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
