"""
Event API Endpoints

職責：
1. 建立賽事（自動產生有效賽程）
2. 查詢賽事與其賽程
3. 透過賽事改期
4. 報名、記錄成績、查詢成績
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas import (
    EventCreate,
    EventResponse,
    EventCreatedResponse,
    ScheduleResponse,
    RescheduleRequest,
    EnrollmentRequest,
    ResultSubmit,
    EntryResponse,
    EventResultItem,
    EventResultsResponse
)
from core.catalog_manager import CatalogManager
from core.schedule_manager import ScheduleManager
from core.result_recorder import ResultRecorder
from core.exceptions import ValidationError, NotFoundError, ConstraintViolation
from services.report_service import list_event_results

router = APIRouter(prefix="/api/events", tags=["events"])
logger = logging.getLogger(__name__)


@router.post("", response_model=EventCreatedResponse, status_code=201)
def create_event(event_data: EventCreate, db: Session = Depends(get_db)):
    """
    建立賽事

    效果：
    - 建立 Event
    - 同一個 transaction 內建立 Schedule（日期、時間、場館與賽事相同）

    返回：
        - event: 賽事
        - schedule: 自動產生的賽程
    """
    try:
        event, schedule = CatalogManager.create_event(
            db,
            event_data.sport_type,
            event_data.event_date,
            event_data.event_time,
            event_data.venue_id
        )
        return EventCreatedResponse(
            event=EventResponse.model_validate(event),
            schedule=ScheduleResponse.model_validate(schedule)
        )

    except ConstraintViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create event: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("", response_model=List[EventResponse])
def list_events(db: Session = Depends(get_db)):
    try:
        return [EventResponse.model_validate(e) for e in CatalogManager.list_events(db)]

    except Exception as e:
        logger.error(f"Failed to list events: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: int, db: Session = Depends(get_db)):
    """取得賽事原始規劃（改期不會影響這裡）"""
    try:
        return EventResponse.model_validate(CatalogManager.get_event(db, event_id))

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to get event: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{event_id}/schedule", response_model=ScheduleResponse)
def get_event_schedule(event_id: int, db: Session = Depends(get_db)):
    """取得賽事目前的有效賽程"""
    try:
        return ScheduleResponse.model_validate(
            ScheduleManager.get_schedule_for_event(db, event_id)
        )

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to get event schedule: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.put("/{event_id}/schedule", response_model=ScheduleResponse)
def reschedule_event(
    event_id: int,
    reschedule_data: RescheduleRequest,
    db: Session = Depends(get_db)
):
    """
    透過賽事 id 改期

    只更新 Schedule，Event 保持原樣；每次改期留下一筆變更紀錄。
    """
    try:
        schedule = ScheduleManager.reschedule_event(
            db,
            event_id,
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
        logger.error(f"Failed to reschedule event: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("/{event_id}/participants", response_model=EntryResponse, status_code=201)
def enroll_participant(
    event_id: int,
    enrollment: EnrollmentRequest,
    db: Session = Depends(get_db)
):
    """
    報名賽事

    前置條件：
    - 賽事與選手都存在
    - 選手年齡 >= 16
    - 尚未報名
    """
    try:
        entry = ResultRecorder.enroll_participant(db, event_id, enrollment.participant_id)
        return EntryResponse.model_validate(entry)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConstraintViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to enroll participant: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.put("/{event_id}/results/{participant_id}", response_model=EntryResponse)
def record_result(
    event_id: int,
    participant_id: int,
    result_data: ResultSubmit,
    db: Session = Depends(get_db)
):
    """
    記錄成績

    score、ranking 皆可省略（團體賽或尚未計分）。
    只有 request body 帶到的欄位會被改寫，沒帶的欄位保留原值；明確送 null 會清除。
    """
    try:
        entry = ResultRecorder.record_result(
            db,
            event_id,
            participant_id,
            **result_data.model_dump(exclude_unset=True)
        )
        return EntryResponse.model_validate(entry)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConstraintViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to record result: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{event_id}/results", response_model=EventResultsResponse)
def get_event_results(event_id: int, db: Session = Depends(get_db)):
    """取得賽事成績（名次由小到大，沒有名次的排最後）"""
    try:
        rows = list_event_results(db, event_id)
        return EventResultsResponse(
            event_id=event_id,
            results=[EventResultItem(**row) for row in rows]
        )

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to get event results: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
