"""
Participant API Endpoints

職責：
1. 建立選手（年齡 >= 1、性別檢查）
2. 依國籍查詢選手
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas import ParticipantCreate, ParticipantResponse
from core.catalog_manager import CatalogManager
from core.exceptions import ValidationError, NotFoundError
from services.report_service import list_participants_by_nationality

router = APIRouter(prefix="/api/participants", tags=["participants"])
logger = logging.getLogger(__name__)


@router.post("", response_model=ParticipantResponse, status_code=201)
def create_participant(participant_data: ParticipantCreate, db: Session = Depends(get_db)):
    """
    建立選手

    前置條件：
    - age >= 1
    - gender 為 Male / Female / Other

    被拒絕時返回 400，資料庫不會有任何變動。
    """
    try:
        participant = CatalogManager.create_participant(
            db,
            participant_data.name,
            participant_data.nationality,
            participant_data.age,
            participant_data.gender
        )
        return ParticipantResponse.model_validate(participant)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create participant: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("", response_model=List[ParticipantResponse])
def list_participants(nationality: str = Query(...), db: Session = Depends(get_db)):
    """依國籍查詢選手"""
    try:
        participants = list_participants_by_nationality(db, nationality)
        return [ParticipantResponse.model_validate(p) for p in participants]

    except Exception as e:
        logger.error(f"Failed to list participants: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{participant_id}", response_model=ParticipantResponse)
def get_participant(participant_id: int, db: Session = Depends(get_db)):
    try:
        return ParticipantResponse.model_validate(
            CatalogManager.get_participant(db, participant_id)
        )

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to get participant: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
