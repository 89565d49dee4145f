"""
Venue API Endpoints

職責：
1. 建立場館
2. 查詢場館
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas import VenueCreate, VenueResponse
from core.catalog_manager import CatalogManager
from core.exceptions import ValidationError, NotFoundError

router = APIRouter(prefix="/api/venues", tags=["venues"])
logger = logging.getLogger(__name__)


@router.post("", response_model=VenueResponse, status_code=201)
def create_venue(venue_data: VenueCreate, db: Session = Depends(get_db)):
    """
    建立場館

    前置條件：
    - capacity >= 0
    """
    try:
        venue = CatalogManager.create_venue(
            db,
            venue_data.name,
            venue_data.location,
            venue_data.capacity
        )
        return VenueResponse.model_validate(venue)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create venue: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("", response_model=List[VenueResponse])
def list_venues(db: Session = Depends(get_db)):
    try:
        return [VenueResponse.model_validate(v) for v in CatalogManager.list_venues(db)]

    except Exception as e:
        logger.error(f"Failed to list venues: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{venue_id}", response_model=VenueResponse)
def get_venue(venue_id: int, db: Session = Depends(get_db)):
    try:
        return VenueResponse.model_validate(CatalogManager.get_venue(db, venue_id))

    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to get venue: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
