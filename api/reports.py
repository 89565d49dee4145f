"""
Report API Endpoints

職責：
1. 依運動項目查詢排名
2. 全部成績報表
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas import StandingItem, ReportItem
from services.report_service import list_standings_by_sport, results_report

router = APIRouter(prefix="/api", tags=["reports"])
logger = logging.getLogger(__name__)


@router.get("/standings", response_model=List[StandingItem])
def get_standings(sport_type: str = Query(...), db: Session = Depends(get_db)):
    try:
        return [StandingItem(**row) for row in list_standings_by_sport(db, sport_type)]

    except Exception as e:
        logger.error(f"Failed to get standings: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/results", response_model=List[ReportItem])
def get_results_report(db: Session = Depends(get_db)):
    """每場賽事的所有選手成績，依賽事、名次排序"""
    try:
        return [ReportItem(**row) for row in results_report(db)]

    except Exception as e:
        logger.error(f"Failed to build results report: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
