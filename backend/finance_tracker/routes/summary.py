from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from finance_tracker.database import get_db
from finance_tracker.db_helpers import get_user_id
from finance_tracker.schemas import ChartDataResponse, MonthlyTotal, SummaryResponse
from finance_tracker.services.chart_data import expense_breakdown, top_categories
from finance_tracker.services.ledger_service import LedgerError, TransactionLedger

router = APIRouter()


def _load_summary(db: Session, user_id: int, month: Optional[str]) -> dict:
    try:
        return TransactionLedger(db).get_summary(user_id, month=month)
    except LedgerError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=SummaryResponse)
def get_summary(
    month: Optional[str] = None,
    user_id: int = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    """
    Totals for the month (or all time): income, expenses, the running balance
    up to the end of the month and the per-category breakdown.
    """
    return _load_summary(db, user_id, month)


@router.get("/monthly", response_model=List[MonthlyTotal])
def get_monthly_totals(
    year: Optional[int] = Query(None, ge=1, le=9998),
    user_id: int = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    """Get monthly income and expenses for bar chart"""
    return TransactionLedger(db).get_monthly_totals(user_id, year=year)


@router.get("/charts", response_model=ChartDataResponse)
def get_chart_data(
    month: Optional[str] = None,
    limit: int = Query(6, ge=1, le=50),
    user_id: int = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    """Get the expenses pie and top categories bar series for the dashboard."""
    summary = _load_summary(db, user_id, month)
    return {
        "month": month,
        "expense_breakdown": expense_breakdown(summary),
        "top_categories": top_categories(summary, limit=limit),
    }
