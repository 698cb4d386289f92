from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from finance_tracker.database import get_db
from finance_tracker.db_helpers import get_user_id
from finance_tracker.schemas import MessageResponse, TransactionCreate, TransactionResponse
from finance_tracker.services.ledger_service import (
    LedgerError,
    TransactionLedger,
    TransactionNotFoundError,
)

router = APIRouter()


@router.get("", response_model=List[TransactionResponse])
def list_transactions(
    month: Optional[str] = None,
    category: Optional[str] = None,
    user_id: int = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    """
    List the current user's transactions, newest first.

    Args:
        month: Only transactions booked in this YYYY-MM month
        category: Only transactions in this category ("all" for every category)
    """
    try:
        return TransactionLedger(db).list_transactions(user_id, month=month, category=category)
    except LedgerError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    transaction: TransactionCreate,
    user_id: int = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    """Record an income or expense."""
    try:
        return TransactionLedger(db).create_transaction(
            user_id,
            description=transaction.description,
            amount=transaction.amount,
            transaction_type=transaction.transaction_type,
            category=transaction.category,
            booked_on=transaction.booked_on,
        )
    except LedgerError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: int,
    user_id: int = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    """Delete one of the current user's transactions."""
    try:
        TransactionLedger(db).delete_transaction(user_id, transaction_id)
    except TransactionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return MessageResponse(message="Transaction deleted")
