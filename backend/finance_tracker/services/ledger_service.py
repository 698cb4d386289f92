"""
Service for storing a user's transactions and computing their aggregates.
Handles:
1. Listing transactions with month/category filters
2. Recording and deleting transactions
3. Summary totals (income, expense, cumulative balance, per-category breakdown)
4. Month-by-month income/expense totals
"""
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Tuple
import logging
import re

from sqlalchemy import case, extract, func
from sqlalchemy.orm import Session

from finance_tracker.models import (
    TRANSACTION_TYPE_EXPENSE,
    TRANSACTION_TYPE_INCOME,
    TRANSACTION_TYPES,
    Transaction,
)

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"
_MONTH_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")
CENT = Decimal("0.01")
MAX_AMOUNT = Decimal(10) ** 13


class LedgerError(ValueError):
    """Transaction input rejected for a business reason."""


class TransactionNotFoundError(LedgerError):
    """The transaction does not exist or belongs to another user."""


def month_bounds(month: str) -> Tuple[date, date]:
    """
    Convert a YYYY-MM string into a half-open date range.

    Returns:
        (first day of the month, first day of the following month)

    Raises:
        LedgerError: if the string is not a valid YYYY-MM month
    """
    match = _MONTH_PATTERN.fullmatch(month or "")
    if not match:
        raise LedgerError("Month must use the YYYY-MM format")
    year, month_number = int(match.group(1)), int(match.group(2))
    try:
        start = date(year, month_number, 1)
        if month_number == 12:
            end = date(year + 1, 1, 1)
        else:
            end = date(year, month_number + 1, 1)
    except ValueError as exc:
        raise LedgerError("Month is out of the supported range") from exc
    return start, end


def _income_sum():
    return func.coalesce(
        func.sum(case((Transaction.transaction_type == TRANSACTION_TYPE_INCOME, Transaction.amount), else_=0)),
        0,
    )


def _expense_sum():
    return func.coalesce(
        func.sum(case((Transaction.transaction_type == TRANSACTION_TYPE_EXPENSE, Transaction.amount), else_=0)),
        0,
    )


def _to_float(value) -> float:
    return float(value) if value else 0.0


class TransactionLedger:
    """Stores, retrieves and aggregates transactions for one database session."""

    def __init__(self, db: Session):
        self.db = db

    def list_transactions(
        self,
        user_id: int,
        month: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Transaction]:
        """
        List a user's transactions, newest first.

        Args:
            user_id: Owner of the transactions
            month: Optional YYYY-MM month filter
            category: Optional category filter; "all" disables it
        """
        query = self.db.query(Transaction).filter(Transaction.user_id == user_id)

        if month:
            start, end = month_bounds(month)
            query = query.filter(Transaction.booked_on >= start, Transaction.booked_on < end)
        if category and category != ALL_CATEGORIES:
            query = query.filter(Transaction.category == category)

        return query.order_by(
            Transaction.booked_on.desc(),
            Transaction.created_at.desc(),
            Transaction.id.desc(),
        ).all()

    def create_transaction(
        self,
        user_id: int,
        description: str,
        amount,
        transaction_type: str,
        category: str,
        booked_on: date,
    ) -> Transaction:
        description = (description or "").strip()
        category = (category or "").strip()
        if not description or not category or amount is None or not transaction_type or not booked_on:
            raise LedgerError("All fields are required")

        try:
            amount = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise LedgerError("Amount must be a number") from exc
        if not amount.is_finite():
            raise LedgerError("Amount must be a number")
        # Numeric(15, 2) holds at most 13 integer digits
        if abs(amount) >= MAX_AMOUNT:
            raise LedgerError(f"Amount must be less than {MAX_AMOUNT:,}")
        amount = amount.quantize(CENT)
        if amount <= 0:
            raise LedgerError("Amount must be greater than 0")

        if transaction_type not in TRANSACTION_TYPES:
            raise LedgerError(f"Type must be one of: {', '.join(TRANSACTION_TYPES)}")

        transaction = Transaction(
            user_id=user_id,
            description=description,
            amount=amount,
            transaction_type=transaction_type,
            category=category,
            booked_on=booked_on,
        )
        self.db.add(transaction)
        self.db.commit()
        self.db.refresh(transaction)

        logger.info(
            f"[LEDGER] Recorded {transaction_type} {transaction.id} for user {user_id} "
            f"({category}, {booked_on.isoformat()})"
        )
        return transaction

    def delete_transaction(self, user_id: int, transaction_id: int) -> None:
        transaction = self.db.query(Transaction).filter(
            Transaction.id == transaction_id,
            Transaction.user_id == user_id,
        ).first()
        if not transaction:
            raise TransactionNotFoundError("Transaction not found")

        self.db.delete(transaction)
        self.db.commit()
        logger.info(f"[LEDGER] Deleted transaction {transaction_id} for user {user_id}")

    def get_summary(self, user_id: int, month: Optional[str] = None) -> Dict:
        """
        Aggregate a user's transactions.

        Income and expense totals and the category breakdown cover the given
        month (or all time). The balance is cumulative: everything booked up to
        the end of the month counts, so it carries over from earlier months.
        """
        start = end = None
        if month:
            start, end = month_bounds(month)

        def in_period(query):
            if start is not None:
                query = query.filter(Transaction.booked_on >= start, Transaction.booked_on < end)
            return query

        totals = in_period(
            self.db.query(
                _income_sum().label("total_income"),
                _expense_sum().label("total_expense"),
            ).filter(Transaction.user_id == user_id)
        ).one()

        balance_query = self.db.query(
            func.coalesce(
                func.sum(
                    case(
                        (Transaction.transaction_type == TRANSACTION_TYPE_INCOME, Transaction.amount),
                        (Transaction.transaction_type == TRANSACTION_TYPE_EXPENSE, -Transaction.amount),
                        else_=0,
                    )
                ),
                0,
            )
        ).filter(Transaction.user_id == user_id)
        if end is not None:
            balance_query = balance_query.filter(Transaction.booked_on < end)
        balance = balance_query.scalar()

        category_total = func.sum(Transaction.amount)
        by_category = (
            in_period(
                self.db.query(
                    Transaction.category.label("category"),
                    Transaction.transaction_type.label("transaction_type"),
                    category_total.label("total"),
                    func.count(Transaction.id).label("count"),
                ).filter(Transaction.user_id == user_id)
            )
            .group_by(Transaction.category, Transaction.transaction_type)
            .order_by(category_total.desc(), Transaction.category)
            .all()
        )

        return {
            "month": month,
            "total_income": _to_float(totals.total_income),
            "total_expense": _to_float(totals.total_expense),
            "balance": _to_float(balance),
            "by_category": [
                {
                    "category": r.category,
                    "transaction_type": r.transaction_type,
                    "total": _to_float(r.total),
                    "count": r.count,
                }
                for r in by_category
            ],
        }

    def get_monthly_totals(self, user_id: int, year: Optional[int] = None) -> List[Dict]:
        """Get income and expenses per month, oldest month first."""
        year_col = extract("year", Transaction.booked_on)
        month_col = extract("month", Transaction.booked_on)

        query = self.db.query(
            year_col.label("year"),
            month_col.label("month"),
            _income_sum().label("income"),
            _expense_sum().label("expense"),
        ).filter(Transaction.user_id == user_id)

        if year is not None:
            query = query.filter(
                Transaction.booked_on >= date(year, 1, 1),
                Transaction.booked_on < date(year + 1, 1, 1),
            )

        results = query.group_by(year_col, month_col).order_by(year_col, month_col).all()

        return [
            {
                "month": f"{int(r.year)}-{int(r.month):02d}",
                "income": _to_float(r.income),
                "expense": _to_float(r.expense),
                "net": _to_float(r.income) - _to_float(r.expense),
            }
            for r in results
        ]
