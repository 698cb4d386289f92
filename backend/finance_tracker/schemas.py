from pydantic import BaseModel, ConfigDict
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional


# Auth Schemas
class CredentialsRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    token: str
    username: str


# Transaction Schemas
class TransactionBase(BaseModel):
    description: str
    transaction_type: str  # income, expense
    category: str
    booked_on: date


class TransactionCreate(TransactionBase):
    amount: Decimal


class TransactionResponse(TransactionBase):
    id: int
    amount: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


# Summary Schemas
class CategoryTotal(BaseModel):
    category: str
    transaction_type: str
    total: float
    count: int


class SummaryResponse(BaseModel):
    month: Optional[str] = None
    total_income: float
    total_expense: float
    balance: float
    by_category: List[CategoryTotal]


class MonthlyTotal(BaseModel):
    month: str  # YYYY-MM
    income: float
    expense: float
    net: float


# Chart Schemas
class ExpenseSlice(BaseModel):
    """One slice of the expenses-by-category pie chart."""
    name: str
    value: float
    color: str


class CategoryBar(BaseModel):
    """One bar of the top categories chart."""
    name: str
    amount: float
    transaction_type: str


class ChartDataResponse(BaseModel):
    month: Optional[str] = None
    expense_breakdown: List[ExpenseSlice]
    top_categories: List[CategoryBar]


class CategoryCatalogResponse(BaseModel):
    expense: List[str]
    income: List[str]
    colors: dict[str, str]
