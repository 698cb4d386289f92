"""
SQLAlchemy models for users and their income/expense transactions.
"""
from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    Numeric,
    Text,
    Integer,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import relationship

from finance_tracker.database import Base

TRANSACTION_TYPE_INCOME = "income"
TRANSACTION_TYPE_EXPENSE = "expense"
TRANSACTION_TYPES = (TRANSACTION_TYPE_INCOME, TRANSACTION_TYPE_EXPENSE)


class User(Base):
    """
    A registered user. Only the bcrypt hash of the password is stored.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(128), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    transactions = relationship("Transaction", back_populates="user", cascade="all, delete-orphan")


class Transaction(Base):
    """
    A single income or expense record owned by a user.
    """
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)  # Always positive; sign comes from transaction_type
    transaction_type = Column(String(20), nullable=False)  # income, expense
    category = Column(String(100), nullable=False)
    booked_on = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="transactions")

    # Indexes
    __table_args__ = (
        Index("idx_transactions_user", "user_id"),
        Index("idx_transactions_booked_on", "booked_on"),
        Index("idx_transactions_user_category", "user_id", "category"),
    )
