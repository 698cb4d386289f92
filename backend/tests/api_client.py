"""
Helpers for running the API and services against a throwaway in-memory database.
"""
from contextlib import contextmanager
from datetime import date
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from finance_tracker.database import Base, build_engine, get_db
from finance_tracker.main import app
from finance_tracker.models import Transaction, User


@contextmanager
def _in_memory_sessionmaker():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


@contextmanager
def temporary_session():
    """Yield a session bound to a fresh in-memory database."""
    with _in_memory_sessionmaker() as session_factory:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()


@contextmanager
def temporary_client():
    """Yield a TestClient whose requests use a fresh in-memory database."""
    with _in_memory_sessionmaker() as session_factory:
        def override_get_db():
            db = session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        try:
            yield TestClient(app)
        finally:
            app.dependency_overrides.pop(get_db, None)


def register(client: TestClient, username: str = "alice", password: str = "secret123") -> dict[str, str]:
    """Register a user and return Authorization headers for it."""
    response = client.post("/api/auth/register", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def add_user(db, username: str = "alice") -> User:
    user = User(username=username, password_hash="$2b$04$unused")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_transaction(db, user: User, booked_on: date, transaction_type: str, category: str, amount: str, description: str = "entry") -> Transaction:
    transaction = Transaction(
        user_id=user.id,
        description=description,
        amount=Decimal(amount),
        transaction_type=transaction_type,
        category=category,
        booked_on=booked_on,
    )
    db.add(transaction)
    db.commit()
    return transaction
