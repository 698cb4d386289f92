"""
Tests for registration and login rules.
"""
import pytest
from sqlalchemy.orm import sessionmaker

from finance_tracker.config import Settings
from finance_tracker.database import Base, build_engine
from finance_tracker.models import User
from finance_tracker.security.tokens import decode_access_token
from finance_tracker.services import credential_service
from finance_tracker.services.credential_service import CredentialError, CredentialService
from tests.api_client import temporary_session

SETTINGS = Settings(jwt_secret="service-secret", bcrypt_rounds=4)


def test_register_stores_hash_and_issues_token() -> None:
    with temporary_session() as db:
        user, token = CredentialService(db, settings=SETTINGS).register("alice", "secret123")

        stored = db.query(User).filter(User.username == "alice").one()
        assert stored.id == user.id
        assert stored.password_hash != "secret123"
        assert decode_access_token(token, settings=SETTINGS) == user.id


def test_register_trims_username() -> None:
    with temporary_session() as db:
        user, _ = CredentialService(db, settings=SETTINGS).register("  alice  ", "secret123")
        assert user.username == "alice"


@pytest.mark.parametrize(
    ("username", "password", "message"),
    [
        ("", "secret123", "required"),
        ("alice", "", "required"),
        ("   ", "secret123", "required"),
        ("al", "secret123", "at least 3"),
        ("alice", "12345", "at least 6"),
        ("alice", "x" * 73, "at most 72"),
    ],
)
def test_register_rejects_invalid_input(username: str, password: str, message: str) -> None:
    with temporary_session() as db:
        with pytest.raises(CredentialError, match=message):
            CredentialService(db, settings=SETTINGS).register(username, password)
        assert db.query(User).count() == 0


def test_register_rejects_duplicate_username() -> None:
    with temporary_session() as db:
        service = CredentialService(db, settings=SETTINGS)
        service.register("alice", "secret123")

        with pytest.raises(CredentialError, match="already exists"):
            service.register("alice", "other-password")
        assert db.query(User).count() == 1


def test_authenticate_accepts_valid_credentials() -> None:
    with temporary_session() as db:
        service = CredentialService(db, settings=SETTINGS)
        registered, _ = service.register("alice", "secret123")

        user, token = service.authenticate("alice", "secret123")
        assert user.id == registered.id
        assert decode_access_token(token, settings=SETTINGS) == registered.id


def test_authenticate_reports_unknown_user_and_wrong_password_identically() -> None:
    with temporary_session() as db:
        service = CredentialService(db, settings=SETTINGS)
        service.register("alice", "secret123")

        with pytest.raises(CredentialError) as wrong_password:
            service.authenticate("alice", "wrong-password")
        with pytest.raises(CredentialError) as unknown_user:
            service.authenticate("bob", "secret123")

        assert str(wrong_password.value) == str(unknown_user.value) == "Invalid username or password"


def test_register_maps_lost_race_to_duplicate_username(tmp_path, monkeypatch) -> None:
    engine = build_engine(f"sqlite:///{tmp_path / 'race.db'}")
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = session_factory()
    rival = session_factory()
    real_hash_password = credential_service.hash_password

    def hash_after_rival_registers(password, rounds=None):
        # Another request claims the name between the existence check and the commit
        rival.add(User(username="alice", password_hash="$2b$04$rival"))
        rival.commit()
        return real_hash_password(password, rounds=rounds)

    monkeypatch.setattr(credential_service, "hash_password", hash_after_rival_registers)
    try:
        with pytest.raises(CredentialError, match="already exists"):
            CredentialService(db, settings=SETTINGS).register("alice", "secret123")

        users = db.query(User).all()
        assert [u.password_hash for u in users] == ["$2b$04$rival"]
    finally:
        db.close()
        rival.close()
        engine.dispose()
