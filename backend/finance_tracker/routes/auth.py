from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from finance_tracker.database import get_db
from finance_tracker.schemas import CredentialsRequest, TokenResponse
from finance_tracker.services.credential_service import CredentialError, CredentialService

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(credentials: CredentialsRequest, db: Session = Depends(get_db)):
    """Create an account and return a bearer token for it."""
    try:
        user, token = CredentialService(db).register(credentials.username, credentials.password)
    except CredentialError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return TokenResponse(token=token, username=user.username)


@router.post("/login", response_model=TokenResponse)
def login(credentials: CredentialsRequest, db: Session = Depends(get_db)):
    """Exchange a username and password for a bearer token."""
    try:
        user, token = CredentialService(db).authenticate(credentials.username, credentials.password)
    except CredentialError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return TokenResponse(token=token, username=user.username)
