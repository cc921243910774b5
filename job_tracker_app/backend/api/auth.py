import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import APIKeyCookie
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import schemas
from ..config.settings import get_settings
from ..models.db import crud
from ..models.db.database import get_db
from ..security import create_session_token, decode_session_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter()

# Reads the session cookie; missing cookies are handled by get_current_user
session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


def _read_credentials(credentials: schemas.Credentials):
    email = credentials.email.strip().lower() if isinstance(credentials.email, str) else ""
    password = credentials.password if isinstance(credentials.password, str) else ""
    if not email or not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="email and password required",
        )
    return email, password


def _start_session(response: Response, user_id: int) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(user_id),
        max_age=settings.session_max_age_minutes * 60,
        httponly=True,
        samesite=settings.session_cookie_samesite,
        secure=settings.session_cookie_secure,
    )


def _session_user(db: Session, token: Optional[str]):
    if not token:
        return None
    user_id = decode_session_token(token)
    if user_id is None:
        return None
    return crud.get_user_by_id(db, user_id)


@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(credentials: schemas.Credentials, response: Response, db: Session = Depends(get_db)):
    email, password = _read_credentials(credentials)
    if crud.get_user_by_email(db, email=email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")

    try:
        user = crud.create_user(db=db, email=email, hashed_password=get_password_hash(password))
    except IntegrityError:
        # Lost a race against a concurrent registration
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already exists")

    _start_session(response, user.id)
    logger.info("Registered user %s", user.id)
    return {"ok": True, "user": schemas.UserPublic.model_validate(user)}


@router.post("/login", response_model=schemas.AuthResponse)
def login(credentials: schemas.Credentials, response: Response, db: Session = Depends(get_db)):
    email, password = _read_credentials(credentials)
    user = crud.get_user_by_email(db, email=email)
    if not user or not verify_password(password, user.hashed_password):
        logger.warning("Failed login for %s", email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    _start_session(response, user.id)
    return {"ok": True, "user": schemas.UserPublic.model_validate(user)}


@router.post("/logout", response_model=schemas.OkResponse)
def logout(response: Response):
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite=settings.session_cookie_samesite,
        secure=settings.session_cookie_secure,
    )
    return {"ok": True}


@router.get("/me", response_model=schemas.AuthResponse)
def me(db: Session = Depends(get_db), token: Optional[str] = Depends(session_cookie)):
    user = _session_user(db, token)
    return {"ok": True, "user": schemas.UserPublic.model_validate(user) if user else None}


def get_current_user(db: Session = Depends(get_db), token: Optional[str] = Depends(session_cookie)):
    user = _session_user(db, token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return user


def get_current_active_user(current_user=Depends(get_current_user)):
    if not current_user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user
