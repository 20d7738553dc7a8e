from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.deps import get_current_user
from app.auth.passwords import hash_password, verify_password
from app.auth.tokens import issue_access_token
from app.config import settings
from app.db import get_db
from app.models.user import User
from app.ratelimit import api_rate_limit, rate_limit
from app.schemas.auth import (
    AuthOut,
    ChangePasswordIn,
    LoginIn,
    ProfileUpdateIn,
    RegisterIn,
    UserEnvelopeOut,
    UserMessageOut,
    UserOut,
)
from app.schemas.base import MessageOut

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"], dependencies=[Depends(api_rate_limit)])

auth_rate_limit = rate_limit(
    "auth",
    limit_per_window=settings.rate_limit_auth_per_min,
    window_seconds=60,
)

def user_out(u: User) -> UserOut:
    return UserOut(id=u.id, name=u.name, email=u.email, created_at=u.created_at)

EMAIL_EXISTS = "User already exists with this email"
EMAIL_IN_USE = "Email is already in use"

def _email_taken(db: Session, email: str) -> bool:
    return db.scalar(select(User.id).where(User.email == email)) is not None

def _commit_or_conflict(db: Session, detail: str) -> None:
    # the unique index on email still catches a concurrent insert/update
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail=detail)

@router.post("/register", response_model=AuthOut, status_code=201)
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    _: None = Depends(auth_rate_limit),
) -> AuthOut:
    email = payload.email.lower().strip()
    if _email_taken(db, email):
        raise HTTPException(status_code=400, detail=EMAIL_EXISTS)

    user = User(name=payload.name, email=email, password_hash=hash_password(payload.password))
    db.add(user)
    _commit_or_conflict(db, EMAIL_EXISTS)
    db.refresh(user)
    log.info("registered user %s", user.id)

    return AuthOut(
        message="User registered successfully",
        token=issue_access_token(user.id),
        user=user_out(user),
    )

@router.post("/login", response_model=AuthOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    _: None = Depends(auth_rate_limit),
) -> AuthOut:
    email = payload.email.lower().strip()
    user = db.scalar(select(User).where(User.email == email))

    # same answer for unknown email and wrong password
    if user is None or not verify_password(payload.password, user.password_hash):
        log.info("failed login attempt")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return AuthOut(
        message="Login successful",
        token=issue_access_token(user.id),
        user=user_out(user),
    )

@router.get("/me", response_model=UserEnvelopeOut)
def me(user: User = Depends(get_current_user)) -> UserEnvelopeOut:
    return UserEnvelopeOut(user=user_out(user))

@router.put("/profile", response_model=UserMessageOut)
def update_profile(
    payload: ProfileUpdateIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserMessageOut:
    if payload.email is not None:
        email = payload.email.lower().strip()
        if email != user.email and _email_taken(db, email):
            raise HTTPException(status_code=400, detail=EMAIL_IN_USE)
        user.email = email

    if payload.name is not None:
        user.name = payload.name

    db.add(user)
    _commit_or_conflict(db, EMAIL_IN_USE)
    db.refresh(user)
    return UserMessageOut(message="Profile updated successfully", user=user_out(user))

@router.put("/change-password", response_model=MessageOut)
def change_password(
    payload: ChangePasswordIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageOut:
    if not verify_password(payload.current_password, user.password_hash):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    user.password_hash = hash_password(payload.new_password)
    db.add(user)
    db.commit()
    log.info("password changed for user %s", user.id)
    return MessageOut(message="Password changed successfully")
