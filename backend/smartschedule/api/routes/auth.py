import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from smartschedule.api.deps import get_current_user, get_db
from smartschedule.core.config import get_settings
from smartschedule.core.security import create_access_token, verify_password
from smartschedule.models.user import User, UserRole
from smartschedule.schemas.user import TeacherCreate, TeacherOut, Token, UserLogin, UserOut
from smartschedule.services.rate_limit import (
    ensure_not_limited,
    rate_limit_key,
    record_attempt,
    reset_attempts,
)
from smartschedule.services.teachers import DuplicateEmailError, get_user_by_email, register_teacher

settings = get_settings()
router = APIRouter()
logger = logging.getLogger(__name__)


def _authenticate(db: Session, payload: UserLogin) -> User | None:
    if payload.role == UserRole.admin:
        if payload.email != settings.admin_email.strip().lower():
            return None
        admin = db.get(User, settings.admin_user_id)
        if admin is None or not verify_password(payload.password, admin.password):
            return None
        return admin

    if not payload.email.endswith(settings.teacher_email_domain):
        return None
    user = get_user_by_email(db, payload.email)
    if user is None or user.role != UserRole.teacher:
        return None
    if not verify_password(payload.password, user.password):
        return None
    return user


@router.post("/login", response_model=Token)
def login(payload: UserLogin, request: Request, db: Session = Depends(get_db)) -> Token:
    key = rate_limit_key(request, "auth.login", payload.email)
    ensure_not_limited(
        key=key,
        scope="auth.login",
        limit=settings.auth_rate_limit_login_max_requests,
        window_seconds=settings.auth_rate_limit_window_seconds,
    )
    user = _authenticate(db, payload)
    if user is None:
        record_attempt(key)
        logger.info("Rejected %s login for %s", payload.role.value, payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    reset_attempts(key)
    token = create_access_token(user.id, role=user.role.value)
    return Token(access_token=token, token_type="bearer", user=UserOut.model_validate(user))


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)) -> UserOut:
    return current_user


@router.post("/logout")
def logout(current_user: User = Depends(get_current_user)) -> dict[str, bool]:
    # Tokens are stateless; the client discards its copy.
    return {"success": True}


@router.post("/register", response_model=TeacherOut, status_code=status.HTTP_201_CREATED)
def register(payload: TeacherCreate, request: Request, db: Session = Depends(get_db)) -> TeacherOut:
    key = rate_limit_key(request, "auth.register")
    ensure_not_limited(
        key=key,
        scope="auth.register",
        limit=settings.auth_rate_limit_register_max_requests,
        window_seconds=settings.auth_rate_limit_window_seconds,
    )
    record_attempt(key)
    try:
        teacher = register_teacher(db, payload, admin_id=settings.admin_user_id)
    except DuplicateEmailError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered") from exc
    db.commit()
    db.refresh(teacher)
    return teacher
