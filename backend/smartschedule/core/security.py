from __future__ import annotations

from datetime import datetime, timedelta, timezone
import secrets

from jose import jwt

from smartschedule.core.config import get_settings


def create_access_token(subject: str, *, role: str, expires_minutes: int | None = None) -> str:
    settings = get_settings()
    lifetime = settings.access_token_expire_minutes if expires_minutes is None else expires_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=lifetime)
    payload = {"sub": subject, "role": role, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


def verify_password(plain_password: str, stored_password: str | None) -> bool:
    # Credentials are stored and compared in plaintext.
    if stored_password is None:
        return False
    return secrets.compare_digest(plain_password.encode("utf-8"), stored_password.encode("utf-8"))
