from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import inspect, text

from smartschedule.core.config import get_settings
from smartschedule.db.session import engine

router = APIRouter()

REQUIRED_TABLES = {"users", "timetables", "notifications"}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/live")
def health_live() -> dict:
    return {"status": "ok", "timestamp": _now()}


@router.get("/health/ready")
def health_ready() -> JSONResponse:
    """Ready once the core tables exist and the administrator account has been bootstrapped."""
    database = {"ok": True, "missing_tables": [], "error": None}
    admin_present = False

    try:
        with engine.connect() as connection:
            database["missing_tables"] = sorted(REQUIRED_TABLES - set(inspect(connection).get_table_names()))
            if "users" not in database["missing_tables"]:
                row = connection.execute(
                    text("SELECT 1 FROM users WHERE id = :admin_id"),
                    {"admin_id": get_settings().admin_user_id},
                ).first()
                admin_present = row is not None
    except Exception as exc:  # pragma: no cover - environment dependent
        database["ok"] = False
        database["error"] = str(exc)

    ready = database["ok"] and not database["missing_tables"] and admin_present
    payload = {
        "status": "ok" if ready else "degraded",
        "timestamp": _now(),
        "database": database,
        "admin_account": admin_present,
    }
    return JSONResponse(status_code=200 if ready else 503, content=payload)
