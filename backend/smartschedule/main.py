from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from smartschedule.api.routes import (
    auth,
    dashboard,
    health,
    mailbox,
    notifications,
    teachers,
    timetables,
)
from smartschedule.core.config import get_settings
from smartschedule.core.exceptions import AppError
from smartschedule.core.logging_setup import configure_logging
from smartschedule.core.middleware import RequestSizeLimitMiddleware, RequestTimingMiddleware
from smartschedule.db.bootstrap import ensure_database_ready

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_database_ready()
    logger.info("%s ready", settings.project_name)
    yield


async def app_error_handler(request: Request, exc: AppError):
    logger.info("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )


app = FastAPI(title=settings.project_name, lifespan=lifespan)
app.add_exception_handler(AppError, app_error_handler)

app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_size_bytes)
app.add_middleware(RequestTimingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(auth.router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])
app.include_router(teachers.router, prefix=f"{settings.api_prefix}/teachers", tags=["teachers"])
app.include_router(timetables.router, prefix=f"{settings.api_prefix}/timetables", tags=["timetables"])
app.include_router(notifications.router, prefix=settings.api_prefix, tags=["notifications"])
app.include_router(mailbox.router, prefix=settings.api_prefix, tags=["mailbox"])
app.include_router(dashboard.router, prefix=settings.api_prefix, tags=["dashboard"])
