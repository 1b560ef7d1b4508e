from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

import smartschedule.models  # noqa: F401
from smartschedule.core.config import Settings, get_settings
from smartschedule.db.base import Base
from smartschedule.db.session import SessionLocal, engine
from smartschedule.models.user import User, UserRole

logger = logging.getLogger(__name__)

DEMO_TEACHERS: list[dict] = [
    {
        "name": "Dr. Anita Sharma",
        "email": "anita.sharma@slrtce.in",
        "password": "teacher123",
        "phone_number": "+91 98200 11111",
        "year_specialization": "First Year",
        "department": "Computer Engineering",
        "subjects": ["Engineering Mathematics", "Mathematics Lab"],
        "qualification": "Ph.D. Mathematics",
        "experience": "12 years",
        "location": "Mira Road",
    },
    {
        "name": "Prof. Rohan Mehta",
        "email": "rohan.mehta@slrtce.in",
        "password": "teacher123",
        "phone_number": "+91 98200 22222",
        "year_specialization": "First Year",
        "department": "Computer Engineering",
        "subjects": ["Engineering Physics", "Physics Lab"],
        "qualification": "M.Sc. Physics",
        "experience": "8 years",
        "location": "Borivali",
    },
    {
        "name": "Prof. Kavita Iyer",
        "email": "kavita.iyer@slrtce.in",
        "password": "teacher123",
        "phone_number": "+91 98200 33333",
        "year_specialization": "Second Year",
        "department": "Information Technology",
        "subjects": ["Data Structures", "Data Structures Lab"],
        "qualification": "M.E. Computer Engineering",
        "experience": "6 years",
        "location": "Dahisar",
    },
]


def ensure_admin_user(db: Session, settings: Settings) -> User:
    admin = db.get(User, settings.admin_user_id)
    if admin is None:
        admin = User(
            id=settings.admin_user_id,
            name=settings.admin_name,
            email=settings.admin_email.strip().lower(),
            password=settings.admin_password,
            role=UserRole.admin,
            subjects=[],
        )
        db.add(admin)
        logger.info("Created administrator account %s", admin.email)
    return admin


def seed_demo_teachers(db: Session) -> int:
    has_teachers = db.execute(select(User.id).where(User.role == UserRole.teacher).limit(1)).first()
    if has_teachers is not None:
        return 0
    for values in DEMO_TEACHERS:
        db.add(User(role=UserRole.teacher, **values))
    logger.info("Seeded %d demo teacher(s)", len(DEMO_TEACHERS))
    return len(DEMO_TEACHERS)


def ensure_database_ready() -> None:
    settings = get_settings()
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        ensure_admin_user(db, settings)
        if settings.seed_demo_data:
            seed_demo_teachers(db)
        db.commit()
