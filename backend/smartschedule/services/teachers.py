from __future__ import annotations

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from smartschedule.models.notification import Notification, NotificationType
from smartschedule.models.user import User, UserRole
from smartschedule.schemas.user import TeacherCreate, TeacherUpdate
from smartschedule.services.notifications import add_notification
from smartschedule.services.timetables import unassign_teacher_from_timetables

logger = logging.getLogger(__name__)


class DuplicateEmailError(ValueError):
    pass


def get_user_by_email(db: Session, email: str) -> User | None:
    normalized = email.strip().lower()
    return db.execute(select(User).where(func.lower(User.email) == normalized)).scalar_one_or_none()


def list_teachers(db: Session) -> list[User]:
    return list(db.execute(select(User).where(User.role == UserRole.teacher).order_by(User.name)).scalars())


def get_teacher(db: Session, teacher_id: str) -> User | None:
    user = db.get(User, teacher_id)
    if user is None or user.role != UserRole.teacher:
        return None
    return user


def find_teacher_by_name(db: Session, name: str) -> User | None:
    return db.execute(
        select(User).where(User.role == UserRole.teacher, User.name == name).limit(1)
    ).scalar_one_or_none()


def register_teacher(db: Session, payload: TeacherCreate, *, admin_id: str) -> User:
    if get_user_by_email(db, payload.email) is not None:
        raise DuplicateEmailError(payload.email)
    values = payload.model_dump()
    values["age"] = None
    teacher = User(role=UserRole.teacher, **values)
    db.add(teacher)
    db.flush()
    add_notification(
        db,
        user_id=admin_id,
        message=f"{teacher.name} has registered as a new teacher.",
        notification_type=NotificationType.registration,
    )
    logger.info("Registered teacher %s <%s>", teacher.name, teacher.email)
    return teacher


def update_teacher_profile(db: Session, teacher: User, payload: TeacherUpdate) -> User:
    existing = get_user_by_email(db, payload.email)
    if existing is not None and existing.id != teacher.id:
        raise DuplicateEmailError(payload.email)
    values = payload.model_dump()
    password = values.pop("password")
    for key, value in values.items():
        setattr(teacher, key, value)
    if password:
        teacher.password = password
    db.flush()
    return teacher


def delete_teacher(db: Session, teacher: User) -> int:
    """Remove a teacher and their notifications after unassigning them from every timetable lecture."""
    unassigned = unassign_teacher_from_timetables(db, teacher.name)
    db.execute(delete(Notification).where(Notification.user_id == teacher.id))
    db.delete(teacher)
    db.flush()
    logger.info("Deleted teacher %s; %d lecture(s) unassigned", teacher.name, unassigned)
    return unassigned
