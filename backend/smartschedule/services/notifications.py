from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from smartschedule.core.config import get_settings
from smartschedule.models.notification import Notification, NotificationType
from smartschedule.models.timetable import Timetable
from smartschedule.models.user import User
from smartschedule.schemas.notification import (
    BulkDispatchOut,
    DispatchOut,
    MockBulkEmailSummary,
    MockEmail,
    Recipient,
    ScheduleContent,
)
from smartschedule.schemas.timetable import DaySchedule, Lecture
from smartschedule.services.mailbox import MockMailbox, mock_mailbox

logger = logging.getLogger(__name__)

SCHEDULE_UPDATE_SUBJECT = "Schedule Update Notification"
NO_LECTURES_MESSAGE = "You have no lectures assigned in this timetable."


class DispatchStatus(str, Enum):
    dispatched = "dispatched"
    skipped = "skipped"


@dataclass
class DispatchOutcome:
    status: DispatchStatus
    reason: str | None = None
    notifications: list[Notification] = field(default_factory=list)
    email: MockEmail | None = None

    def to_out(self) -> DispatchOut:
        return DispatchOut(
            status=self.status.value,
            reason=self.reason,
            notification_ids=[item.id for item in self.notifications],
            email=self.email,
        )


@dataclass
class BulkDispatchOutcome:
    status: DispatchStatus
    reason: str | None = None
    notified_teachers: list[User] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)
    summary: MockBulkEmailSummary | None = None

    def to_out(self) -> BulkDispatchOut:
        return BulkDispatchOut(
            status=self.status.value,
            reason=self.reason,
            notified_teacher_ids=[item.id for item in self.notified_teachers],
            notification_ids=[item.id for item in self.notifications],
            summary=self.summary,
        )


def _admin_id() -> str:
    return get_settings().admin_user_id


def add_notification(
    db: Session,
    *,
    user_id: str,
    message: str,
    notification_type: NotificationType = NotificationType.timetable,
) -> Notification:
    record = Notification(user_id=user_id, message=message, notification_type=notification_type)
    db.add(record)
    db.flush()
    return record


def list_notifications(db: Session, *, user_id: str, is_read: bool | None = None) -> list[Notification]:
    query = (
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc())
    )
    if is_read is not None:
        query = query.where(Notification.is_read == is_read)
    return list(db.execute(query).scalars())


def mark_notification_as_read(db: Session, notification: Notification) -> Notification:
    notification.is_read = True
    db.flush()
    return notification


def mark_all_notifications_as_read(db: Session, *, user_id: str) -> int:
    result = db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        .values(is_read=True)
    )
    return result.rowcount or 0


def _schedule_days(timetable: Timetable) -> list[DaySchedule]:
    return [DaySchedule.model_validate(item) for item in timetable.schedule or []]


def format_teacher_schedule(teacher_name: str, timetable: Timetable) -> str:
    teacher_days = []
    for day in _schedule_days(timetable):
        lectures = [item for item in day.lectures if item.teacher == teacher_name and not item.is_break]
        if lectures:
            teacher_days.append((day.day, lectures))

    if not teacher_days:
        return NO_LECTURES_MESSAGE

    lines = [
        f"Your schedule for {timetable.department} - {timetable.year} "
        f"({timetable.start_date.isoformat()} to {timetable.end_date.isoformat()}):",
        "",
    ]
    for day_name, lectures in teacher_days:
        lines.append(f"--- {day_name} ---")
        for lecture in lectures:
            lines.append(f"  {lecture.time}: {lecture.subject} (Room: {lecture.room or 'N/A'})")
        lines.append("")
    return "\n".join(lines).strip()


def send_notification(
    db: Session,
    teacher: User | None,
    message: str,
    *,
    context: tuple[str, Lecture] | None = None,
    mailbox: MockMailbox | None = None,
) -> DispatchOutcome:
    """Notify one teacher of a schedule change and log it for the administrator.

    ``context`` is the ``(day, lecture)`` pair that triggered the change, if any.
    Teachers without both an email and a phone number are skipped.
    """
    if teacher is None or not teacher.email or not teacher.phone_number:
        name = teacher.name if teacher is not None else "Unknown Teacher"
        logger.warning("Could not send notification to %s due to missing contact info", name)
        return DispatchOutcome(status=DispatchStatus.skipped, reason="missing_contact")

    mailbox = mailbox or mock_mailbox
    admin_id = _admin_id()
    created = [
        add_notification(db, user_id=teacher.id, message=message),
        add_notification(
            db,
            user_id=admin_id,
            message=f'You updated the schedule for "{teacher.name}". A notification has been sent.',
        ),
    ]

    schedule_content = None
    if context is not None:
        day, lecture = context
        schedule_content = ScheduleContent(day=day, lecture=lecture)
    email = MockEmail(
        recipient_name=teacher.name,
        recipient_email=teacher.email,
        recipient_phone=teacher.phone_number,
        subject=SCHEDULE_UPDATE_SUBJECT,
        message=message,
        schedule_content=schedule_content,
    )
    mailbox.show_email(admin_id, email)

    logger.info("Notification sent to %s | email=%s | phone=%s", teacher.name, teacher.email, teacher.phone_number)
    return DispatchOutcome(status=DispatchStatus.dispatched, notifications=created, email=email)


def _bulk_preview(teacher: User, timetable: Timetable) -> str:
    personalized = format_teacher_schedule(teacher.name, timetable)
    return (
        f"(This is a preview of the email sent to each teacher. This example is for {teacher.name}.)\n"
        "\n"
        f"Hello {teacher.name},\n"
        "\n"
        f"A new timetable has been generated for {timetable.department} - {timetable.year}. "
        "Your personalized schedule is detailed below.\n"
        "\n"
        "--------------------------------------\n"
        f"{personalized}\n"
        "--------------------------------------\n"
        "\n"
        "You can also view this on your SmartSchedule AI dashboard at any time.\n"
        "\n"
        "Regards,\n"
        "SmartSchedule AI"
    )


def send_bulk_notifications_for_generation(
    db: Session,
    timetable: Timetable,
    all_teachers: list[User],
    *,
    mailbox: MockMailbox | None = None,
) -> BulkDispatchOutcome:
    """Notify every teacher specialised in the timetable's year about a new timetable.

    The administrator gets one summary notification and one bulk email summary
    whose preview is personalised for the first matched teacher only.
    """
    admin_id = _admin_id()
    relevant = [item for item in all_teachers if item.year_specialization == timetable.year]

    if not relevant:
        notice = add_notification(
            db,
            user_id=admin_id,
            message=(
                f"You generated a new schedule for {timetable.department} ({timetable.year}), "
                "but no teachers with that year specialization were found to notify."
            ),
        )
        logger.info("No teachers specialised in %s; nobody notified", timetable.year)
        return BulkDispatchOutcome(
            status=DispatchStatus.skipped,
            reason="no_matching_teachers",
            notifications=[notice],
        )

    in_app_message = (
        f"A new timetable for {timetable.department} ({timetable.year}) has been generated. "
        "Please check your dashboard for your assignments."
    )
    created: list[Notification] = []
    recipients: list[Recipient] = []
    for teacher in relevant:
        created.append(add_notification(db, user_id=teacher.id, message=in_app_message))
        recipients.append(Recipient(name=teacher.name, email=teacher.email))
        logger.debug("Bulk notification queued for %s (%s)", teacher.name, teacher.email)

    created.append(
        add_notification(
            db,
            user_id=admin_id,
            message=(
                f"You generated a new schedule for {timetable.department} ({timetable.year}) "
                f"and notified {len(relevant)} relevant teachers."
            ),
        )
    )

    summary = MockBulkEmailSummary(
        recipients=recipients,
        subject=f"New Timetable Generated: {timetable.department} - {timetable.year}",
        email_body_preview=_bulk_preview(relevant[0], timetable),
    )
    (mailbox or mock_mailbox).show_bulk_summary(admin_id, summary)
    logger.info("Notified %d teacher(s) about %s (%s)", len(relevant), timetable.department, timetable.year)
    return BulkDispatchOutcome(
        status=DispatchStatus.dispatched,
        notified_teachers=relevant,
        notifications=created,
        summary=summary,
    )
