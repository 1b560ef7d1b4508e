from datetime import datetime

from pydantic import BaseModel, computed_field

from smartschedule.core.dates import format_time_ago
from smartschedule.models.notification import NotificationType
from smartschedule.schemas.timetable import Lecture


class NotificationOut(BaseModel):
    id: str
    user_id: str
    message: str
    notification_type: NotificationType
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def time_ago(self) -> str:
        return format_time_ago(self.created_at)


class ScheduleContent(BaseModel):
    day: str
    lecture: Lecture


class MockEmail(BaseModel):
    recipient_name: str
    recipient_email: str
    recipient_phone: str
    subject: str
    message: str
    schedule_content: ScheduleContent | None = None


class Recipient(BaseModel):
    name: str
    email: str


class MockBulkEmailSummary(BaseModel):
    recipients: list[Recipient]
    subject: str
    email_body_preview: str


class MailboxOut(BaseModel):
    email: MockEmail | None = None
    bulk_summary: MockBulkEmailSummary | None = None


class DispatchOut(BaseModel):
    status: str
    reason: str | None = None
    notification_ids: list[str]
    email: MockEmail | None = None


class BulkDispatchOut(BaseModel):
    status: str
    reason: str | None = None
    notified_teacher_ids: list[str]
    notification_ids: list[str]
    summary: MockBulkEmailSummary | None = None
