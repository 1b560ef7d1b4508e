from __future__ import annotations

import logging
from threading import Lock

from smartschedule.schemas.notification import MailboxOut, MockBulkEmailSummary, MockEmail

logger = logging.getLogger(__name__)


class MockMailbox:
    """In-process stand-in for email/SMS delivery.

    Holds the most recent simulated email and bulk summary per viewer until the
    viewer dismisses them. Nothing here is persisted.
    """

    def __init__(self) -> None:
        self._emails: dict[str, MockEmail] = {}
        self._bulk_summaries: dict[str, MockBulkEmailSummary] = {}
        self._lock = Lock()

    def show_email(self, viewer_id: str, email: MockEmail) -> None:
        with self._lock:
            self._emails[viewer_id] = email
        logger.info(
            "Mock email to %s <%s> / %s: %s",
            email.recipient_name,
            email.recipient_email,
            email.recipient_phone,
            email.subject,
        )

    def hide_email(self, viewer_id: str) -> bool:
        with self._lock:
            return self._emails.pop(viewer_id, None) is not None

    def show_bulk_summary(self, viewer_id: str, summary: MockBulkEmailSummary) -> None:
        with self._lock:
            self._bulk_summaries[viewer_id] = summary
        logger.info("Mock bulk email '%s' to %d recipient(s)", summary.subject, len(summary.recipients))

    def hide_bulk_summary(self, viewer_id: str) -> bool:
        with self._lock:
            return self._bulk_summaries.pop(viewer_id, None) is not None

    def snapshot(self, viewer_id: str) -> MailboxOut:
        with self._lock:
            return MailboxOut(
                email=self._emails.get(viewer_id),
                bulk_summary=self._bulk_summaries.get(viewer_id),
            )

    def clear(self) -> None:
        with self._lock:
            self._emails.clear()
            self._bulk_summaries.clear()


mock_mailbox = MockMailbox()


def clear_mock_mailbox() -> None:
    mock_mailbox.clear()
