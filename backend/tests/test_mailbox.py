from smartschedule.schemas.notification import MockBulkEmailSummary, MockEmail, Recipient
from smartschedule.services.mailbox import MockMailbox, mock_mailbox


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def sample_email(name: str = "Asha Patil") -> MockEmail:
    return MockEmail(
        recipient_name=name,
        recipient_email="asha@slrtce.in",
        recipient_phone="+91 98200 11111",
        subject="Schedule Update Notification",
        message="Moved to 11:00.",
    )


def test_mailbox_keeps_latest_email_per_viewer():
    mailbox = MockMailbox()
    mailbox.show_email("admin", sample_email("First"))
    mailbox.show_email("admin", sample_email("Second"))

    assert mailbox.snapshot("admin").email.recipient_name == "Second"
    assert mailbox.snapshot("someone-else").email is None


def test_hiding_is_idempotent():
    mailbox = MockMailbox()
    mailbox.show_email("admin", sample_email())

    assert mailbox.hide_email("admin") is True
    assert mailbox.hide_email("admin") is False
    assert mailbox.hide_bulk_summary("admin") is False


def test_mailbox_endpoints_show_and_dismiss(client, admin_token):
    mock_mailbox.show_email("admin", sample_email())
    mock_mailbox.show_bulk_summary(
        "admin",
        MockBulkEmailSummary(
            recipients=[Recipient(name="Asha Patil", email="asha@slrtce.in")],
            subject="New Timetable Generated: Computer Engineering - First Year",
            email_body_preview="preview",
        ),
    )

    snapshot = client.get("/api/mailbox", headers=auth_headers(admin_token)).json()
    assert snapshot["email"]["message"] == "Moved to 11:00."
    assert snapshot["bulk_summary"]["recipients"] == [{"name": "Asha Patil", "email": "asha@slrtce.in"}]

    dismissed = client.delete("/api/mailbox/email", headers=auth_headers(admin_token))
    assert dismissed.json() == {"dismissed": True}
    dismissed = client.delete("/api/mailbox/bulk-summary", headers=auth_headers(admin_token))
    assert dismissed.json() == {"dismissed": True}

    assert client.get("/api/mailbox", headers=auth_headers(admin_token)).json() == {
        "email": None,
        "bulk_summary": None,
    }


def test_mailbox_requires_authentication(client):
    assert client.get("/api/mailbox").status_code in {401, 403}
