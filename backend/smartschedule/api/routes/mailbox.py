from fastapi import APIRouter, Depends

from smartschedule.api.deps import get_current_user
from smartschedule.models.user import User
from smartschedule.schemas.notification import MailboxOut
from smartschedule.services.mailbox import mock_mailbox

router = APIRouter()


@router.get("/mailbox", response_model=MailboxOut)
def get_mailbox(current_user: User = Depends(get_current_user)) -> MailboxOut:
    return mock_mailbox.snapshot(current_user.id)


@router.delete("/mailbox/email")
def dismiss_email(current_user: User = Depends(get_current_user)) -> dict[str, bool]:
    return {"dismissed": mock_mailbox.hide_email(current_user.id)}


@router.delete("/mailbox/bulk-summary")
def dismiss_bulk_summary(current_user: User = Depends(get_current_user)) -> dict[str, bool]:
    return {"dismissed": mock_mailbox.hide_bulk_summary(current_user.id)}
