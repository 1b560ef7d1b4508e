from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from smartschedule.api.deps import get_current_user, get_db
from smartschedule.models.notification import Notification
from smartschedule.models.user import User
from smartschedule.schemas.notification import NotificationOut
from smartschedule.services.notifications import (
    list_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
)

router = APIRouter()


@router.get("/notifications", response_model=list[NotificationOut])
def list_my_notifications(
    is_read: bool | None = Query(default=None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[NotificationOut]:
    return list_notifications(db, user_id=current_user.id, is_read=is_read)


@router.post("/notifications/{notification_id}/read", response_model=NotificationOut)
def mark_read(
    notification_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> NotificationOut:
    notification = db.get(Notification, notification_id)
    if notification is None or notification.user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    mark_notification_as_read(db, notification)
    db.commit()
    db.refresh(notification)
    return notification


@router.post("/notifications/read-all")
def mark_all_read(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict[str, int]:
    updated = mark_all_notifications_as_read(db, user_id=current_user.id)
    db.commit()
    return {"updated": updated}
