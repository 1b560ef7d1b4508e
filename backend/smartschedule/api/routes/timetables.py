from functools import partial
import logging

import anyio
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from smartschedule.api.deps import get_current_user, get_db, require_admin
from smartschedule.core.config import get_settings
from smartschedule.core.exceptions import ResourceNotFoundError
from smartschedule.models.timetable import Timetable
from smartschedule.models.user import User, UserRole
from smartschedule.schemas.generator import GenerateTimetableResponse, LectureUpdateResponse
from smartschedule.schemas.timetable import (
    DaySchedule,
    GenerationParams,
    LectureUpdate,
    TimetableCreate,
    TimetableOut,
)
from smartschedule.services.notifications import send_bulk_notifications_for_generation, send_notification
from smartschedule.services.teacher_schedule import timetable_for_teacher
from smartschedule.services.teachers import find_teacher_by_name, list_teachers
from smartschedule.services.timetable_generator import generate_timetable
from smartschedule.services.timetables import (
    add_generated_timetable,
    add_timetable,
    delete_timetable,
    list_timetables,
    replace_lecture,
    update_timetable,
)

settings = get_settings()
router = APIRouter()
logger = logging.getLogger(__name__)


def _get_timetable_or_404(db: Session, timetable_id: str) -> Timetable:
    timetable = db.get(Timetable, timetable_id)
    if timetable is None:
        raise ResourceNotFoundError("Timetable", timetable_id)
    return timetable


@router.get("/", response_model=list[TimetableOut])
def list_all_timetables(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[TimetableOut]:
    timetables = list_timetables(db)
    if current_user.role == UserRole.admin:
        return timetables
    own = (timetable_for_teacher(item, current_user.name) for item in timetables)
    return [item for item in own if item is not None]


@router.get("/{timetable_id}", response_model=TimetableOut)
def get_timetable(
    timetable_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TimetableOut:
    timetable = _get_timetable_or_404(db, timetable_id)
    if current_user.role == UserRole.admin:
        return timetable
    own = timetable_for_teacher(timetable, current_user.name)
    if own is None:
        raise ResourceNotFoundError("Timetable", timetable_id)
    return own


@router.post("/", response_model=TimetableOut, status_code=status.HTTP_201_CREATED)
def create_timetable(
    payload: TimetableCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> TimetableOut:
    timetable = add_timetable(db, payload)
    db.commit()
    db.refresh(timetable)
    return timetable


def _store_generated(db: Session, payload: GenerationParams, schedule: list[DaySchedule]) -> GenerateTimetableResponse:
    timetable = add_generated_timetable(db, payload, schedule)
    outcome = send_bulk_notifications_for_generation(db, timetable, list_teachers(db))
    db.commit()
    db.refresh(timetable)
    logger.info("Timetable %s generated for %s (%s)", timetable.id, timetable.department, timetable.year)
    return GenerateTimetableResponse(
        timetable=TimetableOut.model_validate(timetable),
        dispatch=outcome.to_out(),
    )


@router.post("/generate", response_model=GenerateTimetableResponse, status_code=status.HTTP_201_CREATED)
async def generate(
    payload: GenerationParams,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> GenerateTimetableResponse:
    generated = await generate_timetable(payload, delay_seconds=settings.generation_delay_seconds)
    # Session work stays off the event loop.
    return await anyio.to_thread.run_sync(partial(_store_generated, db, payload, generated.schedule))


@router.put("/{timetable_id}", response_model=TimetableOut)
def replace_timetable(
    timetable_id: str,
    payload: TimetableCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> TimetableOut:
    timetable = _get_timetable_or_404(db, timetable_id)
    update_timetable(db, timetable, payload)
    db.commit()
    db.refresh(timetable)
    return timetable


@router.put("/{timetable_id}/lectures", response_model=LectureUpdateResponse)
def update_lecture(
    timetable_id: str,
    payload: LectureUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> LectureUpdateResponse:
    timetable = _get_timetable_or_404(db, timetable_id)
    try:
        lecture = replace_lecture(db, timetable, day=payload.day, index=payload.index, lecture=payload.lecture)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    dispatch = None
    if not lecture.is_break:
        teacher = find_teacher_by_name(db, lecture.teacher)
        if teacher is not None:
            message = payload.message or (
                f"Your schedule for {payload.day} has been updated: "
                f"{lecture.time} {lecture.subject} (Room: {lecture.room or 'N/A'})."
            )
            dispatch = send_notification(db, teacher, message, context=(payload.day, lecture)).to_out()

    db.commit()
    db.refresh(timetable)
    return LectureUpdateResponse(timetable=TimetableOut.model_validate(timetable), dispatch=dispatch)


@router.delete("/{timetable_id}")
def remove_timetable(
    timetable_id: str,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict[str, bool]:
    timetable = _get_timetable_or_404(db, timetable_id)
    delete_timetable(db, timetable)
    db.commit()
    return {"success": True}
