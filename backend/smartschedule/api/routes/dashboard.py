from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from smartschedule.api.deps import get_db, require_teacher
from smartschedule.models.user import User
from smartschedule.schemas.timetable import DaySchedule, TimetableOut
from smartschedule.services.teacher_schedule import build_teacher_view, render_todays_schedule
from smartschedule.services.timetables import list_timetables

router = APIRouter()


class TeacherDashboardOut(BaseModel):
    today: date
    today_day: str
    total_lectures: int
    lectures_this_week: int
    todays_schedule: list[DaySchedule]
    weekly_overview: dict[str, int]
    active_or_upcoming: list[TimetableOut]
    past: list[TimetableOut]


@router.get("/dashboard/teacher", response_model=TeacherDashboardOut)
def teacher_dashboard(
    current_user: User = Depends(require_teacher),
    db: Session = Depends(get_db),
) -> TeacherDashboardOut:
    view = build_teacher_view(list_timetables(db), current_user.name)
    return TeacherDashboardOut(
        today=view.today,
        today_day=view.today_day,
        total_lectures=view.total_lectures,
        lectures_this_week=view.lectures_this_week,
        todays_schedule=view.todays_schedule,
        weekly_overview=view.weekly_overview,
        active_or_upcoming=view.active_or_upcoming,
        past=view.past,
    )


@router.get("/dashboard/teacher/today.txt", response_class=PlainTextResponse)
def download_todays_schedule(
    current_user: User = Depends(require_teacher),
    db: Session = Depends(get_db),
) -> PlainTextResponse:
    view = build_teacher_view(list_timetables(db), current_user.name)
    filename = f"todays_schedule_{view.today.isoformat()}.txt"
    return PlainTextResponse(
        render_todays_schedule(current_user.name, view),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
