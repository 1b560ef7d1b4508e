"""Per-teacher projections of the stored timetables for the teacher dashboard."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from smartschedule.core.dates import WEEKDAYS, get_today_info
from smartschedule.models.timetable import Timetable
from smartschedule.schemas.timetable import DaySchedule, TimetableOut


def timetable_for_teacher(timetable: Timetable, teacher_name: str) -> TimetableOut | None:
    """Keep only ``teacher_name``'s lectures; ``None`` when nothing is left."""
    full = TimetableOut.model_validate(timetable)
    days = []
    for day in full.schedule:
        lectures = [item for item in day.lectures if item.teacher == teacher_name]
        if lectures:
            days.append(DaySchedule(day=day.day, lectures=lectures))
    if not days:
        return None
    return full.model_copy(update={"schedule": days})


def lecture_count(timetable: TimetableOut) -> int:
    return sum(len(day.lectures) for day in timetable.schedule)


@dataclass
class TeacherScheduleView:
    today: date
    today_day: str
    past: list[TimetableOut] = field(default_factory=list)
    active_or_upcoming: list[TimetableOut] = field(default_factory=list)
    active: list[TimetableOut] = field(default_factory=list)
    total_lectures: int = 0
    lectures_this_week: int = 0
    todays_schedule: list[DaySchedule] = field(default_factory=list)
    weekly_overview: dict[str, int] = field(default_factory=dict)


def build_teacher_view(timetables: list[Timetable], teacher_name: str, *, today: date | None = None) -> TeacherScheduleView:
    today_string, today_day = get_today_info(today)
    current = date.fromisoformat(today_string)

    own = [item for item in (timetable_for_teacher(t, teacher_name) for t in timetables) if item is not None]
    view = TeacherScheduleView(today=current, today_day=today_day)
    view.past = sorted((t for t in own if t.end_date < current), key=lambda t: t.start_date, reverse=True)
    view.active_or_upcoming = sorted((t for t in own if t.end_date >= current), key=lambda t: t.start_date)
    view.active = [t for t in own if t.start_date <= current <= t.end_date]
    view.total_lectures = sum(lecture_count(t) for t in own)
    view.lectures_this_week = sum(lecture_count(t) for t in view.active)
    view.todays_schedule = [day for t in view.active for day in t.schedule if day.day == today_day]
    view.weekly_overview = {
        name: sum(len(day.lectures) for t in view.active for day in t.schedule if day.day == name)
        for name in WEEKDAYS
    }
    return view


def render_todays_schedule(teacher_name: str, view: TeacherScheduleView) -> str:
    header = f"Today's Schedule for {teacher_name}\nDate: {view.today.isoformat()}\n\n"
    lines = [
        f"  • {lecture.time}: {lecture.subject} (Room: {lecture.room or 'N/A'})"
        for day in view.todays_schedule
        for lecture in day.lectures
    ]
    return header + ("\n".join(lines) if lines else "No lectures scheduled for today.")
