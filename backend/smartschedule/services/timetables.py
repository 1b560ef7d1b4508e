from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from smartschedule.models.timetable import Timetable
from smartschedule.schemas.timetable import (
    UNASSIGNED_TEACHER,
    DaySchedule,
    GenerationParams,
    Lecture,
    TimetableCreate,
)

logger = logging.getLogger(__name__)


def _dump_schedule(schedule: list[DaySchedule]) -> list[dict]:
    return [item.model_dump(mode="json") for item in schedule]


def list_timetables(db: Session) -> list[Timetable]:
    return list(db.execute(select(Timetable).order_by(Timetable.start_date, Timetable.created_at)).scalars())


def add_timetable(db: Session, payload: TimetableCreate) -> Timetable:
    timetable = Timetable(
        year=payload.year,
        semester=payload.semester,
        department=payload.department,
        start_date=payload.start_date,
        end_date=payload.end_date,
        schedule=_dump_schedule(payload.schedule),
    )
    db.add(timetable)
    db.flush()
    return timetable


def add_generated_timetable(db: Session, params: GenerationParams, schedule: list[DaySchedule]) -> Timetable:
    return add_timetable(
        db,
        TimetableCreate(
            year=params.year,
            semester=params.semester,
            department=params.department,
            start_date=params.start_date,
            end_date=params.end_date,
            schedule=schedule,
        ),
    )


def update_timetable(db: Session, timetable: Timetable, payload: TimetableCreate) -> Timetable:
    timetable.year = payload.year
    timetable.semester = payload.semester
    timetable.department = payload.department
    timetable.start_date = payload.start_date
    timetable.end_date = payload.end_date
    timetable.schedule = _dump_schedule(payload.schedule)
    db.flush()
    return timetable


def replace_lecture(db: Session, timetable: Timetable, *, day: str, index: int, lecture: Lecture) -> Lecture:
    """Swap one slot of ``day`` for ``lecture``; raises ``LookupError`` for an unknown day or slot."""
    schedule = [DaySchedule.model_validate(item) for item in timetable.schedule or []]
    for day_schedule in schedule:
        if day_schedule.day != day:
            continue
        if index >= len(day_schedule.lectures):
            raise LookupError(f"{day} has no slot {index}")
        day_schedule.lectures[index] = lecture
        # Reassign so the JSON column is flagged dirty.
        timetable.schedule = _dump_schedule(schedule)
        db.flush()
        return lecture
    raise LookupError(f"{day} is not part of this timetable")


def delete_timetable(db: Session, timetable: Timetable) -> None:
    db.delete(timetable)
    db.flush()


def unassign_teacher_from_timetables(db: Session, teacher_name: str) -> int:
    changed = 0
    for timetable in list_timetables(db):
        schedule = []
        touched = False
        for day in timetable.schedule or []:
            lectures = []
            for lecture in day.get("lectures", []):
                if lecture.get("teacher") == teacher_name:
                    lecture = {**lecture, "teacher": UNASSIGNED_TEACHER}
                    touched = True
                    changed += 1
                lectures.append(lecture)
            schedule.append({**day, "lectures": lectures})
        if touched:
            timetable.schedule = schedule
    if changed:
        db.flush()
        logger.info("Unassigned %s from %d lecture(s)", teacher_name, changed)
    return changed
