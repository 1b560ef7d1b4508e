"""Round-robin weekly timetable generator.

Each weekday gets four morning lectures, a break, an optional lab and two
afternoon lectures. Lecture subjects are drawn cyclically across the whole
week and labs rotate one per day, so the result is fully determined by the
order of the subject list.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging

import anyio

from smartschedule.core.dates import WEEKDAYS
from smartschedule.core.exceptions import EmptySubjectSetError
from smartschedule.schemas.timetable import (
    BREAK_SUBJECT,
    NOT_APPLICABLE,
    DaySchedule,
    GeneratedSchedule,
    GenerationParams,
    Lecture,
    Subject,
)
from smartschedule.services.time_utils import add_minutes, format_time_range, parse_time_to_minutes

logger = logging.getLogger(__name__)

MORNING_LECTURES = 4
AFTERNOON_LECTURES = 2
LAB_ROOMS_PER_YEAR = 5

YEAR_CODES = {
    "First Year": 1,
    "Second Year": 2,
    "Third Year": 3,
    "Fourth Year": 4,
}


def split_subjects(subjects: list[Subject]) -> tuple[list[Subject], list[Subject]]:
    lectures = [item for item in subjects if not item.is_lab]
    labs = [item for item in subjects if item.is_lab]
    return lectures, labs


@dataclass
class GenerationSession:
    """Cyclic counters for a single generation run."""

    year: str
    lectures: list[Subject]
    labs: list[Subject]
    lecture_index: int = 0
    lab_index: int = 0
    year_code: int = field(init=False)

    def __post_init__(self) -> None:
        self.year_code = YEAR_CODES.get(self.year, 1)

    def next_lecture(self) -> Subject:
        subject = self.lectures[self.lecture_index % len(self.lectures)]
        self.lecture_index += 1
        return subject

    def next_lab(self) -> Subject | None:
        if not self.labs:
            return None
        subject = self.labs[self.lab_index % len(self.labs)]
        self.lab_index += 1
        return subject

    def room_for(self, subject: Subject) -> str:
        if subject.is_lab:
            return f"Lab {self.year_code}5{(self.lab_index % LAB_ROOMS_PER_YEAR) + 1}"
        return f"Room {self.year_code}01"


def _teaching_slot(session: GenerationSession, subject: Subject, start: str, duration: int) -> tuple[Lecture, str]:
    end = add_minutes(start, duration)
    lecture = Lecture(
        time=format_time_range(start, end),
        subject=subject.name,
        teacher=subject.default_teacher,
        room=session.room_for(subject),
    )
    return lecture, end


def _break_slot(start: str, duration: int) -> tuple[Lecture, str]:
    end = add_minutes(start, duration)
    lecture = Lecture(
        time=format_time_range(start, end),
        subject=BREAK_SUBJECT,
        teacher=NOT_APPLICABLE,
        room=NOT_APPLICABLE,
        is_break=True,
    )
    return lecture, end


def create_mock_timetable(params: GenerationParams) -> GeneratedSchedule:
    lectures, labs = split_subjects(params.subjects)
    if not lectures:
        raise EmptySubjectSetError("lecture")
    if params.require_lab and not labs:
        raise EmptySubjectSetError("lab")
    # Fail on a malformed start time before building any slot.
    parse_time_to_minutes(params.start_time)

    session = GenerationSession(year=params.year, lectures=lectures, labs=labs)
    schedule: list[DaySchedule] = []

    for day in WEEKDAYS:
        day_lectures: list[Lecture] = []
        current = params.start_time
        daily_lab = session.next_lab()

        for _ in range(MORNING_LECTURES):
            lecture, current = _teaching_slot(session, session.next_lecture(), current, params.lecture_duration)
            day_lectures.append(lecture)

        lecture, current = _break_slot(current, params.break_duration)
        day_lectures.append(lecture)

        if daily_lab is not None:
            lecture, current = _teaching_slot(session, daily_lab, current, params.lab_duration)
            day_lectures.append(lecture)

        for _ in range(AFTERNOON_LECTURES):
            lecture, current = _teaching_slot(session, session.next_lecture(), current, params.lecture_duration)
            day_lectures.append(lecture)

        schedule.append(DaySchedule(day=day, lectures=day_lectures))

    return GeneratedSchedule(schedule=schedule)


async def generate_timetable(params: GenerationParams, *, delay_seconds: float = 1.5) -> GeneratedSchedule:
    logger.info(
        "Generating timetable for %s (%s) with %d subject(s)",
        params.department,
        params.year,
        len(params.subjects),
    )
    if delay_seconds > 0:
        await anyio.sleep(delay_seconds)
    generated = create_mock_timetable(params)
    logger.debug("Generated %d day(s) for %s (%s)", len(generated.schedule), params.department, params.year)
    return generated
