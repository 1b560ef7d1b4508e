from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from smartschedule.core.dates import WEEKDAYS
from smartschedule.core.exceptions import InvalidTimeFormatError
from smartschedule.services.time_utils import parse_time_to_minutes

YEAR_VALUES = ("First Year", "Second Year", "Third Year", "Fourth Year")

BREAK_SUBJECT = "Lunch Break"
NOT_APPLICABLE = "N/A"
UNASSIGNED_TEACHER = "[Unassigned]"


def _validate_clock(value: str) -> str:
    try:
        parse_time_to_minutes(value)
    except InvalidTimeFormatError as exc:
        raise ValueError(exc.message) from exc
    return value.strip()


class Subject(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    default_teacher: str = Field(min_length=1, max_length=200)

    @property
    def is_lab(self) -> bool:
        return "lab" in self.name.lower()


class Lecture(BaseModel):
    time: str = Field(min_length=1, max_length=50)
    subject: str = Field(min_length=1, max_length=200)
    teacher: str = Field(min_length=1, max_length=200)
    room: str | None = Field(default=None, max_length=100)
    is_break: bool = False


class DaySchedule(BaseModel):
    day: str
    lectures: list[Lecture] = Field(default_factory=list)

    @field_validator("day")
    @classmethod
    def validate_day(cls, value: str) -> str:
        day = value.strip()
        if day not in WEEKDAYS:
            raise ValueError(f"day must be one of: {', '.join(WEEKDAYS)}")
        return day


class GeneratedSchedule(BaseModel):
    schedule: list[DaySchedule]


class TimetableBase(BaseModel):
    year: str
    semester: str = Field(min_length=1, max_length=50)
    department: str = Field(min_length=1, max_length=200)
    start_date: date
    end_date: date

    @field_validator("year")
    @classmethod
    def validate_year(cls, value: str) -> str:
        if value not in YEAR_VALUES:
            raise ValueError(f"year must be one of: {', '.join(YEAR_VALUES)}")
        return value

    @model_validator(mode="after")
    def validate_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TimetableCreate(TimetableBase):
    schedule: list[DaySchedule] = Field(default_factory=list, max_length=len(WEEKDAYS))

    @field_validator("schedule")
    @classmethod
    def validate_unique_days(cls, value: list[DaySchedule]) -> list[DaySchedule]:
        days = [item.day for item in value]
        if len(days) != len(set(days)):
            raise ValueError("Each weekday may appear at most once in a schedule")
        return value


class TimetableOut(TimetableCreate):
    id: str

    model_config = {"from_attributes": True}


class TeacherRef(BaseModel):
    """A roster entry sent along with generation parameters; any teacher fields are kept as sent."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None


class GenerationParams(TimetableBase):
    subjects: list[Subject] = Field(min_length=1, max_length=100)
    teachers: list[TeacherRef] = Field(default_factory=list)
    start_time: str = "09:00"
    end_time: str = "17:00"
    lecture_duration: int = Field(default=60, ge=1, le=600)
    lab_duration: int = Field(default=120, ge=1, le=600)
    break_duration: int = Field(default=45, ge=0, le=600)
    require_lab: bool = False

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        return _validate_clock(value)


class LectureUpdate(BaseModel):
    day: str
    index: int = Field(ge=0)
    lecture: Lecture
    message: str | None = Field(default=None, max_length=2000)

    @field_validator("day")
    @classmethod
    def validate_day(cls, value: str) -> str:
        day = value.strip()
        if day not in WEEKDAYS:
            raise ValueError(f"day must be one of: {', '.join(WEEKDAYS)}")
        return day
