from pydantic import BaseModel, EmailStr, Field, field_validator

from smartschedule.models.user import UserRole
from smartschedule.schemas.timetable import YEAR_VALUES


class UserOut(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: UserRole

    model_config = {"from_attributes": True}


class UserLogin(BaseModel):
    role: UserRole
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class Token(BaseModel):
    access_token: str
    token_type: str
    user: UserOut


class TeacherBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    phone_number: str | None = Field(default=None, max_length=50)
    year_specialization: str
    department: str = Field(min_length=1, max_length=200)
    subjects: list[str] = Field(default_factory=list, max_length=50)
    age: int | None = Field(default=None, ge=18, le=100)
    location: str | None = Field(default=None, max_length=200)
    qualification: str | None = Field(default=None, max_length=200)
    experience: str | None = Field(default=None, max_length=100)

    @field_validator("name", "department")
    @classmethod
    def strip_required_text(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Value cannot be empty")
        return trimmed

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("phone_number")
    @classmethod
    def normalize_phone_number(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("year_specialization")
    @classmethod
    def validate_year_specialization(cls, value: str) -> str:
        if value not in YEAR_VALUES:
            raise ValueError(f"year_specialization must be one of: {', '.join(YEAR_VALUES)}")
        return value

    @field_validator("subjects")
    @classmethod
    def normalize_subjects(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(item.strip() for item in value if item.strip()))


class TeacherCreate(TeacherBase):
    password: str = Field(min_length=6, max_length=128)


class TeacherUpdate(TeacherBase):
    password: str | None = Field(default=None, min_length=6, max_length=128)


class TeacherOut(TeacherBase):
    id: str
    role: UserRole

    model_config = {"from_attributes": True}
