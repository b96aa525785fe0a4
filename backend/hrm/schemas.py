# backend/hrm/schemas.py
import datetime as dt
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from .models import InterviewStatus, PositionLevel
from .time_format import is_12_hour, to_12_hour

T = TypeVar("T")

USER_ROLES = ("admin", "hr", "Manager", "Recruiter")


# --- Base Schemas ---
class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire (the frontend speaks camelCase)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def _require_text(value: Optional[str], min_length: int, message: str) -> str:
    value = (value or "").strip()
    if len(value) < min_length:
        raise ValueError(message)
    return value


# --- Envelopes ---
class DataResponse(CamelModel, Generic[T]):
    data: T
    message: Optional[str] = None


class PageResponse(CamelModel, Generic[T]):
    data: List[T]
    total: int
    next_page: Optional[int] = None


class MessageResponse(CamelModel):
    message: str


# --- Reference data ---
class SkillIn(CamelModel):
    name: str
    category: str

    @field_validator("name")
    @classmethod
    def _name(cls, v):
        return _require_text(v, 2, "Name must be at least 2 characters")

    @field_validator("category")
    @classmethod
    def _category(cls, v):
        return _require_text(v, 2, "Category must be at least 2 characters")


class Skill(CamelModel):
    id: int
    name: str
    category: str


class PositionIn(CamelModel):
    name: str
    department: str
    level: PositionLevel

    @field_validator("name")
    @classmethod
    def _name(cls, v):
        return _require_text(v, 2, "Name must be at least 2 characters")

    @field_validator("department")
    @classmethod
    def _department(cls, v):
        return _require_text(v, 2, "Department must be at least 2 characters")


class Position(CamelModel):
    id: int
    name: str
    department: str
    level: PositionLevel


class InterviewRoundIn(CamelModel):
    name: str
    description: str

    @field_validator("name")
    @classmethod
    def _name(cls, v):
        return _require_text(v, 2, "Name must be at least 2 characters")

    @field_validator("description")
    @classmethod
    def _description(cls, v):
        return _require_text(v, 2, "Description must be at least 2 characters")


class InterviewRound(CamelModel):
    id: int
    name: str
    description: str


# --- Candidates ---
class CandidateIn(CamelModel):
    full_name: str
    email: EmailStr
    phone: str = Field(max_length=10)
    total_experience: float = Field(ge=0, le=30)
    skills: List[str] = Field(min_length=1)
    education: Optional[List[str]] = None
    previous_companies: Optional[str] = None
    applied_position: List[str] = Field(min_length=1)
    availability: Optional[str] = Field(default=None, max_length=50)
    current_salary: Optional[int] = Field(default=None, ge=0)
    expected_salary: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=1000)
    # Defaults to the signed-in user's name when omitted
    add_by: Optional[str] = Field(default=None, max_length=50)
    resume: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def _full_name(cls, v):
        return _require_text(v, 2, "Name must be at least 2 characters")

    @field_validator("previous_companies")
    @classmethod
    def _previous_companies(cls, v):
        if v is None:
            return v
        return _require_text(v, 2, "Current company name must be at least 2 characters")

    @field_validator("skills")
    @classmethod
    def _skills(cls, v):
        names = [s.strip() for s in v if s and s.strip()]
        if not names:
            raise ValueError("At least one skill must be selected")
        return names

    @field_validator("applied_position")
    @classmethod
    def _positions(cls, v):
        names = [p.strip() for p in v if p and p.strip()]
        if not names:
            raise ValueError("At least one position must be selected")
        return names


class CandidateBrief(CamelModel):
    id: int
    full_name: str
    email: str
    phone: str


class Candidate(CamelModel):
    id: int
    full_name: str
    email: str
    phone: str
    total_experience: float
    education: Optional[List[str]] = None
    previous_companies: Optional[str] = None
    availability: Optional[str] = None
    current_salary: Optional[int] = None
    expected_salary: Optional[int] = None
    notes: Optional[str] = None
    add_by: Optional[str] = None
    resume: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    skills: List[Skill] = []
    applied_position: List[Position] = []


class ResumeUpload(CamelModel):
    resume: str
    original_filename: str
    content_type: str
    size: int


# --- Interviews ---
class ReviewIn(CamelModel):
    score: Optional[float] = Field(default=None, ge=0, le=10)
    feedback: Optional[str] = None

    @field_validator("score")
    @classmethod
    def _one_decimal(cls, v):
        return round(v, 1) if v is not None else v


class Review(CamelModel):
    id: int
    score: Optional[float] = None
    feedback: Optional[str] = None


class InterviewIn(CamelModel):
    interviewer: str
    candidate_id: int
    date: dt.date
    start_time: str
    end_time: str
    status: InterviewStatus = InterviewStatus.PENDING
    interview_round: str
    meeting_link: Optional[str] = Field(default=None, max_length=2048)
    review: Optional[ReviewIn] = None

    @field_validator("interviewer")
    @classmethod
    def _interviewer(cls, v):
        return _require_text(v, 2, "Interviewer name must be at least 2 characters")

    @field_validator("candidate_id")
    @classmethod
    def _candidate_id(cls, v):
        if v <= 0:
            raise ValueError("Please select a valid candidate")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("Please select an interview date")
        return v.strip() if isinstance(v, str) else v

    @field_validator("start_time")
    @classmethod
    def _start_time(cls, v):
        if not is_12_hour(v.strip()):
            raise ValueError("Please select a valid start time")
        return v.strip()

    @field_validator("end_time")
    @classmethod
    def _end_time(cls, v):
        if not is_12_hour(v.strip()):
            raise ValueError("Please select a valid end time")
        return v.strip()

    @field_validator("interview_round")
    @classmethod
    def _interview_round(cls, v):
        return _require_text(v, 1, "Please select an interview round")

    @field_validator("meeting_link")
    @classmethod
    def _meeting_link(cls, v):
        if v is None:
            return v
        return v.strip() or None


class Interview(CamelModel):
    id: int
    interviewer: str
    candidate_id: int
    candidate: Optional[CandidateBrief] = None
    date: dt.date
    start_time: str
    end_time: str
    interview_round: str
    status: InterviewStatus
    meeting_link: Optional[str] = None
    review: Optional[Review] = None

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _display_time(cls, v):
        # stored as 24-hour, shown as 12-hour
        return to_12_hour(v)


# --- Users / Auth ---
class UserBase(CamelModel):
    name: str
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=10)
    role: str

    @field_validator("name")
    @classmethod
    def _name(cls, v):
        return _require_text(v, 1, "Name is required")

    @field_validator("role")
    @classmethod
    def _role(cls, v):
        role = _require_text(v, 1, "Role is required")
        if role not in USER_ROLES:
            raise ValueError(f"Role must be one of: {', '.join(USER_ROLES)}")
        return role


class UserCreate(UserBase):
    password: str = Field(min_length=4)
    role: str = "hr"


class UserUpdate(UserBase):
    pass


class User(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    created_at: Optional[dt.datetime] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class Token(CamelModel):
    token: str
    token_type: str = "bearer"


class Profile(CamelModel):
    user_id: int
    email: str
    role: str
    name: str
