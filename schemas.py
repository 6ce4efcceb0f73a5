"""
Data Schemas for the Student Dashboard

Each Pydantic model is one entity of the dashboard. Resource-backed entities
(Student, Course) map to a collection of the mock API by plural lowercase name.
Attributes are snake_case in Python and camelCase on the wire.
"""

import time
from datetime import datetime, timezone
from typing import List, Literal, Optional, Union
from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Identifier = Union[int, str]
ScheduleStatus = Literal["scheduled", "completed", "cancelled"]
MeetingMode = Literal["online", "in-person", "phone"]
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

_last_id = 0


def new_id() -> int:
    """Millisecond timestamp id, bumped so ids from one process never repeat."""
    global _last_id
    _last_id = max(int(time.time() * 1000), _last_id + 1)
    return _last_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def same_id(a: Identifier, b: Identifier) -> bool:
    """Ids arrive as ints from seed data and as strings from paths and forms."""
    return str(a) == str(b)


def avatar_url(name: str, background: str = "3b82f6") -> str:
    return (
        f"https://ui-avatars.com/api/?name={quote_plus(name.strip())}"
        f"&background={background}&color=ffffff&size=100"
    )


class DashboardModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*")
    @classmethod
    def assume_utc(cls, value):
        # Timestamps without an offset are UTC
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)

    @classmethod
    def normalize(cls, data: dict) -> dict:
        """Rename camelCase keys to field names so partial updates merge cleanly."""
        names = {to_camel(name): name for name in cls.model_fields}
        return {names.get(k, k): v for k, v in data.items()}


# Students & documents
class Document(DashboardModel):
    id: Identifier
    name: str
    size: int = Field(0, ge=0, description="Size in bytes")
    type: str = Field("", description="MIME type")
    uploaded_at: datetime = Field(default_factory=utcnow)
    url: Optional[str] = None


class Student(DashboardModel):
    id: Identifier
    name: str
    email: str
    course: str = Field(..., description="Course name, not a foreign key")
    profile_image: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    documents: List[Document] = Field(default_factory=list)


class Course(DashboardModel):
    id: Identifier
    name: str
    code: str


# Classes & schedules
class Material(DashboardModel):
    id: Identifier
    name: str
    type: str = ""
    url: str = "#"


class ClassSession(DashboardModel):
    id: Identifier
    title: str
    course: str
    instructor: str
    description: str = ""
    duration: int = Field(60, description="Minutes")
    max_students: int = 20
    enrolled_students: int = 0
    tags: List[str] = Field(default_factory=list)
    materials: List[Material] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)


class Schedule(DashboardModel):
    id: Identifier
    class_id: Identifier
    date: str = Field(..., description="YYYY-MM-DD")
    start_time: str = Field(..., pattern=TIME_PATTERN, description="HH:MM, 24h")
    end_time: str = Field(..., pattern=TIME_PATTERN, description="HH:MM, 24h")
    room: str
    meeting_link: Optional[str] = None
    status: ScheduleStatus = "scheduled"
    attendees: int = 0
    notes: Optional[str] = None


# Meetings
class Meeting(DashboardModel):
    id: Identifier
    student_id: Identifier
    student_name: Optional[str] = None
    title: str = ""
    date: str
    time: str
    duration: int = 30
    type: MeetingMode = "online"
    meeting_link: Optional[str] = None
    description: str = ""
    status: ScheduleStatus = "scheduled"
    scheduled_at: datetime = Field(default_factory=utcnow)
    cancelled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None


# Session
class User(DashboardModel):
    id: Identifier
    email: str
    name: str
    role: Literal["admin", "teacher"] = "teacher"
    campus: Optional[str] = None
    created_at: Optional[datetime] = None
