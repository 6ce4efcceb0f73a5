"""
Form validation.

Each ``validate_*`` function takes a form (field -> value, snake_case or
camelCase keys) and returns a field -> message map. An empty map means the
form may be submitted.
"""

import re
from datetime import date, timedelta
from typing import Dict, Iterable, Optional, Tuple

from pydantic import AnyUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from schemas import ClassSession, Identifier, Schedule, TIME_PATTERN, same_id

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MEETING_MODES = ("online", "in-person", "phone")
MIN_CLASS_DURATION = 15

_url_adapter = TypeAdapter(AnyUrl)

Errors = Dict[str, str]


def _value(form: dict, name: str):
    if name in form:
        return form[name]
    return form.get(to_camel(name))


def _text(form: dict, name: str) -> str:
    value = _value(form, name)
    return "" if value is None else str(value).strip()


def _number(form: dict, name: str) -> Optional[float]:
    value = _value(form, name)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _date(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def is_valid_url(value: str) -> bool:
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def is_valid_time(value: str) -> bool:
    return bool(re.match(TIME_PATTERN, value))


def time_to_minutes(value: str) -> int:
    if not is_valid_time(value):
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def times_overlap(first: Tuple[str, str], second: Tuple[str, str]) -> bool:
    """Half-open [start, end) overlap; touching endpoints do not overlap."""
    start1, end1 = (time_to_minutes(t) for t in first)
    start2, end2 = (time_to_minutes(t) for t in second)
    return start1 < end2 and start2 < end1


def calculate_end_time(start_time: str, duration: int) -> str:
    total = (time_to_minutes(start_time) + int(duration)) % (24 * 60)
    return f"{total // 60:02d}:{total % 60:02d}"


def find_schedule_conflict(
    schedules: Iterable[Schedule],
    on_date: str,
    room: str,
    start_time: str,
    end_time: str,
    exclude_id: Optional[Identifier] = None,
) -> Optional[Schedule]:
    for s in schedules:
        if exclude_id is not None and same_id(s.id, exclude_id):
            continue
        if s.date == on_date and s.room == room and times_overlap((s.start_time, s.end_time), (start_time, end_time)):
            return s
    return None


def conflict_message(conflict: Schedule, classes: Iterable[ClassSession] = ()) -> str:
    title = next((c.title for c in classes if same_id(c.id, conflict.class_id)), f"class {conflict.class_id}")
    return f'Room is already booked at this time for "{title}"'


def validate_student(form: dict) -> Errors:
    errors: Errors = {}

    name = _text(form, "name")
    if not name:
        errors["name"] = "Name is required"
    elif len(name) < 2:
        errors["name"] = "Name must be at least 2 characters"

    email = _text(form, "email")
    if not email:
        errors["email"] = "Email is required"
    elif not is_valid_email(email):
        errors["email"] = "Please enter a valid email address"

    if not _text(form, "course"):
        errors["course"] = "Please select a course"

    image = _text(form, "profile_image")
    if image and not is_valid_url(image):
        errors["profile_image"] = "Please enter a valid image URL"

    return errors


def validate_class(form: dict) -> Errors:
    errors: Errors = {}

    if not _text(form, "title"):
        errors["title"] = "Class title is required"
    if not _text(form, "course"):
        errors["course"] = "Please select a course"
    if not _text(form, "instructor"):
        errors["instructor"] = "Instructor name is required"
    if not _text(form, "description"):
        errors["description"] = "Class description is required"

    duration = _number(form, "duration")
    if duration is None or duration < MIN_CLASS_DURATION:
        errors["duration"] = f"Duration must be at least {MIN_CLASS_DURATION} minutes"

    max_students = _number(form, "max_students")
    if max_students is None or max_students < 1:
        errors["max_students"] = "Max students must be at least 1"

    return errors


def validate_schedule(
    form: dict,
    schedules: Iterable[Schedule] = (),
    classes: Iterable[ClassSession] = (),
    today: Optional[date] = None,
    exclude_id: Optional[Identifier] = None,
) -> Errors:
    errors: Errors = {}
    today = today or date.today()

    on_date = _text(form, "date")
    if not on_date:
        errors["date"] = "Date is required"
    elif _date(on_date) is None:
        errors["date"] = "Please enter a valid date"
    elif _date(on_date) < today:
        errors["date"] = "Date cannot be in the past"

    start = _text(form, "start_time")
    if not start:
        errors["start_time"] = "Start time is required"
    elif not is_valid_time(start):
        errors["start_time"] = "Please enter a valid time"

    end = _text(form, "end_time")
    if not end:
        errors["end_time"] = "End time is required"
    elif not is_valid_time(end):
        errors["end_time"] = "Please enter a valid time"
    elif "start_time" not in errors and time_to_minutes(end) <= time_to_minutes(start):
        errors["end_time"] = "End time must be after start time"

    room = _text(form, "room")
    if not room:
        errors["room"] = "Room or location is required"

    link = _text(form, "meeting_link")
    if not link:
        errors["meeting_link"] = "Meeting link is required"
    elif not is_valid_url(link):
        errors["meeting_link"] = "Please enter a valid URL"

    if on_date and room and "start_time" not in errors and "end_time" not in errors:
        conflict = find_schedule_conflict(schedules, on_date, room, start, end, exclude_id)
        if conflict is not None:
            errors["room"] = conflict_message(conflict, classes)

    return errors


def validate_meeting(form: dict, today: Optional[date] = None) -> Errors:
    errors: Errors = {}
    today = today or date.today()

    if not _text(form, "title"):
        errors["title"] = "Meeting title is required"

    on_date = _text(form, "date")
    if not on_date:
        errors["date"] = "Date is required"
    elif _date(on_date) is None:
        errors["date"] = "Please enter a valid date"
    elif _date(on_date) < today:
        errors["date"] = "Date cannot be in the past"

    when = _text(form, "time")
    if not when:
        errors["time"] = "Time is required"
    elif not is_valid_time(when):
        errors["time"] = "Please enter a valid time"

    duration = _number(form, "duration")
    if duration is None or duration < MIN_CLASS_DURATION:
        errors["duration"] = f"Duration must be at least {MIN_CLASS_DURATION} minutes"

    if _text(form, "type") not in MEETING_MODES:
        errors["type"] = "Please choose online, in-person or phone"

    link = _text(form, "meeting_link")
    if link and not is_valid_url(link):
        errors["meeting_link"] = "Please enter a valid URL"

    return errors


def default_schedule_form(cls: ClassSession, today: Optional[date] = None, room: str = "Virtual Room A") -> dict:
    """Pre-filled schedule form: one week out, 10:00 start, end from the class duration."""
    on_date = (today or date.today()) + timedelta(days=7)
    slug = "-".join(cls.title.lower().split())
    return {
        "date": on_date.isoformat(),
        "start_time": "10:00",
        "end_time": calculate_end_time("10:00", cls.duration),
        "room": room,
        "meeting_link": f"https://meet.navgurukul.org/{slug}",
        "notes": "",
    }
