"""Built-in datasets: API fallbacks, sample classes and the mock login accounts."""

import copy
from typing import List

from schemas import ClassSession, Course, Schedule, Student

DEFAULT_COURSES = [
    {"id": 1, "name": "Computer Science", "code": "CS"},
    {"id": 2, "name": "Mathematics", "code": "MATH"},
    {"id": 3, "name": "Physics", "code": "PHYS"},
    {"id": 4, "name": "Chemistry", "code": "CHEM"},
    {"id": 5, "name": "Biology", "code": "BIO"},
]

FALLBACK_STUDENTS = [
    {
        "id": 1,
        "name": "Priya Sharma",
        "email": "priya.sharma@navgurukul.org",
        "course": "Full Stack Web Development",
        "profileImage": "https://ui-avatars.com/api/?name=Priya+Sharma&background=3b82f6&color=ffffff&size=100",
        "createdAt": "2024-02-15T10:00:00.000Z",
        "documents": [
            {"id": 1, "name": "Resume.pdf", "uploadedAt": "2024-02-15T10:30:00.000Z"},
            {"id": 2, "name": "Portfolio.pdf", "uploadedAt": "2024-02-16T14:20:00.000Z"},
        ],
    },
    {
        "id": 2,
        "name": "Arjun Kumar",
        "email": "arjun.kumar@navgurukul.org",
        "course": "Python Programming",
        "profileImage": "https://ui-avatars.com/api/?name=Arjun+Kumar&background=059669&color=ffffff&size=100",
        "createdAt": "2024-02-16T14:00:00.000Z",
        "documents": [
            {"id": 3, "name": "Certificates.pdf", "uploadedAt": "2024-02-17T09:15:00.000Z"},
        ],
    },
    {
        "id": 3,
        "name": "Sneha Gupta",
        "email": "sneha.gupta@navgurukul.org",
        "course": "Data Science",
        "profileImage": "https://ui-avatars.com/api/?name=Sneha+Gupta&background=dc2626&color=ffffff&size=100",
        "createdAt": "2024-02-17T09:30:00.000Z",
        "documents": [],
    },
]

SAMPLE_CLASSES = [
    {
        "id": 1,
        "title": "JavaScript Fundamentals",
        "course": "Full Stack Web Development",
        "instructor": "Priya Sharma",
        "description": "Introduction to JavaScript programming, variables, functions, and basic DOM manipulation",
        "duration": 90,
        "maxStudents": 25,
        "enrolledStudents": 18,
        "tags": ["beginner", "javascript", "programming"],
        "materials": [
            {"id": 1, "name": "JavaScript Basics.pdf", "type": "pdf", "url": "#"},
            {"id": 2, "name": "Code Examples.zip", "type": "zip", "url": "#"},
        ],
        "createdAt": "2024-02-15T10:00:00.000Z",
    },
    {
        "id": 2,
        "title": "React Components Deep Dive",
        "course": "Full Stack Web Development",
        "instructor": "Arjun Kumar",
        "description": "Advanced React components, hooks, state management, and best practices",
        "duration": 120,
        "maxStudents": 20,
        "enrolledStudents": 15,
        "tags": ["advanced", "react", "components"],
        "materials": [
            {"id": 3, "name": "React Hooks Guide.pdf", "type": "pdf", "url": "#"},
        ],
        "createdAt": "2024-02-16T14:00:00.000Z",
    },
    {
        "id": 3,
        "title": "Python Data Structures",
        "course": "Python Programming",
        "instructor": "Sneha Gupta",
        "description": "Lists, dictionaries, sets, tuples and their practical applications",
        "duration": 75,
        "maxStudents": 30,
        "enrolledStudents": 22,
        "tags": ["intermediate", "python", "data-structures"],
        "materials": [],
        "createdAt": "2024-02-17T09:30:00.000Z",
    },
]

SAMPLE_SCHEDULES = [
    {
        "id": 1,
        "classId": 1,
        "date": "2024-12-20",
        "startTime": "10:00",
        "endTime": "11:30",
        "status": "scheduled",
        "attendees": 18,
        "room": "Virtual Room A",
        "meetingLink": "https://meet.navgurukul.org/js-fundamentals",
    },
    {
        "id": 2,
        "classId": 2,
        "date": "2024-12-21",
        "startTime": "14:00",
        "endTime": "16:00",
        "status": "scheduled",
        "attendees": 15,
        "room": "Virtual Room B",
        "meetingLink": "https://meet.navgurukul.org/react-deep-dive",
    },
    {
        "id": 3,
        "classId": 3,
        "date": "2024-12-22",
        "startTime": "09:30",
        "endTime": "10:45",
        "status": "scheduled",
        "attendees": 22,
        "room": "Lab 1, Bangalore Campus",
        "meetingLink": "https://meet.navgurukul.org/python-data",
    },
    {
        "id": 4,
        "classId": 1,
        "date": "2024-12-18",
        "startTime": "10:00",
        "endTime": "11:30",
        "status": "completed",
        "attendees": 17,
        "room": "Virtual Room A",
        "meetingLink": "https://meet.navgurukul.org/js-fundamentals",
    },
]

ROOM_OPTIONS = [
    "Virtual Room A",
    "Virtual Room B",
    "Virtual Room C",
    "Lab 1, Bangalore Campus",
    "Lab 2, Bangalore Campus",
    "Conference Room, Delhi Campus",
    "Main Hall, Pune Campus",
    "Computer Lab, Mumbai Campus",
]

# password is stripped before a user reaches the session slot
MOCK_USERS = [
    {
        "id": 1,
        "email": "admin@navgurukul.org",
        "password": "admin123",
        "name": "Admin User",
        "role": "admin",
        "campus": "Bangalore",
    },
    {
        "id": 2,
        "email": "teacher@navgurukul.org",
        "password": "teacher123",
        "name": "Priya Sharma",
        "role": "teacher",
        "campus": "Delhi",
    },
]


def default_courses() -> List[Course]:
    return [Course.model_validate(c) for c in DEFAULT_COURSES]


def fallback_students() -> List[Student]:
    return [Student.model_validate(s) for s in FALLBACK_STUDENTS]


def sample_classes() -> List[ClassSession]:
    return [ClassSession.model_validate(c) for c in SAMPLE_CLASSES]


def sample_schedules() -> List[Schedule]:
    return [Schedule.model_validate(s) for s in SAMPLE_SCHEDULES]


def initial_document() -> dict:
    """Contents of a fresh db.json for the mock API."""
    return {
        "students": copy.deepcopy(FALLBACK_STUDENTS),
        "courses": copy.deepcopy(DEFAULT_COURSES),
    }
