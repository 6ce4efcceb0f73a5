import logging
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from gateway import RemoteGateway
from schemas import (
    Course, Document, Identifier, Meeting, Student,
    avatar_url, new_id, same_id, utcnow,
)
from seed_data import default_courses, fallback_students

logger = logging.getLogger(__name__)


class StudentStore:
    """
    Students, courses and meetings held in memory.

    Mutations try the remote API first and then always apply locally, using
    the server's echo when there is one and the locally built record when the
    call failed. Local state can drift from the server; nothing reconciles it.
    """

    def __init__(self, gateway: RemoteGateway):
        self.gateway = gateway
        self.students: List[Student] = []
        self.courses: List[Course] = []
        self.meetings: List[Meeting] = []
        self.loading = False
        self.error: Optional[str] = None

    def load(self) -> None:
        self.fetch_courses()
        self.fetch_students()

    def get_student(self, student_id: Identifier) -> Optional[Student]:
        return next((s for s in self.students if same_id(s.id, student_id)), None)

    # Fetching
    def fetch_courses(self) -> List[Course]:
        self.loading = True
        self.error = None
        try:
            result = self.gateway.list("courses")
            courses = self._parse_list(Course, result.data) if result.ok else None
            if courses is None:
                reason = result.error if not result.ok else "malformed course data"
                self.error = f"Failed to fetch courses: {reason}"
                logger.warning("%s, using default courses", self.error)
                courses = default_courses()
            self.courses = courses
        finally:
            self.loading = False
        return self.courses

    def fetch_students(self) -> List[Student]:
        self.loading = True
        self.error = None
        try:
            result = self.gateway.list("students")
            students = self._parse_list(Student, result.data) if result.ok else None
            if students is None:
                reason = result.error if not result.ok else "malformed student data"
                self.error = (
                    f"API Connection Issue: {reason}. The app will continue to work with local data. "
                    "Start the mock API for full functionality."
                )
                logger.warning("Failed to fetch students (%s), using fallback data", reason)
                students = fallback_students()
            self.students = students
        finally:
            self.loading = False
        return self.students

    @staticmethod
    def _parse_list(model, data: Any):
        if not isinstance(data, list):
            return None
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as e:
            logger.warning("Discarding %s payload: %s", model.__name__, e.error_count())
            return None

    @staticmethod
    def _parse_echo(data: Any, local: Student) -> Student:
        try:
            return Student.model_validate(data)
        except ValidationError:
            logger.warning("Server echo for student %s was malformed, keeping local copy", local.id)
            return local

    # Students
    def add_student(self, data: dict) -> Student:
        student = Student.model_validate({**Student.normalize(data), "id": new_id()})
        student = student.model_copy(update={
            "created_at": utcnow(),
            "documents": [],
            "profile_image": student.profile_image or avatar_url(student.name),
        })

        result = self.gateway.create("students", student.to_wire())
        if result.ok:
            student = self._parse_echo(result.data, student)
        else:
            logger.warning("Adding student %s to local state only", student.id)

        self.students = [*self.students, student]
        return student

    def update_student(self, student_id: Identifier, data: dict) -> Student:
        current = self.get_student(student_id)
        fields = {**Student.normalize(data), "updated_at": utcnow()}
        if current is None:
            # Partial data cannot validate without a base record
            logger.warning("Student %s not found, nothing updated", student_id)
            return Student.model_construct(**{**fields, "id": student_id})
        student_id = current.id
        merged = Student.model_validate({**current.model_dump(), **fields, "id": student_id})

        result = self.gateway.update("students", student_id, merged.to_wire())
        if result.ok:
            merged = self._parse_echo(result.data, merged)
        else:
            logger.warning("Updating student %s in local state only", student_id)

        self.students = [merged if same_id(s.id, student_id) else s for s in self.students]
        return merged

    def delete_student(self, student_id: Identifier) -> None:
        result = self.gateway.delete("students", student_id)
        if not result.ok:
            logger.warning("Removing student %s from local state only", student_id)
        self.students = [s for s in self.students if not same_id(s.id, student_id)]

    # Documents
    @staticmethod
    def new_document(name: str, size: int = 0, mime_type: str = "", url: Optional[str] = None) -> Document:
        return Document(id=new_id(), name=name, size=size, type=mime_type, uploaded_at=utcnow(), url=url)

    def add_document(self, student_id: Identifier, document: Union[Document, dict]) -> Optional[Student]:
        student = self.get_student(student_id)
        if student is None:
            return None
        doc = Document.model_validate(document)
        return self.update_student(student_id, {**student.model_dump(), "documents": [*student.documents, doc]})

    def remove_document(self, student_id: Identifier, document_id: Identifier) -> Optional[Student]:
        student = self.get_student(student_id)
        if student is None:
            return None
        docs = [d for d in student.documents if not same_id(d.id, document_id)]
        return self.update_student(student_id, {**student.model_dump(), "documents": docs})

    # Meetings (local only)
    def schedule_meeting(self, data: dict) -> Meeting:
        meeting = Meeting.model_validate({
            **Meeting.normalize(data),
            "id": new_id(),
            "scheduled_at": utcnow(),
            "status": "scheduled",
        })
        self.meetings = [*self.meetings, meeting]
        return meeting

    def _transition(self, meeting_id: Identifier, **changes) -> Optional[Meeting]:
        updated = None
        meetings = []
        for m in self.meetings:
            if same_id(m.id, meeting_id):
                m = updated = m.model_copy(update=changes)
            meetings.append(m)
        self.meetings = meetings
        return updated

    def cancel_meeting(self, meeting_id: Identifier) -> Optional[Meeting]:
        return self._transition(meeting_id, status="cancelled", cancelled_at=utcnow())

    def complete_meeting(self, meeting_id: Identifier, notes: str = "") -> Optional[Meeting]:
        return self._transition(meeting_id, status="completed", completed_at=utcnow(), notes=notes)

    def meetings_for_student(self, student_id: Identifier) -> List[Meeting]:
        return [m for m in self.meetings if same_id(m.student_id, student_id)]
