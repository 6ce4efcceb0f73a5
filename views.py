"""
Derived list views: search, category filter, sort and pagination.

``derive_view`` is pure and recomputed on demand. ``ListView`` holds the
list screen's state (raw and committed search, category, sort key, page) and
reads the store collection through ``derive_view``.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import config
from debounce import Debouncer
from schemas import ClassSession, Course, Student, Schedule, utcnow


def field_value(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def value_key(name: str) -> Callable[[Any], Any]:
    return lambda record: field_value(record, name)


def text_key(name: str) -> Callable[[Any], str]:
    return lambda record: str(field_value(record, name) or "").casefold()


@dataclass(frozen=True)
class SortOption:
    key: Callable[[Any], Any]
    descending: bool = False


@dataclass(frozen=True)
class ViewSpec:
    noun: str
    search_fields: Tuple[str, ...]
    category_field: str
    sort_options: Dict[str, SortOption]
    default_sort: str
    page_size: Optional[int] = None


STUDENT_VIEW = ViewSpec(
    noun="students",
    search_fields=("name", "email", "course"),
    category_field="course",
    sort_options={
        "name": SortOption(text_key("name")),
        "email": SortOption(text_key("email")),
        "course": SortOption(text_key("course")),
        "date": SortOption(value_key("created_at"), descending=True),
    },
    default_sort="name",
    page_size=config.STUDENTS_PER_PAGE,
)

CLASS_VIEW = ViewSpec(
    noun="classes",
    search_fields=("title", "instructor", "description"),
    category_field="course",
    sort_options={
        "title": SortOption(text_key("title")),
        "course": SortOption(text_key("course")),
        "instructor": SortOption(text_key("instructor")),
        "date": SortOption(value_key("created_at"), descending=True),
        "enrollment": SortOption(value_key("enrolled_students"), descending=True),
    },
    default_sort="title",
)


@dataclass
class Page:
    items: List[Any]
    page: int
    page_size: Optional[int]
    total: int
    overall: int
    total_pages: int

    @property
    def start_index(self) -> int:
        return (self.page - 1) * self.page_size if self.page_size else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def matches_search(record: Any, term: str, fields: Iterable[str]) -> bool:
    if not term:
        return True
    needle = term.lower()
    return any(needle in str(field_value(record, f) or "").lower() for f in fields)


def filter_by_search(records: Iterable[Any], term: str, fields: Iterable[str]) -> List[Any]:
    fields = tuple(fields)
    return [r for r in records if matches_search(r, term, fields)]


def filter_by_category(records: Iterable[Any], category_field: str, value: str) -> List[Any]:
    if not value:
        return list(records)
    return [r for r in records if field_value(r, category_field) == value]


def sort_records(records: Iterable[Any], sort_key: Optional[str], options: Dict[str, SortOption]) -> List[Any]:
    option = options.get(sort_key) if sort_key else None
    if option is None:
        return list(records)
    return sorted(records, key=option.key, reverse=option.descending)


def count_pages(total: int, page_size: Optional[int]) -> int:
    if not page_size:
        return 1 if total else 0
    return math.ceil(total / page_size)


def paginate(records: Sequence[Any], page: int = 1, page_size: Optional[int] = None, overall: Optional[int] = None) -> Page:
    page = max(1, page)
    total = len(records)
    if page_size:
        start = (page - 1) * page_size
        items = list(records[start:start + page_size])
    else:
        items = list(records)
    return Page(
        items=items,
        page=page,
        page_size=page_size,
        total=total,
        overall=total if overall is None else overall,
        total_pages=count_pages(total, page_size),
    )


def derive_view(
    records: Sequence[Any],
    spec: ViewSpec,
    search: str = "",
    category: str = "",
    sort_key: Optional[str] = None,
    page: int = 1,
) -> Page:
    filtered = filter_by_search(records, search, spec.search_fields)
    filtered = filter_by_category(filtered, spec.category_field, category)
    ordered = sort_records(filtered, sort_key, spec.sort_options)
    return paginate(ordered, page, spec.page_size, overall=len(records))


class ListView:
    def __init__(self, spec: ViewSpec, source: Callable[[], Sequence[Any]],
                 delay: float = config.SEARCH_DEBOUNCE_SECONDS):
        self.spec = spec
        self.source = source
        self.search_input = ""
        self.search_term = ""
        self.category = ""
        self.sort_key = spec.default_sort
        self.page = 1
        self._debouncer = Debouncer(self._commit_search, delay)

    def _commit_search(self, term: str) -> None:
        if term != self.search_term:
            self.search_term = term
            self.page = 1

    @property
    def is_typing(self) -> bool:
        return self.search_input != self.search_term

    def set_search(self, text: str) -> None:
        self.search_input = text
        self._debouncer.push(text)

    def set_category(self, value: str) -> None:
        if value != self.category:
            self.category = value
            self.page = 1

    def set_sort(self, sort_key: str) -> None:
        if sort_key != self.sort_key:
            self.sort_key = sort_key
            self.page = 1

    def go_to_page(self, page: int) -> None:
        last = max(1, self.result().total_pages)
        self.page = min(max(1, page), last)

    def next_page(self) -> None:
        self.go_to_page(self.page + 1)

    def previous_page(self) -> None:
        self.go_to_page(self.page - 1)

    def clear_filters(self) -> None:
        self._debouncer.cancel()
        self.search_input = ""
        self.search_term = ""
        self.category = ""
        self.sort_key = self.spec.default_sort
        self.page = 1

    @property
    def has_filters(self) -> bool:
        return bool(self.search_term or self.category)

    def result(self) -> Page:
        return derive_view(self.source(), self.spec, self.search_term, self.category, self.sort_key, self.page)

    def categories(self) -> List[str]:
        seen = {}
        for record in self.source():
            seen.setdefault(field_value(record, self.spec.category_field), None)
        return list(seen)

    def summary(self) -> str:
        page = self.result()
        count = page.total if self.has_filters else page.overall
        text = f"Showing {len(page.items)} of {count} {self.spec.noun}"
        if self.search_term:
            text += f' matching "{self.search_term}"'
        if self.category:
            text += f" in {self.category}"
        if page.total_pages > 1:
            text += f" (Page {page.page} of {page.total_pages})"
        return text


def student_list_view(store) -> ListView:
    return ListView(STUDENT_VIEW, lambda: store.students)


def class_list_view(store) -> ListView:
    return ListView(CLASS_VIEW, lambda: store.classes)


# Dashboard summaries
def dashboard_stats(
    students: Sequence[Student],
    classes: Sequence[ClassSession] = (),
    schedules: Sequence[Schedule] = (),
    now: Optional[datetime] = None,
) -> dict:
    now = now or utcnow()
    last_week = now - timedelta(days=7)
    return {
        "total_students": len(students),
        "unique_courses": len({s.course for s in students}),
        "recent_students": sum(1 for s in students if s.created_at >= last_week),
        "total_documents": sum(len(s.documents) for s in students),
        "total_classes": len(classes),
        "scheduled_sessions": sum(1 for s in schedules if s.status == "scheduled"),
    }


def course_distribution(students: Sequence[Student], courses: Sequence[Course], limit: int = 6) -> List[dict]:
    total = len(students)
    rows = []
    for course in courses[:limit]:
        count = sum(1 for s in students if s.course == course.name)
        rows.append({
            "name": course.name,
            "code": course.code,
            "students": count,
            "percentage": (count / total) * 100 if total else 0,
        })
    return rows


def all_documents(students: Sequence[Student]) -> List[dict]:
    return [
        {**doc.model_dump(), "student_name": s.name, "student_id": s.id}
        for s in students
        for doc in s.documents
    ]
