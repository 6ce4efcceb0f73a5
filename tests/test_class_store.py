from datetime import date

import pytest

from class_store import ClassStore, parse_tags
from validation import validate_schedule

NEW_CLASS = {"title": "X", "course": "Y", "instructor": "Z", "duration": 60, "maxStudents": 20}


def slot(class_id, start, end, room="Virtual Room A", on_date="2025-01-01"):
    return {
        "classId": class_id,
        "date": on_date,
        "startTime": start,
        "endTime": end,
        "room": room,
        "meetingLink": "https://meet.example/x",
    }


def test_seeded_with_sample_data(class_store):
    assert len(class_store.classes) == 3
    assert len(class_store.schedules) == 4
    assert class_store.loading is False


def test_unseeded_store_is_empty():
    store = ClassStore(seed=False)
    assert store.classes == []
    assert store.schedules == []


def test_add_class(class_store):
    result = class_store.add_class({**NEW_CLASS, "tags": "beginner, ,python", "enrolledStudents": 12})
    assert result["success"]
    cls = result["class"]
    assert len(class_store.classes) == 4
    assert cls.enrolled_students == 0
    assert cls.tags == ["beginner", "python"]
    assert cls.materials == []
    assert class_store.get_class(cls.id) == cls


def test_add_class_with_bad_data_fails_cleanly(class_store):
    result = class_store.add_class({"course": "Y", "instructor": "Z"})
    assert not result["success"]
    assert class_store.error
    assert len(class_store.classes) == 3
    assert class_store.loading is False


def test_update_class_merges(class_store):
    assert class_store.update_class(1, {"maxStudents": 40, "tags": "js, dom"}) == {"success": True}
    cls = class_store.get_class(1)
    assert cls.max_students == 40
    assert cls.tags == ["js", "dom"]
    assert cls.title == "JavaScript Fundamentals"


def test_update_unknown_class_changes_nothing(class_store):
    before = list(class_store.classes)
    assert class_store.update_class(404, {"title": "Ghost"}) == {"success": True}
    assert class_store.classes == before


@pytest.mark.parametrize("class_id", [1, 2, 3, 404])
def test_delete_class_cascades_to_schedules(class_store, class_id):
    class_store.delete_class(class_id)
    assert class_store.get_class(class_id) is None
    assert [s for s in class_store.schedules if s.class_id == class_id] == []


def test_delete_class_keeps_other_schedules(class_store):
    class_store.delete_class(1)
    assert sorted(s.id for s in class_store.schedules) == [2, 3]


def test_schedule_scenario_with_conflict():
    store = ClassStore(seed=False)
    cls = store.add_class(NEW_CLASS)["class"]
    assert len(store.classes) == 1 and cls.enrolled_students == 0

    first = store.schedule_class(slot(cls.id, "10:00", "11:00"))
    assert first["success"]
    assert first["schedule"].status == "scheduled"
    assert first["schedule"].attendees == 0

    second_form = slot(cls.id, "10:30", "11:30")
    errors = validate_schedule(second_form, store.schedules, store.classes, today=date(2024, 12, 1))
    assert errors == {"room": 'Room is already booked at this time for "X"'}

    second = store.schedule_class(second_form)
    assert not second["success"]
    assert second["error"] == 'Room is already booked at this time for "X"'
    assert second["conflict"].id == first["schedule"].id
    assert len(store.schedules) == 1


def test_touching_slots_and_other_rooms_do_not_conflict():
    store = ClassStore(seed=False)
    cls = store.add_class(NEW_CLASS)["class"]
    assert store.schedule_class(slot(cls.id, "10:00", "11:00"))["success"]
    assert store.schedule_class(slot(cls.id, "11:00", "12:00"))["success"]
    assert store.schedule_class(slot(cls.id, "10:30", "11:30", room="Virtual Room B"))["success"]
    assert store.schedule_class(slot(cls.id, "10:30", "11:30", on_date="2025-01-02"))["success"]
    assert len(store.schedules) == 4


def test_schedule_class_with_bad_time_fails(class_store):
    result = class_store.schedule_class(slot(1, "25:00", "26:00"))
    assert not result["success"]
    assert len(class_store.schedules) == 4


def test_update_schedule(class_store):
    assert class_store.update_schedule(1, {"status": "completed", "attendees": 20}) == {"success": True}
    updated = class_store.get_schedule(1)
    assert updated.status == "completed"
    assert updated.attendees == 20


def test_update_schedule_cannot_move_onto_a_booked_room(class_store):
    # schedule 2 is Virtual Room B on 2024-12-21, 14:00-16:00
    result = class_store.update_schedule(1, {"date": "2024-12-21", "room": "Virtual Room B", "startTime": "15:00", "endTime": "16:30"})
    assert not result["success"]
    assert "React Components Deep Dive" in result["error"]
    assert class_store.get_schedule(1).date == "2024-12-20"


def test_update_schedule_may_resize_its_own_slot(class_store):
    assert class_store.update_schedule(1, {"endTime": "12:00"})["success"]
    assert class_store.get_schedule(1).end_time == "12:00"


def test_delete_schedule(class_store):
    class_store.delete_schedule(2)
    assert class_store.get_schedule(2) is None
    before = list(class_store.schedules)
    class_store.delete_schedule(404)
    assert class_store.schedules == before


def test_schedules_for_class(class_store):
    assert [s.id for s in class_store.schedules_for_class(1)] == [1, 4]


def test_class_materials(class_store):
    cls = class_store.add_class_material(3, {"name": "Cheatsheet.pdf", "type": "pdf", "url": "https://files.example/c.pdf"})
    assert [m.name for m in cls.materials] == ["Cheatsheet.pdf"]
    material_id = cls.materials[0].id

    cls = class_store.remove_class_material(3, material_id)
    assert cls.materials == []
    assert class_store.get_class(3).materials == []

    assert [m.id for m in class_store.remove_class_material(1, 1).materials] == [2]
    assert class_store.add_class_material(404, {"name": "x"}) is None


def test_parse_tags():
    assert parse_tags(None) == []
    assert parse_tags(" a, b ,,c ") == ["a", "b", "c"]
    assert parse_tags(["x", " ", "y "]) == ["x", "y"]


def test_success_clears_a_previous_error(class_store):
    assert not class_store.add_class({"course": "Y"})["success"]
    assert class_store.error
    assert class_store.add_class(NEW_CLASS)["success"]
    assert class_store.error is None


def test_string_ids_match_seeded_records(class_store):
    assert class_store.get_class("1").title == "JavaScript Fundamentals"
    assert [s.id for s in class_store.schedules_for_class("1")] == [1, 4]
    assert class_store.update_schedule("1", {"endTime": "12:00"})["success"]
    assert class_store.get_schedule(1).end_time == "12:00"

    class_store.delete_class("2")
    assert class_store.get_class(2) is None
    assert class_store.schedules_for_class(2) == []
