import json

import mongomock
import pytest

from database import JsonDatabase, MongoDatabase, matches


def test_json_database_creates_initial_document(tmp_path):
    path = tmp_path / "nested" / "db.json"
    db = JsonDatabase(str(path))
    assert path.exists()
    data = json.loads(path.read_text())
    assert len(data["students"]) == 3
    assert len(data["courses"]) == 5
    assert db.resources() == ["courses", "students"]


def test_json_database_keeps_existing_file(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"students": [{"id": "a", "name": "Kept"}]}))
    db = JsonDatabase(str(path))
    assert db.list_documents("students") == [{"id": "a", "name": "Kept"}]
    assert not db.has_resource("courses")


def test_json_database_matches_ids_as_strings(json_db):
    assert json_db.get_document("students", "1")["name"] == "Priya Sharma"
    assert json_db.get_document("students", "nope") is None


def test_matches_filters_and_text():
    doc = {"id": 1, "name": "Arjun Kumar", "course": "Python Programming"}
    assert matches(doc, {})
    assert matches(doc, {"id": "1"})
    assert not matches(doc, {"course": "Physics"})
    assert matches(doc, {}, q="kumar")
    assert not matches(doc, {}, q="zzz")


@pytest.fixture
def mongo_db():
    return MongoDatabase(mongomock.MongoClient()["dashboard_test"])


def test_mongo_crud_cycle(mongo_db):
    created = mongo_db.create_document("students", {"id": 10, "name": "Ravi", "course": "Physics"})
    assert created == {"id": 10, "name": "Ravi", "course": "Physics"}
    assert mongo_db.get_document("students", "10") == created

    replaced = mongo_db.replace_document("students", "10", {"name": "Ravi V", "course": "Biology"})
    assert replaced == {"id": 10, "name": "Ravi V", "course": "Biology"}

    patched = mongo_db.update_document("students", "10", {"course": "Chemistry"})
    assert patched["course"] == "Chemistry"
    assert patched["name"] == "Ravi V"

    assert mongo_db.list_documents("students", {"course": "Chemistry"}) == [patched]
    assert mongo_db.delete_document("students", "10")
    assert not mongo_db.delete_document("students", "10")
    assert mongo_db.get_document("students", "10") is None


def test_mongo_missing_records(mongo_db):
    assert mongo_db.replace_document("students", "99", {"name": "x"}) is None
    assert mongo_db.update_document("students", "99", {"name": "x"}) is None


def test_mongo_assigns_id_and_lists_resources(mongo_db):
    created = mongo_db.create_document("meetings", {"title": "Check-in"})
    assert "id" in created
    assert "_id" not in created
    assert mongo_db.resources() == ["courses", "meetings", "students"]
    assert mongo_db.has_resource("courses")


def test_mongo_seed_is_one_shot(mongo_db):
    assert mongo_db.seed("courses", [{"id": 1, "name": "Physics", "code": "PHYS"}]) == 1
    assert mongo_db.seed("courses", [{"id": 2, "name": "Biology", "code": "BIO"}]) == 0
    assert mongo_db.list_documents("courses") == [{"id": 1, "name": "Physics", "code": "PHYS"}]
