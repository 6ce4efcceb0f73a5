"""
Storage for the mock REST API.

Every resource is an array of JSON objects keyed by an ``id`` field. The
default backend is a flat JSON document on disk; setting DATABASE_URL switches
to a MongoDB database with one collection per resource.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, Iterable, List, Optional

from pymongo import MongoClient

import config
from schemas import new_id, same_id
from seed_data import initial_document

logger = logging.getLogger(__name__)


def matches(doc: Dict[str, Any], filters: Dict[str, str], q: Optional[str] = None) -> bool:
    for key, value in filters.items():
        if str(doc.get(key)) != value:
            return False
    if q:
        needle = q.lower()
        return any(isinstance(v, str) and needle in v.lower() for v in doc.values())
    return True


class JsonDatabase:
    """A flat JSON document: ``{"students": [...], "courses": [...]}``."""

    name = "json"

    def __init__(self, path: str, initial: Optional[Dict[str, List[dict]]] = None):
        self.path = path
        self._lock = threading.Lock()
        if not os.path.exists(path):
            directory = os.path.dirname(path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            self._write(initial if initial is not None else initial_document())
            logger.info("Created %s", path)

    def _read(self) -> Dict[str, List[dict]]:
        with open(self.path, "r") as f:
            return json.load(f)

    def _write(self, data: Dict[str, List[dict]]) -> None:
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)

    def resources(self) -> List[str]:
        with self._lock:
            return sorted(k for k, v in self._read().items() if isinstance(v, list))

    def has_resource(self, resource: str) -> bool:
        return resource in self.resources()

    def list_documents(self, resource: str, filters: Optional[Dict[str, str]] = None, q: Optional[str] = None) -> List[dict]:
        with self._lock:
            items = self._read().get(resource, [])
        return [d for d in items if matches(d, filters or {}, q)]

    def get_document(self, resource: str, doc_id: str) -> Optional[dict]:
        with self._lock:
            for d in self._read().get(resource, []):
                if same_id(d.get("id"), doc_id):
                    return d
        return None

    def create_document(self, resource: str, data: Dict[str, Any]) -> dict:
        doc = copy.deepcopy(data)
        doc.setdefault("id", new_id())
        with self._lock:
            db = self._read()
            db.setdefault(resource, []).append(doc)
            self._write(db)
        return doc

    def replace_document(self, resource: str, doc_id: str, data: Dict[str, Any]) -> Optional[dict]:
        with self._lock:
            db = self._read()
            items = db.get(resource, [])
            for i, d in enumerate(items):
                if same_id(d.get("id"), doc_id):
                    doc = {**copy.deepcopy(data), "id": d["id"]}
                    items[i] = doc
                    self._write(db)
                    return doc
        return None

    def update_document(self, resource: str, doc_id: str, data: Dict[str, Any]) -> Optional[dict]:
        with self._lock:
            db = self._read()
            for d in db.get(resource, []):
                if same_id(d.get("id"), doc_id):
                    d.update({k: v for k, v in copy.deepcopy(data).items() if k != "id"})
                    self._write(db)
                    return d
        return None

    def delete_document(self, resource: str, doc_id: str) -> bool:
        with self._lock:
            db = self._read()
            items = db.get(resource, [])
            kept = [d for d in items if not same_id(d.get("id"), doc_id)]
            if len(kept) == len(items):
                return False
            db[resource] = kept
            self._write(db)
        return True

    def seed(self, resource: str, documents: Iterable[dict]) -> int:
        with self._lock:
            db = self._read()
            if db.get(resource):
                return 0
            db[resource] = copy.deepcopy(list(documents))
            self._write(db)
            return len(db[resource])


class MongoDatabase:
    """Same resource contract over a pymongo database, one collection per resource."""

    name = "mongodb"

    def __init__(self, db, known_resources: Iterable[str] = ("students", "courses")):
        self.db = db
        self.known = set(known_resources)

    @staticmethod
    def _id_query(doc_id: str) -> dict:
        candidates: List[Any] = [str(doc_id)]
        if str(doc_id).lstrip("-").isdigit():
            candidates.append(int(doc_id))
        return {"id": {"$in": candidates}}

    def resources(self) -> List[str]:
        return sorted(self.known | set(self.db.list_collection_names()))

    def has_resource(self, resource: str) -> bool:
        return resource in self.resources()

    def list_documents(self, resource: str, filters: Optional[Dict[str, str]] = None, q: Optional[str] = None) -> List[dict]:
        items = self.db[resource].find({}, {"_id": 0})
        return [d for d in items if matches(d, filters or {}, q)]

    def get_document(self, resource: str, doc_id: str) -> Optional[dict]:
        return self.db[resource].find_one(self._id_query(doc_id), {"_id": 0})

    def create_document(self, resource: str, data: Dict[str, Any]) -> dict:
        doc = copy.deepcopy(data)
        doc.setdefault("id", new_id())
        # insert_one adds _id to the dict it is given
        self.db[resource].insert_one(dict(doc))
        self.known.add(resource)
        return doc

    def replace_document(self, resource: str, doc_id: str, data: Dict[str, Any]) -> Optional[dict]:
        current = self.get_document(resource, doc_id)
        if current is None:
            return None
        doc = {**copy.deepcopy(data), "id": current["id"]}
        self.db[resource].replace_one(self._id_query(doc_id), dict(doc))
        return doc

    def update_document(self, resource: str, doc_id: str, data: Dict[str, Any]) -> Optional[dict]:
        updates = {k: v for k, v in data.items() if k != "id"}
        res = self.db[resource].update_one(self._id_query(doc_id), {"$set": updates}) if updates else None
        if res is not None and res.matched_count == 0:
            return None
        return self.get_document(resource, doc_id)

    def delete_document(self, resource: str, doc_id: str) -> bool:
        res = self.db[resource].delete_one(self._id_query(doc_id))
        return res.deleted_count > 0

    def seed(self, resource: str, documents: Iterable[dict]) -> int:
        if self.db[resource].count_documents({}) > 0:
            return 0
        docs = [dict(d) for d in copy.deepcopy(list(documents))]
        if not docs:
            return 0
        self.db[resource].insert_many(docs)
        self.known.add(resource)
        return len(docs)


def get_database():
    if config.DATABASE_URL:
        client = MongoClient(config.DATABASE_URL)
        logger.info("Using MongoDB database %s", config.DATABASE_NAME)
        return MongoDatabase(client[config.DATABASE_NAME])
    logger.info("Using JSON document %s", config.DB_JSON_PATH)
    return JsonDatabase(config.DB_JSON_PATH)
