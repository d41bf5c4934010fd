# tests/conftest.py

import copy
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from app.database import get_db
from app.main import app
from app.utils.uploads import UploadSink, get_upload_sink


def _matches(doc, query):
    for key, cond in (query or {}).items():
        if isinstance(cond, dict) and "$in" in cond:
            if doc.get(key) not in cond["$in"]:
                return False
        elif doc.get(key) != cond:
            return False
    return True


def _apply_update(doc, update):
    for path, value in update.get("$set", {}).items():
        *parents, leaf = path.split(".")
        target = doc
        for part in parents:
            target = target.setdefault(part, {})
        target[leaf] = copy.deepcopy(value)

    for path in update.get("$unset", {}):
        *parents, leaf = path.split(".")
        target = doc
        for part in parents:
            target = target.get(part)
            if not isinstance(target, dict):
                break
        else:
            target.pop(leaf, None)

    for field, value in update.get("$push", {}).items():
        items = value["$each"] if isinstance(value, dict) and "$each" in value else [value]
        doc.setdefault(field, []).extend(copy.deepcopy(items))


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, key_or_list, direction=1):
        keys = key_or_list if isinstance(key_or_list, list) else [(key_or_list, direction)]
        for key, order in reversed(keys):
            self.docs.sort(key=lambda d: d.get(key), reverse=order == -1)
        return self

    async def to_list(self, length=None):
        return self.docs if length is None else self.docs[:length]


class FakeCollection:
    """Минимальная in-memory замена коллекции Motor"""

    def __init__(self, name, database):
        self.name = name
        self.database = database
        self.docs = []

    def _check(self):
        if self.database.broken:
            raise PyMongoError("connection refused")

    def find(self, query=None):
        self._check()
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query)])

    async def find_one(self, query=None):
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, doc):
        self._check()
        stored = copy.deepcopy(doc)
        stored.setdefault("_id", ObjectId())
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                before = copy.deepcopy(doc)
                _apply_update(doc, update)
                return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def find_one_and_delete(self, query):
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                self.docs.remove(doc)
                return doc
        return None

    async def delete_many(self, query):
        self._check()
        kept = [d for d in self.docs if not _matches(d, query)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return SimpleNamespace(deleted_count=deleted)


class FakeDatabase:
    def __init__(self):
        self.broken = False
        self._collections = {}

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        if name not in self._collections:
            self._collections[name] = FakeCollection(name, self)
        return self._collections[name]


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def sink(upload_dir):
    sink = UploadSink(str(upload_dir))
    sink.init()
    return sink


@pytest.fixture
def client(fake_db, sink):
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_upload_sink] = lambda: sink
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def individual_lesson():
    return {
        "student_id": "s001",
        "day": "пн",
        "date": "2025-03-10",
        "time": "15:00",
        "duration": 60,
        "subject": "Математика",
    }


@pytest.fixture
def group_lesson():
    return {
        "group_id": "g001",
        "day": "вт",
        "date": "2025-03-11",
        "time": "17:30",
        "duration": 90,
        "subject": "Физика",
        "description": "Кинематика",
    }
