import copy
import time
from datetime import datetime

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError

from moviemaster.core.config import Settings
from moviemaster.core.database import MongoConnection
from moviemaster.main import create_app


# --------------------------
# In-memory stand-in for a pymongo collection
# --------------------------

def _matches(doc, query):
    return all(doc.get(k) == v for k, v in (query or {}).items())


def _sort_key(value):
    # MongoDB compares across types by BSON type order: null, numbers, strings, ..., dates.
    if value is None:
        return (0, 0)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    if isinstance(value, ObjectId):
        return (7, value)
    if isinstance(value, datetime):
        return (9, value)
    return (3, repr(value))


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, keys):
        for field, direction in reversed(keys):
            self.docs.sort(key=lambda d: _sort_key(d.get(field)), reverse=direction < 0)
        return self

    def limit(self, n):
        self.docs = self.docs[:n]
        return self

    def __iter__(self):
        return iter(self.docs)


class InsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeCollection:
    name = "movies"

    def __init__(self):
        self.docs = []

    def find(self, query=None):
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query)])

    def find_one(self, query):
        for d in self.docs:
            if _matches(d, query):
                return copy.deepcopy(d)
        return None

    def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return InsertResult(doc["_id"])

    def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        for d in self.docs:
            if _matches(d, query):
                before = copy.deepcopy(d)
                d.update(update.get("$set", {}))
                return copy.deepcopy(d) if return_document == ReturnDocument.AFTER else before
        return None

    def find_one_and_delete(self, query):
        for i, d in enumerate(self.docs):
            if _matches(d, query):
                return self.docs.pop(i)
        return None


class FakeDatabase:
    name = "moviemaster"

    def __init__(self, collection):
        self.collection = collection

    def __getitem__(self, name):
        return self.collection


class FakeAdmin:
    def __init__(self, client):
        self.client = client

    def command(self, name):
        self.client.pings += 1
        time.sleep(self.client.delay)
        if self.client.fail:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")
        return {"ok": 1.0}


class FakeMongoClient:
    def __init__(self, collection, fail=False, delay=0.0):
        self.collection = collection
        self.fail = fail
        self.delay = delay
        self.pings = 0
        self.closed = False
        self.admin = FakeAdmin(self)

    def get_default_database(self, default=None):
        return FakeDatabase(self.collection)

    def close(self):
        self.closed = True


class ClientFactory:
    """
    Records every client it builds; set `fail` to make the next ping fail
    and `delay` to slow every ping down.
    """
    def __init__(self, collection):
        self.collection = collection
        self.fail = False
        self.delay = 0.0
        self.clients = []
        self.calls = []

    def __call__(self, uri, **kwargs):
        self.calls.append((uri, kwargs))
        client = FakeMongoClient(self.collection, fail=self.fail, delay=self.delay)
        self.clients.append(client)
        return client


# --------------------------
# Fixtures
# --------------------------

@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def client_factory(collection):
    return ClientFactory(collection)


@pytest.fixture
def settings():
    return Settings(mongo_uri="mongodb://test:27017/moviemaster", connect_timeout_ms=100)


@pytest.fixture
def connection(settings, client_factory):
    return MongoConnection(settings, client_factory=client_factory)


@pytest.fixture
def api(settings, connection):
    app = create_app(settings, connection)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def lazy_settings():
    return Settings(mongo_uri="mongodb://test:27017/moviemaster", connection_mode="lazy")


@pytest.fixture
def lazy_connection(lazy_settings, client_factory):
    return MongoConnection(lazy_settings, client_factory=client_factory)


@pytest.fixture
def lazy_api(lazy_settings, lazy_connection):
    app = create_app(lazy_settings, lazy_connection)
    with TestClient(app) as client:
        yield client
