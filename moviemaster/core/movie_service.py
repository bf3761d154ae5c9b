"""
Store side of the movie resource: each method performs exactly one MongoDB
call and returns plain documents, or raises a MovieStoreError subclass.
"""
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, List, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from pydantic import ValidationError

from moviemaster.core.database import MongoConnection
from moviemaster.core.exceptions import (
    MovieNotFoundError,
    StoreOperationError,
    StoreUnavailableError,
)
from moviemaster.models.movie import MovieCreate, MovieFields, MovieUpdate

logger = logging.getLogger(__name__)

TOP_RATED_LIMIT = 5
RECENT_LIMIT = 6

# Equal ratings / creation times are ordered by _id so results are stable.
TOP_RATED_SORT = [("rating", DESCENDING), ("_id", ASCENDING)]
RECENT_SORT = [("createdAt", DESCENDING), ("_id", ASCENDING)]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


M = TypeVar("M", bound=MovieFields)


def _describe(e: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}" for err in e.errors()
    )
    return f"Movie validation failed: {problems}"


def _cast(model: Type[M], payload: Any, message: str) -> M:
    """
    Request bodies are cast here rather than by the router so that a value
    the schema cannot hold fails like any other write, with a 500.
    """
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate({} if payload is None else payload)
    except ValidationError as e:
        logger.error("%s: %s", message, e)
        raise StoreOperationError(message, error=_describe(e)) from e


class MovieService:
    def __init__(self, connection: MongoConnection):
        self.connection = connection

    @contextmanager
    def _store_call(self, message: str) -> Iterator[Collection]:
        try:
            yield self.connection.get_collection()
        except StoreUnavailableError as e:
            logger.error("%s: %s", message, e.error)
            raise StoreUnavailableError(message, error=e.error) from e
        except (PyMongoError, InvalidId) as e:
            logger.error("%s: %s", message, e)
            raise StoreOperationError(message, error=str(e)) from e

    def top_rated(self, limit: int = TOP_RATED_LIMIT) -> List[dict]:
        with self._store_call("Error fetching top rated movies") as movies:
            return list(movies.find().sort(TOP_RATED_SORT).limit(limit))

    def recent(self, limit: int = RECENT_LIMIT) -> List[dict]:
        with self._store_call("Error fetching recent movies") as movies:
            return list(movies.find().sort(RECENT_SORT).limit(limit))

    def by_user(self, email: str) -> List[dict]:
        with self._store_call("Error fetching user movies") as movies:
            return list(movies.find({"addedBy": email}))

    def list_all(self) -> List[dict]:
        with self._store_call("Error fetching movies") as movies:
            return list(movies.find())

    def get(self, movie_id: str) -> dict:
        with self._store_call("Error fetching movie") as movies:
            doc = movies.find_one({"_id": ObjectId(movie_id)})

        if doc is None:
            raise MovieNotFoundError()
        return doc

    def create(self, payload: Any) -> dict:
        movie = _cast(MovieCreate, payload, "Error adding movie")
        now = _utcnow()
        doc = movie.model_dump(exclude_unset=True)
        doc["createdAt"] = now
        doc["updatedAt"] = now

        with self._store_call("Error adding movie") as movies:
            result = movies.insert_one(doc)

        doc["_id"] = result.inserted_id
        return doc

    def update(self, movie_id: str, payload: Any) -> dict:
        movie = _cast(MovieUpdate, payload, "Error updating movie")
        changes = movie.model_dump(exclude_unset=True)
        changes["updatedAt"] = _utcnow()

        with self._store_call("Error updating movie") as movies:
            doc = movies.find_one_and_update(
                {"_id": ObjectId(movie_id)},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )

        if doc is None:
            raise MovieNotFoundError()
        return doc

    def delete(self, movie_id: str) -> dict:
        with self._store_call("Error deleting movie") as movies:
            doc = movies.find_one_and_delete({"_id": ObjectId(movie_id)})

        if doc is None:
            raise MovieNotFoundError()
        return doc
