from typing import Any, Optional

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict, field_validator

NUMERIC_FIELDS = ("releaseYear", "rating", "duration")


class MovieFields(BaseModel):
    """
    Every movie attribute is optional; unknown keys in a payload are dropped.

    Scalars are cast the way a loose document schema would: numbers become
    text in string fields, numeric strings become numbers and an empty string
    in a numeric field means "no value".
    """
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: Optional[str] = None
    genre: Optional[str] = None
    releaseYear: Optional[int | float] = None
    director: Optional[str] = None
    cast: Optional[str] = None
    rating: Optional[int | float] = None
    duration: Optional[int | float] = None
    plotSummary: Optional[str] = None
    posterUrl: Optional[str] = None
    language: Optional[str] = None
    country: Optional[str] = None
    addedBy: Optional[str] = None

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def blank_number_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class MovieCreate(MovieFields):
    pass


class MovieUpdate(MovieFields):
    pass


def movie_to_json(doc: dict) -> dict:
    """
    Stored documents are returned as they are, whatever shape another writer
    gave them; only BSON types are turned into JSON-friendly values.
    """
    return jsonable_encoder(doc, custom_encoder={ObjectId: str})
