"""
Response Decoder
Turns raw TMDB response bodies into typed models, independent of how they were fetched
"""
from enum import Enum
from typing import Dict, Type

from pydantic import BaseModel, ValidationError

from tmdb_fetcher.core.exceptions import DecodeFailure
from tmdb_fetcher.models.tmdb import CreditsRecord, GenreListResponse, ListingResponse


class Shape(str, Enum):
    GENRE_LIST = "genre-list"
    LISTING = "listing-response"
    CREDITS = "credits"


_MODELS: Dict[Shape, Type[BaseModel]] = {
    Shape.GENRE_LIST: GenreListResponse,
    Shape.LISTING: ListingResponse,
    Shape.CREDITS: CreditsRecord,
}


def _describe(error: ValidationError) -> str:
    parts = []
    for detail in error.errors()[:3]:
        location = ".".join(str(part) for part in detail["loc"]) or "<root>"
        parts.append(f"{location}: {detail['msg']}")
    if error.error_count() > 3:
        parts.append(f"... {error.error_count() - 3} more")
    return "; ".join(parts)


def decode(raw: bytes, shape: Shape) -> BaseModel:
    """
    Decode a response body as the given shape

    Missing optional fields fall back to defaults; a missing or mistyped
    required field (such as a numeric id) fails the whole body.

    Raises:
        DecodeFailure: If the body is not JSON or does not match the shape
    """
    try:
        return _MODELS[shape].model_validate_json(raw)
    except ValidationError as e:
        raise DecodeFailure(_describe(e)) from e


def decode_genres(raw: bytes) -> GenreListResponse:
    return decode(raw, Shape.GENRE_LIST)


def decode_listing(raw: bytes) -> ListingResponse:
    return decode(raw, Shape.LISTING)


def decode_credits(raw: bytes) -> CreditsRecord:
    return decode(raw, Shape.CREDITS)
