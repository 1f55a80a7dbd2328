"""
TMDB Response Models
Pydantic models for the upstream payloads the fetcher consumes
"""
from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, Discriminator, StrictFloat, StrictInt, StrictStr, Tag


class Genre(BaseModel):
    """One entry of /genre/{movie,tv}/list"""
    id: StrictInt
    name: StrictStr


class GenreListResponse(BaseModel):
    genres: List[Genre]


class _CatalogRecord(BaseModel):
    """Fields shared by movie and TV listing rows"""
    id: StrictInt
    poster_path: Optional[StrictStr] = None
    backdrop_path: Optional[StrictStr] = None
    vote_average: Optional[StrictFloat] = None
    overview: Optional[StrictStr] = None
    genre_ids: Optional[List[StrictInt]] = None
    release_date: Optional[StrictStr] = None
    first_air_date: Optional[StrictStr] = None


class MovieRecord(_CatalogRecord):
    """Listing row carrying a movie title (possibly empty)"""
    title: StrictStr


class TVRecord(_CatalogRecord):
    """Listing row without a movie title; name may be missing too"""
    name: Optional[StrictStr] = None


def _record_kind(value: Any) -> str:
    # A non-null title marks a movie, even when it is the empty string
    if isinstance(value, dict):
        return "movie" if value.get("title") is not None else "tv"
    return "movie" if isinstance(value, MovieRecord) else "tv"


RawRecord = Annotated[
    Union[
        Annotated[MovieRecord, Tag("movie")],
        Annotated[TVRecord, Tag("tv")],
    ],
    Discriminator(_record_kind),
]


class ListingResponse(BaseModel):
    """Any paged listing endpoint (popular, top_rated, discover...)"""
    results: List[RawRecord]


class CastEntry(BaseModel):
    id: StrictInt
    name: StrictStr
    character: Optional[StrictStr] = None
    order: Optional[StrictInt] = None
    profile_path: Optional[StrictStr] = None


class CrewEntry(BaseModel):
    id: StrictInt
    name: StrictStr
    job: Optional[StrictStr] = None
    department: Optional[StrictStr] = None
    profile_path: Optional[StrictStr] = None


class CreditsRecord(BaseModel):
    """Response of /movie/{id}/credits and /tv/{id}/credits"""
    id: StrictInt
    cast: List[CastEntry] = []
    crew: List[CrewEntry] = []


CatalogRecord = Union[MovieRecord, TVRecord]
