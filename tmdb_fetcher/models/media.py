"""
Output Models
Pydantic models for the JSON document written at the end of a run
"""
from pydantic import BaseModel, ConfigDict, Field, model_serializer
from typing import List, Literal, Optional


class CastCredit(BaseModel):
    """Billed cast member"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    character: str = ""
    profileUrl: Optional[str] = None
    order: int = 0


class DirectorCredit(BaseModel):
    """Crew member credited with the Director job"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    job: str = "Director"
    department: str = ""
    profileUrl: Optional[str] = None


class MediaItem(BaseModel):
    """Normalized movie or TV show"""
    model_config = ConfigDict(frozen=True)

    id: str  # TMDB id as a string
    title: str
    type_: Literal["Movie", "TVShow"]
    imageUrl: str = ""
    year: int
    rating: float = 0.0
    description: str
    backdropUrl: Optional[str] = None
    genres: List[str] = Field(default_factory=list)
    # None means credits were not requested for this run
    cast: Optional[List[CastCredit]] = None
    directors: Optional[List[DirectorCredit]] = None

    @model_serializer(mode="wrap")
    def _omit_unrequested_credits(self, handler):
        data = handler(self)
        if self.cast is None:
            data.pop("cast", None)
        if self.directors is None:
            data.pop("directors", None)
        return data


class CategoryOutput(BaseModel):
    """One successfully fetched category"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    items: List[MediaItem]


class OutputDocument(BaseModel):
    """The persisted artifact"""
    model_config = ConfigDict(frozen=True)

    categories: List[CategoryOutput]

    def to_json(self) -> bytes:
        return self.model_dump_json().encode("utf-8")
