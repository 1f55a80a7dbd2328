"""
Run Configuration Models
Immutable pydantic models describing what a single fetch run does
"""
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

from tmdb_fetcher.core.config import Settings


class Category(BaseModel):
    """A named listing query with a cap on emitted items"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Slug, unique within a config")
    name: str = Field(..., description="Display name")
    endpoint: str = Field(..., description="Listing endpoint path, e.g. /movie/popular")
    params: Tuple[Tuple[str, str], ...] = Field(default=(), description="Ordered query parameters")
    limit: int = Field(..., gt=0, description="Maximum items emitted for this category")

    @field_validator("params", mode="before")
    @classmethod
    def coerce_params(cls, value: Any) -> Any:
        # Accept {"page": 1} as well as [["page", "1"]]; values are sent as strings
        if isinstance(value, dict):
            value = list(value.items())
        if isinstance(value, (list, tuple)):
            return tuple((str(k), str(v)) for k, v in value)
        return value


DEFAULT_CATEGORIES: Tuple[Category, ...] = (
    Category(
        id="continue-watching",
        name="Continue Watching",
        endpoint="/movie/popular",
        params=[("page", "1")],
        limit=8,
    ),
    Category(
        id="recently-added",
        name="Recently Added",
        endpoint="/movie/now_playing",
        params=[("page", "1")],
        limit=8,
    ),
    Category(
        id="recommended",
        name="Recommended For You",
        endpoint="/movie/top_rated",
        params=[("page", "1")],
        limit=8,
    ),
    Category(
        id="movie-library",
        name="Movies",
        endpoint="/discover/movie",
        params=[("sort_by", "popularity.desc"), ("page", "1")],
        limit=12,
    ),
    Category(
        id="tv-library",
        name="TV Shows",
        endpoint="/tv/popular",
        params=[("page", "1")],
        limit=12,
    ),
)


class FetcherConfig(BaseModel):
    """Everything the pipeline needs, resolved before it starts"""
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1, description="TMDB API key (required)")
    api_base_url: str = "https://api.themoviedb.org/3"
    image_base_url: str = "https://image.tmdb.org/t/p/w500"
    categories: Tuple[Category, ...] = DEFAULT_CATEGORIES
    include_credits: bool = True
    cast_limit: int = Field(10, ge=0)
    request_timeout: float = Field(10.0, gt=0)
    max_concurrent_requests: int = Field(10, ge=1)

    @model_validator(mode="after")
    def validate_unique_categories(self):
        seen = set()
        for category in self.categories:
            if category.id in seen:
                raise ValueError(f"Duplicate category id: {category.id}")
            seen.add(category.id)
        return self

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        api_key: Optional[str] = None,
        categories: Optional[Tuple[Category, ...]] = None,
        include_credits: Optional[bool] = None,
    ) -> "FetcherConfig":
        """Build a run config from settings, letting explicit arguments win"""
        if categories is None:
            categories = (
                load_categories(settings.CATEGORIES_FILE)
                if settings.CATEGORIES_FILE
                else DEFAULT_CATEGORIES
            )
        return cls(
            api_key=api_key or settings.TMDB_API_KEY,
            api_base_url=settings.TMDB_API_BASE_URL,
            image_base_url=settings.TMDB_IMAGE_BASE_URL,
            categories=categories,
            include_credits=settings.INCLUDE_CREDITS if include_credits is None else include_credits,
            cast_limit=settings.CAST_LIMIT,
            request_timeout=settings.REQUEST_TIMEOUT,
            max_concurrent_requests=settings.MAX_CONCURRENT_API_CALLS,
        )


_categories_adapter = TypeAdapter(List[Category])


def load_categories(path: Union[str, Path]) -> Tuple[Category, ...]:
    """
    Load a category list from a JSON file

    Args:
        path: File holding a JSON array of category objects

    Returns:
        Categories in file order

    Raises:
        OSError: If the file cannot be read
        pydantic.ValidationError: If the file is not valid JSON or an entry is malformed
    """
    raw = Path(path).read_text(encoding="utf-8")
    return tuple(_categories_adapter.validate_json(raw))
