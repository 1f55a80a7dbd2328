"""
Item Normalizer
Converts raw TMDB listing rows (movie or TV) into the unified output shape
"""
import string
from datetime import datetime
from typing import List, Optional
from tmdb_fetcher.models.media import CastCredit, DirectorCredit, MediaItem
from tmdb_fetcher.models.tmdb import CatalogRecord, CreditsRecord, MovieRecord
from tmdb_fetcher.services.genres import GenreLookup

DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
DEFAULT_YEAR = 2000
UNKNOWN_TITLE = "Unknown Title"
NO_DESCRIPTION = "No description available."
DIRECTOR_JOB = "Director"


def media_kind(record: CatalogRecord) -> str:
    """Movie whenever a title field was present, even an empty one"""
    return "Movie" if isinstance(record, MovieRecord) else "TVShow"


def resolve_title(record: CatalogRecord) -> str:
    if isinstance(record, MovieRecord):
        return record.title
    if record.name is not None:
        return record.name
    return UNKNOWN_TITLE


def extract_year(date_str: Optional[str]) -> int:
    """
    Year from a TMDB date string

    "2017-05-12" -> 2017 via a full date parse; otherwise the first four
    characters are used when they are all ASCII digits ("2017" -> 2017);
    anything else, or no date at all, gives 2000.
    """
    if date_str is None:
        return DEFAULT_YEAR
    try:
        return datetime.strptime(date_str.strip(), "%Y-%m-%d").year
    except ValueError:
        pass
    prefix = date_str[:4]
    if prefix and all(c in string.digits for c in prefix):
        return int(prefix)
    return DEFAULT_YEAR


def image_url(path: Optional[str], image_base_url: str = DEFAULT_IMAGE_BASE_URL) -> Optional[str]:
    if path is None:
        return None
    return f"{image_base_url}{path}"


def map_genres(genre_lookup: GenreLookup, genre_ids: Optional[List[int]]) -> List[str]:
    """Resolve ids in order, dropping ids the lookup does not know"""
    return [genre_lookup[gid] for gid in genre_ids or [] if gid in genre_lookup]


def build_cast(
    credits: Optional[CreditsRecord],
    image_base_url: str = DEFAULT_IMAGE_BASE_URL,
    limit: int = 10,
) -> List[CastCredit]:
    if credits is None:
        return []
    return [
        CastCredit(
            id=str(member.id),
            name=member.name,
            character=member.character or "",
            profileUrl=image_url(member.profile_path, image_base_url),
            order=member.order if member.order is not None else index,
        )
        for index, member in enumerate(credits.cast[:limit])
    ]


def build_directors(
    credits: Optional[CreditsRecord],
    image_base_url: str = DEFAULT_IMAGE_BASE_URL,
) -> List[DirectorCredit]:
    # Exact, case-sensitive match on the job title
    if credits is None:
        return []
    return [
        DirectorCredit(
            id=str(member.id),
            name=member.name,
            job=member.job,
            department=member.department or "",
            profileUrl=image_url(member.profile_path, image_base_url),
        )
        for member in credits.crew
        if member.job == DIRECTOR_JOB
    ]


def normalize(
    genre_lookup: GenreLookup,
    record: CatalogRecord,
    credits: Optional[CreditsRecord] = None,
    image_base_url: str = DEFAULT_IMAGE_BASE_URL,
    cast_limit: int = 10,
    with_credits: bool = True,
) -> MediaItem:
    """
    Build a MediaItem from one listing row

    Args:
        genre_lookup: Merged genre id -> name mapping
        record: Raw movie or TV row
        credits: Credits for the row, or None if they could not be fetched
        image_base_url: Prefix for poster/backdrop/profile paths
        cast_limit: Maximum cast entries kept
        with_credits: False when credits are not part of this run; the item
            then carries no cast/directors at all

    Returns:
        Normalized item
    """
    poster = image_url(record.poster_path, image_base_url)
    date_str = record.release_date if record.release_date is not None else record.first_air_date

    return MediaItem(
        id=str(record.id),
        title=resolve_title(record),
        type_=media_kind(record),
        imageUrl=poster if poster is not None else "",
        year=extract_year(date_str),
        rating=record.vote_average if record.vote_average is not None else 0.0,
        description=record.overview if record.overview is not None else NO_DESCRIPTION,
        backdropUrl=image_url(record.backdrop_path, image_base_url),
        genres=map_genres(genre_lookup, record.genre_ids),
        cast=build_cast(credits, image_base_url, cast_limit) if with_credits else None,
        directors=build_directors(credits, image_base_url) if with_credits else None,
    )
