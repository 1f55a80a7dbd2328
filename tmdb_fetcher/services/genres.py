"""
Genre Resolver
Builds the single genre id -> name lookup shared by every category
"""
import logging
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple
from tmdb_fetcher.core.exceptions import DecodeFailure, FatalFailure, TransportFailure
from tmdb_fetcher.models.tmdb import Genre
from tmdb_fetcher.services.decoder import decode_genres
from tmdb_fetcher.services.tmdb import TMDBClient

logger = logging.getLogger(__name__)

GenreLookup = Mapping[int, str]

MOVIE_GENRES_ENDPOINT = "/genre/movie/list"
TV_GENRES_ENDPOINT = "/genre/tv/list"


def build_genre_lookup(*genre_lists: Iterable[Genre]) -> GenreLookup:
    """
    Union genre lists into a read-only lookup.

    Lists are merged in the order given; if two lists share an id, the
    later entry wins.
    """
    lookup = {}
    for genres in genre_lists:
        for genre in genres:
            lookup[genre.id] = genre.name
    return MappingProxyType(lookup)


class GenreResolver:
    """Fetches the movie and TV genre taxonomies"""

    def __init__(self, client: TMDBClient):
        self.client = client

    async def _fetch(self, endpoint: str) -> Tuple[Optional[bytes], Optional[TransportFailure]]:
        try:
            return await self.client.get(endpoint), None
        except TransportFailure as e:
            return None, e

    async def resolve(self) -> GenreLookup:
        """
        Fetch both taxonomies (movie first, then TV) and merge them.

        Both requests are always made. Failures are reported in a fixed
        order: movie fetch, TV fetch, movie decode, TV decode.

        Raises:
            FatalFailure: If either taxonomy cannot be fetched or decoded
        """
        logger.info("Fetching movie genres...")
        movie_body, movie_error = await self._fetch(MOVIE_GENRES_ENDPOINT)

        logger.info("Fetching TV genres...")
        tv_body, tv_error = await self._fetch(TV_GENRES_ENDPOINT)

        if movie_error is not None:
            raise FatalFailure(f"Error fetching movie genres: {movie_error}") from movie_error
        if tv_error is not None:
            raise FatalFailure(f"Error fetching TV genres: {tv_error}") from tv_error

        movie_genres = self._decode(movie_body, "movie")
        tv_genres = self._decode(tv_body, "TV")

        lookup = build_genre_lookup(movie_genres, tv_genres)
        logger.info(f"Found {len(lookup)} unique genres")
        return lookup

    @staticmethod
    def _decode(body: bytes, label: str) -> List[Genre]:
        try:
            return decode_genres(body).genres
        except DecodeFailure as e:
            raise FatalFailure(f"Error decoding {label} genres: {e}") from e
