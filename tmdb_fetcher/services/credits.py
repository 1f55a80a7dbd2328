"""
Credits Enricher
Best-effort cast/crew lookup for a single item
"""
import logging
from typing import Optional
from tmdb_fetcher.core.exceptions import DecodeFailure, EnrichmentFailure, TransportFailure
from tmdb_fetcher.models.tmdb import CreditsRecord
from tmdb_fetcher.services.decoder import decode_credits
from tmdb_fetcher.services.tmdb import TMDBClient

logger = logging.getLogger(__name__)


def credits_endpoint(item_id: int, media_kind: str) -> str:
    """/movie/{id}/credits for movies, /tv/{id}/credits for TV shows"""
    prefix = "movie" if media_kind == "Movie" else "tv"
    return f"/{prefix}/{item_id}/credits"


class CreditsEnricher:
    """Fetches credits; a failure here never affects the owning item"""

    def __init__(self, client: TMDBClient):
        self.client = client

    async def fetch_credits(self, item_id: int, media_kind: str) -> CreditsRecord:
        """
        Fetch and decode credits for one item

        Raises:
            EnrichmentFailure: On any transport or decode failure
        """
        try:
            body = await self.client.get(credits_endpoint(item_id, media_kind))
            return decode_credits(body)
        except (TransportFailure, DecodeFailure) as e:
            raise EnrichmentFailure(item_id, e) from e

    async def enrich(self, item_id: int, media_kind: str) -> Optional[CreditsRecord]:
        """Credits for the item, or None if they are unavailable"""
        try:
            return await self.fetch_credits(item_id, media_kind)
        except EnrichmentFailure as e:
            logger.info(f"{e}; continuing without credits")
            return None
