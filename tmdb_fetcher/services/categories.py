"""
Category Processor
Fetches one category's listing and turns it into normalized items
"""
import asyncio
import logging
from typing import Optional
from tmdb_fetcher.core.exceptions import CategoryFailure, DecodeFailure, TransportFailure
from tmdb_fetcher.models.config import Category, FetcherConfig
from tmdb_fetcher.models.media import CategoryOutput, MediaItem
from tmdb_fetcher.models.tmdb import CatalogRecord, CreditsRecord
from tmdb_fetcher.services.credits import CreditsEnricher
from tmdb_fetcher.services.decoder import decode_listing
from tmdb_fetcher.services.genres import GenreLookup
from tmdb_fetcher.services.normalizer import media_kind, normalize
from tmdb_fetcher.services.tmdb import TMDBClient

logger = logging.getLogger(__name__)


class CategoryProcessor:
    """Drives the fetch for a single configured category"""

    def __init__(self, client: TMDBClient, config: FetcherConfig):
        self.client = client
        self.config = config
        self.credits = CreditsEnricher(client)

    async def _build_item(self, genre_lookup: GenreLookup, record: CatalogRecord) -> MediaItem:
        credits: Optional[CreditsRecord] = None
        if self.config.include_credits:
            credits = await self.credits.enrich(record.id, media_kind(record))
        return normalize(
            genre_lookup,
            record,
            credits,
            image_base_url=self.config.image_base_url,
            cast_limit=self.config.cast_limit,
            with_credits=self.config.include_credits,
        )

    async def process(self, genre_lookup: GenreLookup, category: Category) -> CategoryOutput:
        """
        Fetch, truncate and normalize one category

        Every retained listing row produces exactly one item; credits are
        fetched concurrently per item and results keep listing order.

        Args:
            genre_lookup: Merged genre lookup
            category: Category to fetch

        Returns:
            The category's output block

        Raises:
            CategoryFailure: If the listing cannot be fetched or decoded
        """
        logger.info(f"Fetching {category.name} from {category.endpoint}...")

        try:
            body = await self.client.get(category.endpoint, category.params)
        except TransportFailure as e:
            raise CategoryFailure(
                category.name, f"Error fetching {category.name}: {e}", e
            ) from e

        try:
            listing = decode_listing(body)
        except DecodeFailure as e:
            raise CategoryFailure(
                category.name, f"Error parsing {category.name} response: {e}", e
            ) from e

        records = listing.results[:category.limit]
        tasks = [
            asyncio.ensure_future(self._build_item(genre_lookup, record))
            for record in records
        ]
        try:
            items = await asyncio.gather(*tasks)
        except BaseException:
            # gather leaves the sibling tasks running when one of them raises
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        logger.info(f"Successfully fetched {len(items)} items for {category.name}")
        return CategoryOutput(id=category.id, name=category.name, items=list(items))
