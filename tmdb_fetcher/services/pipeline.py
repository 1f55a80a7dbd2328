"""
Pipeline Orchestrator
Resolves genres once, runs every category and assembles the output document
"""
import asyncio
import logging
from typing import List
from tmdb_fetcher.core.exceptions import CategoryFailure, FatalFailure
from tmdb_fetcher.models.config import FetcherConfig
from tmdb_fetcher.models.media import CategoryOutput, OutputDocument
from tmdb_fetcher.services.categories import CategoryProcessor
from tmdb_fetcher.services.genres import GenreResolver
from tmdb_fetcher.services.tmdb import TMDBClient

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """Runs one complete fetch"""

    def __init__(self, client: TMDBClient, config: FetcherConfig):
        self.client = client
        self.config = config
        self.genres = GenreResolver(client)
        self.processor = CategoryProcessor(client, config)
        self.failures: List[CategoryFailure] = []

    async def run(self) -> OutputDocument:
        """
        Fetch every configured category into one document

        Categories run concurrently and independently; the document keeps
        configured order and contains only the categories that succeeded.
        Failed categories are available afterwards in `failures`.

        Raises:
            FatalFailure: If genres cannot be resolved or no category succeeds
        """
        genre_lookup = await self.genres.resolve()

        results = await asyncio.gather(
            *(self.processor.process(genre_lookup, category) for category in self.config.categories),
            return_exceptions=True,
        )

        successful: List[CategoryOutput] = []
        self.failures = []
        for result in results:
            if isinstance(result, CategoryFailure):
                logger.error(f"{result}")
                self.failures.append(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                successful.append(result)

        if self.failures:
            logger.warning(f"Warning: {len(self.failures)} categories failed to fetch.")

        if not successful:
            raise FatalFailure("No categories were successfully fetched.")

        return OutputDocument(categories=successful)
