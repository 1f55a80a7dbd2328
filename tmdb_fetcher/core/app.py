"""
Fetcher Application
Logging setup and the wiring that runs one fetch end to end
"""
import logging
from pathlib import Path
from typing import Union
from tmdb_fetcher.models.config import FetcherConfig
from tmdb_fetcher.models.media import OutputDocument
from tmdb_fetcher.services.output import write_document
from tmdb_fetcher.services.pipeline import PipelineOrchestrator
from tmdb_fetcher.services.tmdb import TMDBClient

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    """Configure root logging once for the process"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


async def fetch_document(config: FetcherConfig) -> OutputDocument:
    """Run the pipeline with a client whose session lives for the run"""
    async with TMDBClient(config) as client:
        orchestrator = PipelineOrchestrator(client, config)
        return await orchestrator.run()


async def run_fetcher(config: FetcherConfig, output_path: Union[str, Path]) -> OutputDocument:
    """
    Fetch everything and persist it

    Nothing is written if the pipeline fails.

    Raises:
        FatalFailure: Propagated from the pipeline
    """
    logger.info("TMDB Data Fetcher")
    logger.info("----------------")
    logger.info(f"Output will be saved to: {output_path}")

    document = await fetch_document(config)
    write_document(document, output_path)
    return document
