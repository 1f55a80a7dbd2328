"""
Output Writer
Persists the output document as UTF-8 JSON
"""
import logging
from pathlib import Path
from typing import Union
from tmdb_fetcher.models.media import OutputDocument

logger = logging.getLogger(__name__)


def write_document(document: OutputDocument, path: Union[str, Path]) -> int:
    """
    Write the document, creating parent directories as needed

    Returns:
        Number of bytes written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = document.to_json()
    path.write_bytes(payload)

    logger.info(
        f"Successfully wrote data for {len(document.categories)} categories to {path}"
    )
    logger.info(f"Total size: {len(payload) // 1024} KB")
    return len(payload)
