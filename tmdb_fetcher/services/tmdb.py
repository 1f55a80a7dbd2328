"""
TMDB API Client
Async transport for The Movie Database API
"""
import aiohttp
import asyncio
import json
import logging
from typing import Dict, Optional, Sequence, Tuple, Union
from tmdb_fetcher.core.exceptions import HttpFailure, NetworkFailure
from tmdb_fetcher.models.config import FetcherConfig

logger = logging.getLogger(__name__)

QueryParams = Union[Sequence[Tuple[str, str]], Dict[str, str]]


def _status_message(body: bytes) -> str:
    """Pull TMDB's status_message out of an error body, if there is one"""
    try:
        payload = json.loads(body)
    except ValueError:
        return "Unknown error"
    if isinstance(payload, dict) and isinstance(payload.get("status_message"), str):
        return payload["status_message"]
    return "Unknown error"


def _format_params(params: Sequence[Tuple[str, str]]) -> str:
    if not params:
        return ""
    return "?" + "&".join(f"{k}={v}" for k, v in params)


class TMDBClient:
    """Async client for TMDB API"""

    def __init__(self, config: FetcherConfig):
        self.api_key = config.api_key
        self.base_url = config.api_base_url.rstrip("/")
        self.timeout = config.request_timeout
        self.session: Optional[aiohttp.ClientSession] = None
        self._semaphore = asyncio.Semaphore(config.max_concurrent_requests)

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self.session

    async def close(self):
        """Close aiohttp session"""
        if self.session and not self.session.closed:
            await self.session.close()

    async def __aenter__(self) -> "TMDBClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    def _describe_error(self, error: aiohttp.ClientError) -> str:
        """Error text without the request URL's api_key"""
        if isinstance(error, aiohttp.ClientResponseError):
            message = f"{error.__class__.__name__}: {error.message}"
        else:
            message = str(error) or error.__class__.__name__
        return message.replace(self.api_key, "***")

    async def get(self, endpoint: str, params: Optional[QueryParams] = None) -> bytes:
        """
        Make a single GET request to TMDB.

        The API key is always sent first, ahead of the caller's parameters,
        and is never logged. There is no retry.

        Args:
            endpoint: Path below the API base URL, e.g. "/movie/popular"
            params: Ordered query parameters

        Returns:
            Raw response body of a 2xx response

        Raises:
            NetworkFailure: No response was received
            HttpFailure: The response status was not 2xx
        """
        if isinstance(params, dict):
            params = list(params.items())
        params = list(params or [])

        url = f"{self.base_url}{endpoint}"
        request_params = [("api_key", self.api_key)] + params

        logger.info("Requesting data from: %s%s", url, _format_params(params))

        try:
            async with self._semaphore:
                session = await self.get_session()
                async with session.get(url, params=request_params) as response:
                    status = response.status
                    body = await response.read()
        except asyncio.TimeoutError:
            raise NetworkFailure(f"timed out after {self.timeout}s requesting {endpoint}") from None
        except aiohttp.ClientError as e:
            raise NetworkFailure(self._describe_error(e)) from e

        if 200 <= status < 300:
            return body

        raise HttpFailure(status, _status_message(body))
