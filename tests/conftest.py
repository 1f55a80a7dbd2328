"""
Test configuration and fixtures
"""
import asyncio
import json
import pytest
from typing import Any, Dict, List, Optional, Tuple
from tmdb_fetcher.core.exceptions import HttpFailure
from tmdb_fetcher.models.config import FetcherConfig


class FakeTMDBClient:
    """
    Stands in for TMDBClient: serves canned bodies per endpoint

    A route may map to a dict/list (served as JSON), raw bytes, or an
    exception instance (raised). Unknown endpoints answer with a 404.
    `delays` holds per-endpoint latencies in seconds; `completed` lists
    endpoints in the order their latency elapsed.
    """

    def __init__(
        self,
        routes: Optional[Dict[str, Any]] = None,
        delays: Optional[Dict[str, float]] = None,
    ):
        self.routes = dict(routes or {})
        self.delays = dict(delays or {})
        self.completed: List[str] = []
        self.calls: List[Tuple[str, List[Tuple[str, str]]]] = []
        self.closed = False

    async def get(self, endpoint: str, params=None) -> bytes:
        if isinstance(params, dict):
            params = list(params.items())
        self.calls.append((endpoint, list(params or [])))
        await asyncio.sleep(self.delays.get(endpoint, 0))
        self.completed.append(endpoint)

        if endpoint not in self.routes:
            raise HttpFailure(404, "The resource you requested could not be found.")
        response = self.routes[endpoint]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, bytes):
            return response
        return json.dumps(response).encode("utf-8")

    def endpoints(self) -> List[str]:
        return [endpoint for endpoint, _ in self.calls]

    async def close(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()


@pytest.fixture
def fetcher_config():
    """Run config with a fake 32-char hex key and credits enabled"""
    return FetcherConfig(api_key="9a3b6df7b9285e1b338a8ca4b2970365")


@pytest.fixture
def movie_genres_response():
    return {
        "genres": [
            {"id": 28, "name": "Action"},
            {"id": 18, "name": "Drama"},
            {"id": 53, "name": "Thriller"},
        ]
    }


@pytest.fixture
def tv_genres_response():
    return {
        "genres": [
            {"id": 18, "name": "Drama"},
            {"id": 80, "name": "Crime"},
            {"id": 10765, "name": "Sci-Fi & Fantasy"},
        ]
    }


@pytest.fixture
def sample_tmdb_movie():
    """Sample TMDB movie listing row"""
    return {
        "id": 550,
        "title": "Fight Club",
        "poster_path": "/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg",
        "backdrop_path": "/fCayJrkfRaCRCTh8GqN30f8oyQF.jpg",
        "overview": "A ticking-time-bomb insomniac...",
        "release_date": "1999-10-15",
        "vote_average": 8.4,
        "genre_ids": [18, 53],
        "popularity": 45.3,
    }


@pytest.fixture
def sample_tmdb_series():
    """Sample TMDB TV listing row"""
    return {
        "id": 1396,
        "name": "Breaking Bad",
        "poster_path": "/ggFHVNu6YYI5L9pCfOacjizRGt.jpg",
        "backdrop_path": "/tsRy63Mu5cu8etL1X7ZLyf7UP1M.jpg",
        "overview": "A high school chemistry teacher...",
        "first_air_date": "2008-01-20",
        "vote_average": 8.9,
        "genre_ids": [18, 80],
        "popularity": 120.5,
    }


@pytest.fixture
def sample_movie_credits():
    """Sample /movie/550/credits response"""
    return {
        "id": 550,
        "cast": [
            {
                "id": 819,
                "name": "Edward Norton",
                "character": "The Narrator",
                "order": 0,
                "profile_path": "/8nytsqL59SFJTVYVrN72k6qkGgJ.jpg",
            },
            {
                "id": 287,
                "name": "Brad Pitt",
                "character": "Tyler Durden",
                "order": 1,
                "profile_path": "/cckcYc2v0yh1tc9QjRelptcOBko.jpg",
            },
            {
                "id": 1283,
                "name": "Helena Bonham Carter",
                "character": "Marla Singer",
                "order": 2,
                "profile_path": None,
            },
        ],
        "crew": [
            {
                "id": 7467,
                "name": "David Fincher",
                "job": "Director",
                "department": "Directing",
                "profile_path": "/tpEczFclQZeKAiCeKZZ0adRvtfz.jpg",
            },
            {
                "id": 7469,
                "name": "Jim Uhls",
                "job": "Screenplay",
                "department": "Writing",
                "profile_path": None,
            },
        ],
    }


@pytest.fixture
def make_listing():
    """Wrap rows in a paged listing response"""
    def build(*rows: Dict[str, Any]) -> Dict[str, Any]:
        return {"page": 1, "results": list(rows), "total_pages": 1, "total_results": len(rows)}
    return build


@pytest.fixture
def fake_client_factory():
    return FakeTMDBClient


@pytest.fixture
def genre_routes(movie_genres_response, tv_genres_response):
    return {
        "/genre/movie/list": movie_genres_response,
        "/genre/tv/list": tv_genres_response,
    }
