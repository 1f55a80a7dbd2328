"""
Tests for the pipeline orchestrator
"""
import pytest
from tmdb_fetcher.core.exceptions import FatalFailure, HttpFailure, NetworkFailure
from tmdb_fetcher.models.config import DEFAULT_CATEGORIES, FetcherConfig
from tmdb_fetcher.services.pipeline import PipelineOrchestrator


@pytest.fixture
def listing_routes(make_listing, sample_tmdb_movie, sample_tmdb_series):
    return {
        "/movie/popular": make_listing(sample_tmdb_movie),
        "/movie/now_playing": make_listing(sample_tmdb_movie),
        "/movie/top_rated": make_listing(sample_tmdb_movie),
        "/discover/movie": make_listing(sample_tmdb_movie),
        "/tv/popular": make_listing(sample_tmdb_series),
    }


@pytest.mark.asyncio
async def test_all_categories_succeed(fake_client_factory, fetcher_config, genre_routes, listing_routes):
    client = fake_client_factory({**genre_routes, **listing_routes})
    orchestrator = PipelineOrchestrator(client, fetcher_config)

    document = await orchestrator.run()

    assert [category.id for category in document.categories] == [
        "continue-watching",
        "recently-added",
        "recommended",
        "movie-library",
        "tv-library",
    ]
    assert orchestrator.failures == []
    assert document.categories[4].items[0].genres == ["Drama", "Crime"]


@pytest.mark.asyncio
async def test_partial_failure_keeps_successful_categories(
    fake_client_factory, fetcher_config, genre_routes, listing_routes, caplog
):
    """2 of 5 categories fail: 3 remain in configured order"""
    listing_routes["/movie/now_playing"] = NetworkFailure("Connection reset by peer")
    listing_routes["/discover/movie"] = HttpFailure(500, "Internal error")
    client = fake_client_factory({**genre_routes, **listing_routes})
    orchestrator = PipelineOrchestrator(client, fetcher_config)

    with caplog.at_level("INFO"):
        document = await orchestrator.run()

    assert [category.id for category in document.categories] == [
        "continue-watching",
        "recommended",
        "tv-library",
    ]
    assert len(orchestrator.failures) == 2
    assert "Error fetching Recently Added" in caplog.text
    assert "Error fetching Movies: HTTP error 500: Internal error" in caplog.text
    assert "Warning: 2 categories failed to fetch." in caplog.text


@pytest.mark.asyncio
async def test_genre_failure_is_fatal_before_categories(
    fake_client_factory, fetcher_config, genre_routes, listing_routes
):
    genre_routes["/genre/movie/list"] = HttpFailure(401, "Invalid API key")
    client = fake_client_factory({**genre_routes, **listing_routes})

    with pytest.raises(FatalFailure, match="Error fetching movie genres"):
        await PipelineOrchestrator(client, fetcher_config).run()

    assert client.endpoints() == ["/genre/movie/list", "/genre/tv/list"]


@pytest.mark.asyncio
async def test_all_categories_failing_is_fatal(fake_client_factory, fetcher_config, genre_routes):
    client = fake_client_factory(genre_routes)
    orchestrator = PipelineOrchestrator(client, fetcher_config)

    with pytest.raises(FatalFailure, match="No categories were successfully fetched"):
        await orchestrator.run()

    assert len(orchestrator.failures) == len(DEFAULT_CATEGORIES)


@pytest.mark.asyncio
async def test_unexpected_errors_propagate(fake_client_factory, genre_routes, listing_routes):
    """Only category failures are absorbed"""
    listing_routes["/tv/popular"] = RuntimeError("boom")
    client = fake_client_factory({**genre_routes, **listing_routes})
    config = FetcherConfig(api_key="test_api_key_12345678", include_credits=False)

    with pytest.raises(RuntimeError, match="boom"):
        await PipelineOrchestrator(client, config).run()


@pytest.mark.asyncio
async def test_category_order_survives_out_of_order_completion(
    fake_client_factory, genre_routes, listing_routes
):
    delays = {
        "/movie/popular": 0.05,
        "/movie/now_playing": 0.04,
        "/movie/top_rated": 0.03,
        "/discover/movie": 0.02,
        "/tv/popular": 0.01,
    }
    client = fake_client_factory({**genre_routes, **listing_routes}, delays=delays)
    config = FetcherConfig(api_key="test_api_key_12345678", include_credits=False)

    document = await PipelineOrchestrator(client, config).run()

    assert client.completed[2:] == list(reversed(list(delays)))
    assert [category.id for category in document.categories] == [
        category.id for category in DEFAULT_CATEGORIES
    ]
