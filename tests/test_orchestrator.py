"""Tests for the search orchestrator."""

import asyncio

import pytest

from wiki_search.search.cache import ResultCache
from wiki_search.search.orchestrator import SearchOrchestrator
from wiki_search.search.search_models import (
    CacheKey,
    ClearedView,
    EmptyView,
    FailedView,
    ResultsView,
    SearchState,
    SuggestionsView,
    TimedOutView,
)
from wiki_search.services.base import MalformedResponse, NetworkFailure
from wiki_search.utils.preferences import LanguagePreference

from .fakes import EINSTEIN_EXTRACT, FakeClient, make_payload

EINSTEIN = make_payload(
    titles=["Albert Einstein", "Albert Einstein Medal", "Albert Einstein College of Medicine"],
    search_titles=["Albert Einstein", "Einstein family", "Hans Albert Einstein"],
    extracts={"Albert Einstein": EINSTEIN_EXTRACT},
)
MISSPELLED = make_payload(
    titles=[],
    search_titles=["Albert Einstein", "Einstein family"],
    extracts={"Albert Einstein": EINSTEIN_EXTRACT},
)


def make_orchestrator(client, **kwargs):
    views = []
    kwargs.setdefault("language", "en")
    kwargs.setdefault("debounce_delay", 0.02)
    kwargs.setdefault("timeout", 1.0)
    orchestrator = SearchOrchestrator(client=client, on_result=views.append, **kwargs)
    return orchestrator, views


@pytest.mark.asyncio
async def test_exact_match_search():
    client = FakeClient(
        payloads={"Albert Einstein": EINSTEIN},
        candidates={"Albert Einstein": ["Albert Einstein", "Albert Einstein Medal"]},
    )
    orchestrator, views = make_orchestrator(client)

    view = await orchestrator.search("Albert Einstein")

    assert isinstance(view, ResultsView)
    assert views == [view]
    assert view.exact_match is True
    assert view.message_key == "search_results_for"
    assert view.recommendation is None
    assert view.ranked_results[0].title == "Albert Einstein"
    assert view.ranked_results[0].score == 2000
    assert view.ranked_results[0].extract == EINSTEIN_EXTRACT
    assert len({r.title for r in view.ranked_results}) == len(view.ranked_results) == 5
    assert view.timing >= 0
    assert orchestrator.state == SearchState.IDLE
    assert orchestrator.last_outcome == SearchState.SUCCEEDED


@pytest.mark.asyncio
async def test_misspelled_query_gets_recommendation():
    client = FakeClient(
        payloads={"Albrt Einsten": MISSPELLED},
        candidates={"Albrt Einsten": ["Albert Einstein"]},
    )
    orchestrator, _ = make_orchestrator(client)

    view = await orchestrator.search("Albrt Einsten")

    assert isinstance(view, ResultsView)
    assert view.exact_match is False
    assert view.message_key == "search_results_similar"
    assert view.recommendation == "Albert Einstein"
    assert view.ranked_results[0].title == "Albert Einstein"


@pytest.mark.asyncio
async def test_no_results_and_no_suggestions():
    client = FakeClient()
    orchestrator, views = make_orchestrator(client)

    view = await orchestrator.search("zzqxnonexistentterm")

    assert view == EmptyView("zzqxnonexistentterm", "en")
    assert views == [view]
    assert CacheKey("en", "zzqxnonexistentterm") in orchestrator.cache


@pytest.mark.asyncio
async def test_no_results_with_suggestions_then_accept():
    client = FakeClient(
        payloads={"Albert Einstein": EINSTEIN},
        candidates={"Albrt Einsten": ["Albert Einstein", "Albert Einstein Medal"]},
    )
    orchestrator, views = make_orchestrator(client)

    view = await orchestrator.search("Albrt Einsten")

    assert view == SuggestionsView("Albrt Einsten", "en", ("Albert Einstein",))
    assert orchestrator.suggestions == ("Albert Einstein",)

    assert orchestrator.move_selection(1) == 0
    assert orchestrator.move_selection(1) == 0
    assert orchestrator.accept_selection() == "Albert Einstein"
    await orchestrator.wait_idle()

    assert isinstance(views[-1], ResultsView)
    assert views[-1].query == "Albert Einstein"
    assert orchestrator.selected_index == -1
    assert orchestrator.suggestions == ()


@pytest.mark.asyncio
async def test_accept_without_selection():
    orchestrator, views = make_orchestrator(FakeClient())
    assert orchestrator.move_selection(1) == -1
    assert orchestrator.accept_selection() is None
    assert views == []


@pytest.mark.asyncio
async def test_timeout_reports_once_and_skips_cache():
    client = FakeClient(payloads={"slow": EINSTEIN}, delays={"slow": 0.2})
    orchestrator, views = make_orchestrator(client, timeout=0.05)

    view = await orchestrator.search("slow")

    assert view == TimedOutView("slow", "en")
    assert orchestrator.last_outcome == SearchState.TIMED_OUT
    assert orchestrator.state == SearchState.IDLE

    # the abandoned fetch completes in the background without effect
    await asyncio.sleep(0.3)
    assert views == [view]
    assert len(orchestrator.cache) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error", [NetworkFailure("connection refused"), MalformedResponse("not JSON")]
)
async def test_failure_reports_failed_view(error):
    client = FakeClient(error=error)
    orchestrator, views = make_orchestrator(client)

    view = await orchestrator.search("Albert Einstein")

    assert view == FailedView("Albert Einstein", "en")
    assert views == [view]
    assert orchestrator.last_outcome == SearchState.FAILED
    assert len(orchestrator.cache) == 0


@pytest.mark.asyncio
async def test_unexpected_error_propagates():
    client = FakeClient(error=RuntimeError("bug"))
    orchestrator, views = make_orchestrator(client)

    with pytest.raises(RuntimeError):
        await orchestrator.search("Albert Einstein")

    assert views == [FailedView("Albert Einstein", "en")]
    assert orchestrator.last_outcome == SearchState.FAILED
    assert orchestrator.state == SearchState.IDLE


@pytest.mark.asyncio
async def test_unexpected_error_in_debounced_cycle_reports_failure():
    client = FakeClient(error=RuntimeError("bug"))
    orchestrator, views = make_orchestrator(client)

    orchestrator.on_query_changed("Albert Einstein")
    await asyncio.wait_for(orchestrator.wait_idle(), timeout=1)

    assert views == [FailedView("Albert Einstein", "en")]
    assert orchestrator.state == SearchState.IDLE


@pytest.mark.asyncio
async def test_owned_client_timeout_covers_search_deadline(fresh_config):
    fresh_config.update({"search_timeout": 30.0, "http_timeout": 30.0})

    default = SearchOrchestrator(language="en")
    extended = SearchOrchestrator(language="en", timeout=60.0)

    assert default.client.timeout == 30.0
    assert extended.client.timeout == 60.0


@pytest.mark.asyncio
async def test_cached_payload_is_reused():
    client = FakeClient(payloads={"Albert Einstein": EINSTEIN})
    orchestrator, views = make_orchestrator(client)

    first = await orchestrator.search("Albert Einstein")
    second = await orchestrator.search("  Albert Einstein  ")

    assert len(client.payload_calls) == 1
    assert len(client.opensearch_calls) == 2
    assert first.ranked_results == second.ranked_results
    assert len(views) == 2


@pytest.mark.asyncio
async def test_stale_cache_entry_is_refetched():
    now = [1000.0]
    cache = ResultCache(ttl=10, clock=lambda: now[0])
    client = FakeClient(payloads={"Albert Einstein": EINSTEIN})
    orchestrator, _ = make_orchestrator(client, cache=cache)

    await orchestrator.search("Albert Einstein")
    now[0] += 10
    await orchestrator.search("Albert Einstein")

    assert len(client.payload_calls) == 2
    assert len(cache) == 1


@pytest.mark.asyncio
async def test_cache_is_language_scoped():
    client = FakeClient(payloads={"Jakarta": make_payload(titles=["Jakarta"])})
    orchestrator, _ = make_orchestrator(client)

    await orchestrator.search("Jakarta", language="en")
    await orchestrator.search("Jakarta", language="id")

    assert client.payload_calls == [("Jakarta", "en"), ("Jakarta", "id")]


@pytest.mark.asyncio
async def test_superseded_response_is_dropped():
    client = FakeClient(
        payloads={"slow": make_payload(titles=["Slow"]), "fast": make_payload(titles=["Fast"])},
        delays={"slow": 0.1},
    )
    orchestrator, views = make_orchestrator(client)

    slow = asyncio.ensure_future(orchestrator.search("slow"))
    await asyncio.sleep(0.01)
    fast = await orchestrator.search("fast")

    assert await slow is None
    assert views == [fast]
    assert fast.query == "fast"
    assert CacheKey("en", "slow") not in orchestrator.cache


@pytest.mark.asyncio
async def test_typing_burst_runs_one_search():
    client = FakeClient(payloads={"Albert Einstein": EINSTEIN})
    orchestrator, views = make_orchestrator(client, debounce_delay=0.05)

    for text in ("Alb", "Albert", "Albert Ein", "Albert Einstein"):
        orchestrator.on_query_changed(text)
    await orchestrator.wait_idle()

    assert client.payload_calls == [("Albert Einstein", "en")]
    assert len(views) == 1
    assert views[0].query == "Albert Einstein"


@pytest.mark.asyncio
async def test_blank_query_clears_immediately():
    client = FakeClient(payloads={"Albert Einstein": EINSTEIN})
    orchestrator, views = make_orchestrator(client)

    orchestrator.on_query_changed("Albert Einstein")
    orchestrator.on_query_changed("   ")
    await orchestrator.wait_idle()

    assert views == [ClearedView()]
    assert client.payload_calls == []
    assert orchestrator.state == SearchState.IDLE


@pytest.mark.asyncio
async def test_blank_query_supersedes_running_search():
    client = FakeClient(payloads={"slow": EINSTEIN}, delays={"slow": 0.1})
    orchestrator, views = make_orchestrator(client)

    slow = asyncio.ensure_future(orchestrator.search("slow"))
    await asyncio.sleep(0.01)
    orchestrator.clear()

    assert await slow is None
    assert views == [ClearedView()]


@pytest.mark.asyncio
async def test_retry_reruns_last_query():
    client = FakeClient(error=NetworkFailure("offline"))
    orchestrator, views = make_orchestrator(client)

    await orchestrator.search("Albert Einstein")
    client.error = None
    client.payloads["Albert Einstein"] = EINSTEIN
    orchestrator.retry()
    await orchestrator.wait_idle()

    assert isinstance(views[0], FailedView)
    assert isinstance(views[1], ResultsView)


@pytest.mark.asyncio
async def test_set_language_persists_and_reruns(tmp_path):
    preferences = LanguagePreference(path=tmp_path / "prefs.json")
    client = FakeClient(payloads={"Jakarta": make_payload(titles=["Jakarta"])})
    orchestrator, views = make_orchestrator(client, language=None, preferences=preferences)
    assert orchestrator.language == "en"

    await orchestrator.search("Jakarta")
    orchestrator.set_language("ID")
    await orchestrator.wait_idle()

    assert orchestrator.language == "id"
    assert preferences.load() == "id"
    assert client.payload_calls[-1] == ("Jakarta", "id")
    assert views[-1].language == "id"


@pytest.mark.asyncio
async def test_stored_language_is_used(tmp_path):
    preferences = LanguagePreference(path=tmp_path / "prefs.json")
    preferences.save("id")
    orchestrator, _ = make_orchestrator(FakeClient(), language=None, preferences=preferences)
    assert orchestrator.language == "id"


@pytest.mark.asyncio
@pytest.mark.parametrize("code", ["", "eng", "e1", "english"])
async def test_invalid_language_is_rejected(code):
    orchestrator, _ = make_orchestrator(FakeClient())

    with pytest.raises(ValueError):
        orchestrator.set_language(code)
    with pytest.raises(ValueError):
        await orchestrator.search("Albert Einstein", language=code or "x")
    assert orchestrator.language == "en"


@pytest.mark.asyncio
async def test_context_manager_closes_client():
    client = FakeClient()
    async with SearchOrchestrator(client=client, language="en") as orchestrator:
        orchestrator.on_query_changed("pending search")
    assert client.closed
    assert client.payload_calls == []
