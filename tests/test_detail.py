"""Tests for the detail orchestrator."""
import asyncio

import pytest

from book_finder.detail import DetailOrchestrator, DetailState
from book_finder.search import SearchOrchestrator, SearchState
from conftest import make_items


@pytest.mark.asyncio
async def test_open_loads_normalized_detail(fake_client):
    item = make_items(1)[0]
    fake_client.details[item.key] = {
        "description": {"type": "/type/text", "value": "A tale."},
        "first_sentence": "It began.",
        "excerpts": [{"excerpt": "An excerpt."}],
        "subjects": ["Adventure"],
    }
    details = DetailOrchestrator(fake_client)

    state = await details.open(item)

    assert state is DetailState.LOADED
    assert details.item is item
    assert details.detail.description == "A tale."
    assert details.detail.first_sentence == "It began."
    assert details.detail.excerpt == "An excerpt."
    assert details.detail.subjects == ["Adventure"]


@pytest.mark.asyncio
async def test_loading_state_while_fetching(fake_client):
    item = make_items(1)[0]
    fake_client.details[item.key] = {"description": "Later."}
    details = DetailOrchestrator(fake_client)

    gate = fake_client.gate(item.key)
    task = asyncio.create_task(details.open(item))
    await asyncio.sleep(0)

    assert details.state is DetailState.LOADING
    assert details.is_loading
    assert details.item is item
    assert details.detail is None

    gate.set()
    assert await task is DetailState.LOADED


@pytest.mark.asyncio
async def test_failed_fetch_is_unavailable_not_error(fake_client):
    """Test missing enrichment keeps the base item available."""
    item = make_items(1)[0]
    details = DetailOrchestrator(fake_client)

    state = await details.open(item)

    assert state is DetailState.UNAVAILABLE
    assert details.is_open
    assert details.item is item
    assert details.detail is None


@pytest.mark.asyncio
async def test_stale_response_does_not_overwrite_newer_selection(fake_client):
    """Open A, then B before A resolves: A's late response is dropped."""
    book_a, book_b = make_items(2)
    fake_client.details[book_a.key] = {"description": "About A"}
    fake_client.details[book_b.key] = {"description": "About B"}
    details = DetailOrchestrator(fake_client)

    gate_a = fake_client.gate(book_a.key)
    task_a = asyncio.create_task(details.open(book_a))
    await asyncio.sleep(0)

    await details.open(book_b)
    assert details.detail.description == "About B"

    gate_a.set()
    await task_a

    assert details.state is DetailState.LOADED
    assert details.item is book_b
    assert details.detail.description == "About B"


@pytest.mark.asyncio
async def test_close_discards_detail_and_late_response(fake_client):
    item = make_items(1)[0]
    fake_client.details[item.key] = {"description": "Too late"}
    details = DetailOrchestrator(fake_client)

    gate = fake_client.gate(item.key)
    task = asyncio.create_task(details.open(item))
    await asyncio.sleep(0)
    details.close()
    gate.set()
    await task

    assert details.state is DetailState.CLOSED
    assert not details.is_open
    assert details.item is None
    assert details.detail is None


@pytest.mark.asyncio
async def test_reopen_refetches(fake_client):
    """Test nothing is cached between selections."""
    item = make_items(1)[0]
    fake_client.details[item.key] = {"description": "First"}
    details = DetailOrchestrator(fake_client)

    await details.open(item)
    details.close()

    fake_client.details[item.key] = {"description": "Second"}
    await details.open(item)

    assert fake_client.detail_calls == [item.key, item.key]
    assert details.detail.description == "Second"


@pytest.mark.asyncio
async def test_hobbit_search_then_open_third_item(fake_client, notifier):
    """Search 'Hobbit' by title, open the third result, load its description."""
    results = make_items(24, prefix="Hobbit")
    fake_client.search_results["Hobbit"] = results
    third = results[2]
    fake_client.details[third.key] = {"description": "Bilbo's journey."}

    search = SearchOrchestrator(fake_client, notifier)
    details = DetailOrchestrator(fake_client)

    assert await search.submit("Hobbit", "title") is SearchState.RESULTS
    assert len(search.items) == 24

    gate = fake_client.gate(third.key)
    task = asyncio.create_task(details.open(search.items[2]))
    await asyncio.sleep(0)
    assert details.state is DetailState.LOADING

    gate.set()
    assert await task is DetailState.LOADED
    assert details.item.title == "Hobbit 3"
    assert details.detail.description == "Bilbo's journey."
