"""Shared fakes for orchestrator tests."""
import asyncio

import pytest

from book_finder.models import CatalogItem
from book_finder.notifier import RecordingNotifier


def make_items(count, prefix="Book"):
    return [
        CatalogItem(key=f"/works/OL{i}W", title=f"{prefix} {i}", author_names=[f"Author {i}"])
        for i in range(1, count + 1)
    ]


class FakeCatalogClient:
    """
    Async stand-in for the catalog client.

    ``search_results`` and ``details`` hold return values (or exceptions)
    keyed by query and item key. A key listed in ``gates`` blocks until its
    event is set.
    """

    def __init__(self):
        self.search_results = {}
        self.details = {}
        self.gates = {}
        self.search_calls = []
        self.detail_calls = []

    def gate(self, name):
        self.gates[name] = asyncio.Event()
        return self.gates[name]

    async def _wait(self, name):
        if name in self.gates:
            await self.gates[name].wait()

    async def search(self, query, field):
        self.search_calls.append((query, field))
        await self._wait(query)
        result = self.search_results.get(query, [])
        if isinstance(result, Exception):
            raise result
        return result

    async def fetch_detail(self, key):
        self.detail_calls.append(key)
        await self._wait(key)
        return self.details.get(key)


@pytest.fixture
def fake_client():
    return FakeCatalogClient()


@pytest.fixture
def notifier():
    return RecordingNotifier()
