import asyncio
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.clients.pokeapi import PokeApiClient
from app.core.cache import TTLCache
from app.deps import get_pokedex
from app.main import app
from app.services.pokedex import PokedexService

BASE = "https://pokeapi.test/api/v2"


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakePokeApi:
    """
    In-memory PokéAPI behind httpx.MockTransport.
    `routes` maps url -> (status, json body); `gate`, when set, holds every
    request until the test opens it.
    """
    def __init__(self):
        self.routes: Dict[str, Tuple[int, Any]] = {}
        self.calls: List[str] = []
        self.gate: Optional[asyncio.Event] = None

    def add(self, url: str, body: Any, status: int = 200) -> None:
        self.routes[url] = (status, body)

    def count(self, url: str) -> int:
        return self.calls.count(url)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        status, body = self.routes.get(url, (404, {"detail": "Not found."}))
        return httpx.Response(status, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def pokemon_body(pid: int, name: str, moves: Optional[List[str]] = None) -> Dict[str, Any]:
    return {
        "id": pid,
        "name": name,
        "height": 7,
        "weight": 69,
        "types": [{"slot": 1, "type": {"name": "grass", "url": f"{BASE}/type/12/"}}],
        "moves": [
            {"move": {"name": m, "url": f"{BASE}/move/{m}/"}, "version_group_details": []}
            for m in (moves or [])
        ],
    }


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    api = FakePokeApi()
    api.add(f"{BASE}/pokemon/bulbasaur", pokemon_body(1, "bulbasaur", ["tackle", "vine-whip"]))
    api.add(
        f"{BASE}/pokemon?limit=1000",
        {"count": 3, "results": [
            {"name": "bulbasaur", "url": f"{BASE}/pokemon/1/"},
            {"name": "ivysaur", "url": f"{BASE}/pokemon/2/"},
            {"name": "charmander", "url": f"{BASE}/pokemon/4/"},
        ]},
    )
    api.add(f"{BASE}/move/tackle/", {"id": 33, "name": "tackle", "type": {"name": "normal", "url": ""}})
    api.add(f"{BASE}/move/vine-whip/", {"id": 22, "name": "vine-whip", "type": {"name": "grass", "url": ""}})
    return api


@pytest.fixture
def client(upstream):
    return PokeApiClient(BASE, transport=upstream.transport())


@pytest.fixture
def service(client, clock):
    return PokedexService(
        client,
        TTLCache(3600, max_items=100, clock=clock),
        TTLCache(24 * 3600, clock=clock),
    )


@pytest.fixture
def api(service):
    app.dependency_overrides[get_pokedex] = lambda: service
    yield AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()
