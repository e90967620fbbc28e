# app/services/pokedex.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..clients.pokeapi import PokeApiClient
from ..core.cache import TTLCache
from ..core.config import Settings
from ..core.errors import MalformedPayloadError, PokedexError
from ..core.inflight import InflightRequests
from ..domain.models import Move, NameIndexPage, Pokemon

logger = logging.getLogger(__name__)

NAME_INDEX_KEY = "all-pokemon-names"

M = TypeVar("M", bound=BaseModel)


def _decode(model: Type[M], url: str, body: Dict[str, Any]) -> M:
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise MalformedPayloadError(f"GET {url}: unexpected {model.__name__} payload: {e}") from e


class PokedexService:
    """
    Cached, de-duplicated access to PokéAPI.

    Lookup order for every operation: cache -> shared in-flight fetch -> upstream.
    Only successful, decoded results are cached; an upstream failure reaches every
    caller that was waiting on that fetch and the next call tries again.
    """

    def __init__(
        self,
        client: PokeApiClient,
        entity_cache: TTLCache,
        names_cache: TTLCache,
        inflight: Optional[InflightRequests] = None,
        *,
        name_index_limit: int = 1000,
        search_limit: int = 10,
        move_type_limit: int = 20,
    ):
        self.client = client
        self.entity_cache = entity_cache
        self.names_cache = names_cache
        self.inflight = inflight if inflight is not None else InflightRequests()
        self.name_index_limit = name_index_limit
        self.search_limit = search_limit
        self.move_type_limit = move_type_limit

    @classmethod
    def from_settings(cls, settings: Settings, client: Optional[PokeApiClient] = None) -> "PokedexService":
        client = client or PokeApiClient(settings.pokeapi_base_url, timeout=settings.http_timeout_seconds)
        return cls(
            client,
            TTLCache(settings.entity_cache_ttl_seconds, max_items=settings.entity_cache_max_items),
            TTLCache(settings.names_cache_ttl_seconds),
            name_index_limit=settings.name_index_limit,
            search_limit=settings.search_limit,
            move_type_limit=settings.move_type_limit,
        )

    # ------------ shared pattern ------------
    async def _cached(self, cache: TTLCache, key: str, load):
        cached = cache.get(key)
        if cached is not None:
            logger.debug("cache hit: %s", key)
            return cached
        logger.debug("cache miss: %s", key)

        async def produce():
            value = await load()
            cache.set(key, value)
            return value

        return await self.inflight.fetch_once(key, produce)

    # ------------ entities ------------
    async def fetch_pokemon(self, name: str) -> Pokemon:
        name = (name or "").strip().lower()
        if not name:
            raise ValueError("Pokemon name is required")
        url = self.client.pokemon_url(name)

        async def load() -> Pokemon:
            return _decode(Pokemon, url, await self.client.get_json(url, resource=name))

        return await self._cached(self.entity_cache, f"entity:{name}", load)

    # ------------ name index / suggestions ------------
    async def fetch_name_index(self) -> List[str]:
        url = self.client.name_index_url(self.name_index_limit)

        async def load() -> List[str]:
            return _decode(NameIndexPage, url, await self.client.get_json(url)).names()

        return await self._cached(self.names_cache, NAME_INDEX_KEY, load)

    async def search_names(self, query: str, limit: Optional[int] = None) -> List[str]:
        """Up to `limit` index names containing `query` (case-insensitive), in index order."""
        if not query:
            return []
        q = query.lower()
        names = await self.fetch_name_index()
        hits = [n for n in names if q in n.lower()]
        return hits[: self.search_limit if limit is None else limit]

    # ------------ related resources ------------
    async def fetch_related(self, url: str) -> Dict[str, Any]:
        if not url:
            raise ValueError("Resource url is required")

        async def load() -> Dict[str, Any]:
            return await self.client.get_json(url)

        return await self._cached(self.entity_cache, f"related:{url}", load)

    async def fetch_move_type(self, url: str) -> str:
        return _decode(Move, url, await self.fetch_related(url)).type.name

    async def fetch_move_types(self, name: str, limit: Optional[int] = None) -> Dict[str, str]:
        """
        Type name of each of the Pokémon's first `limit` moves, looked up concurrently.
        A move whose lookup fails is left out.
        """
        pokemon = await self.fetch_pokemon(name)
        moves = pokemon.moves[: self.move_type_limit if limit is None else limit]
        results = await asyncio.gather(
            *[self.fetch_move_type(m.move.url) for m in moves],
            return_exceptions=True,
        )
        out: Dict[str, str] = {}
        for m, res in zip(moves, results):
            if isinstance(res, (PokedexError, ValueError)):
                logger.warning("move type lookup failed for %s: %s", m.move.name, res)
                continue
            if isinstance(res, BaseException):
                raise res
            out[m.move.name] = res
        return out

    # ------------ housekeeping ------------
    def clear(self) -> None:
        self.entity_cache.clear()
        self.names_cache.clear()

    def stats(self) -> Dict[str, Any]:
        return {
            "entity_cache": {
                "entries": len(self.entity_cache),
                "max_items": self.entity_cache.max_items,
                "ttl_seconds": self.entity_cache.ttl,
            },
            "names_cache": {
                "entries": len(self.names_cache),
                "max_items": self.names_cache.max_items,
                "ttl_seconds": self.names_cache.ttl,
            },
            "in_flight": len(self.inflight),
        }

    async def aclose(self) -> None:
        self.clear()
        await self.client.aclose()
