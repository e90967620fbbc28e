# app/clients/pokeapi.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..core.config import name_index_url, pokemon_url
from ..core.errors import MalformedPayloadError, NotFoundError, PokemonNotFoundError, UpstreamError

logger = logging.getLogger(__name__)


class PokeApiClient:
    """
    Thin async wrapper over PokéAPI v2 (https://pokeapi.co/api/v2):

      entity:     GET /pokemon/{name}
      name index: GET /pokemon?limit={n}   -> {"results": [{"name", "url"}, ...]}
      related:    GET {absolute url}       (moves, abilities, ... as linked from an entity)

    Every call is "fetch(url) -> JSON object | error"; the payload shape is left
    to the caller.
    """

    # ------------ lifecycle ------------
    def __init__(
        self,
        base_url: str = "https://pokeapi.co/api/v2",
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True)

    async def aclose(self) -> None:
        await self._http.aclose()

    # ------------ addresses ------------
    def pokemon_url(self, name: str) -> str:
        return pokemon_url(self.base_url, name)

    def name_index_url(self, limit: int) -> str:
        return name_index_url(self.base_url, limit)

    # ------------ low-level GET ------------
    async def get_json(self, url: str, *, resource: Optional[str] = None) -> Dict[str, Any]:
        """
        GET `url` and decode a JSON object.

        404 -> PokemonNotFoundError(resource) for a named Pokémon lookup,
        NotFoundError(url) otherwise; other non-2xx and
        transport failures -> UpstreamError; non-object body -> MalformedPayloadError.
        """
        try:
            resp = await self._http.get(url)
        except httpx.HTTPError as e:
            logger.warning("GET %s failed: %s", url, e)
            raise UpstreamError(f"GET {url} failed: {e}") from e

        if resp.status_code == 404:
            if resource is not None:
                raise PokemonNotFoundError(resource)
            raise NotFoundError(url)
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("GET %s -> %s", url, resp.status_code)
            raise UpstreamError(
                f"GET {url} -> {resp.status_code} {resp.reason_phrase}",
                upstream_status=resp.status_code,
            ) from e

        try:
            body = resp.json()
        except ValueError as e:
            raise MalformedPayloadError(f"GET {url}: body is not JSON", upstream_status=resp.status_code) from e
        if not isinstance(body, dict):
            raise MalformedPayloadError(
                f"GET {url}: expected a JSON object, got {type(body).__name__}",
                upstream_status=resp.status_code,
            )
        return body
