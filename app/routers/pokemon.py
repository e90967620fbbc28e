# app/routers/pokemon.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..core.errors import PokedexError
from ..deps import pokedex_dep
from ..services.pokedex import PokedexService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["pokemon"])


@router.get(
    "/pokemon",
    summary="Pokémon by name",
    description="Full PokéAPI record. 404 when the name is unknown, 502 when PokéAPI fails.",
)
async def get_pokemon(
    name: Optional[str] = Query(None, description="Pokémon name (case-insensitive)"),
    svc: PokedexService = Depends(pokedex_dep),
):
    pokemon = await svc.fetch_pokemon(name or "")
    return pokemon.payload()


@router.get("/pokemon/moves", summary="Type of each of a Pokémon's first moves")
async def get_move_types(
    name: Optional[str] = Query(None, description="Pokémon name (case-insensitive)"),
    limit: Optional[int] = Query(None, ge=1, le=200, description="Moves to resolve (default 20)"),
    svc: PokedexService = Depends(pokedex_dep),
):
    return await svc.fetch_move_types(name or "", limit=limit)


@router.get("/pokemon-names", summary="Name suggestions for a search box")
async def get_pokemon_names(
    query: str = Query("", description="Substring to look for"),
    svc: PokedexService = Depends(pokedex_dep),
):
    try:
        return await svc.search_names(query.strip())
    except PokedexError as e:
        logger.error("Error fetching Pokémon names: %s", e)
        return JSONResponse({"error": "Failed to fetch Pokémon names"}, status_code=500)


@router.get("/related", summary="Any PokéAPI resource by absolute url (moves, abilities, ...)")
async def get_related(
    url: str = Query(..., description="Absolute PokéAPI url"),
    svc: PokedexService = Depends(pokedex_dep),
):
    if not url.startswith(svc.client.base_url + "/"):
        raise ValueError(f"url must point below {svc.client.base_url}")
    return await svc.fetch_related(url)
