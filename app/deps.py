from fastapi import Depends, Request
from app.services.pokedex import PokedexService

def get_pokedex(request: Request) -> PokedexService:
    """
    Returns the process-wide PokedexService built by the app lifespan.
    Tests swap it via `app.dependency_overrides[get_pokedex]`.
    """
    return request.app.state.pokedex

def pokedex_dep(svc: PokedexService = Depends(get_pokedex)) -> PokedexService:
    return svc
