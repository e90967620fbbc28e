# app/core/config.py
from __future__ import annotations

from functools import lru_cache
from typing import Optional
from urllib.parse import quote

from pydantic_settings import BaseSettings, SettingsConfigDict

# ----- App settings (env-driven) -----
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", env_file=".env", case_sensitive=False)

    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    http_timeout_seconds: float = 20.0

    # Pokémon + related resources (moves, ...)
    entity_cache_ttl_seconds: float = 60 * 60
    entity_cache_max_items: Optional[int] = 100
    # full name listing used for suggestions
    names_cache_ttl_seconds: float = 24 * 60 * 60

    name_index_limit: int = 1000
    search_limit: int = 10
    move_type_limit: int = 20

    log_level: str = "INFO"

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

# ----- PokéAPI addresses -----
def pokemon_url(base: str, name: str) -> str:
    """Entity-by-name address; the name is always a single path segment."""
    return f"{base.rstrip('/')}/pokemon/{quote(name, safe='')}"

def name_index_url(base: str, limit: int) -> str:
    """Bulk name listing, one page of `limit` records."""
    return f"{base.rstrip('/')}/pokemon?limit={limit}"
