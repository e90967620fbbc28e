# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .core.config import get_settings
from .core.errors import register_error_handlers
from .core.logging import configure_logging
from .routers import health, pokemon
from .services.pokedex import PokedexService


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one service (caches + in-flight registry + http client) per process
    app.state.pokedex = PokedexService.from_settings(get_settings())
    try:
        yield
    finally:
        await app.state.pokedex.aclose()


def create_app() -> FastAPI:
    configure_logging(get_settings().log_level)
    app = FastAPI(title="Pokedex API", version="0.1.0", lifespan=lifespan)
    register_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(pokemon.router)

    @app.get("/")
    def root():
        return {"service": "pokedex-api"}

    return app


app = create_app()
