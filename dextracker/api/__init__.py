from dextracker.api.health import router as health_router
from dextracker.api.pokedex import router as pokedex_router
from dextracker.api.routes import router as routes_router
from dextracker.api.transfer import router as transfer_router

__all__ = [
    "health_router",
    "pokedex_router",
    "routes_router",
    "transfer_router",
]
