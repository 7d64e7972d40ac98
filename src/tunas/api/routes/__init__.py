"""API route modules."""

from tunas.api.routes.clubs import router as clubs_router
from tunas.api.routes.health import router as health_router
from tunas.api.routes.relays import router as relays_router
from tunas.api.routes.stats import router as stats_router
from tunas.api.routes.swimmers import router as swimmers_router

__all__ = [
    "clubs_router",
    "health_router",
    "relays_router",
    "stats_router",
    "swimmers_router",
]
