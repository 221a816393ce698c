from tablegen.api.http.health import router as health_router
from tablegen.api.http.tables import router as tables_router
from tablegen.api.http.scripts import router as scripts_router

__all__ = [
    "health_router",
    "tables_router",
    "scripts_router"
]
