import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tablegen import __version__
from tablegen.api.http import health_router, scripts_router, tables_router
from tablegen.core.config import settings
from tablegen.core.db import init_models
from tablegen.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.STORE_BACKEND == "database":
        await init_models()
    logger.info(f"Saved scripts kept in the {settings.STORE_BACKEND} store, upsert key {settings.SCRIPT_UPSERT_KEY}")
    yield


app = FastAPI(
    title="TableGen",
    description="Oracle table, insert and update script generator",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(tables_router)
app.include_router(scripts_router)


@app.get("/")
async def root():
    """API entry point"""
    return {
        "message": "TableGen API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }
