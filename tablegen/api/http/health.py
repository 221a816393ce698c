from fastapi import APIRouter

from tablegen import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Liveness check"""
    return {"status": "ok", "version": __version__}
