from contextlib import asynccontextmanager

from tablegen.core.db import SessionLocal


@asynccontextmanager
async def get_session(session_factory=None):
    factory = session_factory or SessionLocal
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()
