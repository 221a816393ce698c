"""Key-value backends holding the saved-script list.

A store keeps exactly one serialized list under one key. Callers always read
the whole list, change it in memory and write the whole list back; there is no
locking, so two writers racing on the same key lose one of the updates (last
write wins for the entire list).
"""
import copy
import json
import logging
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from tablegen.core.errors import StorageError
from tablegen.db.models.kv import KeyValueEntry
from tablegen.infrastructure.database.session import get_session

logger = logging.getLogger(__name__)

OK = "OK"

Record = Dict[str, Any]


class ListStore(Protocol):
    async def get(self) -> List[Record]:
        ...

    async def set(self, records: List[Record]) -> str:
        ...


def _decode(raw: Optional[str], key: str) -> List[Record]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except ValueError as e:
        raise StorageError(f"Stored value under '{key}' is not valid JSON: {e}") from e
    if not isinstance(value, list):
        raise StorageError(f"Stored value under '{key}' is not a list")
    return value


class InMemoryListStore:
    """Process-local store for development and tests"""

    def __init__(self, records: Optional[List[Record]] = None):
        self._raw = json.dumps(records) if records is not None else None

    async def get(self) -> List[Record]:
        return _decode(self._raw, "memory")

    async def set(self, records: List[Record]) -> str:
        self._raw = json.dumps(copy.deepcopy(records))
        return OK

    @property
    def raw(self) -> Optional[str]:
        """Serialized list exactly as persisted"""
        return self._raw


class DatabaseListStore:
    """Store backed by one row of the kv_entries table"""

    def __init__(self, key: str, session_factory=None):
        self.key = key
        self.session_factory = session_factory

    async def get(self) -> List[Record]:
        try:
            async with get_session(self.session_factory) as session:
                result = await session.execute(
                    select(KeyValueEntry.value).where(KeyValueEntry.key == self.key)
                )
                raw = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read '{self.key}': {e}")
            raise StorageError(f"Failed to read saved scripts: {e}") from e
        return _decode(raw, self.key)

    async def set(self, records: List[Record]) -> str:
        raw = json.dumps(records)
        try:
            async with get_session(self.session_factory) as session:
                result = await session.execute(
                    select(KeyValueEntry).where(KeyValueEntry.key == self.key)
                )
                entry = result.scalar_one_or_none()
                if entry is None:
                    session.add(KeyValueEntry(key=self.key, value=raw))
                else:
                    entry.value = raw
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write '{self.key}': {e}")
            raise StorageError(f"Failed to write saved scripts: {e}") from e
        return OK
