import logging
from typing import List, Optional, Tuple

from tablegen.core.errors import StorageError
from tablegen.domains.scripts.entities import SavedScript, new_script_id
from tablegen.infrastructure.stores import ListStore, OK, Record

logger = logging.getLogger(__name__)

UPSERT_BY_TABLE_NAME = "table_name"
UPSERT_BY_ID = "id"


class SavedScriptRepository:
    """Saved scripts kept as one list in a ListStore.

    Every mutation reads the whole list, changes it in memory and writes the
    whole list back. Records other than the one being changed are written back
    exactly as they were read.
    """

    def __init__(self, store: ListStore, upsert_key: str = UPSERT_BY_TABLE_NAME):
        if upsert_key not in (UPSERT_BY_TABLE_NAME, UPSERT_BY_ID):
            raise ValueError(f"Unsupported upsert key: {upsert_key}")
        self.store = store
        self.upsert_key = upsert_key

    async def list(self) -> List[SavedScript]:
        """All saved scripts in stored order"""
        records = await self.store.get()
        return [SavedScript.from_record(record) for record in records if isinstance(record, dict)]

    async def get_by_id(self, script_id: str) -> Optional[SavedScript]:
        records = await self.store.get()
        index = self._index_of(records, "id", script_id)
        return SavedScript.from_record(records[index]) if index is not None else None

    async def find_by_table_name(self, table_name: str) -> Optional[SavedScript]:
        records = await self.store.get()
        index = self._index_of(records, "tableName", table_name)
        return SavedScript.from_record(records[index]) if index is not None else None

    async def save(self, script: SavedScript) -> Tuple[SavedScript, bool]:
        """Store a script; returns the stored record and whether it was appended"""
        records = await self.store.get()

        if self.upsert_key == UPSERT_BY_TABLE_NAME:
            index = self._index_of(records, "tableName", script.table_name)
        else:
            index = self._index_of(records, "id", script.id) if script.id else None

        if index is not None:
            stored = script.with_id(str(records[index].get("id")))
            records[index] = stored.to_record()
            await self._write(records)
            logger.info(f"Replaced saved script {stored.id} for table {stored.table_name}")
            return stored, False

        stored = script if script.id else script.with_id(new_script_id(self._ids(records)))
        records.append(stored.to_record())
        await self._write(records)
        logger.info(f"Saved new script {stored.id} for table {stored.table_name}")
        return stored, True

    async def update(self, script_id: str, script: SavedScript) -> SavedScript:
        """Replace the record with script_id in place, appending it when missing"""
        records = await self.store.get()

        if self.upsert_key == UPSERT_BY_TABLE_NAME:
            # other records of the same table are superseded by this one
            records = [
                record for record in records
                if not isinstance(record, dict)
                or record.get("tableName") != script.table_name
                or record.get("id") == script_id
            ]

        stored = script.with_id(script_id)
        index = self._index_of(records, "id", script_id)
        if index is None:
            records.append(stored.to_record())
        else:
            records[index] = stored.to_record()

        await self._write(records)
        logger.info(f"Updated saved script {script_id} for table {stored.table_name}")
        return stored

    async def delete_by_id(self, script_id: str) -> bool:
        """Remove the record with script_id; False when there was none"""
        records = await self.store.get()
        remaining = [
            record for record in records
            if not isinstance(record, dict) or record.get("id") != script_id
        ]
        if len(remaining) == len(records):
            return False
        await self._write(remaining)
        logger.info(f"Deleted saved script {script_id}")
        return True

    async def _write(self, records: List[Record]) -> None:
        result = await self.store.set(records)
        if result != OK:
            raise StorageError("Failed to write saved scripts")

    def _index_of(self, records: List[Record], field: str, value: str) -> Optional[int]:
        for index, record in enumerate(records):
            if isinstance(record, dict) and record.get(field) == value:
                return index
        return None

    def _ids(self, records: List[Record]) -> List[str]:
        return [str(record.get("id")) for record in records if isinstance(record, dict)]
