from tablegen.db.repositories.script_repository import (
    SavedScriptRepository, UPSERT_BY_ID, UPSERT_BY_TABLE_NAME
)

__all__ = [
    "SavedScriptRepository",
    "UPSERT_BY_ID",
    "UPSERT_BY_TABLE_NAME"
]
