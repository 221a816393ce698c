from fastapi import Depends

from tablegen.core.config import settings
from tablegen.db.repositories.script_repository import SavedScriptRepository
from tablegen.domains.scripts.services import SavedScriptService
from tablegen.domains.tables.services import TableScriptService
from tablegen.infrastructure.stores import DatabaseListStore, InMemoryListStore, ListStore

_memory_store = InMemoryListStore()


def get_list_store() -> ListStore:
    """Store holding the saved-script list, chosen by STORE_BACKEND"""
    if settings.STORE_BACKEND == "memory":
        return _memory_store
    return DatabaseListStore(settings.SCRIPTS_KEY)


def get_table_service() -> TableScriptService:
    return TableScriptService()


def get_script_service(
    store: ListStore = Depends(get_list_store),
    table_service: TableScriptService = Depends(get_table_service)
) -> SavedScriptService:
    repository = SavedScriptRepository(store, upsert_key=settings.SCRIPT_UPSERT_KEY)
    return SavedScriptService(repository, table_service)
