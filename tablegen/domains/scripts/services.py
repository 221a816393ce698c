import logging
from typing import List, Optional, Tuple, TYPE_CHECKING

from tablegen.core.errors import ValidationError
from tablegen.domains.scripts.entities import SavedScript
from tablegen.domains.tables.entities import TableDescriptor
from tablegen.domains.tables.generator import ScriptMode
from tablegen.domains.tables.services import TableScriptService

if TYPE_CHECKING:
    from tablegen.db.repositories.script_repository import SavedScriptRepository

logger = logging.getLogger(__name__)

SORT_KEYS = {
    "created_at": lambda script: script.created_at,
    "table_name": lambda script: script.table_name.lower(),
}


class SavedScriptService:
    """Service for the shared list of saved scripts"""

    def __init__(
        self,
        repository: "SavedScriptRepository",
        table_service: Optional[TableScriptService] = None
    ):
        self.repository = repository
        self.table_service = table_service or TableScriptService()

    async def list_scripts(
        self,
        query: Optional[str] = None,
        sort: str = "created_at",
        descending: bool = True
    ) -> List[SavedScript]:
        """Saved scripts filtered by table name and sorted"""
        if sort not in SORT_KEYS:
            raise ValidationError(f"Unsupported sort field: {sort}")

        scripts = await self.repository.list()
        if query and query.strip():
            needle = query.strip().lower()
            scripts = [script for script in scripts if needle in script.table_name.lower()]

        return sorted(scripts, key=SORT_KEYS[sort], reverse=descending)

    async def get_script(self, script_id: str) -> Optional[SavedScript]:
        return await self.repository.get_by_id(script_id)

    async def save_script(
        self,
        script: str,
        table_name: str,
        is_alter_table: bool = False,
        table_comment: Optional[str] = None
    ) -> Tuple[SavedScript, bool]:
        """Save a script; returns the record and whether it is new"""
        table_name = self._validate(script, table_name)
        record = SavedScript.create(
            table_name=table_name,
            script=script,
            is_alter_table=is_alter_table,
            table_comment=table_comment
        )
        return await self.repository.save(record)

    async def update_script(
        self,
        script_id: str,
        script: str,
        table_name: str,
        is_alter_table: bool = False,
        table_comment: Optional[str] = None
    ) -> SavedScript:
        """Overwrite a saved script, keeping its id"""
        if not script_id:
            raise ValidationError("Script id is required")
        table_name = self._validate(script, table_name)
        record = SavedScript(
            id=script_id,
            table_name=table_name,
            script=script,
            is_alter_table=is_alter_table,
            table_comment=table_comment
        )
        return await self.repository.update(script_id, record)

    async def delete_script(self, script_id: str) -> bool:
        return await self.repository.delete_by_id(script_id)

    async def save_table(
        self,
        table: TableDescriptor,
        include_drop_guard: bool = True
    ) -> Tuple[SavedScript, bool]:
        """Render the table's DDL and save it"""
        script = self.table_service.generate(
            table,
            ScriptMode.for_table(table),
            include_drop_guard=include_drop_guard
        )
        return await self.save_script(
            script=script,
            table_name=table.name.strip(),
            is_alter_table=table.is_alter_mode,
            table_comment=table.comment or None
        )

    async def load_into_editor(self, script_id: str) -> Optional[TableDescriptor]:
        """Rebuild editor state from a saved script"""
        saved = await self.repository.get_by_id(script_id)
        if not saved:
            return None

        parsed = self.table_service.parse(saved.script, saved.is_alter_table)
        return TableDescriptor(
            name=saved.table_name or parsed.table_name,
            comment=saved.table_comment or parsed.table_comment,
            is_alter_mode=saved.is_alter_table,
            columns=parsed.columns
        )

    def _validate(self, script: str, table_name: str) -> str:
        if not script or not script.strip():
            raise ValidationError("Script is required")
        if not table_name or not table_name.strip():
            raise ValidationError("Table name is required")
        return table_name.strip()
