import logging
from typing import List, Optional

from tablegen.core.errors import ValidationError
from tablegen.domains.tables.comments import CommentSuggester, CommentSuggestion, RuleBasedCommentSuggester
from tablegen.domains.tables.entities import Column, TableDescriptor
from tablegen.domains.tables.generator import ScriptGenerator, ScriptMode
from tablegen.domains.tables.parser import ParsedTable, ScriptParser

logger = logging.getLogger(__name__)


class TableScriptService:
    """Service for rendering and reading back table scripts"""

    def __init__(
        self,
        generator: Optional[ScriptGenerator] = None,
        suggester: Optional[CommentSuggester] = None
    ):
        self.generator = generator or ScriptGenerator()
        self.suggester = suggester or RuleBasedCommentSuggester()

    def generate(
        self,
        table: TableDescriptor,
        mode: Optional[ScriptMode] = None,
        include_drop_guard: bool = True
    ) -> str:
        """Render one artifact; mode defaults to the table's DDL mode"""
        mode = mode or ScriptMode.for_table(table)
        try:
            script = self.generator.generate(table, mode, include_drop_guard=include_drop_guard)
        except ValidationError as e:
            logger.warning(f"Rejected {mode.value} for table '{table.name}': {e}")
            raise
        logger.info(f"Generated {mode.value} for table {table.name}")
        return script

    def parse(self, script: str, is_alter_mode: bool) -> ParsedTable:
        """Recover editor columns from a previously generated script"""
        return ScriptParser().parse(script, is_alter_mode)

    def suggest_comments(
        self,
        table_name: str,
        table_comment: Optional[str],
        columns: List[Column]
    ) -> List[CommentSuggestion]:
        return self.suggester.suggest(table_name, table_comment, columns)
