from tablegen.domains.tables.entities import Column, TableDescriptor
from tablegen.domains.tables.generator import ScriptGenerator, ScriptMode, generate_script
from tablegen.domains.tables.parser import ParsedTable, ScanState, ScriptParser, parse_columns, parse_script
from tablegen.domains.tables.comments import CommentSuggester, CommentSuggestion, RuleBasedCommentSuggester
from tablegen.domains.tables.services import TableScriptService

__all__ = [
    "Column", "TableDescriptor",
    "ScriptGenerator", "ScriptMode", "generate_script",
    "ParsedTable", "ScanState", "ScriptParser", "parse_columns", "parse_script",
    "CommentSuggester", "CommentSuggestion", "RuleBasedCommentSuggester",
    "TableScriptService"
]
