"""Best-effort reconstruction of editor columns from generated script text.

The parser reads the script one line at a time and only recognises the shapes
the generator writes. Anything else is skipped; nothing here raises.
"""
import logging
import re
from enum import Enum
from typing import Dict, List, Optional, Tuple

from tablegen.domains.tables.entities import Column

logger = logging.getLogger(__name__)

IDENT = r"[A-Za-z_][\w$#]*"
TABLE_IDENT = rf"{IDENT}(?:\.{IDENT})?"
DATA_TYPE = r"\w+(?:\s*\([^)]*\))?"
QUOTED = r"'((?:[^']|'')*)'"

TABLE_COMMENT_RE = re.compile(rf"COMMENT\s+ON\s+TABLE\s+\S+\s+IS\s+{QUOTED}", re.IGNORECASE)
COLUMN_COMMENT_RE = re.compile(
    rf"COMMENT\s+ON\s+COLUMN\s+(?:\S+\.)?({IDENT})\s+IS\s+{QUOTED}", re.IGNORECASE
)
CREATE_TABLE_RE = re.compile(rf"^CREATE\s+TABLE\s+({TABLE_IDENT})\s*\(", re.IGNORECASE)
ALTER_ADD_COLUMN_RE = re.compile(
    rf"^ALTER\s+TABLE\s+({TABLE_IDENT})\s+ADD\s+({IDENT})\s+({DATA_TYPE})(\s+NOT\s+NULL)?", re.IGNORECASE
)
COLUMN_LINE_RE = re.compile(rf"^\s+({IDENT})\s+({DATA_TYPE})(\s+NOT\s+NULL)?", re.IGNORECASE)
PRIMARY_KEY_RE = re.compile(r"PRIMARY\s+KEY\b(.*)$", re.IGNORECASE)
PAREN_LIST_RE = re.compile(r"\(([^()]*)\)")
FOREIGN_KEY_RE = re.compile(
    rf"FOREIGN\s+KEY\s*\(\s*({IDENT})\s*\)\s*REFERENCES\s+({TABLE_IDENT})\s*\(\s*({IDENT})\s*\)",
    re.IGNORECASE,
)

# Lines inside a CREATE TABLE body that are not column definitions
NON_COLUMN_PREFIXES = (",", ")")
CONSTRAINT_KEYWORDS = {"CONSTRAINT", "PRIMARY", "FOREIGN", "UNIQUE", "CHECK"}


class ScanState(str, Enum):
    IDLE = "idle"
    IN_DROP_GUARD = "in_drop_guard"
    IN_CREATE_BODY = "in_create_body"


def _unquote(text: str) -> str:
    return text.replace("''", "'")


class ParsedTable:
    """What could be recovered from a script"""

    def __init__(self, table_name: str = "", table_comment: str = "", columns: Optional[List[Column]] = None):
        self.table_name = table_name
        self.table_comment = table_comment
        self.columns = columns or [Column.blank()]

    def __repr__(self) -> str:
        return f"ParsedTable(table_name={self.table_name!r}, columns={len(self.columns)})"


class ScriptParser:
    """Line-oriented state machine over a generated script"""

    def __init__(self):
        self._reset()

    def _reset(self) -> None:
        self.state = ScanState.IDLE
        self.collecting_primary_key = False
        self.table_name = ""
        self.table_comment = ""
        self.columns: List[Column] = []
        self.primary_keys: List[str] = []
        self.foreign_keys: List[Tuple[str, str]] = []
        self.column_comments: Dict[str, str] = {}

    def parse(self, script: str, is_alter_mode: bool) -> ParsedTable:
        self._reset()
        if not isinstance(script, str):
            return ParsedTable()

        for line in script.splitlines():
            self._feed(line, is_alter_mode)

        self._resolve()
        logger.debug(f"Recovered {len(self.columns)} columns from script of {self.table_name or 'unknown table'}")
        return ParsedTable(
            table_name=self.table_name,
            table_comment=self.table_comment,
            columns=self.columns or [Column.blank()],
        )

    def _feed(self, line: str, is_alter_mode: bool) -> None:
        stripped = line.strip()
        if not stripped or stripped.startswith("--"):
            return

        if self.state == ScanState.IN_DROP_GUARD:
            if stripped.upper() == "END;":
                self.state = ScanState.IDLE
            return

        if self.state == ScanState.IDLE and stripped.upper() == "BEGIN":
            self.state = ScanState.IN_DROP_GUARD
            return

        if self._match_comments(stripped):
            return
        self._match_keys(stripped)

        if self.state == ScanState.IN_CREATE_BODY:
            if stripped.startswith(");") or stripped == ")":
                self.state = ScanState.IDLE
            elif not is_alter_mode:
                self._match_create_column(line, stripped)
            return

        create_match = CREATE_TABLE_RE.match(stripped)
        if create_match:
            self.table_name = self.table_name or create_match.group(1)
            self.state = ScanState.IN_CREATE_BODY
            return

        if is_alter_mode:
            self._match_alter_column(stripped)

    def _match_comments(self, stripped: str) -> bool:
        table_match = TABLE_COMMENT_RE.search(stripped)
        if table_match:
            self.table_comment = _unquote(table_match.group(1))
            return True
        column_match = COLUMN_COMMENT_RE.search(stripped)
        if column_match:
            self.column_comments[column_match.group(1)] = _unquote(column_match.group(2))
            return True
        return False

    def _match_keys(self, stripped: str) -> None:
        foreign_match = FOREIGN_KEY_RE.search(stripped)
        if foreign_match:
            self.foreign_keys.append((foreign_match.group(1), foreign_match.group(2)))

        primary_match = PRIMARY_KEY_RE.search(stripped)
        if primary_match:
            names = PAREN_LIST_RE.search(primary_match.group(1))
            if names:
                self._add_primary_keys(names.group(1))
                self.collecting_primary_key = False
            else:
                # list follows on a later line
                self.collecting_primary_key = True
            return

        if self.collecting_primary_key:
            names = PAREN_LIST_RE.search(stripped)
            if names:
                self._add_primary_keys(names.group(1))
                self.collecting_primary_key = False

    def _add_primary_keys(self, names: str) -> None:
        for name in names.split(","):
            name = name.strip()
            if name and name not in self.primary_keys:
                self.primary_keys.append(name)

    def _match_create_column(self, line: str, stripped: str) -> None:
        first_word = stripped.split(None, 1)[0].upper()
        if stripped.startswith(NON_COLUMN_PREFIXES) or first_word in CONSTRAINT_KEYWORDS:
            return
        match = COLUMN_LINE_RE.match(line if line[:1].isspace() else f" {line}")
        if match:
            self._add_column(match.group(1), match.group(2), match.group(3))

    def _match_alter_column(self, stripped: str) -> None:
        match = ALTER_ADD_COLUMN_RE.match(stripped)
        if not match or match.group(2).upper() in CONSTRAINT_KEYWORDS:
            return
        self.table_name = self.table_name or match.group(1)
        self._add_column(match.group(2), match.group(3), match.group(4))

    def _add_column(self, name: str, data_type: str, not_null: Optional[str]) -> None:
        self.columns.append(Column(name=name, data_type=data_type, is_nullable=not not_null))

    def _find(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def _resolve(self) -> None:
        """Apply keys and comments once every column is known"""
        for name in self.primary_keys:
            column = self._find(name)
            if column:
                column.mark_primary_key(True)
        for name, foreign_table in self.foreign_keys:
            column = self._find(name)
            if column:
                column.has_foreign_key = True
                column.foreign_table = foreign_table
        for name, comment in self.column_comments.items():
            column = self._find(name)
            if column:
                column.comment = comment


def parse_script(script: str, is_alter_mode: bool) -> ParsedTable:
    return ScriptParser().parse(script, is_alter_mode)


def parse_columns(script: str, is_alter_mode: bool) -> List[Column]:
    """Columns recovered from the script; one blank column when none"""
    return parse_script(script, is_alter_mode).columns
