"""Column comment suggestions.

The suggester is pluggable; the default one derives a sentence from the data
type and key flags and never calls out to a model.
"""
import re
from typing import List, Optional, Protocol

from tablegen.domains.tables.entities import Column

DEFAULT_VARCHAR_LENGTH = "255"


class CommentSuggestion:
    def __init__(self, column_name: str, comment: str):
        self.column_name = column_name
        self.comment = comment

    def __eq__(self, other) -> bool:
        if not isinstance(other, CommentSuggestion):
            return False
        return (self.column_name, self.comment) == (other.column_name, other.comment)

    def __repr__(self) -> str:
        return f"CommentSuggestion(column_name={self.column_name!r}, comment={self.comment!r})"


class CommentSuggester(Protocol):
    def suggest(
        self,
        table_name: str,
        table_comment: Optional[str],
        columns: List[Column]
    ) -> List[CommentSuggestion]:
        ...


class RuleBasedCommentSuggester:
    """Builds comments from data type, primary key and foreign key flags"""

    def suggest(
        self,
        table_name: str,
        table_comment: Optional[str],
        columns: List[Column]
    ) -> List[CommentSuggestion]:
        return [
            CommentSuggestion(column_name=column.name, comment=self.describe(column))
            for column in columns
        ]

    def describe(self, column: Column) -> str:
        comment = f"Stores {self._describe_type(column.data_type or '')}"
        if column.is_primary_key:
            comment += ", uniquely identifies each row"
        if column.has_foreign_key and column.foreign_table:
            comment += f", references table {column.foreign_table}"
        return comment

    def _describe_type(self, data_type: str) -> str:
        data_type = data_type.strip().upper()
        if "VARCHAR2" in data_type:
            length = re.search(r"\(\s*(\d+)", data_type)
            return f"text of up to {length.group(1) if length else DEFAULT_VARCHAR_LENGTH} characters"
        if "NUMBER" in data_type:
            return "numeric values"
        if data_type == "DATE":
            return "dates"
        if data_type.startswith("TIMESTAMP"):
            return "dates and times"
        if data_type == "CLOB":
            return "long text"
        if data_type == "BLOB":
            return "binary data"
        if data_type == "CHAR(1)":
            return "a single character"
        return "values"
