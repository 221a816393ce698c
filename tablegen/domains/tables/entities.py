from typing import Any, List, Optional


class Column:
    """One field of the table being edited"""

    FIELDS = (
        "name",
        "data_type",
        "is_primary_key",
        "is_nullable",
        "constraint",
        "has_foreign_key",
        "foreign_table",
        "comment",
    )

    def __init__(
        self,
        name: str = "",
        data_type: str = "",
        is_primary_key: bool = False,
        is_nullable: bool = True,
        constraint: str = "",
        has_foreign_key: bool = False,
        foreign_table: str = "",
        comment: str = ""
    ):
        self.name = name
        self.data_type = data_type
        self.is_primary_key = is_primary_key
        # a primary key is never nullable
        self.is_nullable = is_nullable and not is_primary_key
        self.constraint = constraint
        self.has_foreign_key = has_foreign_key
        self.foreign_table = foreign_table
        self.comment = comment

    def mark_primary_key(self, value: bool) -> None:
        """Toggle primary-key membership; turning it on clears nullability"""
        self.is_primary_key = bool(value)
        if self.is_primary_key:
            self.is_nullable = False

    def set_nullable(self, value: bool) -> None:
        """Set nullability; ignored for primary-key columns"""
        self.is_nullable = bool(value) and not self.is_primary_key

    def references(self) -> Optional[str]:
        """Referenced table, if this column carries a usable foreign key"""
        if self.has_foreign_key and self.foreign_table:
            return self.foreign_table
        return None

    def copy(self) -> "Column":
        return Column(**self.to_dict())

    def to_dict(self) -> dict:
        return {field: getattr(self, field) for field in self.FIELDS}

    @classmethod
    def blank(cls) -> "Column":
        """Empty editor row"""
        return cls()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Column):
            return False
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Column(name={self.name!r}, data_type={self.data_type!r}, pk={self.is_primary_key})"


class TableDescriptor:
    """Table name, comment, generation mode and ordered columns"""

    def __init__(
        self,
        name: str,
        comment: str = "",
        is_alter_mode: bool = False,
        columns: Optional[List[Column]] = None
    ):
        self.name = name
        self.comment = comment or ""
        self.is_alter_mode = is_alter_mode
        self.columns = list(columns) if columns else [Column.blank()]

    def add_column(self, column: Optional[Column] = None) -> Column:
        """Append a column (blank by default) at the end"""
        column = column or Column.blank()
        self.columns.append(column)
        return column

    def update_column(self, index: int, field: str, value: Any) -> Column:
        """Change a single field of the column at index"""
        if field not in Column.FIELDS:
            raise ValueError(f"Unknown column field: {field}")
        column = self.columns[index]
        if field == "is_primary_key":
            column.mark_primary_key(value)
        elif field == "is_nullable":
            column.set_nullable(value)
        else:
            setattr(column, field, value)
        return column

    def remove_column(self, index: int) -> bool:
        """Delete the column at index; the last remaining column is kept"""
        if len(self.columns) <= 1:
            return False
        del self.columns[index]
        return True

    def named_columns(self) -> List[Column]:
        return [column for column in self.columns if column.name]

    def primary_keys(self) -> List[Column]:
        return [column for column in self.named_columns() if column.is_primary_key]

    def non_primary_keys(self) -> List[Column]:
        return [column for column in self.named_columns() if not column.is_primary_key]

    def __repr__(self) -> str:
        return f"TableDescriptor(name={self.name!r}, columns={len(self.columns)}, alter={self.is_alter_mode})"
