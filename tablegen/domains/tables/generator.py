"""Oracle script rendering for a table descriptor.

Every artifact is built from the descriptor's named columns in their
descriptor order. Unnamed columns are blank editor rows and are skipped.
"""
import logging
from enum import Enum
from typing import List

from tablegen.core.errors import ValidationError
from tablegen.domains.tables.entities import Column, TableDescriptor

logger = logging.getLogger(__name__)

INDENT = "    "

# Fixed storage clause of the primary-key index
INDEX_STORAGE = ["LOGGING", "PCTFREE 10", "INITRANS 2", "MAXTRANS 255"]

# ORA-00942: table or view does not exist
MISSING_TABLE_SQLCODE = -942

NOT_FOUND_ERROR_CODE = -20001


class ScriptMode(str, Enum):
    CREATE_TABLE = "create_table"
    ALTER_TABLE = "alter_table"
    INSERT_PROC = "insert_procedure"
    UPDATE_PROC = "update_procedure"

    @classmethod
    def for_table(cls, table: TableDescriptor) -> "ScriptMode":
        """DDL mode matching the descriptor's alter flag"""
        return cls.ALTER_TABLE if table.is_alter_mode else cls.CREATE_TABLE

    @property
    def title(self) -> str:
        return {
            ScriptMode.CREATE_TABLE: "Table creation script",
            ScriptMode.ALTER_TABLE: "Table alteration script",
            ScriptMode.INSERT_PROC: "Insert procedure",
            ScriptMode.UPDATE_PROC: "Update procedure",
        }[self]


def quote_literal(text: str) -> str:
    """Single-line SQL string literal with quotes doubled"""
    flat = " ".join(text.splitlines())
    return "'" + flat.replace("'", "''") + "'"


def primary_key_name(table_name: str) -> str:
    return f"PK_{table_name}"


def foreign_key_name(table_name: str, column_name: str) -> str:
    return f"FK_{table_name}_{column_name}"


def sequence_name(table_name: str) -> str:
    return f"{table_name}_SEQ"


class ScriptGenerator:
    """Renders a TableDescriptor into one of the ScriptMode artifacts"""

    def generate(
        self,
        table: TableDescriptor,
        mode: ScriptMode,
        include_drop_guard: bool = True
    ) -> str:
        table_name = (table.name or "").strip()
        if not table_name:
            raise ValidationError("Table name is required")

        if mode == ScriptMode.CREATE_TABLE:
            lines = self._create_table(table, table_name, include_drop_guard)
        elif mode == ScriptMode.ALTER_TABLE:
            lines = self._alter_table(table, table_name)
        elif mode == ScriptMode.INSERT_PROC:
            lines = self._insert_procedure(table, table_name)
        elif mode == ScriptMode.UPDATE_PROC:
            lines = self._update_procedure(table, table_name)
        else:
            raise ValueError(f"Unsupported mode: {mode}")

        logger.debug(f"Rendered {mode.value} for {table_name} ({len(lines)} lines)")
        return "\n".join(lines) + "\n"

    # DDL

    def _create_table(self, table: TableDescriptor, table_name: str, include_drop_guard: bool) -> List[str]:
        columns = self._require_columns(table)

        lines = self._header(table, table_name)
        if include_drop_guard:
            lines += self._drop_guard(table_name)

        lines.append(f"CREATE TABLE {table_name} (")
        for index, column in enumerate(columns):
            separator = "," if index < len(columns) - 1 else ""
            lines.append(f"{INDENT}{self._column_definition(column)}{separator}")
        lines.append(");")
        lines.append("")

        lines += self._key_statements(table, table_name)
        lines += self._comment_statements(table, table_name)
        return lines

    def _alter_table(self, table: TableDescriptor, table_name: str) -> List[str]:
        columns = self._require_columns(table)

        lines = self._header(table, table_name)
        for column in columns:
            lines.append(f"ALTER TABLE {table_name} ADD {self._column_definition(column)};")
        lines.append("")

        lines += self._key_statements(table, table_name)
        lines += self._comment_statements(table, table_name)
        return lines

    def _require_columns(self, table: TableDescriptor) -> List[Column]:
        columns = table.named_columns()
        if not columns:
            raise ValidationError("At least one named column is required")
        return columns

    def _header(self, table: TableDescriptor, table_name: str) -> List[str]:
        lines = [f"-- Table {table_name}"]
        if table.comment:
            lines.append(f"-- {' '.join(table.comment.split())}")
        lines.append("")
        return lines

    def _drop_guard(self, table_name: str) -> List[str]:
        return [
            "BEGIN",
            f"{INDENT}EXECUTE IMMEDIATE 'DROP TABLE {table_name} CASCADE CONSTRAINTS';",
            "EXCEPTION",
            f"{INDENT}WHEN OTHERS THEN",
            f"{INDENT * 2}IF SQLCODE != {MISSING_TABLE_SQLCODE} THEN",
            f"{INDENT * 3}RAISE;",
            f"{INDENT * 2}END IF;",
            "END;",
            "/",
            "",
        ]

    def _column_definition(self, column: Column) -> str:
        definition = f"{column.name} {column.data_type}".rstrip()
        if not column.is_nullable:
            definition += " NOT NULL"
        if column.constraint:
            definition += " " + " ".join(column.constraint.split())
        return definition

    def _key_statements(self, table: TableDescriptor, table_name: str) -> List[str]:
        lines = []
        primary_keys = [column.name for column in table.primary_keys()]
        if primary_keys:
            pk_name = primary_key_name(table_name)
            pk_list = ", ".join(primary_keys)
            lines.append(f"CREATE UNIQUE INDEX {pk_name} ON {table_name}")
            lines.append(f"({pk_list})")
            lines += INDEX_STORAGE[:-1]
            lines.append(f"{INDEX_STORAGE[-1]};")
            lines.append("")
            lines += [
                f"ALTER TABLE {table_name} ADD (",
                f"{INDENT}CONSTRAINT {pk_name}",
                f"{INDENT}PRIMARY KEY",
                f"{INDENT}({pk_list})",
                f"{INDENT}USING INDEX {pk_name}",
                f"{INDENT}ENABLE VALIDATE);",
                "",
            ]

        foreign_keys = [column for column in table.named_columns() if column.references()]
        for column in foreign_keys:
            lines.append(
                f"ALTER TABLE {table_name} ADD CONSTRAINT {foreign_key_name(table_name, column.name)} "
                f"FOREIGN KEY ({column.name}) REFERENCES {column.foreign_table} ({column.name});"
            )
        if foreign_keys:
            lines.append("")
        return lines

    def _comment_statements(self, table: TableDescriptor, table_name: str) -> List[str]:
        lines = []
        if table.comment:
            lines.append(f"COMMENT ON TABLE {table_name} IS {quote_literal(table.comment)};")
        for column in table.named_columns():
            if column.comment:
                lines.append(
                    f"COMMENT ON COLUMN {table_name}.{column.name} IS {quote_literal(column.comment)};"
                )
        return lines

    # Procedures

    def _insert_procedure(self, table: TableDescriptor, table_name: str) -> List[str]:
        columns = self._require_columns(table)
        procedure = f"SP_INSERT_{table_name}"

        lines = [f"-- Procedure to insert rows into {table_name}", ""]
        lines.append(f"CREATE OR REPLACE PROCEDURE {procedure}")
        lines += self._parameters(table.non_primary_keys())
        lines.append("BEGIN")
        lines.append(f"{INDENT}INSERT INTO {table_name}")
        lines.append(f"{INDENT}(")
        lines += self._comma_list([column.name for column in columns], INDENT * 2)
        lines.append(f"{INDENT})")
        lines.append(f"{INDENT}VALUES")
        lines.append(f"{INDENT}(")
        values = [
            f"{sequence_name(table_name)}.NEXTVAL" if column.is_primary_key else f"P_{column.name}"
            for column in columns
        ]
        lines += self._comma_list(values, INDENT * 2)
        lines.append(f"{INDENT});")
        lines += self._transaction_tail(procedure)
        return lines

    def _update_procedure(self, table: TableDescriptor, table_name: str) -> List[str]:
        primary_keys = table.primary_keys()
        if not primary_keys:
            raise ValidationError("At least one primary key column is required")
        non_primary_keys = table.non_primary_keys()
        if not non_primary_keys:
            raise ValidationError("At least one non-primary-key column is required")
        procedure = f"SP_UPDATE_{table_name}"

        lines = [f"-- Procedure to update rows of {table_name}", ""]
        lines.append(f"CREATE OR REPLACE PROCEDURE {procedure}")
        lines += self._parameters(table.named_columns())
        lines.append("BEGIN")
        lines.append(f"{INDENT}UPDATE {table_name}")
        lines.append(f"{INDENT}SET")
        lines += self._comma_list(
            [f"{column.name} = P_{column.name}" for column in non_primary_keys], INDENT * 2
        )
        lines.append(f"{INDENT}WHERE")
        for index, column in enumerate(primary_keys):
            prefix = "" if index == 0 else "AND "
            lines.append(f"{INDENT * 2}{prefix}{column.name} = P_{column.name}")
        lines.append(f"{INDENT};")
        lines.append("")
        lines.append(f"{INDENT}IF SQL%ROWCOUNT = 0 THEN")
        lines.append(
            f"{INDENT * 2}RAISE_APPLICATION_ERROR({NOT_FOUND_ERROR_CODE}, 'Record to update not found');"
        )
        lines.append(f"{INDENT}END IF;")
        lines.append("")
        lines += self._transaction_tail(procedure)
        return lines

    def _parameters(self, columns: List[Column]) -> List[str]:
        if not columns:
            return ["AS"]
        lines = ["("]
        lines += self._comma_list(
            [f"P_{column.name} IN {column.data_type}".rstrip() for column in columns], INDENT
        )
        lines.append(") AS")
        return lines

    def _comma_list(self, items: List[str], indent: str) -> List[str]:
        return [
            f"{indent}{item}{',' if index < len(items) - 1 else ''}"
            for index, item in enumerate(items)
        ]

    def _transaction_tail(self, procedure: str) -> List[str]:
        return [
            f"{INDENT}COMMIT;",
            "EXCEPTION",
            f"{INDENT}WHEN OTHERS THEN",
            f"{INDENT * 2}ROLLBACK;",
            f"{INDENT * 2}RAISE;",
            f"END {procedure};",
            "/",
        ]


def generate_script(table: TableDescriptor, mode: ScriptMode, include_drop_guard: bool = True) -> str:
    return ScriptGenerator().generate(table, mode, include_drop_guard=include_drop_guard)
