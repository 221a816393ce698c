from __future__ import annotations

from tablegen.domains.tables.entities import Column, TableDescriptor


class TableBuilder:
    def __init__(self, name: str):
        self._name = name
        self._comment = ""
        self._is_alter_mode = False
        self._columns = []

    def with_comment(self, comment: str) -> TableBuilder:
        self._comment = comment
        return self

    def as_alter(self) -> TableBuilder:
        self._is_alter_mode = True
        return self

    def with_column(
        self,
        name: str,
        data_type: str,
        primary_key: bool = False,
        nullable: bool = True,
        constraint: str = "",
        foreign_table: str = "",
        comment: str = "",
    ) -> TableBuilder:
        self._columns.append(
            Column(
                name=name,
                data_type=data_type,
                is_primary_key=primary_key,
                is_nullable=nullable,
                constraint=constraint,
                has_foreign_key=bool(foreign_table),
                foreign_table=foreign_table,
                comment=comment,
            )
        )
        return self

    def build(self) -> TableDescriptor:
        return TableDescriptor(
            name=self._name,
            comment=self._comment,
            is_alter_mode=self._is_alter_mode,
            columns=list(self._columns),
        )


def cliente_table() -> TableDescriptor:
    return (
        TableBuilder("CLIENTE")
        .with_column("ID", "NUMBER(10)", primary_key=True, nullable=False)
        .with_column("NOMBRE", "VARCHAR2(255)")
        .build()
    )


def order_table() -> TableDescriptor:
    return (
        TableBuilder("PEDIDO")
        .with_comment("Customer orders")
        .with_column("ID", "NUMBER(10)", primary_key=True, comment="Order id")
        .with_column("LINEA", "NUMBER(5)", primary_key=True)
        .with_column("CLIENTE_ID", "NUMBER(10)", nullable=False, foreign_table="CLIENTE")
        .with_column("TOTAL", "NUMBER(10,2)", constraint="CHECK (TOTAL >= 0)")
        .with_column("NOTA", "VARCHAR2(4000)", comment="Customer's note")
        .with_column("CREADO", "TIMESTAMP", nullable=False)
        .build()
    )
