from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
from typing import Optional, List

from tablegen.domains.tables.entities import Column, TableDescriptor
from tablegen.domains.tables.generator import ScriptMode


class ColumnSchema(BaseModel):
    """Schema of one editor column"""
    name: str = Field(default="", max_length=128)
    data_type: str = Field(default="", max_length=128)
    is_primary_key: bool = False
    is_nullable: bool = True
    constraint: str = Field(default="", max_length=1000)
    has_foreign_key: bool = False
    foreign_table: str = Field(default="", max_length=128)
    comment: str = Field(default="", max_length=4000)

    model_config = ConfigDict(from_attributes=True)

    @field_validator('name', 'data_type', 'foreign_table')
    @classmethod
    def strip_identifier(cls, v):
        return v.strip()

    @model_validator(mode='after')
    def primary_key_not_nullable(self):
        if self.is_primary_key:
            self.is_nullable = False
        return self

    def to_entity(self) -> Column:
        return Column(**self.model_dump())


class TableSchema(BaseModel):
    """Schema of the table being edited"""
    name: str = Field(default="", max_length=128)
    comment: Optional[str] = Field(default="", max_length=4000)
    is_alter_mode: bool = False
    columns: List[ColumnSchema] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        return v.strip()

    def to_entity(self) -> TableDescriptor:
        return TableDescriptor(
            name=self.name,
            comment=self.comment or "",
            is_alter_mode=self.is_alter_mode,
            columns=[column.to_entity() for column in self.columns]
        )


class ColumnResponse(BaseModel):
    """Column recovered from a script; not bounded like editor input"""
    name: str
    data_type: str
    is_primary_key: bool
    is_nullable: bool
    constraint: str
    has_foreign_key: bool
    foreign_table: str
    comment: str

    model_config = ConfigDict(from_attributes=True)


class TableResponse(BaseModel):
    name: str
    comment: str
    is_alter_mode: bool
    columns: List[ColumnResponse]

    model_config = ConfigDict(from_attributes=True)


class GenerateRequest(BaseModel):
    """Schema of a generation request; mode defaults to the table's DDL mode"""
    table: TableSchema
    mode: Optional[ScriptMode] = None
    include_drop_guard: bool = True


class GenerateResponse(BaseModel):
    mode: ScriptMode
    title: str
    script: str


class ParseRequest(BaseModel):
    script: str = Field(..., max_length=1000000)
    is_alter_mode: bool = False


class ParseResponse(BaseModel):
    table_name: str
    table_comment: str
    columns: List[ColumnResponse]


class CommentColumnSchema(BaseModel):
    name: str
    data_type: str = ""
    is_primary_key: bool = False
    has_foreign_key: bool = False
    foreign_table: str = ""

    def to_entity(self) -> Column:
        return Column(**self.model_dump())


class CommentRequest(BaseModel):
    """Schema of a comment suggestion request"""
    table_name: str = ""
    table_comment: Optional[str] = ""
    columns: List[CommentColumnSchema] = Field(default_factory=list)


class CommentSuggestionResponse(BaseModel):
    column_name: str
    comment: str

    model_config = ConfigDict(from_attributes=True)
