from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime

from tablegen.domains.tables.schemas import TableSchema


class SaveScriptRequest(BaseModel):
    """Schema for saving or updating a script"""
    script: str = Field(default="", max_length=1000000)
    table_name: str = Field(default="", max_length=128)
    is_alter_table: bool = False
    table_comment: Optional[str] = Field(None, max_length=4000)


class SaveTableRequest(BaseModel):
    """Schema for rendering a table's DDL and saving it"""
    table: TableSchema
    include_drop_guard: bool = True


class SavedScriptResponse(BaseModel):
    id: str
    table_name: str
    script: str
    created_at: datetime
    is_alter_table: bool
    table_comment: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SaveScriptResponse(BaseModel):
    script: SavedScriptResponse
    created: bool


class SavedScriptListResponse(BaseModel):
    scripts: List[SavedScriptResponse]
    total: int
