from sqlalchemy import Column, String, Text

from tablegen.db.base import BaseModel


class KeyValueEntry(BaseModel):
    __tablename__ = "kv_entries"

    key = Column(String(255), unique=True, index=True, nullable=False)
    # JSON text of the whole stored value
    value = Column(Text, nullable=False, default="[]")
