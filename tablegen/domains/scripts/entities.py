import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional


def new_script_id(existing_ids: Iterable[str] = ()) -> str:
    """Millisecond timestamp id, bumped until unique within the list"""
    taken = set(existing_ids)
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix"""
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
        else:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return datetime.fromtimestamp(0, tz=timezone.utc)


class SavedScript:
    """A script kept in the shared saved-script list"""

    def __init__(
        self,
        id: Optional[str],
        table_name: str,
        script: str,
        created_at: Optional[datetime] = None,
        is_alter_table: bool = False,
        table_comment: Optional[str] = None
    ):
        self.id = id
        self.table_name = table_name
        self.script = script
        self.created_at = created_at or datetime.now(timezone.utc)
        self.is_alter_table = is_alter_table
        self.table_comment = table_comment

    def with_id(self, script_id: str) -> "SavedScript":
        """Same content under another id"""
        return SavedScript(
            id=script_id,
            table_name=self.table_name,
            script=self.script,
            created_at=self.created_at,
            is_alter_table=self.is_alter_table,
            table_comment=self.table_comment
        )

    def to_record(self) -> Dict[str, Any]:
        """Persisted JSON shape"""
        record = {
            "id": self.id,
            "script": self.script,
            "tableName": self.table_name,
            "createdAt": format_timestamp(self.created_at),
            "isAlterTable": self.is_alter_table,
        }
        if self.table_comment is not None:
            record["tableComment"] = self.table_comment
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "SavedScript":
        return cls(
            id=str(record.get("id", "")),
            table_name=record.get("tableName", ""),
            script=record.get("script", ""),
            created_at=parse_timestamp(record.get("createdAt")),
            is_alter_table=bool(record.get("isAlterTable", False)),
            table_comment=record.get("tableComment")
        )

    @classmethod
    def create(
        cls,
        table_name: str,
        script: str,
        is_alter_table: bool = False,
        table_comment: Optional[str] = None
    ) -> "SavedScript":
        """New record; the repository assigns the id when it is stored"""
        return cls(
            id=None,
            table_name=table_name,
            script=script,
            is_alter_table=is_alter_table,
            table_comment=table_comment
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, SavedScript):
            return False
        return self.to_record() == other.to_record()

    def __repr__(self) -> str:
        return f"SavedScript(id={self.id}, table_name={self.table_name}, alter={self.is_alter_table})"
