from tablegen.db.models.kv import KeyValueEntry

__all__ = [
    "KeyValueEntry",
]
