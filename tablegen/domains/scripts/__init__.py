from tablegen.domains.scripts.entities import SavedScript, new_script_id
from tablegen.domains.scripts.schemas import (
    SaveScriptRequest, SaveTableRequest, SavedScriptResponse,
    SaveScriptResponse, SavedScriptListResponse
)
from tablegen.domains.scripts.services import SavedScriptService

__all__ = [
    "SavedScript", "new_script_id",
    "SaveScriptRequest", "SaveTableRequest", "SavedScriptResponse",
    "SaveScriptResponse", "SavedScriptListResponse",
    "SavedScriptService"
]
