from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import Optional

from tablegen.api.deps import get_script_service
from tablegen.core.errors import StorageError, ValidationError
from tablegen.domains.scripts.schemas import (
    SaveScriptRequest, SaveScriptResponse, SaveTableRequest,
    SavedScriptListResponse, SavedScriptResponse
)
from tablegen.domains.scripts.services import SavedScriptService
from tablegen.domains.tables.schemas import TableResponse

router = APIRouter(prefix="/scripts", tags=["scripts"])


def _storage_failure(e: StorageError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(e)
    )


@router.get("", response_model=SavedScriptListResponse)
@router.get("/", response_model=SavedScriptListResponse, include_in_schema=False)
async def list_scripts(
    q: Optional[str] = Query(None, max_length=128),
    sort: str = Query("created_at", pattern="^(created_at|table_name)$"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    script_service: SavedScriptService = Depends(get_script_service)
):
    """List saved scripts, optionally filtered by table name"""
    try:
        scripts = await script_service.list_scripts(query=q, sort=sort, descending=order == "desc")
    except StorageError as e:
        raise _storage_failure(e)

    return SavedScriptListResponse(
        scripts=[SavedScriptResponse.model_validate(script) for script in scripts],
        total=len(scripts)
    )


@router.post("", response_model=SaveScriptResponse, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=SaveScriptResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def save_script(
    request: SaveScriptRequest,
    response: Response,
    script_service: SavedScriptService = Depends(get_script_service)
):
    """Save a script; a save that replaces an existing record answers 200"""
    try:
        script, created = await script_service.save_script(
            script=request.script,
            table_name=request.table_name,
            is_alter_table=request.is_alter_table,
            table_comment=request.table_comment
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except StorageError as e:
        raise _storage_failure(e)

    if not created:
        response.status_code = status.HTTP_200_OK
    return SaveScriptResponse(script=SavedScriptResponse.model_validate(script), created=created)


@router.post("/tables", response_model=SaveScriptResponse, status_code=status.HTTP_201_CREATED)
async def save_table(
    request: SaveTableRequest,
    response: Response,
    script_service: SavedScriptService = Depends(get_script_service)
):
    """Render a table's DDL and save it"""
    try:
        script, created = await script_service.save_table(
            request.table.to_entity(),
            include_drop_guard=request.include_drop_guard
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except StorageError as e:
        raise _storage_failure(e)

    if not created:
        response.status_code = status.HTTP_200_OK
    return SaveScriptResponse(script=SavedScriptResponse.model_validate(script), created=created)


@router.get("/{script_id}", response_model=SavedScriptResponse)
async def get_script(
    script_id: str,
    script_service: SavedScriptService = Depends(get_script_service)
):
    """Get a saved script by id"""
    try:
        script = await script_service.get_script(script_id)
    except StorageError as e:
        raise _storage_failure(e)

    if not script:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Script not found"
        )

    return SavedScriptResponse.model_validate(script)


@router.get("/{script_id}/editor", response_model=TableResponse)
async def load_into_editor(
    script_id: str,
    script_service: SavedScriptService = Depends(get_script_service)
):
    """Editor state re-derived from a saved script"""
    try:
        table = await script_service.load_into_editor(script_id)
    except StorageError as e:
        raise _storage_failure(e)

    if not table:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Script not found"
        )

    return TableResponse.model_validate(table)


@router.put("/{script_id}", response_model=SavedScriptResponse)
async def update_script(
    script_id: str,
    request: SaveScriptRequest,
    script_service: SavedScriptService = Depends(get_script_service)
):
    """Overwrite a saved script"""
    try:
        script = await script_service.update_script(
            script_id,
            script=request.script,
            table_name=request.table_name,
            is_alter_table=request.is_alter_table,
            table_comment=request.table_comment
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except StorageError as e:
        raise _storage_failure(e)

    return SavedScriptResponse.model_validate(script)


@router.delete("/{script_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_script(
    script_id: str,
    script_service: SavedScriptService = Depends(get_script_service)
):
    """Delete a saved script"""
    try:
        deleted = await script_service.delete_script(script_id)
    except StorageError as e:
        raise _storage_failure(e)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Script not found"
        )
