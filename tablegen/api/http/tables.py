from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from tablegen.api.deps import get_table_service
from tablegen.core.errors import ValidationError
from tablegen.domains.tables.generator import ScriptMode
from tablegen.domains.tables.schemas import (
    ColumnResponse, CommentRequest, CommentSuggestionResponse,
    GenerateRequest, GenerateResponse, ParseRequest, ParseResponse
)
from tablegen.domains.tables.services import TableScriptService

router = APIRouter(prefix="/tables", tags=["tables"])


@router.post("/generate", response_model=GenerateResponse)
async def generate_script(
    request: GenerateRequest,
    table_service: TableScriptService = Depends(get_table_service)
):
    """Render a table script or procedure"""
    table = request.table.to_entity()
    mode = request.mode or ScriptMode.for_table(table)

    try:
        script = table_service.generate(table, mode, include_drop_guard=request.include_drop_guard)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return GenerateResponse(mode=mode, title=mode.title, script=script)


@router.post("/parse", response_model=ParseResponse)
async def parse_script(
    request: ParseRequest,
    table_service: TableScriptService = Depends(get_table_service)
):
    """Recover editor columns from a generated script"""
    parsed = table_service.parse(request.script, request.is_alter_mode)

    return ParseResponse(
        table_name=parsed.table_name,
        table_comment=parsed.table_comment,
        columns=[ColumnResponse.model_validate(column) for column in parsed.columns]
    )


@router.post("/comments", response_model=List[CommentSuggestionResponse])
async def suggest_comments(
    request: CommentRequest,
    table_service: TableScriptService = Depends(get_table_service)
):
    """Suggest a comment for every column"""
    suggestions = table_service.suggest_comments(
        request.table_name,
        request.table_comment,
        [column.to_entity() for column in request.columns]
    )

    return [CommentSuggestionResponse.model_validate(suggestion) for suggestion in suggestions]
