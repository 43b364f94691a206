"""
MemoPad Backend — Memo Route Handlers
=======================================

What:  POST /createMemo, /editMemo, /deleteMemo, /getMemo.
How:   Validates the body, delegates to MemoService, shapes the response.

The memo endpoints identify the owner from the request body (`userId`),
not from the session.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.memo import (
    CreateMemoRequest,
    DeleteMemoRequest,
    EditMemoRequest,
    ListMemosRequest,
    MemoResponse,
    MemoRow,
)
from app.services.memo_service import memo_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Memos"])


@router.post(
    "/createMemo",
    response_model=MemoResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Create a memo",
)
async def create_memo(
    body: CreateMemoRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MemoResponse:
    memo = await memo_service.create(db, owner_id=body.user_id, title=body.title, content=body.content)
    return MemoResponse.from_memo(memo)


@router.post(
    "/editMemo",
    response_model=MemoResponse,
    responses={
        404: {"description": "Memo not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a memo's title and content",
)
async def edit_memo(
    body: EditMemoRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MemoResponse:
    memo = await memo_service.edit(db, memo_id=body.memo_id, title=body.title, content=body.content)
    return MemoResponse.from_memo(memo)


@router.post(
    "/deleteMemo",
    response_class=PlainTextResponse,
    responses={
        404: {"description": "Memo not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a memo",
)
async def delete_memo(
    body: DeleteMemoRequest,
    db: AsyncSession = Depends(get_db_session),
) -> PlainTextResponse:
    await memo_service.delete(db, memo_id=body.memo_id)
    return PlainTextResponse("Delete complete")


@router.post(
    "/getMemo",
    response_model=List[MemoRow],
    responses={
        404: {"description": "Unknown user", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List a user's memos",
)
async def get_memos(
    body: ListMemosRequest,
    db: AsyncSession = Depends(get_db_session),
) -> List[MemoRow]:
    """
    Return every memo owned by `userId`, oldest first.

    A user with no memos gets an empty list; an unknown user gets 404.
    """
    memos = await memo_service.list_by_owner(db, owner_id=body.user_id)
    logger.debug("Listed %d memos for user %s", len(memos), body.user_id)
    return [MemoRow.model_validate(memo) for memo in memos]
