"""
MemoPad Backend — Memo Request/Response Schemas
=================================================

What:  Pydantic models for the memo endpoints.

Wire formats:
    createMemo / editMemo return a MemoResponse:
        {"memo_id": 3, "title": "Hi", "content": "Body",
         "created_it": "2024-05-01 09:30:00", "updated_it": "2024-05-01 09:30:00"}
    getMemo returns a list of MemoRow, which mirrors the table columns.

    All timestamps are rendered as 'YYYY-MM-DD HH:MM:SS'.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from app.models.memo import Memo

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_datetime(value: datetime) -> str:
    """Render a timestamp as 'YYYY-MM-DD HH:MM:SS'."""
    return value.strftime(DATETIME_FORMAT)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreateMemoRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId", description="Owner; taken on trust from the client")
    title: str = Field(min_length=1)
    content: str = Field(description="May be empty")


class EditMemoRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    memo_id: int = Field(alias="memoId")
    title: str = Field(min_length=1)
    content: str = Field(description="May be empty")


class DeleteMemoRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    memo_id: int = Field(alias="memoId")


class ListMemosRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class MemoResponse(BaseModel):
    """
    A single memo as returned by createMemo and editMemo.

    The `created_it` / `updated_it` keys are the names existing clients read.
    """
    memo_id: int
    title: str
    content: str
    created_it: datetime
    updated_it: datetime

    @field_serializer("created_it", "updated_it")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_datetime(value)

    @classmethod
    def from_memo(cls, memo: Memo) -> "MemoResponse":
        return cls(
            memo_id=memo.memo_id,
            title=memo.title,
            content=memo.content,
            created_it=memo.created_at,
            updated_it=memo.updated_at,
        )


class MemoRow(BaseModel):
    """A memo row as listed by getMemo."""
    memo_id: int
    user_id: int
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_datetime(value)

