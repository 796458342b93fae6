"""Comment 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import List
from datetime import datetime

from knowledge_base.schemas.user import UserSummary


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)


class CommentOut(BaseModel):
    comment_id: int
    doc_id: int
    author_id: int
    content: str
    mentions: List[str]
    created_at: datetime
    author: UserSummary

    model_config = {"from_attributes": True}
