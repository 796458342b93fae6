"""Document 요청/응답 계약을 위한 Pydantic 스키마입니다.

DocumentOut은 작성자/스페이스를 포함한 읽기 전용 조회 모델이며
영속 엔티티(Document)와 분리되어 있습니다.
"""

from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

from knowledge_base.schemas.space import SpaceSummary
from knowledge_base.schemas.user import UserSummary

Visibility = Literal["private", "public", "space"]


class DocumentCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    content: str = ""
    space_id: Optional[int] = None
    visibility: Visibility = "private"


class DocumentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    content: Optional[str] = None
    space_id: Optional[int] = None
    visibility: Optional[Visibility] = None


class DocumentOut(BaseModel):
    doc_id: int
    title: str
    content: str
    slug: str
    author_id: int
    space_id: Optional[int]
    visibility: str
    view_count: int
    created_at: datetime
    updated_at: Optional[datetime]
    author: UserSummary
    space: Optional[SpaceSummary] = None

    model_config = {"from_attributes": True}


class PermissionCreate(BaseModel):
    user_id: int
    permission: Literal["view", "edit"]


class PermissionOut(BaseModel):
    permission_id: int
    doc_id: int
    user_id: int
    permission: str
    granted_by: int
    created_at: datetime
    user: UserSummary

    model_config = {"from_attributes": True}
