"""Space 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

from knowledge_base.schemas.user import UserSummary


class SpaceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    is_private: bool = False


class SpaceSummary(BaseModel):
    space_id: int
    name: str
    slug: str

    model_config = {"from_attributes": True}


class SpaceOut(SpaceSummary):
    description: Optional[str] = None
    owner_id: int
    is_private: bool
    created_at: datetime
    updated_at: Optional[datetime]


class SpaceMemberCreate(BaseModel):
    user_id: int
    role: Literal["admin", "member"] = "member"


class SpaceMemberOut(BaseModel):
    member_id: int
    space_id: int
    user_id: int
    role: str
    created_at: datetime
    user: UserSummary

    model_config = {"from_attributes": True}
