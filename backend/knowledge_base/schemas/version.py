"""문서 버전 이력 응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from knowledge_base.schemas.user import UserSummary


class DocumentVersionOut(BaseModel):
    version_id: int
    doc_id: int
    version_no: int
    title: str
    content: str
    changes: Optional[str] = None
    author_id: int
    created_at: datetime
    author: UserSummary

    model_config = {"from_attributes": True}
