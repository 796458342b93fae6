"""Users 기능 API 라우터입니다. 멘션/공유 대상 검색에 쓰이는 사용자 검색만 제공합니다."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from knowledge_base.database import get_db
from knowledge_base.middleware.auth_middleware import get_current_user
from knowledge_base.models.user import User
from knowledge_base.schemas.user import UserSummary
from knowledge_base.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/search", response_model=List[UserSummary])
def search_users(
    q: Optional[str] = Query(None, max_length=100),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
):
    return user_service.search_users(db, q)
