"""User Service 도메인 서비스 레이어입니다."""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from knowledge_base.config import settings
from knowledge_base.models.user import User
from knowledge_base.utils.helpers import LIKE_ESCAPE, like_pattern


def search_users(db: Session, q: Optional[str]) -> List[User]:
    keyword = (q or "").strip()
    if keyword.startswith("@"):
        keyword = keyword[1:]
    if not keyword:
        return []
    like = like_pattern(keyword)
    return (
        db.query(User)
        .filter(
            or_(
                User.username.ilike(like, escape=LIKE_ESCAPE),
                User.email.ilike(like, escape=LIKE_ESCAPE),
                User.first_name.ilike(like, escape=LIKE_ESCAPE),
                User.last_name.ilike(like, escape=LIKE_ESCAPE),
            )
        )
        .order_by(User.username.asc())
        .limit(settings.USER_SEARCH_LIMIT)
        .all()
    )
