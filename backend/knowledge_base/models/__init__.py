"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from knowledge_base.models.user import User
from knowledge_base.models.space import Space, SpaceMember
from knowledge_base.models.document import Document, DocumentPermission
from knowledge_base.models.version import DocumentVersion
from knowledge_base.models.comment import Comment
from knowledge_base.models.notification import Notification

__all__ = [
    "User",
    "Space", "SpaceMember",
    "Document", "DocumentPermission",
    "DocumentVersion",
    "Comment",
    "Notification",
]
