"""서비스 레이어 패키지 초기화 모듈입니다."""

from knowledge_base.services import (
    auth_service,
    notification_service,
    mention_service,
    version_service,
    document_service,
    comment_service,
    space_service,
    user_service,
)
