"""멘션(@) 파싱, 멘션 대상 열람 권한 자동 부여, 알림 발송을 담당하는 도메인 서비스입니다."""

import logging
import re
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from knowledge_base.models.document import Document, DocumentPermission
from knowledge_base.models.user import User
from knowledge_base.services import notification_service
from knowledge_base.utils.permissions import VIEW, user_can_view

logger = logging.getLogger(__name__)

MENTION_PATTERN = re.compile(r"@([A-Za-z0-9_]+)")


def extract_mentions(text: Optional[str]) -> List[str]:
    """등장 순서대로 username 목록을 반환합니다. 대소문자와 중복은 그대로 유지합니다."""
    if not text:
        return []
    return MENTION_PATTERN.findall(text)


def grant_view_if_missing(db: Session, doc: Document, user_id: int, granted_by: int) -> bool:
    # 기존 권한(view/edit)은 건드리지 않고, 열람 불가일 때만 view 권한을 추가한다.
    if user_can_view(db, doc, user_id):
        return False
    db.add(DocumentPermission(doc_id=doc.doc_id, user_id=user_id, permission=VIEW, granted_by=granted_by))
    try:
        db.commit()
    except IntegrityError:
        # 동시 요청이 먼저 권한을 추가한 경우
        db.rollback()
        return False
    return True


def _mention_message(actor_name: str, doc_title: str, comment_id: Optional[int]) -> tuple:
    if comment_id is not None:
        return "댓글 멘션", f"{actor_name}님이 댓글에서 회원님을 멘션했습니다."
    return "문서 멘션", f'{actor_name}님이 "{doc_title}" 문서에서 회원님을 멘션했습니다.'


def process_mentions(
    db: Session,
    *,
    doc: Document,
    actor: User,
    text: Optional[str],
    comment_id: Optional[int] = None,
) -> List[str]:
    """text의 멘션마다 열람 권한을 보장하고 mention 알림을 생성합니다.

    존재하지 않는 username은 조용히 건너뜁니다. 멘션 하나의 저장 오류는 롤백 후
    로그만 남기고 나머지 멘션 처리를 계속합니다. 처리된 username 목록을 반환합니다.
    """
    usernames = extract_mentions(text)
    if not usernames:
        return []

    doc_id = doc.doc_id
    actor_id = actor.user_id
    title, message = _mention_message(actor.username, doc.title, comment_id)
    payload = {"document_id": doc_id}
    if comment_id is not None:
        payload["comment_id"] = comment_id

    processed: List[str] = []
    for username in usernames:
        try:
            user = db.query(User).filter(User.username == username).first()
            if not user:
                continue
            if grant_view_if_missing(db, doc, user.user_id, actor_id):
                logger.info("[mention] granted view on document %s to user %s", doc_id, user.user_id)
            notification_service.create_notification(
                db,
                user_id=user.user_id,
                noti_type=notification_service.MENTION,
                title=title,
                message=message,
                data=payload,
            )
            processed.append(username)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("[mention] failed to process @%s on document %s: %s", username, doc_id, exc)
    return processed
