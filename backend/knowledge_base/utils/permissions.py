"""문서 열람/편집 권한 판정 헬퍼입니다.

판정 규칙 자체(can_view/can_edit)는 (visibility, author_id, space_id) 튜플과
이미 조회된 권한 정보만 받는 순수 함수이고, DB 조회가 필요한 부분은
user_can_view/user_can_edit 등 세션을 받는 래퍼에서 처리합니다.
요청 사용자는 항상 user_id 인자로 명시적으로 전달합니다.
"""

from typing import NamedTuple, Optional

from fastapi import HTTPException, status
from sqlalchemy import and_, exists, or_
from sqlalchemy.orm import Session

from knowledge_base.models.document import Document, DocumentPermission
from knowledge_base.models.space import SpaceMember
from knowledge_base.models.user import User


PUBLIC = "public"
SPACE = "space"

VIEW = "view"
EDIT = "edit"

SPACE_ADMIN = "admin"


class AccessSubject(NamedTuple):
    visibility: str
    author_id: int
    space_id: Optional[int] = None


def access_subject(doc: Document) -> AccessSubject:
    return AccessSubject(visibility=doc.visibility, author_id=doc.author_id, space_id=doc.space_id)


def can_view(
    subject: AccessSubject,
    user_id: Optional[int],
    permission: Optional[str] = None,
    is_space_member: bool = False,
) -> bool:
    if subject.visibility == PUBLIC:
        return True
    if user_id is None:
        return False
    if subject.author_id == user_id:
        return True
    if permission is not None:
        return True
    if subject.visibility == SPACE and subject.space_id is not None:
        return is_space_member
    return False


def can_edit(subject: AccessSubject, user_id: Optional[int], permission: Optional[str] = None) -> bool:
    # 스페이스 역할(admin 포함)은 편집 권한을 주지 않는다.
    if user_id is None:
        return False
    if subject.author_id == user_id:
        return True
    return permission == EDIT


def get_permission(db: Session, doc_id: int, user_id: int) -> Optional[str]:
    row = (
        db.query(DocumentPermission.permission)
        .filter(
            DocumentPermission.doc_id == doc_id,
            DocumentPermission.user_id == user_id,
        )
        .first()
    )
    return row[0] if row else None


def is_space_member(db: Session, space_id: int, user_id: int) -> bool:
    return db.query(SpaceMember.member_id).filter(
        SpaceMember.space_id == space_id,
        SpaceMember.user_id == user_id,
    ).first() is not None


def get_space_role(db: Session, space_id: int, user_id: int) -> Optional[str]:
    row = (
        db.query(SpaceMember.role)
        .filter(SpaceMember.space_id == space_id, SpaceMember.user_id == user_id)
        .first()
    )
    return row[0] if row else None


def user_can_view(db: Session, doc: Document, user_id: Optional[int]) -> bool:
    subject = access_subject(doc)
    if subject.visibility == PUBLIC or user_id is None:
        return can_view(subject, user_id)
    if subject.author_id == user_id:
        return True
    permission = get_permission(db, doc.doc_id, user_id)
    member = False
    if permission is None and subject.visibility == SPACE and subject.space_id is not None:
        member = is_space_member(db, subject.space_id, user_id)
    return can_view(subject, user_id, permission=permission, is_space_member=member)


def user_can_edit(db: Session, doc: Document, user_id: Optional[int]) -> bool:
    subject = access_subject(doc)
    if user_id is None or subject.author_id == user_id:
        return can_edit(subject, user_id)
    return can_edit(subject, user_id, permission=get_permission(db, doc.doc_id, user_id))


def ensure_can_view(db: Session, doc: Document, user: Optional[User]):
    if doc.visibility != PUBLIC and user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="로그인이 필요합니다.")
    if not user_can_view(db, doc, user.user_id if user else None):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="문서 열람 권한이 없습니다.")


def ensure_can_edit(db: Session, doc: Document, user: User):
    if not user_can_edit(db, doc, user.user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="문서 편집 권한이 없습니다.")


def visible_documents_clause(user_id: int):
    """can_view와 같은 규칙을 목록/검색 쿼리용 SQL 조건으로 표현합니다."""
    has_permission = exists().where(
        DocumentPermission.doc_id == Document.doc_id,
        DocumentPermission.user_id == user_id,
    )
    in_space = exists().where(
        SpaceMember.space_id == Document.space_id,
        SpaceMember.user_id == user_id,
    )
    return or_(
        Document.visibility == PUBLIC,
        Document.author_id == user_id,
        has_permission,
        and_(Document.visibility == SPACE, Document.space_id.isnot(None), in_space),
    )
