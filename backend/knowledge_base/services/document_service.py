"""Document Service 도메인 서비스 레이어입니다. 문서 조회/작성/수정/삭제와 공유 권한 관리를 담당합니다."""

import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from knowledge_base.config import settings
from knowledge_base.models.document import Document, DocumentPermission
from knowledge_base.models.space import Space
from knowledge_base.models.user import User
from knowledge_base.schemas.document import DocumentCreate, DocumentUpdate, PermissionCreate
from knowledge_base.services import mention_service, notification_service, version_service
from knowledge_base.utils.helpers import LIKE_ESCAPE, like_pattern, slugify
from knowledge_base.utils.permissions import (
    SPACE,
    ensure_can_edit,
    ensure_can_view,
    visible_documents_clause,
)

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("title", "content")


def _documents_query(db: Session):
    return (
        db.query(Document)
        .options(joinedload(Document.author), joinedload(Document.space))
        .filter(Document.is_deleted == False)  # noqa: E712
    )


def _visible_query(db: Session, user_id: int):
    return _documents_query(db).filter(visible_documents_clause(user_id))


def _latest_first(query):
    return query.order_by(Document.updated_at.desc(), Document.doc_id.desc())


def list_documents(db: Session, user_id: int, space_id: Optional[int] = None) -> List[Document]:
    q = _visible_query(db, user_id)
    if space_id is not None:
        q = q.filter(Document.space_id == space_id)
    return _latest_first(q).all()


def recent_documents(db: Session, user_id: int, limit: Optional[int] = None) -> List[Document]:
    size = limit or settings.RECENT_DOCUMENTS_DEFAULT_LIMIT
    size = max(1, min(size, settings.RECENT_DOCUMENTS_MAX_LIMIT))
    return _latest_first(_visible_query(db, user_id)).limit(size).all()


def search_documents(db: Session, user_id: int, q: Optional[str]) -> List[Document]:
    keyword = (q or "").strip()
    if not keyword:
        return []
    like = like_pattern(keyword)
    query = _visible_query(db, user_id).filter(
        or_(
            Document.title.ilike(like, escape=LIKE_ESCAPE),
            Document.content.ilike(like, escape=LIKE_ESCAPE),
        )
    )
    return _latest_first(query).limit(settings.DOCUMENT_SEARCH_LIMIT).all()


def get_document(db: Session, doc_id: int) -> Document:
    doc = _documents_query(db).filter(Document.doc_id == doc_id).first()
    if not doc:
        raise HTTPException(status_code=404, detail="문서를 찾을 수 없습니다.")
    return doc


def get_document_by_slug(db: Session, slug: str, space_id: Optional[int], user: Optional[User]) -> Document:
    # slug는 유일하지 않으므로 첫 번째 일치 문서를 반환한다.
    q = _documents_query(db).filter(Document.slug == slug)
    if space_id is not None:
        q = q.filter(Document.space_id == space_id)
    doc = q.order_by(Document.doc_id.asc()).first()
    if not doc:
        raise HTTPException(status_code=404, detail="문서를 찾을 수 없습니다.")
    ensure_can_view(db, doc, user)
    return doc


def increment_view(db: Session, doc_id: int):
    db.query(Document).filter(Document.doc_id == doc_id).update(
        {
            Document.view_count: Document.view_count + 1,
            Document.updated_at: Document.updated_at,
        },
        synchronize_session=False,
    )
    db.commit()


def view_document(db: Session, doc_id: int, user: Optional[User]) -> Document:
    doc = get_document(db, doc_id)
    ensure_can_view(db, doc, user)
    increment_view(db, doc_id)
    db.refresh(doc)
    return doc


def _validate_placement(db: Session, visibility: str, space_id: Optional[int]):
    if space_id is not None:
        if not db.query(Space.space_id).filter(Space.space_id == space_id).first():
            raise HTTPException(status_code=400, detail="존재하지 않는 스페이스입니다.")
    if visibility == SPACE and space_id is None:
        raise HTTPException(status_code=400, detail="스페이스 공개 문서는 space_id가 필요합니다.")


def create_document(db: Session, data: DocumentCreate, current_user: User) -> Document:
    _validate_placement(db, data.visibility, data.space_id)
    doc = Document(
        title=data.title,
        content=data.content,
        slug=slugify(data.title),
        author_id=current_user.user_id,
        space_id=data.space_id,
        visibility=data.visibility,
    )
    db.add(doc)
    db.commit()
    return get_document(db, doc.doc_id)


def update_document(db: Session, doc_id: int, data: DocumentUpdate, current_user: User) -> Document:
    doc = get_document(db, doc_id)
    ensure_can_edit(db, doc, current_user)

    payload = data.model_dump(exclude_unset=True)
    for key in ("title", "content", "visibility"):
        if key in payload and payload[key] is None:
            payload.pop(key)
    _validate_placement(
        db,
        payload.get("visibility", doc.visibility),
        payload["space_id"] if "space_id" in payload else doc.space_id,
    )

    previous_content = doc.content
    text_changed = any(key in payload and payload[key] != getattr(doc, key) for key in TEXT_FIELDS)
    if text_changed or settings.SNAPSHOT_ON_METADATA_UPDATE:
        version_service.snapshot_document(
            db,
            doc,
            editor_id=current_user.user_id,
            changes=",".join(sorted(payload)) or None,
        )

    for k, v in payload.items():
        setattr(doc, k, v)
    if "title" in payload:
        doc.slug = slugify(doc.title)
    db.commit()

    if "content" in payload and payload["content"] != previous_content:
        mention_service.process_mentions(db, doc=doc, actor=current_user, text=payload["content"])
    return get_document(db, doc_id)


def delete_document(db: Session, doc_id: int, current_user: User):
    doc = get_document(db, doc_id)
    ensure_can_edit(db, doc, current_user)
    doc.is_deleted = True
    db.commit()


def list_permissions(db: Session, doc_id: int, current_user: User) -> List[DocumentPermission]:
    doc = get_document(db, doc_id)
    ensure_can_edit(db, doc, current_user)
    return (
        db.query(DocumentPermission)
        .options(joinedload(DocumentPermission.user))
        .filter(DocumentPermission.doc_id == doc_id)
        .order_by(DocumentPermission.created_at.asc(), DocumentPermission.permission_id.asc())
        .all()
    )


def _find_permission(db: Session, doc_id: int, user_id: int) -> Optional[DocumentPermission]:
    return db.query(DocumentPermission).filter(
        DocumentPermission.doc_id == doc_id,
        DocumentPermission.user_id == user_id,
    ).first()


def _upsert_permission(db: Session, doc_id: int, data: PermissionCreate, granted_by: int) -> DocumentPermission:
    row = _find_permission(db, doc_id, data.user_id)
    if row is None:
        row = DocumentPermission(
            doc_id=doc_id,
            user_id=data.user_id,
            permission=data.permission,
            granted_by=granted_by,
        )
        db.add(row)
        try:
            db.commit()
            db.refresh(row)
            return row
        except IntegrityError:
            # 동시 요청이 먼저 같은 사용자 권한을 추가한 경우 해당 행을 갱신한다.
            db.rollback()
            row = _find_permission(db, doc_id, data.user_id)
    row.permission = data.permission
    row.granted_by = granted_by
    db.commit()
    db.refresh(row)
    return row


def share_document(db: Session, doc_id: int, data: PermissionCreate, current_user: User) -> DocumentPermission:
    doc = get_document(db, doc_id)
    ensure_can_edit(db, doc, current_user)
    target = db.query(User).filter(User.user_id == data.user_id).first()
    if not target:
        raise HTTPException(status_code=404, detail="사용자를 찾을 수 없습니다.")

    doc_title = doc.title
    row = _upsert_permission(db, doc_id, data, current_user.user_id)
    notification_service.create_notification(
        db,
        user_id=target.user_id,
        noti_type=notification_service.SHARE,
        title="문서 공유",
        message=f'{current_user.username}님이 "{doc_title}" 문서를 공유했습니다.',
        data={"document_id": doc_id, "permission": data.permission},
    )
    logger.info("[share] document %s shared with user %s (%s)", doc_id, target.user_id, data.permission)
    db.refresh(row)
    return row


def revoke_permission(db: Session, doc_id: int, user_id: int, current_user: User):
    doc = get_document(db, doc_id)
    ensure_can_edit(db, doc, current_user)
    db.query(DocumentPermission).filter(
        DocumentPermission.doc_id == doc_id,
        DocumentPermission.user_id == user_id,
    ).delete(synchronize_session=False)
    db.commit()


def list_versions(db: Session, doc_id: int, current_user: User):
    doc = get_document(db, doc_id)
    ensure_can_view(db, doc, current_user)
    return version_service.list_versions(db, doc_id)
