"""Comment Service 도메인 서비스 레이어입니다. 댓글 작성 시 멘션 처리와 작성자 알림을 함께 수행합니다."""

import json
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from knowledge_base.models.comment import Comment
from knowledge_base.models.user import User
from knowledge_base.schemas.comment import CommentCreate
from knowledge_base.services import mention_service, notification_service
from knowledge_base.services.document_service import get_document
from knowledge_base.utils.permissions import ensure_can_view, user_can_edit


def _comments_query(db: Session, doc_id: int):
    return (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.doc_id == doc_id, Comment.is_deleted == False)  # noqa: E712
    )


def list_comments(db: Session, doc_id: int, current_user: Optional[User]) -> List[Comment]:
    doc = get_document(db, doc_id)
    ensure_can_view(db, doc, current_user)
    return _comments_query(db, doc_id).order_by(Comment.created_at.asc(), Comment.comment_id.asc()).all()


def create_comment(db: Session, doc_id: int, data: CommentCreate, current_user: User) -> Comment:
    doc = get_document(db, doc_id)
    ensure_can_view(db, doc, current_user)

    mentions = mention_service.extract_mentions(data.content)
    comment = Comment(
        doc_id=doc_id,
        author_id=current_user.user_id,
        content=data.content,
        mentions_json=json.dumps(mentions, ensure_ascii=False),
    )
    db.add(comment)
    db.commit()
    comment_id = comment.comment_id

    mention_service.process_mentions(
        db,
        doc=doc,
        actor=current_user,
        text=data.content,
        comment_id=comment_id,
    )
    if doc.author_id != current_user.user_id:
        notification_service.create_notification(
            db,
            user_id=doc.author_id,
            noti_type=notification_service.COMMENT,
            title="새 댓글",
            message=f'{current_user.username}님이 "{doc.title}" 문서에 댓글을 남겼습니다.',
            data={"document_id": doc_id, "comment_id": comment_id},
        )
    return _comments_query(db, doc_id).filter(Comment.comment_id == comment_id).first()


def delete_comment(db: Session, doc_id: int, comment_id: int, current_user: User):
    doc = get_document(db, doc_id)
    comment = _comments_query(db, doc_id).filter(Comment.comment_id == comment_id).first()
    if not comment:
        raise HTTPException(status_code=404, detail="댓글을 찾을 수 없습니다.")
    if comment.author_id != current_user.user_id and not user_can_edit(db, doc, current_user.user_id):
        raise HTTPException(status_code=403, detail="본인 댓글 또는 문서 편집자만 삭제할 수 있습니다.")
    comment.is_deleted = True
    db.commit()
