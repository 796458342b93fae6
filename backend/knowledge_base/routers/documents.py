"""Documents 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from knowledge_base.database import get_db
from knowledge_base.middleware.auth_middleware import get_current_user, get_optional_user
from knowledge_base.models.user import User
from knowledge_base.schemas.comment import CommentCreate, CommentOut
from knowledge_base.schemas.document import (
    DocumentCreate,
    DocumentOut,
    DocumentUpdate,
    PermissionCreate,
    PermissionOut,
)
from knowledge_base.schemas.version import DocumentVersionOut
from knowledge_base.services import comment_service, document_service

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.get("", response_model=List[DocumentOut])
def list_documents(
    space_id: Optional[int] = Query(None, alias="spaceId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.list_documents(db, current_user.user_id, space_id)


@router.get("/recent", response_model=List[DocumentOut])
def recent_documents(
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.recent_documents(db, current_user.user_id, limit)


@router.get("/search", response_model=List[DocumentOut])
def search_documents(
    q: Optional[str] = Query(None, max_length=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.search_documents(db, current_user.user_id, q)


@router.get("/by-slug/{slug}", response_model=DocumentOut)
def get_document_by_slug(
    slug: str,
    space_id: Optional[int] = Query(None, alias="spaceId"),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    return document_service.get_document_by_slug(db, slug, space_id, current_user)


@router.get("/{doc_id}", response_model=DocumentOut)
def get_document(
    doc_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    return document_service.view_document(db, doc_id, current_user)


@router.post("", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
def create_document(
    data: DocumentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.create_document(db, data, current_user)


@router.put("/{doc_id}", response_model=DocumentOut)
def update_document(
    doc_id: int,
    data: DocumentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.update_document(db, doc_id, data, current_user)


@router.delete("/{doc_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(
    doc_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    document_service.delete_document(db, doc_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{doc_id}/permissions", response_model=List[PermissionOut])
def list_permissions(
    doc_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.list_permissions(db, doc_id, current_user)


@router.post("/{doc_id}/permissions", response_model=PermissionOut, status_code=status.HTTP_201_CREATED)
def share_document(
    doc_id: int,
    data: PermissionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.share_document(db, doc_id, data, current_user)


@router.delete("/{doc_id}/permissions/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def revoke_permission(
    doc_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    document_service.revoke_permission(db, doc_id, user_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{doc_id}/versions", response_model=List[DocumentVersionOut])
def list_document_versions(
    doc_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return document_service.list_versions(db, doc_id, current_user)


@router.get("/{doc_id}/comments", response_model=List[CommentOut])
def list_comments(
    doc_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    return comment_service.list_comments(db, doc_id, current_user)


@router.post("/{doc_id}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def create_comment(
    doc_id: int,
    data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return comment_service.create_comment(db, doc_id, data, current_user)


@router.delete("/{doc_id}/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    doc_id: int,
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment_service.delete_comment(db, doc_id, comment_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
