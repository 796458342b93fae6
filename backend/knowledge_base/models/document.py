"""Document/DocumentPermission 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from knowledge_base.database import Base


class Document(Base):
    __tablename__ = "documents"

    doc_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=False, default="")
    slug = Column(String(300), nullable=False)  # 문서 slug는 중복될 수 있다.
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    space_id = Column(Integer, ForeignKey("spaces.space_id"), nullable=True)
    visibility = Column(String(20), nullable=False, default="private")  # private/public/space
    is_deleted = Column(Boolean, nullable=False, default=False)
    view_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    author = relationship("User", back_populates="documents", foreign_keys=[author_id])
    space = relationship("Space", back_populates="documents")
    permissions = relationship("DocumentPermission", back_populates="document", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="document")
    versions = relationship("DocumentVersion", back_populates="document", order_by="DocumentVersion.version_no.desc()")

    __table_args__ = (
        Index("idx_document_space", "space_id", "is_deleted"),
        Index("idx_document_author", "author_id"),
        Index("idx_document_slug", "slug"),
    )


class DocumentPermission(Base):
    __tablename__ = "document_permissions"

    permission_id = Column(Integer, primary_key=True, autoincrement=True)
    doc_id = Column(Integer, ForeignKey("documents.doc_id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    permission = Column(String(10), nullable=False)  # view/edit
    granted_by = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    document = relationship("Document", back_populates="permissions")
    user = relationship("User", foreign_keys=[user_id])

    __table_args__ = (
        UniqueConstraint("doc_id", "user_id", name="uq_document_permission_doc_user"),
        Index("idx_document_permission_user", "user_id"),
    )
