"""문서 수정 직전 상태를 보관하는 버전 이력 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from knowledge_base.database import Base


class DocumentVersion(Base):
    __tablename__ = "document_versions"

    version_id = Column(Integer, primary_key=True, autoincrement=True)
    doc_id = Column(Integer, ForeignKey("documents.doc_id"), nullable=False)
    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    version_no = Column(Integer, nullable=False)
    changes = Column(String(500))
    created_at = Column(DateTime, server_default=func.now())

    document = relationship("Document", back_populates="versions")
    author = relationship("User")

    __table_args__ = (
        UniqueConstraint("doc_id", "version_no", name="uq_document_version_doc_no"),
    )
