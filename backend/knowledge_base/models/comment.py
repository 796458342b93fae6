"""Comment 도메인의 SQLAlchemy 모델 정의입니다."""

import json

from sqlalchemy import Column, Integer, Text, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from knowledge_base.database import Base


class Comment(Base):
    __tablename__ = "comments"

    comment_id = Column(Integer, primary_key=True, autoincrement=True)
    doc_id = Column(Integer, ForeignKey("documents.doc_id"), nullable=False)
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    content = Column(Text, nullable=False)
    mentions_json = Column(Text, nullable=False, default="[]")  # 작성 시점의 멘션 username 목록
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    document = relationship("Document", back_populates="comments")
    author = relationship("User", back_populates="comments")

    __table_args__ = (
        Index("idx_comment_document", "doc_id", "is_deleted"),
    )

    @property
    def mentions(self):
        try:
            parsed = json.loads(self.mentions_json or "[]")
        except json.JSONDecodeError:
            return []
        if not isinstance(parsed, list):
            return []
        return [str(item) for item in parsed]
