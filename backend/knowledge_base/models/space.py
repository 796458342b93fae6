"""Space(문서 묶음) 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from knowledge_base.database import Base


class Space(Base):
    __tablename__ = "spaces"

    space_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    slug = Column(String(200), unique=True, nullable=False)
    owner_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    is_private = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="owned_spaces")
    members = relationship("SpaceMember", back_populates="space", cascade="all, delete-orphan")
    documents = relationship("Document", back_populates="space")


class SpaceMember(Base):
    __tablename__ = "space_members"

    member_id = Column(Integer, primary_key=True, autoincrement=True)
    space_id = Column(Integer, ForeignKey("spaces.space_id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    role = Column(String(20), nullable=False, default="member")  # admin/member
    created_at = Column(DateTime, server_default=func.now())

    space = relationship("Space", back_populates="members")
    user = relationship("User", back_populates="space_memberships")

    __table_args__ = (
        UniqueConstraint("space_id", "user_id", name="uq_space_member_space_user"),
        Index("idx_space_member_user", "user_id"),
    )
