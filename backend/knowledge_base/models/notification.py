"""Notification 도메인의 SQLAlchemy 모델 정의입니다."""

import json

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from knowledge_base.database import Base


class Notification(Base):
    __tablename__ = "notification"

    noti_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    noti_type = Column(String(30), nullable=False)  # mention/share/comment
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    data_json = Column(Text)  # JSON payload
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="notifications")

    __table_args__ = (
        Index("idx_notification_user", "user_id", "is_read", "created_at"),
    )

    @property
    def data(self):
        if not self.data_json:
            return None
        try:
            return json.loads(self.data_json)
        except json.JSONDecodeError:
            return None
