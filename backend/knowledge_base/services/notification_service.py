"""Notification Service 도메인 서비스 레이어입니다. 비즈니스 규칙과 데이터 접근 흐름을 캡슐화합니다."""

import json
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session
from knowledge_base.config import settings
from knowledge_base.models.notification import Notification


MENTION = "mention"
SHARE = "share"
COMMENT = "comment"
NOTIFICATION_TYPES = (MENTION, SHARE, COMMENT)


def get_notifications(db: Session, user_id: int, unread_only: bool = False) -> List[Notification]:
    q = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        q = q.filter(Notification.is_read == False)  # noqa: E712
    return (
        q.order_by(Notification.created_at.desc(), Notification.noti_id.desc())
        .limit(settings.NOTIFICATION_LIST_LIMIT)
        .all()
    )


def mark_read(db: Session, noti_id: int, user_id: int) -> Notification:
    noti = db.query(Notification).filter(
        Notification.noti_id == noti_id,
        Notification.user_id == user_id,
    ).first()
    if not noti:
        raise HTTPException(status_code=404, detail="알림을 찾을 수 없습니다.")
    noti.is_read = True
    db.commit()
    db.refresh(noti)
    return noti


def mark_all_read(db: Session, user_id: int):
    db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.is_read == False,  # noqa: E712
    ).update({"is_read": True})
    db.commit()


def create_notification(
    db: Session,
    user_id: int,
    noti_type: str,
    title: str,
    message: str,
    data: Optional[Dict[str, Any]] = None,
) -> Notification:
    if noti_type not in NOTIFICATION_TYPES:
        raise ValueError(f"unknown notification type: {noti_type}")
    noti = Notification(
        user_id=user_id,
        noti_type=noti_type,
        title=title,
        message=message,
        data_json=json.dumps(data, ensure_ascii=False) if data is not None else None,
    )
    db.add(noti)
    db.commit()
    db.refresh(noti)
    return noti
