"""문서 수정 직전 상태를 버전 이력으로 보관/조회하는 도메인 서비스입니다."""

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from knowledge_base.config import settings
from knowledge_base.models.document import Document
from knowledge_base.models.version import DocumentVersion

logger = logging.getLogger(__name__)


def next_version_no(db: Session, doc_id: int) -> int:
    current_max = (
        db.query(func.max(DocumentVersion.version_no))
        .filter(DocumentVersion.doc_id == doc_id)
        .scalar()
    )
    return (current_max or 0) + 1


def snapshot_document(
    db: Session,
    doc: Document,
    *,
    editor_id: int,
    changes: Optional[str] = None,
) -> DocumentVersion:
    """문서의 현재(수정 전) 제목/본문을 다음 버전 번호로 저장합니다.

    동시 수정으로 같은 버전 번호가 이미 저장된 경우 번호를 다시 계산해 재시도합니다.
    """
    doc_id = doc.doc_id
    title = doc.title
    content = doc.content
    attempts = max(1, settings.VERSION_SNAPSHOT_RETRIES)
    for attempt in range(1, attempts + 1):
        row = DocumentVersion(
            doc_id=doc_id,
            title=title,
            content=content,
            author_id=editor_id,
            version_no=next_version_no(db, doc_id),
            changes=changes,
        )
        db.add(row)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if attempt == attempts:
                raise
            logger.warning("[version] version number collision on document %s, retrying (%s)", doc_id, attempt)
            continue
        db.refresh(row)
        return row


def list_versions(db: Session, doc_id: int) -> List[DocumentVersion]:
    return (
        db.query(DocumentVersion)
        .filter(DocumentVersion.doc_id == doc_id)
        .order_by(DocumentVersion.version_no.desc())
        .all()
    )
