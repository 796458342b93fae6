"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./knowledge_base.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5000"]
    LOG_LEVEL: str = "INFO"

    # Session (JWT in cookie or bearer header)
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    SESSION_COOKIE_NAME: str = "kb_session"
    SESSION_COOKIE_SECURE: bool = False

    # Listing limits
    RECENT_DOCUMENTS_DEFAULT_LIMIT: int = 10
    RECENT_DOCUMENTS_MAX_LIMIT: int = 100
    DOCUMENT_SEARCH_LIMIT: int = 50
    USER_SEARCH_LIMIT: int = 10
    NOTIFICATION_LIST_LIMIT: int = 50

    # 버전 이력: 제목/본문이 바뀌지 않는 수정(공개 범위 변경 등)도 스냅샷할지 여부
    SNAPSHOT_ON_METADATA_UPDATE: bool = False
    VERSION_SNAPSHOT_RETRIES: int = 3

    class Config:
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
