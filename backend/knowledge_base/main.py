"""FastAPI 애플리케이션 진입점. 미들웨어, 예외 처리기, API 라우터를 등록합니다."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from knowledge_base.config import settings
from knowledge_base.database import Base, engine
import knowledge_base.models  # noqa: F401 - 모델 import로 metadata 등록
from knowledge_base.routers import auth, documents, spaces, users, notifications

logging.getLogger("knowledge_base").setLevel(settings.LOG_LEVEL.upper())

app = FastAPI(
    title="Team Knowledge Base",
    description="문서 작성, 스페이스, 댓글 멘션, 공유 권한을 제공하는 팀 지식 베이스",
    version="1.0.0",
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 입력 검증 실패는 400으로 응답하고 실패 내용을 그대로 돌려준다.
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# Register all routers
app.include_router(auth.router)
app.include_router(documents.router)
app.include_router(spaces.router)
app.include_router(users.router)
app.include_router(notifications.router)


@app.on_event("startup")
def ensure_schema():
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "Team Knowledge Base"}
