"""Auth 기능 API 라우터입니다. 가입/로그인 시 세션 쿠키를 발급합니다."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from knowledge_base.config import settings
from knowledge_base.database import get_db
from knowledge_base.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserOut
from knowledge_base.services import auth_service
from knowledge_base.middleware.auth_middleware import get_current_user
from knowledge_base.models.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _start_session(response: Response, user: User) -> TokenResponse:
    token = auth_service.create_access_token(user.user_id)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return TokenResponse(access_token=token, user=UserOut.model_validate(user))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, response: Response, db: Session = Depends(get_db)):
    user = auth_service.register_user(db, request)
    return _start_session(response, user)


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, response: Response, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, request.username, request.password)
    return _start_session(response, user)


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "로그아웃 되었습니다."}


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user
