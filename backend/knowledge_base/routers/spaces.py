"""Spaces 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from knowledge_base.database import get_db
from knowledge_base.middleware.auth_middleware import get_current_user
from knowledge_base.models.user import User
from knowledge_base.schemas.space import SpaceCreate, SpaceMemberCreate, SpaceMemberOut, SpaceOut
from knowledge_base.services import space_service

router = APIRouter(prefix="/api/spaces", tags=["spaces"])


@router.get("", response_model=List[SpaceOut])
def list_spaces(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return space_service.list_spaces(db, current_user.user_id)


@router.post("", response_model=SpaceOut, status_code=status.HTTP_201_CREATED)
def create_space(
    data: SpaceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return space_service.create_space(db, data, current_user)


@router.get("/{space_id}", response_model=SpaceOut)
def get_space(space_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return space_service.get_space(db, space_id, current_user)


@router.get("/{space_id}/members", response_model=List[SpaceMemberOut])
def list_members(space_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return space_service.list_members(db, space_id, current_user)


@router.post("/{space_id}/members", response_model=SpaceMemberOut, status_code=status.HTTP_201_CREATED)
def add_member(
    space_id: int,
    data: SpaceMemberCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return space_service.add_member(db, space_id, data, current_user)


@router.delete("/{space_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    space_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    space_service.remove_member(db, space_id, user_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
