"""Space Service 도메인 서비스 레이어입니다. 스페이스 생성/조회와 멤버 관리를 담당합니다."""

from typing import List

from fastapi import HTTPException
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from knowledge_base.models.space import Space, SpaceMember
from knowledge_base.models.user import User
from knowledge_base.schemas.space import SpaceCreate, SpaceMemberCreate
from knowledge_base.utils.helpers import slugify
from knowledge_base.utils.permissions import SPACE_ADMIN, get_space_role


def list_spaces(db: Session, user_id: int) -> List[Space]:
    return (
        db.query(Space)
        .outerjoin(SpaceMember, SpaceMember.space_id == Space.space_id)
        .filter(or_(Space.owner_id == user_id, SpaceMember.user_id == user_id))
        .distinct()
        .order_by(Space.updated_at.desc(), Space.space_id.desc())
        .all()
    )


def _get_space_or_404(db: Session, space_id: int) -> Space:
    space = db.query(Space).filter(Space.space_id == space_id).first()
    if not space:
        raise HTTPException(status_code=404, detail="스페이스를 찾을 수 없습니다.")
    return space


def get_space(db: Session, space_id: int, current_user: User) -> Space:
    space = _get_space_or_404(db, space_id)
    if space.is_private and space.owner_id != current_user.user_id:
        if get_space_role(db, space_id, current_user.user_id) is None:
            raise HTTPException(status_code=403, detail="비공개 스페이스입니다.")
    return space


def create_space(db: Session, data: SpaceCreate, current_user: User) -> Space:
    slug = slugify(data.name)
    if not slug:
        raise HTTPException(status_code=400, detail="스페이스 이름에 영문자 또는 숫자가 필요합니다.")
    if db.query(Space.space_id).filter(Space.slug == slug).first():
        raise HTTPException(status_code=400, detail="같은 주소(slug)의 스페이스가 이미 있습니다.")

    space = Space(
        name=data.name,
        description=data.description,
        slug=slug,
        owner_id=current_user.user_id,
        is_private=data.is_private,
    )
    db.add(space)
    try:
        db.flush()
        db.add(SpaceMember(space_id=space.space_id, user_id=current_user.user_id, role=SPACE_ADMIN))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="같은 주소(slug)의 스페이스가 이미 있습니다.")
    db.refresh(space)
    return space


def _ensure_can_manage(db: Session, space: Space, current_user: User):
    if space.owner_id == current_user.user_id:
        return
    if get_space_role(db, space.space_id, current_user.user_id) != SPACE_ADMIN:
        raise HTTPException(status_code=403, detail="스페이스 소유자 또는 관리자만 멤버를 관리할 수 있습니다.")


def list_members(db: Session, space_id: int, current_user: User) -> List[SpaceMember]:
    get_space(db, space_id, current_user)
    return (
        db.query(SpaceMember)
        .options(joinedload(SpaceMember.user))
        .filter(SpaceMember.space_id == space_id)
        .order_by(SpaceMember.created_at.asc(), SpaceMember.member_id.asc())
        .all()
    )


def add_member(db: Session, space_id: int, data: SpaceMemberCreate, current_user: User) -> SpaceMember:
    space = _get_space_or_404(db, space_id)
    _ensure_can_manage(db, space, current_user)
    if not db.query(User.user_id).filter(User.user_id == data.user_id).first():
        raise HTTPException(status_code=404, detail="사용자를 찾을 수 없습니다.")

    member = db.query(SpaceMember).filter(
        SpaceMember.space_id == space_id,
        SpaceMember.user_id == data.user_id,
    ).first()
    if member:
        member.role = data.role
    else:
        member = SpaceMember(space_id=space_id, user_id=data.user_id, role=data.role)
        db.add(member)
    db.commit()
    db.refresh(member)
    return member


def remove_member(db: Session, space_id: int, user_id: int, current_user: User):
    space = _get_space_or_404(db, space_id)
    _ensure_can_manage(db, space, current_user)
    if user_id == space.owner_id:
        raise HTTPException(status_code=400, detail="스페이스 소유자는 제외할 수 없습니다.")
    db.query(SpaceMember).filter(
        SpaceMember.space_id == space_id,
        SpaceMember.user_id == user_id,
    ).delete(synchronize_session=False)
    db.commit()
