from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from core.dependencies import get_current_user
from model.database import get_session
from model.schema import EmailText, HeadshotWithUser, UserCreate, UserRead
from service import headshot_service, user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(req: UserCreate, session: Session = Depends(get_session)):
    """가입: 이메일 + 이름 → 사용자 생성. 중복 이메일이면 409."""
    return user_service.create_user(req.email, req.name, session)


@router.get("/by-email", response_model=UserRead | None)
def get_user_by_email(
    email: EmailText = Query(...),
    session: Session = Depends(get_session),
):
    """이메일로 조회. 없으면 에러가 아니라 null."""
    return user_service.get_user_by_email(email, session)


@router.get("/current", response_model=UserRead | None)
def get_current(current_user: UserRead | None = Depends(get_current_user)):
    """앱 시작 시 준비된 사용자. 없으면 null."""
    return current_user


@router.get("/{user_id}/headshots", response_model=list[HeadshotWithUser])
def list_user_headshots(user_id: int, session: Session = Depends(get_session)):
    return headshot_service.get_user_headshots(user_id, session)
