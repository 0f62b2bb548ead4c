from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from model.database import get_session
from model.schema import HeadshotCreate, HeadshotRead, HeadshotUpdate, HeadshotWithUser
from service import headshot_service

router = APIRouter(prefix="/api/headshots", tags=["headshots"])


@router.post("", response_model=HeadshotRead, status_code=status.HTTP_201_CREATED)
def create_headshot(req: HeadshotCreate, session: Session = Depends(get_session)):
    return headshot_service.create_headshot_request(
        user_id=req.user_id,
        original_image_url=req.original_image_url,
        background_style=req.background_style,
        attire=req.attire,
        expression=req.expression,
        session=session,
    )


@router.get("", response_model=list[HeadshotWithUser])
def list_headshots(session: Session = Depends(get_session)):
    return headshot_service.get_all_headshots(session)


# /{headshot_id}보다 먼저 등록해야 "pending"이 id로 해석되지 않는다
@router.get("/pending", response_model=list[HeadshotRead])
def list_pending_headshots(session: Session = Depends(get_session)):
    """외부 워커가 폴링하는 대기 목록."""
    return headshot_service.get_pending_headshots(session)


@router.get("/{headshot_id}", response_model=HeadshotWithUser | None)
def get_headshot(headshot_id: int, session: Session = Depends(get_session)):
    return headshot_service.get_headshot_by_id(headshot_id, session)


@router.patch("/{headshot_id}", response_model=HeadshotRead)
def update_headshot(
    headshot_id: int,
    req: HeadshotUpdate,
    session: Session = Depends(get_session),
):
    """보낸 필드만 수정한다. 없는 id면 404 HEADSHOT_NOT_FOUND."""
    return headshot_service.update_headshot_request(headshot_id, req.changes(), session)
