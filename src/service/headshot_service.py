from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from core.config import settings
from core.exceptions import HeadshotNotFound, UserNotFound
from model.headshot import (
    Attire,
    BackgroundStyle,
    Expression,
    HeadshotRequest,
    HeadshotStatus,
)
from model.schema import HeadshotWithUser
from model.user import User, utcnow
from service.lifecycle import check_transition

UPDATABLE_FIELDS = {"status", "generated_image_url", "error_message"}


def _with_user(headshot: HeadshotRequest, user: User) -> HeadshotWithUser:
    return HeadshotWithUser.model_validate(
        {**headshot.model_dump(), "user": user.model_dump()}
    )


def _joined_query():
    return select(HeadshotRequest, User).join(User, HeadshotRequest.user_id == User.id)


def create_headshot_request(
    user_id: int,
    original_image_url: str,
    background_style: BackgroundStyle,
    attire: Attire,
    expression: Expression,
    session: Session,
) -> HeadshotRequest:
    """새 헤드샷 요청을 pending 상태로 저장한다.

    user_id 존재 여부는 미리 조회하지 않는다. FK 제약이 거부하면
    IntegrityError를 UserNotFound로 바꿔서 올린다 (행은 남지 않음).
    """
    record = HeadshotRequest(
        user_id=user_id,
        original_image_url=original_image_url,
        background_style=background_style,
        attire=attire,
        expression=expression,
        status=HeadshotStatus.PENDING,
    )
    session.add(record)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.warning(f"Headshot request rejected: user {user_id} does not exist")
        raise UserNotFound(f"사용자를 찾을 수 없습니다: {user_id}")
    session.refresh(record)
    logger.info(f"Headshot request {record.id} created for user {user_id}")
    return record


def get_headshot_by_id(headshot_id: int, session: Session) -> HeadshotWithUser | None:
    row = session.exec(_joined_query().where(HeadshotRequest.id == headshot_id)).first()
    if not row:
        return None
    headshot, user = row
    return _with_user(headshot, user)


def get_user_headshots(user_id: int, session: Session) -> list[HeadshotWithUser]:
    """해당 사용자의 요청 목록 (최신순).

    요청이 없는 사용자와 존재하지 않는 사용자는 둘 다 빈 목록이다.
    """
    rows = session.exec(
        _joined_query()
        .where(HeadshotRequest.user_id == user_id)
        .order_by(col(HeadshotRequest.created_at).desc(), col(HeadshotRequest.id).desc())
    ).all()
    return [_with_user(headshot, user) for headshot, user in rows]


def get_all_headshots(session: Session) -> list[HeadshotWithUser]:
    """전체 사용자의 요청 목록 (최신순, 페이지네이션 없음)."""
    rows = session.exec(
        _joined_query().order_by(
            col(HeadshotRequest.created_at).desc(), col(HeadshotRequest.id).desc()
        )
    ).all()
    return [_with_user(headshot, user) for headshot, user in rows]


def get_pending_headshots(session: Session) -> list[HeadshotRequest]:
    """워커 폴링용: status가 정확히 pending인 요청 (오래된 순).

    선점(claim) 처리는 하지 않으므로 여러 워커가 같은 요청을 가져갈 수 있다.
    """
    return list(
        session.exec(
            select(HeadshotRequest)
            .where(HeadshotRequest.status == HeadshotStatus.PENDING)
            .order_by(col(HeadshotRequest.created_at), col(HeadshotRequest.id))
        ).all()
    )


def update_headshot_request(
    headshot_id: int, changes: dict, session: Session
) -> HeadshotRequest:
    """changes에 들어있는 필드만 반영한다.

    - 키가 없으면 기존 값 유지, 값이 None이면 비운다.
    - updated_at은 변경 내용이 없어도 항상 갱신된다.
    - 상태 전이는 ENFORCE_STATUS_TRANSITIONS가 켜져 있을 때만 검사한다.
    """
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"수정할 수 없는 필드: {sorted(unknown)}")

    record = session.get(HeadshotRequest, headshot_id)
    if not record:
        raise HeadshotNotFound(f"헤드샷 요청을 찾을 수 없습니다: {headshot_id}")

    if "status" in changes:
        changes = {**changes, "status": HeadshotStatus(changes["status"])}
        if settings.ENFORCE_STATUS_TRANSITIONS:
            check_transition(record.status, changes["status"])

    previous = record.status
    for field, value in changes.items():
        setattr(record, field, value)
    record.updated_at = utcnow()

    session.add(record)
    session.commit()
    session.refresh(record)

    if record.status != previous:
        logger.info(
            f"Headshot request {record.id}: {HeadshotStatus(previous).value} → {record.status.value}"
        )
    else:
        logger.debug(f"Headshot request {record.id} updated ({', '.join(changes) or 'no fields'})")
    return record
