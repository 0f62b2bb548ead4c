"""헤드샷 요청 상태 전이 표.

의도된 흐름: pending → processing → completed | failed

update_headshot_request는 기본적으로 이 표를 검사하지 않는다.
(외부 워커가 재시도 등으로 임의의 상태를 기록할 수 있어야 함)
ENFORCE_STATUS_TRANSITIONS=true일 때만 check_transition으로 검증한다.
"""

from core.exceptions import InvalidStatusTransition
from model.headshot import HeadshotStatus

ALLOWED_TRANSITIONS: dict[HeadshotStatus, frozenset[HeadshotStatus]] = {
    HeadshotStatus.PENDING: frozenset({HeadshotStatus.PROCESSING, HeadshotStatus.FAILED}),
    # 워커가 작업을 내려놓으면 다시 pending
    HeadshotStatus.PROCESSING: frozenset(
        {HeadshotStatus.COMPLETED, HeadshotStatus.FAILED, HeadshotStatus.PENDING}
    ),
    HeadshotStatus.COMPLETED: frozenset(),
    # 실패한 요청은 재제출 가능
    HeadshotStatus.FAILED: frozenset({HeadshotStatus.PENDING}),
}


def is_transition_allowed(current: HeadshotStatus, new: HeadshotStatus) -> bool:
    """같은 상태로의 전이(상태 외 필드만 수정)는 항상 허용."""
    if current == new:
        return True
    return new in ALLOWED_TRANSITIONS[current]


def check_transition(current: HeadshotStatus, new: HeadshotStatus) -> None:
    if not is_transition_allowed(current, new):
        raise InvalidStatusTransition(
            f"허용되지 않는 상태 전이입니다: {current.value} → {new.value}"
        )
