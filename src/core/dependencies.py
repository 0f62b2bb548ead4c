from fastapi import Request

from model.schema import UserRead


def get_current_user(request: Request) -> UserRead | None:
    """앱 시작 시 준비된 사용자를 반환한다.

    인증 개념이 없으므로 토큰 검증은 하지 않는다.
    부트스트랩이 꺼져 있거나 실패했으면 None → 클라이언트가 가입 폼을 띄운다.
    """
    return getattr(request.app.state, "current_user", None)
