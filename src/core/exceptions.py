"""앱 전역 커스텀 예외 클래스.

AppException을 상속하면 전역 핸들러(error_handlers.py)가 자동으로
{"error_code": "...", "message": "..."} 형식의 JSON 응답을 생성한다.
"""


class AppException(Exception):
    """앱 전역 베이스 예외.

    서브클래스에서 status_code, error_code, message를 클래스 변수로 정의하면
    전역 핸들러가 해당 값을 읽어 HTTP 응답을 생성한다.
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    message: str = "서버 내부 오류가 발생했습니다"

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)


# --- 사용자 관련 ---


class DuplicateEmail(AppException):
    status_code = 409
    error_code = "DUPLICATE_EMAIL"
    message = "이미 등록된 이메일입니다"


class UserNotFound(AppException):
    status_code = 404
    error_code = "USER_NOT_FOUND"
    message = "사용자를 찾을 수 없습니다"


# --- 헤드샷 요청 관련 ---


class HeadshotNotFound(AppException):
    status_code = 404
    error_code = "HEADSHOT_NOT_FOUND"
    message = "헤드샷 요청을 찾을 수 없습니다"


class InvalidStatusTransition(AppException):
    status_code = 409
    error_code = "INVALID_STATUS_TRANSITION"
    message = "허용되지 않는 상태 전이입니다"
