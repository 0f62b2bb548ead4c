"""요청/응답 스키마.

HTTP 경계를 넘는 모든 입력과 출력의 형태를 여기서 정의한다.
입력 검증(이메일, URL, enum)은 DB에 닿기 전에 pydantic이 처리한다.
이메일과 URL은 형식만 검사하고, 저장은 사용자가 보낸 문자열 그대로 한다.
"""

from datetime import datetime
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from model.headshot import Attire, BackgroundStyle, Expression, HeadshotStatus

_url_adapter = TypeAdapter(AnyUrl)


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"올바른 이메일 형식이 아닙니다: {e}")
    return value


def _check_url(value: str) -> str:
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("올바른 URL 형식이 아닙니다")
    return value


EmailText = Annotated[str, AfterValidator(_check_email)]
UrlText = Annotated[str, AfterValidator(_check_url)]


# --- 사용자 ---


class UserCreate(BaseModel):
    email: EmailText
    name: str = Field(min_length=1)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    created_at: datetime
    updated_at: datetime


# --- 헤드샷 요청 ---


class HeadshotCreate(BaseModel):
    user_id: int
    original_image_url: UrlText
    background_style: BackgroundStyle
    attire: Attire
    expression: Expression


class HeadshotUpdate(BaseModel):
    """부분 수정 요청.

    보내지 않은 필드는 그대로 두고, 명시적으로 null을 보낸 필드는 비운다.
    이 구분은 model_dump(exclude_unset=True)로 한다.
    """

    status: HeadshotStatus | None = None
    generated_image_url: UrlText | None = None
    error_message: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_not_null(cls, value):
        # status는 생략만 가능하고 null로 비울 수는 없다
        if value is None:
            raise ValueError("status는 null일 수 없습니다")
        return value

    def changes(self) -> dict:
        """명시적으로 보낸 필드만 담은 dict."""
        return self.model_dump(exclude_unset=True)


class HeadshotRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    original_image_url: str
    background_style: BackgroundStyle
    attire: Attire
    expression: Expression
    status: HeadshotStatus
    generated_image_url: str | None
    error_message: str | None
    created_at: datetime
    updated_at: datetime


class HeadshotWithUser(HeadshotRead):
    """헤드샷 요청 + 소유 사용자. 조회 전용 합성 객체이며 저장되지 않는다."""

    user: UserRead


# --- 기타 ---


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
