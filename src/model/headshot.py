from datetime import datetime
from enum import Enum

from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, SQLModel

from model.user import utcnow


class BackgroundStyle(str, Enum):
    PLAIN = "plain"
    OFFICE = "office"
    OUTDOOR = "outdoor"
    STUDIO = "studio"
    GRADIENT = "gradient"


class Attire(str, Enum):
    BUSINESS_CASUAL = "business_casual"
    FORMAL = "formal"
    CASUAL = "casual"
    SMART_CASUAL = "smart_casual"


class Expression(str, Enum):
    SMILING = "smiling"
    SERIOUS = "serious"
    CONFIDENT = "confident"
    FRIENDLY = "friendly"
    PROFESSIONAL = "professional"


class HeadshotStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


def _enum_type(enum_cls: type[Enum], name: str) -> SAEnum:
    """멤버 이름(PENDING)이 아니라 값(pending)으로 저장한다."""
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
    )


class HeadshotRequest(SQLModel, table=True):
    __tablename__ = "headshot_requests"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    original_image_url: str
    background_style: BackgroundStyle = Field(
        sa_type=_enum_type(BackgroundStyle, "background_style")
    )
    attire: Attire = Field(sa_type=_enum_type(Attire, "attire"))
    expression: Expression = Field(sa_type=_enum_type(Expression, "expression"))
    status: HeadshotStatus = Field(
        default=HeadshotStatus.PENDING,
        sa_type=_enum_type(HeadshotStatus, "headshot_status"),
        index=True,
    )  # pending, processing, completed, failed
    generated_image_url: str | None = None
    error_message: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
