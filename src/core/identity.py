"""앱 시작 시 사용할 사용자 신원.

프론트엔드는 인증 없이 이메일만으로 사용자를 구분한다.
앱 초기화 단계에서 IdentityProvider가 사용자를 하나 준비해두고,
실패하면 None을 남겨 클라이언트가 직접 가입 폼을 띄우게 한다.

provider는 lifespan 시작 전에 app.state.identity_provider로 주입할 수 있다.
주입하지 않으면 설정값(build_identity_provider)으로 결정한다.
"""

import time
from typing import Protocol

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from core.config import Settings
from core.exceptions import AppException
from model.schema import UserRead
from model.user import User
from service import user_service


class IdentityProvider(Protocol):
    def resolve(self, session: Session) -> User: ...


class DemoIdentityProvider:
    """실행할 때마다 새 데모 사용자를 만든다 (demo-<epoch ms>@<domain>)."""

    def __init__(self, domain: str = "headshot.studio", name: str = "Demo User"):
        self.domain = domain
        self.name = name

    def resolve(self, session: Session) -> User:
        email = f"demo-{int(time.time() * 1000)}@{self.domain}"
        return user_service.create_user(email, self.name, session)


class ConfiguredIdentityProvider:
    """고정된 이메일의 사용자를 조회하고, 없으면 만든다."""

    def __init__(self, email: str, name: str):
        self.email = email
        self.name = name

    def resolve(self, session: Session) -> User:
        user = user_service.get_user_by_email(self.email, session)
        if user:
            return user
        return user_service.create_user(self.email, self.name, session)


def build_identity_provider(settings: Settings) -> IdentityProvider | None:
    if settings.IDENTITY_EMAIL:
        return ConfiguredIdentityProvider(
            settings.IDENTITY_EMAIL, settings.IDENTITY_NAME or settings.IDENTITY_EMAIL
        )
    if settings.DEMO_USER_ENABLED:
        return DemoIdentityProvider(settings.DEMO_EMAIL_DOMAIN, settings.DEMO_USER_NAME)
    return None


def bootstrap_identity(
    provider: IdentityProvider | None, session: Session
) -> UserRead | None:
    """provider로 사용자를 준비한다. 실패해도 앱 시작은 막지 않는다."""
    if provider is None:
        logger.info("Identity bootstrap disabled")
        return None

    try:
        user = provider.resolve(session)
    except (AppException, SQLAlchemyError) as e:
        logger.warning(f"Identity bootstrap failed, falling back to signup: {e}")
        return None

    logger.info(f"Identity ready: user {user.id} ({user.email})")
    return UserRead.model_validate(user)
