from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from core.exceptions import DuplicateEmail
from model.user import User


def create_user(email: str, name: str, session: Session) -> User:
    """새 사용자를 등록한다.

    1. 이메일 중복 확인
    2. DB에 저장 (동시에 같은 이메일이 들어오면 unique 제약이 막아준다)
    """
    if get_user_by_email(email, session):
        raise DuplicateEmail

    user = User(email=email, name=name)
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.warning(f"Duplicate email on insert: {email}")
        raise DuplicateEmail
    session.refresh(user)
    logger.info(f"User {user.id} created ({user.email})")
    return user


def get_user_by_email(email: str, session: Session) -> User | None:
    """대소문자를 구분하는 정확 일치. 없으면 None."""
    return session.exec(select(User).where(User.email == email)).first()
