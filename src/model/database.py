import sqlite3

from sqlalchemy import Engine, event
from sqlmodel import Session, SQLModel, create_engine

from core.config import settings

_connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)
engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG, connect_args=_connect_args)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite는 기본적으로 FK를 검사하지 않으므로 커넥션마다 켜준다.

    headshot_requests.user_id → users.id 참조 무결성은 DB가 보장한다.
    """
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_and_tables():
    SQLModel.metadata.create_all(engine)


def get_session():
    """요청마다 세션 하나. FastAPI Depends로 주입한다."""
    with Session(engine) as session:
        yield session
