"""pytest 공용 fixture.

모든 API 테스트는 in-memory SQLite DB를 사용하여 격리된다.
- client: TestClient (get_session 오버라이드)
- user / second_user: 미리 만들어둔 사용자
- make_headshot: 헤드샷 요청 생성 헬퍼
"""

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# 앱 import 전에 설정: 데모 유저 부트스트랩 끄기, 실제 DB 파일 만들지 않기
os.environ.setdefault("DEMO_USER_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite://")

# src/ 디렉토리를 import path에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from main import app
from model.database import get_session
from service import user_service


@pytest.fixture()
def session():
    """테스트마다 새 in-memory SQLite DB를 생성한다.

    StaticPool을 사용해야 모든 커넥션이 같은 in-memory DB를 공유한다.
    (기본값은 커넥션마다 별도 DB가 생성되어 테이블이 안 보임)
    FK 검사 PRAGMA는 model.database의 connect 이벤트가 켜준다.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as s:
        yield s


@pytest.fixture()
def client(session):
    """get_session을 테스트용 세션으로 오버라이드한 TestClient."""

    def _override():
        yield session

    app.dependency_overrides[get_session] = _override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def user(session):
    return user_service.create_user("a@x.com", "A", session)


@pytest.fixture()
def second_user(session):
    return user_service.create_user("b@x.com", "B", session)


@pytest.fixture()
def make_headshot(client):
    """POST /api/headshots로 요청을 만들고 응답 JSON을 반환한다."""

    def _make(user_id: int, **overrides) -> dict:
        payload = {
            "user_id": user_id,
            "original_image_url": "https://x/1.jpg",
            "background_style": "plain",
            "attire": "casual",
            "expression": "smiling",
        }
        payload.update(overrides)
        resp = client.post("/api/headshots", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
