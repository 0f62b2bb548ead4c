from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger
from sqlmodel import Session

from core.config import settings
from core.identity import bootstrap_identity, build_identity_provider
from model.database import create_db_and_tables, engine
from utility.logger import setup_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    # === 시작 ===
    setup_logger(settings.LOG_LEVEL)
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION}")

    create_db_and_tables()
    logger.info(f"Database ready ({settings.DATABASE_URL})")

    app.state.settings = settings

    # 테스트 등에서 미리 주입한 provider가 있으면 그것을 쓴다
    provider = getattr(app.state, "identity_provider", None) or build_identity_provider(
        settings
    )
    with Session(engine) as session:
        app.state.current_user = bootstrap_identity(provider, session)

    yield

    # === 종료 ===
    logger.info("Shutting down")
