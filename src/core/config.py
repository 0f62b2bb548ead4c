from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # 앱 설정
    APP_NAME: str = "headshot-studio"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "DEBUG"

    # 서버 설정
    HOST: str = "0.0.0.0"
    PORT: int = 2022
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # DB 설정
    DATABASE_URL: str = "sqlite:///./headshot_studio.db"

    # 상태 전이 검증 (기본값 false: 워커가 어떤 상태든 기록할 수 있음)
    ENFORCE_STATUS_TRANSITIONS: bool = False

    # 앱 시작 시 사용할 신원 (IDENTITY_EMAIL이 있으면 데모 유저보다 우선)
    DEMO_USER_ENABLED: bool = True
    DEMO_USER_NAME: str = "Demo User"
    DEMO_EMAIL_DOMAIN: str = "headshot.studio"
    IDENTITY_EMAIL: str | None = None
    IDENTITY_NAME: str | None = None

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
