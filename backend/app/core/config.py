# 설정 모듈
# - .env 값들을 한 곳에서 관리
# - 기본값을 제공하여 로컬 실행 편의성 확보
# - 전역 settings 객체 대신 create_app(settings)로 명시적으로 전달

from functools import lru_cache
from pathlib import Path

from fastapi import Request
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# backend/app/core/config.py 기준으로 3단계 위가 프로젝트 루트
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    APP_NAME: str = "campus-board"
    APP_VERSION: str = "1.0.0"
    ENV: str = "dev"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    MONGODB_URI: str = "mongodb://localhost:27017/campus_board"
    # 시작 시 ping 재시도 횟수
    MONGODB_CONNECT_ATTEMPTS: int = 3

    JWT_SECRET_KEY: str = Field(..., description="세션 토큰 서명용 비밀키. 반드시 강력한 랜덤 문자열로 설정하세요.")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # bcrypt cost factor (2^rounds)
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31)

    CORS_ALLOW_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # 업로드 이미지 저장 위치와 공개 URL
    UPLOAD_DIR: Path = PROJECT_ROOT / "uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    DEFAULT_PAGE_SIZE: int = 10

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """프로세스 진입점에서 사용하는 캐시된 Settings 인스턴스."""
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """요청을 처리 중인 앱에 주입된 Settings (FastAPI 의존성)."""
    return request.app.state.settings
