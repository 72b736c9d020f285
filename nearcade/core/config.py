# nearcade/core/config.py
# -----------------------------------------------------------------------------
# 전역 설정 관리 (pydantic-settings v2)
# - .env 파일과 OS 환경변수를 읽어 Settings 객체로 제공
# - 탐색 반경 기본값/상하한도 여기서 관리
# -----------------------------------------------------------------------------
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # 기본
    APP_NAME: str = "nearcade"
    ENV: str = "dev"
    DATABASE_URL: str = "sqlite+aiosqlite:///./nearcade.db"

    # 로깅
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # 주변 탐색 반경 (km)
    DEFAULT_RADIUS_KM: int = 10
    MIN_RADIUS_KM: int = 1
    MAX_RADIUS_KM: int = 30

    # 오락실 목록 페이지 크기
    PAGE_SIZE: int = 50

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore"  # .env에 추가 필드 무시
    )


settings = Settings()
