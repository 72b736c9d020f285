# nearcade/core/logging.py
# -----------------------------------------------------------------------------
# Loguru 기반 로깅 설정
# - 파일 회전/백트레이스/레벨 지정
# - 개발 중에는 stderr 로도 출력
# -----------------------------------------------------------------------------
import sys
from pathlib import Path

from loguru import logger

from nearcade.core.config import settings

LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(exist_ok=True, parents=True)

logger.remove()  # 기본 핸들러 제거
logger.add(
    LOG_DIR / "app.log",
    rotation="10 MB",
    retention=10,  # 최근 10개 파일 유지
    enqueue=True,  # 멀티프로세스 안전
    backtrace=True,
    diagnose=settings.ENV == "dev",
    level=settings.LOG_LEVEL,
)
logger.add(sys.stderr, level=settings.LOG_LEVEL)
