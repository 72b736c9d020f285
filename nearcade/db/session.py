# nearcade/db/session.py
# -----------------------------------------------------------------------------
# 비동기 DB 연결
# - 엔진/세션팩토리는 프로세스 단위로 하나, 세션은 요청마다 새로
# - JSON 컬럼은 ensure_ascii=False 로 저장 (주소 검색 시 한자 그대로 매칭)
# -----------------------------------------------------------------------------
import json
from collections.abc import AsyncGenerator
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from nearcade.core.config import settings


def _dumps(value) -> str:
    return json.dumps(value, ensure_ascii=False)


engine = create_async_engine(settings.DATABASE_URL, echo=False, json_serializer=_dumps)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)
Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
