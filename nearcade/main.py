# nearcade/main.py
# -----------------------------------------------------------------------------
# FastAPI 엔트리포인트
# - 서버 기동 시 테이블 생성
# - 위치 토큰 해석 실패는 400 으로 응답
# -----------------------------------------------------------------------------
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from nearcade.core import logging  # noqa: F401  (로거 설정)
from nearcade.core.config import settings
from nearcade.db import models  # noqa: F401  (테이블 등록)
from nearcade.db.session import Base, engine
from nearcade.routers import admin, discover, shops
from nearcade.services.location_token import InvalidTokenError

app = FastAPI(title=settings.APP_NAME)


@app.on_event("startup")
async def on_startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{settings.APP_NAME} started (env={settings.ENV})")


@app.exception_handler(InvalidTokenError)
async def invalid_token_handler(request: Request, exc: InvalidTokenError):
    logger.warning(f"[token] {request.url.path}: {exc.reason}")
    return JSONResponse(status_code=400, content={"detail": exc.reason})


app.include_router(discover.router)
app.include_router(shops.router)
app.include_router(admin.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
