# nearcade/routers/admin.py
# -----------------------------------------------------------------------------
# 데모 데이터 적재/로그 조회
# -----------------------------------------------------------------------------
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from nearcade.db import crud
from nearcade.db.session import get_session
from nearcade.services.ingest import load_mock

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/ingest/mock")
async def ingest_mock(db: AsyncSession = Depends(get_session)):
    try:
        return await load_mock(db)
    except Exception as e:
        raise HTTPException(500, detail=str(e))


@router.get("/logs")
async def get_ingest_logs(db: AsyncSession = Depends(get_session)):
    logs = await crud.list_ingest_logs(db)
    return [{"id": x.id, "source": x.source, "status": x.status} for x in logs]
