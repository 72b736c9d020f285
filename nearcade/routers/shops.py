# nearcade/routers/shops.py
# -----------------------------------------------------------------------------
# /shops                   : 이름순 목록 / 이름·주소 검색 (페이지)
# /shops/{source}/{id}     : 단건 조회
# -----------------------------------------------------------------------------
from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from nearcade.core.config import settings
from nearcade.db import crud
from nearcade.db.session import get_session
from nearcade.schemas.shop import ShopListResponse, ShopOut
from nearcade.services.geo import parse_leading_int

router = APIRouter(prefix="/shops", tags=["shops"])


@router.get("", response_model=ShopListResponse)
async def list_shops(
    q: str = Query(""),
    page: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
):
    page_no = max(1, parse_leading_int(page) or 1)
    limit = settings.PAGE_SIZE
    skip = (page_no - 1) * limit
    try:
        rows, total = await crud.search_shops(db, q, offset=skip, limit=limit)
    except Exception:
        logger.exception("Error loading shops")
        raise HTTPException(500, detail="Failed to load shops")

    return ShopListResponse(
        shops=[ShopOut.model_validate(s) for s in rows],
        total_count=total,
        current_page=page_no,
        has_next_page=skip + len(rows) < total,
        has_prev_page=page_no > 1,
        query=q,
    )


@router.get("/{source}/{shop_id}", response_model=ShopOut)
async def get_shop(source: str, shop_id: int, db: AsyncSession = Depends(get_session)):
    shop = await crud.get_shop(db, source, shop_id)
    if shop is None:
        raise HTTPException(404, detail="Shop not found")
    return ShopOut.model_validate(shop)
