# nearcade/services/discover.py
from __future__ import annotations

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from nearcade.db import crud
from nearcade.db.models import Shop
from nearcade.services.geo import bounding_box, calculate_distance


async def find_nearby_shops(
    db: AsyncSession, *, lat: float, lng: float, radius_km: float
) -> list[tuple[Shop, float]]:
    """
    반경 내 오락실을 가까운 순으로 반환.
    박스 검색으로 후보를 좁힌 뒤 하버사인 거리로 원 밖을 걸러낸다.
    """
    min_lat, min_lng, max_lat, max_lng = bounding_box(lat, lng, radius_km)
    candidates = await crud.get_shops_bbox(db, min_lat, min_lng, max_lat, max_lng)

    hits: list[tuple[Shop, float]] = []
    for shop in candidates:
        distance = calculate_distance(lat, lng, shop.latitude, shop.longitude)
        if distance <= radius_km:
            hits.append((shop, distance))
    hits.sort(key=lambda pair: pair[1])

    logger.info(
        f"[discover] ({lat:.6f}, {lng:.6f}) r={radius_km}km "
        f"후보 {len(candidates)}건 → {len(hits)}건"
    )
    return hits
