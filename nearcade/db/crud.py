# nearcade/db/crud.py
# -----------------------------------------------------------------------------
# 읽기/쓰기 유틸 함수 모음
# - bbox 조회 (날짜변경선 걸침 처리)
# - 단건 조회 / 이름·주소 검색(페이지) / 중복 방지 저장
# - 적재 이력
# -----------------------------------------------------------------------------
from sqlalchemy import String, and_, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from nearcade.db.models import Shop, IngestLog
from typing import Sequence


async def get_shops_bbox(
    db: AsyncSession, min_lat: float, min_lon: float, max_lat: float, max_lon: float
) -> Sequence[Shop]:
    if min_lon < -180:
        lon_cond = or_(Shop.longitude >= min_lon + 360, Shop.longitude <= max_lon)
    elif max_lon > 180:
        lon_cond = or_(Shop.longitude >= min_lon, Shop.longitude <= max_lon - 360)
    else:
        lon_cond = Shop.longitude.between(min_lon, max_lon)

    stmt = select(Shop).where(Shop.latitude.between(min_lat, max_lat), lon_cond)
    res = await db.execute(stmt)
    return res.scalars().all()


async def get_shop(db: AsyncSession, source: str, shop_id: int) -> Shop | None:
    stmt = select(Shop).where(Shop.source == source, Shop.shop_id == shop_id)
    res = await db.execute(stmt)
    return res.scalar_one_or_none()


def _like_pattern(q: str) -> str:
    escaped = q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def search_shops(
    db: AsyncSession, q: str, *, offset: int, limit: int
) -> tuple[Sequence[Shop], int]:
    """
    이름/일반주소 부분일치(대소문자 무시) 검색 + 이름순 페이지.
    q 가 비어 있으면 전체 목록. (행, 전체 건수) 반환
    """
    conds = []
    if q.strip():
        pattern = _like_pattern(q.strip())
        conds.append(
            or_(
                Shop.name.ilike(pattern, escape="\\"),
                cast(Shop.address_general, String).ilike(pattern, escape="\\"),
            )
        )

    total = (await db.execute(select(func.count(Shop.id)).where(*conds))).scalar_one()
    stmt = (
        select(Shop)
        .where(*conds)
        .order_by(Shop.name, Shop.id)
        .offset(offset)
        .limit(limit)
    )
    res = await db.execute(stmt)
    return res.scalars().all(), total


async def save_shops(db: AsyncSession, shops: list[dict]) -> int:
    """(source, shop_id) 기준 없는 것만 추가. 추가 건수 반환"""
    inserted = 0
    for s in shops:
        stmt = select(Shop.id).where(
            and_(Shop.source == s["source"], Shop.shop_id == s["shop_id"])
        )
        res = await db.execute(stmt)
        if res.scalar_one_or_none() is None:
            db.add(Shop(**s))
            inserted += 1
    await db.commit()
    return inserted


async def mark(db: AsyncSession, key: str, status: str) -> None:
    db.add(IngestLog(source=key, status=status))
    await db.commit()


async def list_ingest_logs(db: AsyncSession) -> Sequence[IngestLog]:
    res = await db.execute(select(IngestLog).order_by(IngestLog.id))
    return res.scalars().all()
