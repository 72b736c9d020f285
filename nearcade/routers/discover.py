# nearcade/routers/discover.py
# -----------------------------------------------------------------------------
# /discover                          : 쿼리 문자열 좌표로 주변 오락실
# /discover/{latitude}/{longitude}   : 경로 좌표로 주변 오락실
# /discover/t/{token}                : 위치 토큰으로 주변 오락실 (원본 경로 기준 해석)
# /discover/token                    : 위치 토큰 발급
# -----------------------------------------------------------------------------
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from nearcade.core.config import settings
from nearcade.db.session import get_session
from nearcade.schemas.discover import DiscoverLocation, DiscoverResponse, TokenResponse
from nearcade.schemas.shop import ShopOut, ShopWithDistance
from nearcade.services import location_token
from nearcade.services.discover import find_nearby_shops
from nearcade.services.geo import (
    clamp_radius,
    is_coord_param,
    parse_coordinates,
    parse_leading_int,
)

router = APIRouter(prefix="/discover", tags=["discover"])

INVALID_COORDS = "Invalid latitude or longitude format"


async def _search(
    db: AsyncSession, lat: float, lng: float, radius: int | None, name: str | None
) -> DiscoverResponse:
    radius_km = clamp_radius(radius)
    try:
        hits = await find_nearby_shops(db, lat=lat, lng=lng, radius_km=radius_km)
    except Exception:
        logger.exception("Error loading shops")
        raise HTTPException(500, detail="Failed to load shops from database")

    shops = [
        ShopWithDistance(**ShopOut.model_validate(shop).model_dump(), distance=d)
        for shop, d in hits
    ]
    return DiscoverResponse(
        shops=shops,
        location=DiscoverLocation(name=name, latitude=lat, longitude=lng),
        radius=radius_km,
    )


@router.get("", response_model=DiscoverResponse)
async def discover(
    latitude: str | None = Query(None),
    longitude: str | None = Query(None),
    lat: str | None = Query(None),
    lng: str | None = Query(None),
    radius: str | None = Query(None),
    name: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
):
    lat_param = latitude if latitude is not None else lat
    lng_param = longitude if longitude is not None else lng
    if not lat_param or not lng_param:
        raise HTTPException(400, detail="Latitude and longitude parameters are required")
    try:
        la, ln = parse_coordinates(lat_param, lng_param)
    except ValueError:
        raise HTTPException(400, detail=INVALID_COORDS)
    return await _search(db, la, ln, parse_leading_int(radius), name)


@router.get("/token", response_model=TokenResponse)
async def issue_token(
    latitude: float = Query(...),
    longitude: float = Query(...),
    radius: int = Query(settings.DEFAULT_RADIUS_KM),
    name: str = Query(""),
    escaped: bool = Query(False, description="name 이 이미 퍼센트 인코딩된 경우"),
):
    try:
        if escaped:
            token = location_token.encode_escaped(latitude, longitude, radius, name)
        else:
            token = location_token.encode(latitude, longitude, radius, name)
    except ValueError as e:
        raise HTTPException(400, detail=str(e))
    return TokenResponse(token=token)


TOKEN_PREFIX = router.prefix + "/t/"


def _raw_token(request: Request, token: str) -> str:
    """
    서버가 퍼센트 디코딩하기 전의 토큰 세그먼트.
    '!' 형식 이름은 decode 에서 한 번만 풀어야 '%', '/' 가 보존된다.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        return token
    path = raw_path.decode("latin-1").split("?", 1)[0]
    idx = path.find(TOKEN_PREFIX)
    return path[idx + len(TOKEN_PREFIX) :] if idx >= 0 else token


@router.get("/t/{token:path}", response_model=DiscoverResponse)
async def discover_by_token(
    request: Request, token: str, db: AsyncSession = Depends(get_session)
):
    # InvalidTokenError 는 main 의 예외 핸들러가 400 으로 변환
    loc = location_token.decode(_raw_token(request, token))
    if not (-90 <= loc.latitude <= 90 and -180 <= loc.longitude <= 180):
        raise HTTPException(400, detail=INVALID_COORDS)
    return await _search(db, loc.latitude, loc.longitude, loc.radius, loc.name)


@router.get("/{latitude}/{longitude}", response_model=DiscoverResponse)
async def discover_at(
    latitude: str,
    longitude: str,
    radius: str | None = Query(None),
    name: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
):
    if not (is_coord_param(latitude) and is_coord_param(longitude)):
        raise HTTPException(404, detail="Not Found")
    try:
        la, ln = parse_coordinates(latitude, longitude)
    except ValueError:
        raise HTTPException(400, detail=INVALID_COORDS)
    return await _search(db, la, ln, parse_leading_int(radius), name)
