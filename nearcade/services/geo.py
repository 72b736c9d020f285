# nearcade/services/geo.py
# -----------------------------------------------------------------------------
# 좌표 관련 유틸
# - 경로 파라미터 좌표 검사 / 쿼리 문자열 좌표·정수 파싱
# - 하버사인 거리(km), 반경 보정, 검색용 위경도 박스
# -----------------------------------------------------------------------------
from __future__ import annotations

import math
import re

from nearcade.core.config import settings

EARTH_RADIUS_KM = 6371.0
KM_PER_DEG = math.pi * EARTH_RADIUS_KM / 180  # 위도 1도 ≈ 111.19km

_COORD_RE = re.compile(r"-?\d+(?:\.\d+)?", re.ASCII)
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def is_coord_param(param: str) -> bool:
    """
    경로 세그먼트가 좌표 형태인지 확인.
    위도/경도 공용이므로 더 넓은 경도 범위(-180~180)로 검사한다.
    """
    if not _COORD_RE.fullmatch(param):
        return False
    coord = float(param)
    return math.isfinite(coord) and -180 <= coord <= 180


def parse_coordinates(lat_param: str, lng_param: str) -> tuple[float, float]:
    try:
        lat = float(lat_param)
        lng = float(lng_param)
    except (TypeError, ValueError):
        raise ValueError("Invalid latitude or longitude format")
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise ValueError("Invalid latitude or longitude format")
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise ValueError("Invalid latitude or longitude format")
    return lat, lng


def calculate_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """두 좌표 사이의 대원 거리(km, 하버사인)"""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def clamp_radius(radius: int | None) -> int:
    if radius is None:
        return settings.DEFAULT_RADIUS_KM
    return max(settings.MIN_RADIUS_KM, min(settings.MAX_RADIUS_KM, int(radius)))


def bounding_box(
    lat: float, lng: float, radius_km: float
) -> tuple[float, float, float, float]:
    """
    반경 원을 감싸는 (min_lat, min_lng, max_lat, max_lng).
    극지방에서는 경도 폭이 발산하므로 전체 범위로 둔다.
    """
    d_lat = radius_km / KM_PER_DEG
    min_lat = max(-90.0, lat - d_lat)
    max_lat = min(90.0, lat + d_lat)

    # 박스 안에서 가장 극에 가까운 위도 기준
    widest = max(abs(min_lat), abs(max_lat))
    cos_lat = math.cos(math.radians(widest))
    if cos_lat < 1e-6:
        return min_lat, -180.0, max_lat, 180.0
    d_lng = radius_km / (KM_PER_DEG * cos_lat)
    if d_lng >= 180:
        return min_lat, -180.0, max_lat, 180.0
    return min_lat, lng - d_lng, max_lat, lng + d_lng


def parse_leading_int(value: str | None) -> int | None:
    """
    앞쪽 정수 부분만 읽는다 ("5.5" → 5, "5km" → 5).
    숫자로 시작하지 않으면 None.
    """
    if value is None:
        return None
    m = _LEADING_INT_RE.match(value)
    return int(m.group(1)) if m else None
