# nearcade/schemas/discover.py
# -----------------------------------------------------------------------------
# 주변 탐색 / 위치 토큰 스키마
# -----------------------------------------------------------------------------
from pydantic import BaseModel
from typing import List, Optional

from nearcade.schemas.shop import ShopWithDistance


class DiscoverLocation(BaseModel):
    name: Optional[str] = None
    latitude: float
    longitude: float


class DiscoverResponse(BaseModel):
    shops: List[ShopWithDistance]
    location: DiscoverLocation
    radius: int  # 보정된 반경(km)


class TokenResponse(BaseModel):
    token: str
