# nearcade/schemas/shop.py

from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class Game(BaseModel):
    game_id: int
    title_id: int
    name: str
    version: str = ""
    comment: str = ""
    quantity: int = 1
    cost: str = ""


class ShopOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    source: str
    shop_id: int
    name: str
    comment: str = ""
    address_general: List[str] = []
    address_detailed: str = ""
    latitude: float
    longitude: float
    games: List[Game] = []
    updated_at: Optional[datetime] = None


class ShopWithDistance(ShopOut):
    distance: float  # km


class ShopListResponse(BaseModel):
    shops: List[ShopOut]
    total_count: int
    current_page: int
    has_next_page: bool
    has_prev_page: bool
    query: str
