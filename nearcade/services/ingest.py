# nearcade/services/ingest.py
# -----------------------------------------------------------------------------
# 데모용 MOCK 오락실 적재
# - (source, shop_id) 기준으로 중복 없이 저장
# - 적재 결과는 IngestLog 에 남긴다
# -----------------------------------------------------------------------------
from __future__ import annotations

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from nearcade.db import crud

MOCK_KEY = "mock_shops"

# ── MOCK DEMO DATA (상하이 인민광장 주변 + 베이징 1곳) ─────────────────────────
MOCK = [
    {
        "source": "bemanicn",
        "shop_id": 1001,
        "name": "Neon Arcade People's Square",
        "comment": "地铁1号线出口旁",
        "address_general": ["上海市", "黄浦区"],
        "address_detailed": "南京东路 1号 3F",
        "latitude": 31.2330,
        "longitude": 121.4750,
        "games": [
            {
                "game_id": 1,
                "title_id": 1,
                "name": "maimai DX",
                "version": "PRiSM",
                "comment": "",
                "quantity": 2,
                "cost": "2币1PC",
            }
        ],
    },
    {
        "source": "bemanicn",
        "shop_id": 1002,
        "name": "Rhythm Hall Huaihai",
        "comment": "",
        "address_general": ["上海市", "黄浦区"],
        "address_detailed": "淮海中路 200号 B1",
        "latitude": 31.2200,
        "longitude": 121.4600,
        "games": [
            {
                "game_id": 2,
                "title_id": 4,
                "name": "CHUNITHM",
                "version": "VERSE",
                "comment": "",
                "quantity": 1,
                "cost": "1币1PC",
            }
        ],
    },
    {
        "source": "ziv",
        "shop_id": 77,
        "name": "Wujiaochang Game Center",
        "comment": "",
        "address_general": ["上海市", "杨浦区"],
        "address_detailed": "邯郸路 600号",
        "latitude": 31.3000,
        "longitude": 121.5000,
        "games": [],
    },
    {
        "source": "ziv",
        "shop_id": 78,
        "name": "Wangfujing Arcade",
        "comment": "",
        "address_general": ["北京市", "东城区"],
        "address_detailed": "王府井大街 88号",
        "latitude": 39.9139,
        "longitude": 116.4103,
        "games": [],
    },
]


async def load_mock(db: AsyncSession) -> dict:
    try:
        inserted = await crud.save_shops(db, [dict(m) for m in MOCK])
    except Exception as e:  # 실패도 로그 남김
        await db.rollback()
        await crud.mark(db, MOCK_KEY, f"error:{e}")
        logger.exception("[ingest] mock 적재 실패")
        raise
    await crud.mark(db, MOCK_KEY, "done")
    logger.info(f"[ingest] mock 적재 {inserted}건")
    return {"status": "ok", "inserted": inserted}
