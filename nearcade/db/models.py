# nearcade/db/models.py
# -----------------------------------------------------------------------------
# ORM 모델 정의
# - Shop: 오락실(기체 목록 포함)
# - IngestLog: 데이터 적재 이력
# -----------------------------------------------------------------------------
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, Index, Integer, String, UniqueConstraint
from nearcade.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Shop(Base):
    __tablename__ = "shops"

    id = Column(Integer, primary_key=True, index=True)
    source = Column(String, nullable=False)  # 예: "bemanicn", "ziv"
    shop_id = Column(Integer, nullable=False)  # source 내부 id
    name = Column(String, index=True, nullable=False)
    comment = Column(String, default="")
    address_general = Column(JSON, default=list)  # ["上海市", "黄浦区"]
    address_detailed = Column(String, default="")
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    games = Column(JSON, default=list)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # 지오쿼리 최적화
    __table_args__ = (
        UniqueConstraint("source", "shop_id", name="uq_shops_source_shop_id"),
        Index("ix_shops_lat_lon", "latitude", "longitude"),
    )


class IngestLog(Base):
    __tablename__ = "ingest_logs"

    id = Column(Integer, primary_key=True)
    source = Column(String, index=True)  # 예: "mock_shops"
    status = Column(String)  # "done" | "error:..."
