# nearcade/services/location_token.py
# -----------------------------------------------------------------------------
# 위치 토큰 코덱
# - (위도, 경도, 반경, 이름) → URL 경로에 그대로 쓸 수 있는 짧은 문자열
# - 앞 11자: 위도 5자 + 경도 5자 + 반경 1자 (base64url 고정폭 정수)
# - 나머지: 이름 (기본은 UTF-8 base64url, '!' 로 시작하면 퍼센트 인코딩)
# -----------------------------------------------------------------------------
from __future__ import annotations

import base64
import binascii
import math
import re
from dataclasses import dataclass
from typing import Union
from urllib.parse import quote, unquote_to_bytes

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}
_BASE = len(ALPHABET)

LAT_WIDTH = 5
LON_WIDTH = 5
RADIUS_WIDTH = 1
PREFIX_LEN = LAT_WIDTH + LON_WIDTH + RADIUS_WIDTH  # 11

SCALE = 1_000_000
MAX_RADIUS = _BASE**RADIUS_WIDTH  # 64

ESCAPE_MARK = "!"
# encodeURIComponent 가 그대로 두는 문자
_URI_COMPONENT_SAFE = "-_.!~*'()"
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class InvalidTokenError(ValueError):
    """토큰 해석 실패. reason 에 사람이 읽을 수 있는 사유를 담는다."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True, slots=True)
class LocationToken:
    latitude: float
    longitude: float
    radius: int
    name: str


# ── 고정폭 정수 ↔ 문자열 ──────────────────────────────────────────────────────
def int_to_b64(value: int, width: int) -> str:
    if value < 0 or value >= _BASE**width:
        raise ValueError(f"{value} does not fit in {width} base64 digits")
    out = []
    for _ in range(width):
        value, rem = divmod(value, _BASE)
        out.append(ALPHABET[rem])
    return "".join(reversed(out))


def b64_to_int(text: str) -> int:
    result = 0
    for ch in text:
        idx = _INDEX.get(ch)
        if idx is None:
            raise InvalidTokenError(f"invalid character: {ch!r}")
        result = result * _BASE + idx
    return result


# ── 이름 인코딩 (Dense | Escaped) ─────────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class Dense:
    """UTF-8 바이트를 패딩 없는 base64url 로 담는 기본 형식"""

    data: bytes

    @classmethod
    def from_name(cls, name: str) -> "Dense":
        return cls(name.encode("utf-8"))

    def render(self) -> str:
        return base64.urlsafe_b64encode(self.data).rstrip(b"=").decode("ascii")

    def to_name(self) -> str:
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidTokenError(f"name is not valid UTF-8: {e}") from e


@dataclass(frozen=True, slots=True)
class Escaped:
    """이미 퍼센트 인코딩된 이름. 토큰에서는 '!' 뒤에 그대로 붙는다."""

    text: str

    def render(self) -> str:
        return ESCAPE_MARK + self.text

    def to_name(self) -> str:
        bad = _BAD_ESCAPE.search(self.text)
        if bad:
            raise InvalidTokenError(
                f"malformed percent-escape at position {bad.start()}"
            )
        try:
            return unquote_to_bytes(self.text).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidTokenError(f"escaped name is not valid UTF-8: {e}") from e


NameEncoding = Union[Dense, Escaped]


def parse_name_segment(segment: str) -> NameEncoding:
    if segment.startswith(ESCAPE_MARK):
        return Escaped(segment[len(ESCAPE_MARK) :])

    std = segment.replace("-", "+").replace("_", "/")
    std += "=" * (-len(std) % 4)
    try:
        return Dense(base64.b64decode(std, validate=True))
    except binascii.Error as e:
        raise InvalidTokenError(f"malformed base64 name: {e}") from e


def quote_name(name: str) -> str:
    """encodeURIComponent 와 같은 규칙의 퍼센트 인코딩"""
    return quote(name, safe=_URI_COMPONENT_SAFE)


# ── encode / decode ──────────────────────────────────────────────────────────
def _check_domain(latitude: float, longitude: float, radius: int) -> None:
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ValueError("latitude/longitude must be finite numbers")
    if not -90 <= latitude <= 90:
        raise ValueError(f"latitude out of range [-90, 90]: {latitude}")
    if not -180 <= longitude <= 180:
        raise ValueError(f"longitude out of range [-180, 180]: {longitude}")
    if isinstance(radius, bool) or not isinstance(radius, int):
        raise ValueError(f"radius must be an integer: {radius!r}")
    if not 1 <= radius <= MAX_RADIUS:
        raise ValueError(f"radius out of range [1, {MAX_RADIUS}]: {radius}")


def _encode_prefix(latitude: float, longitude: float, radius: int) -> str:
    _check_domain(latitude, longitude, radius)
    lat_int = round((latitude + 90) * SCALE)
    lon_int = round((longitude + 180) * SCALE)
    return (
        int_to_b64(lat_int, LAT_WIDTH)
        + int_to_b64(lon_int, LON_WIDTH)
        + int_to_b64(radius - 1, RADIUS_WIDTH)
    )


def encode_with(
    latitude: float, longitude: float, radius: int, name: NameEncoding
) -> str:
    return _encode_prefix(latitude, longitude, radius) + name.render()


def encode(latitude: float, longitude: float, radius: int, name: str) -> str:
    """
    위치를 토큰으로 압축. 이름은 항상 Dense 형식으로 담는다.
    범위를 벗어난 입력은 보정하지 않고 ValueError.
    """
    return encode_with(latitude, longitude, radius, Dense.from_name(name))


def encode_escaped(
    latitude: float, longitude: float, radius: int, escaped_name: str
) -> str:
    """이미 퍼센트 인코딩된 이름을 재가공 없이 '!' 형식으로 담는다."""
    escaped = Escaped(escaped_name)
    try:
        escaped.to_name()
    except InvalidTokenError as e:
        raise ValueError(f"malformed escaped name: {e.reason}") from e
    return encode_with(latitude, longitude, radius, escaped)


def decode(token: str) -> LocationToken:
    if len(token) < PREFIX_LEN:
        raise InvalidTokenError("token too short")

    prefix, name_data = token[:PREFIX_LEN], token[PREFIX_LEN:]
    lat_int = b64_to_int(prefix[:LAT_WIDTH])
    lon_int = b64_to_int(prefix[LAT_WIDTH : LAT_WIDTH + LON_WIDTH])
    rad_int = b64_to_int(prefix[LAT_WIDTH + LON_WIDTH :])

    latitude = (lat_int - 90 * SCALE) / SCALE
    longitude = (lon_int - 180 * SCALE) / SCALE

    return LocationToken(
        latitude=round(latitude, 6),
        longitude=round(longitude, 6),
        radius=rad_int + 1,
        name=parse_name_segment(name_data).to_name(),
    )
