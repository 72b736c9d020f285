import pytest

from nearcade.services.location_token import (
    ALPHABET,
    PREFIX_LEN,
    Dense,
    Escaped,
    InvalidTokenError,
    LocationToken,
    b64_to_int,
    decode,
    encode,
    encode_escaped,
    int_to_b64,
    parse_name_segment,
    quote_name,
)


def test_alphabet_is_urlsafe_base64_order():
    assert len(ALPHABET) == 64
    assert len(set(ALPHABET)) == 64
    assert ALPHABET[0] == "A" and ALPHABET[26] == "a" and ALPHABET[52] == "0"
    assert ALPHABET[62:] == "-_"


def test_fixed_width_integers():
    assert int_to_b64(0, 5) == "AAAAA"
    assert int_to_b64(63, 1) == "_"
    assert int_to_b64(64, 2) == "BA"
    assert b64_to_int("BA") == 64
    assert b64_to_int(int_to_b64(180_000_000, 5)) == 180_000_000
    with pytest.raises(ValueError):
        int_to_b64(64, 1)
    with pytest.raises(ValueError):
        int_to_b64(-1, 5)


def test_shibuya_scenario():
    token = encode(35.6762, 139.6503, 10, "Shibuya")
    assert len(token) > PREFIX_LEN
    assert all(ch in ALPHABET for ch in token[:PREFIX_LEN])
    assert decode(token) == LocationToken(
        latitude=35.6762, longitude=139.6503, radius=10, name="Shibuya"
    )


def test_precision_is_six_decimals():
    loc = decode(encode(0.1234567, 0, 1, ""))
    assert loc.latitude == 0.123457
    assert loc.longitude == 0.0
    assert loc.name == ""


@pytest.mark.parametrize(
    "lat, lon, radius",
    [
        (-90, -180, 1),
        (90, 180, 64),
        (-90, 180, 64),
        (90, -180, 1),
        (0, 0, 32),
    ],
)
def test_boundary_values_round_trip(lat, lon, radius):
    loc = decode(encode(lat, lon, radius, "edge"))
    assert (loc.latitude, loc.longitude, loc.radius) == (lat, lon, radius)


@pytest.mark.parametrize(
    "name",
    ["", "a", "ab", "abc", "東京タワー", "Café & Bar / 2F", "🎮 arcade 🕹️", "!bang"],
)
def test_unicode_names_round_trip(name):
    token = encode(31.2304, 121.4737, 5, name)
    assert all(ch in ALPHABET for ch in token)
    assert decode(token).name == name


def test_prefix_independent_of_name():
    a = encode(12.5, -45.25, 3, "x")
    b = encode(12.5, -45.25, 3, "a much longer name, with 漢字")
    assert a[:PREFIX_LEN] == b[:PREFIX_LEN]


def test_escaped_name_matches_dense_name():
    dense = encode(35.6762, 139.6503, 10, "Tokyo")
    escaped = dense[:PREFIX_LEN] + "!" + quote_name("Tokyo")
    assert decode(escaped) == decode(dense)


def test_escaped_non_ascii_name():
    token = encode_escaped(35.6762, 139.6503, 10, quote_name("東京 駅"))
    assert token[PREFIX_LEN] == "!"
    assert "%E6%9D%B1" in token
    assert decode(token).name == "東京 駅"


def test_quote_name_keeps_uri_component_marks():
    assert quote_name("a b!*'()~") == "a%20b!*'()~"
    assert quote_name("a/b?c") == "a%2Fb%3Fc"


def test_name_segment_variants():
    assert parse_name_segment("!Tokyo") == Escaped("Tokyo")
    assert parse_name_segment(Dense.from_name("Tokyo").render()) == Dense(b"Tokyo")


@pytest.mark.parametrize("token", ["", "short", "AAAAAAAAAA"])
def test_too_short(token):
    with pytest.raises(InvalidTokenError) as exc:
        decode(token)
    assert exc.value.reason == "token too short"


@pytest.mark.parametrize("token", ["???????????", "AAAA?AAAAAA", "AAAAAAAAAA="])
def test_invalid_prefix_characters(token):
    with pytest.raises(InvalidTokenError) as exc:
        decode(token)
    assert "invalid character" in exc.value.reason


def test_malformed_base64_name():
    prefix = encode(0, 0, 1, "")
    with pytest.raises(InvalidTokenError):
        decode(prefix + "A")  # 4의 배수 + 1 길이
    with pytest.raises(InvalidTokenError):
        decode(prefix + "ab.c")


def test_name_not_utf8():
    prefix = encode(0, 0, 1, "")
    with pytest.raises(InvalidTokenError) as exc:
        decode(prefix + "_w")  # 0xFF
    assert "UTF-8" in exc.value.reason


@pytest.mark.parametrize("segment", ["!%", "!%E6%9D", "!abc%zz", "!%FF"])
def test_malformed_escaped_name(segment):
    prefix = encode(0, 0, 1, "")
    with pytest.raises(InvalidTokenError):
        decode(prefix + segment)


def test_invalid_token_error_is_value_error():
    with pytest.raises(ValueError):
        decode("")


@pytest.mark.parametrize(
    "lat, lon, radius",
    [
        (90.000001, 0, 1),
        (-91, 0, 1),
        (0, 180.5, 1),
        (0, -181, 1),
        (float("nan"), 0, 1),
        (0, float("inf"), 1),
        (0, 0, 0),
        (0, 0, 65),
        (0, 0, 2.5),
        (0, 0, True),
    ],
)
def test_encode_rejects_out_of_domain(lat, lon, radius):
    with pytest.raises(ValueError):
        encode(lat, lon, radius, "x")


def test_encode_escaped_rejects_malformed_name():
    with pytest.raises(ValueError):
        encode_escaped(0, 0, 1, "100%")
