"""텍스트/좌표 유틸리티 테스트"""

import math

import pytest

from src.shared.utils.geo import coordinate_key, haversine_m, is_valid_coordinate
from src.shared.utils.text import (
    compact,
    contains_non_digit,
    has_final_consonant,
    is_numeric,
    with_direction_particle,
    with_object_particle,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("143번 버스", "143번 버스를"),
        ("2호선", "2호선을"),
        ("신분당선", "신분당선을"),
        ("경의중앙선 기차", "경의중앙선 기차를"),
        ("M4102", "M4102을(를)"),
    ],
)
def test_with_object_particle(text: str, expected: str) -> None:
    """받침에 따라 을/를 선택"""
    assert with_object_particle(text) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("코엑스", "코엑스로"),
        ("서울역", "서울역으로"),
        ("을지로", "을지로로"),
        ("서울대입구역 3번 출구", "서울대입구역 3번 출구로"),
        ("시청", "시청으로"),
        ("강남구청 1", "강남구청 1(으)로"),
    ],
)
def test_with_direction_particle(text: str, expected: str) -> None:
    """받침/ㄹ받침에 따라 으로/로 선택"""
    assert with_direction_particle(text) == expected


def test_has_final_consonant_non_hangul() -> None:
    """한글이 아니면 None"""
    assert has_final_consonant("bus") is None
    assert has_final_consonant("") is None


def test_numeric_helpers() -> None:
    """숫자 판정"""
    assert is_numeric("143")
    assert not is_numeric("N26")
    assert not is_numeric("")
    assert contains_non_digit("잠실 방면")
    assert not contains_non_digit("1234")
    assert not contains_non_digit(None)


def test_compact() -> None:
    """이름 비교용 공백 제거"""
    assert compact(" 스타 벅스 강남점 ") == "스타벅스강남점"


def test_haversine_known_distance() -> None:
    """위도 0.001도 ≈ 111m"""
    distance = haversine_m(37.0, 127.0, 37.001, 127.0)
    assert 110.0 < distance < 112.5


def test_coordinate_key_precision() -> None:
    """소수점 4자리 반올림 키"""
    assert coordinate_key(37.56651, 126.97801) == "37.5665,126.9780"
    assert coordinate_key(37.56651, 126.97801, precision=5) == "37.56651,126.97801"


@pytest.mark.parametrize(
    "latitude,longitude,expected",
    [
        (37.5, 127.0, True),
        (90.0, -180.0, True),
        (91.0, 0.0, False),
        (0.0, 181.0, False),
        (math.nan, 0.0, False),
        (math.inf, 0.0, False),
        (None, 127.0, False),
        ("37.5", 127.0, False),
        (True, 127.0, False),
    ],
)
def test_is_valid_coordinate(latitude: object, longitude: object, expected: bool) -> None:
    """유한한 WGS84 좌표만 허용"""
    assert is_valid_coordinate(latitude, longitude) is expected
