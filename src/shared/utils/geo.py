"""좌표 계산 유틸리티"""

import math

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """두 좌표 사이의 대원 거리 (미터)"""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(a))


def coordinate_key(latitude: float, longitude: float, precision: int = 4) -> str:
    """
    좌표를 캐시 키 문자열로 변환

    소수점 4자리 = 약 11m, 5자리 = 약 1.1m
    """
    return f"{latitude:.{precision}f},{longitude:.{precision}f}"


def is_valid_coordinate(latitude: object, longitude: object) -> bool:
    """위도/경도가 유한한 숫자이며 WGS84 범위 안인지 확인"""
    if isinstance(latitude, bool) or isinstance(longitude, bool):
        return False
    if not isinstance(latitude, (int, float)) or not isinstance(longitude, (int, float)):
        return False
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0
