"""캐시 역지오코더"""

from typing import Optional

from ....shared.logging.config import get_logger
from ....shared.utils.geo import coordinate_key
from ..domain.models import Coordinate
from .google_maps_geocoder import GoogleMapsGeocoder

logger = get_logger(__name__)


class CacheGeocoder:
    """
    캐시 역지오코더

    같은 위치(약 11m 격자)에서 경로를 반복 검색할 때
    API 호출을 줄이기 위해 메모리 캐시를 사용한다.
    """

    def __init__(self, geocoder: GoogleMapsGeocoder, precision: int = 4, max_entries: int = 256) -> None:
        """
        Args:
            geocoder: 실제 역지오코더
            precision: 캐시 키 좌표 자릿수
            max_entries: 최대 캐시 항목 수 (초과 시 가장 오래된 항목 삭제)
        """
        self.geocoder = geocoder
        self.precision = precision
        self.max_entries = max_entries
        self.cache: dict[str, Optional[str]] = {}

        logger.info("CacheGeocoder initialized")

    def reverse_geocode(self, coordinate: Coordinate) -> Optional[str]:
        """
        좌표에서 주소 라벨 조회 (캐시 사용)

        Args:
            coordinate: 좌표

        Returns:
            Optional[str]: 주소 라벨 (없으면 None)
        """
        cache_key = coordinate_key(coordinate.latitude, coordinate.longitude, self.precision)

        if cache_key in self.cache:
            logger.debug(f"Cache hit for coordinates: {cache_key}")
            return self.cache[cache_key]

        logger.debug(f"Cache miss for coordinates: {cache_key}")

        label = self.geocoder.reverse_geocode(coordinate)
        if len(self.cache) >= self.max_entries:
            self.cache.pop(next(iter(self.cache)))
        self.cache[cache_key] = label

        return label

