"""근접 캐시 - 위치가 거의 바뀌지 않았으면 주변 탐색 결과를 재사용"""
from typing import Optional

from ....shared.logging.config import get_logger
from ....shared.utils.geo import coordinate_key
from ..domain.models import Coordinate, Place

logger = get_logger(__name__)


class ProximityCache:
    """
    근접 캐시

    마지막으로 성공한 검색 한 건만 보관한다. 그 위치에서 threshold_m 미만으로
    움직였으면 결과를 돌려준다. TTL은 없고, 이동과 새 검색으로만 무효화된다.
    키는 소수점 4자리(약 11m)로 반올림한 좌표.
    """

    def __init__(self, threshold_m: float = 15.0, precision: int = 4) -> None:
        """
        Args:
            threshold_m: 캐시를 재사용하는 최대 이동 거리 (미터)
            precision: 캐시 키 좌표 자릿수
        """
        self.threshold_m = threshold_m
        self.precision = precision
        self._key: Optional[str] = None
        self._places: list[Place] = []
        self._last_location: Optional[Coordinate] = None

    def get(self, location: Coordinate) -> Optional[list[Place]]:
        """
        캐시된 장소 목록 조회

        Args:
            location: 현재 위치

        Returns:
            Optional[list[Place]]: 이동 거리가 임계값 미만이면 캐시 결과, 아니면 None
        """
        last = self._last_location
        if last is None:
            return None

        moved = location.distance_to(last)
        if moved >= self.threshold_m:
            logger.debug(f"Proximity cache miss: moved {moved:.1f}m")
            return None

        logger.debug(f"Proximity cache hit ({self._key}): moved {moved:.1f}m, {len(self._places)} places")
        return list(self._places)

    def put(self, location: Coordinate, places: list[Place]) -> None:
        """
        검색 결과 저장 (이전 결과는 대체됨)

        Args:
            location: 검색 위치
            places: 장소 목록
        """
        self._key = coordinate_key(location.latitude, location.longitude, self.precision)
        self._places = list(places)
        self._last_location = location

    @property
    def last_location(self) -> Optional[Coordinate]:
        """마지막 검색 위치"""
        return self._last_location
