"""장소 기능의 도메인 모델"""
from dataclasses import dataclass, field
from typing import Optional

from ....shared.utils.geo import haversine_m, is_valid_coordinate


@dataclass(frozen=True)
class Coordinate:
    """WGS84 좌표"""

    latitude: float  # 위도
    longitude: float  # 경도

    def __post_init__(self) -> None:
        if not is_valid_coordinate(self.latitude, self.longitude):
            raise ValueError(f"Invalid coordinate: ({self.latitude}, {self.longitude})")

    def distance_to(self, other: "Coordinate") -> float:
        """다른 좌표까지의 거리 (미터)"""
        return haversine_m(self.latitude, self.longitude, other.latitude, other.longitude)

    def rounded(self, precision: int) -> tuple[float, float]:
        """지정 자릿수로 반올림한 (위도, 경도)"""
        return (round(self.latitude, precision), round(self.longitude, precision))

    def to_tuple(self) -> tuple[float, float]:
        """(위도, 경도) 튜플로 반환"""
        return (self.latitude, self.longitude)

    @classmethod
    def from_optional(cls, latitude: object, longitude: object) -> Optional["Coordinate"]:
        """좌표가 유효하면 Coordinate, 아니면 None"""
        if not is_valid_coordinate(latitude, longitude):
            return None
        return cls(float(latitude), float(longitude))  # type: ignore[arg-type]


@dataclass(frozen=True)
class Place:
    """
    장소 (검색 응답마다 생성, 불변)

    좌표가 없는 장소는 파싱 단계에서 버려지므로 coordinate는 항상 존재한다.
    """

    place_id: str
    name: str
    address: str
    coordinate: Coordinate
    types: frozenset[str] = field(default_factory=frozenset)
    is_wheelchair_accessible: bool = False
    source: str = ""  # 제공자 이름 (overpass, google_places)

    @property
    def accessible_description(self) -> str:
        """음성 안내용 설명"""
        base = f"{self.name}. {self.address}." if self.address else f"{self.name}."
        if self.is_wheelchair_accessible:
            base += " 입구에 턱이 없습니다."
        return base

    def to_dict(self) -> dict[str, object]:
        """API 응답용 딕셔너리로 변환"""
        return {
            "place_id": self.place_id,
            "name": self.name,
            "address": self.address,
            "latitude": self.coordinate.latitude,
            "longitude": self.coordinate.longitude,
            "types": sorted(self.types),
            "is_wheelchair_accessible": self.is_wheelchair_accessible,
            "source": self.source,
        }


@dataclass
class NearbySearchResult:
    """
    주변 탐색 결과

    failure_reason이 있으면 제공자 장애로 비어 있는 결과이며,
    "주변에 장소 없음"과 구분해서 안내해야 한다.
    """

    places: list[Place] = field(default_factory=list)
    from_cache: bool = False
    used_rich_provider: bool = False
    failure_reason: Optional[str] = None

    @property
    def is_provider_failure(self) -> bool:
        """제공자 장애로 인한 빈 결과인지"""
        return self.failure_reason is not None
