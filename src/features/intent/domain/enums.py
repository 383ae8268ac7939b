"""의도 분석 기능의 Enum 정의"""
from enum import Enum
from typing import Optional


class TransportMode(str, Enum):
    """이동 수단"""

    TRANSIT = "TRANSIT"
    WALK = "WALK"
    DRIVE = "DRIVE"

    @classmethod
    def parse(cls, value: Optional[str]) -> "TransportMode":
        """문자열에서 변환 (알 수 없으면 TRANSIT)"""
        if not value:
            return cls.TRANSIT
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.TRANSIT


class RoutingPreference(str, Enum):
    """경로 선호 옵션 (상호 배타)"""

    LESS_WALKING = "LESS_WALKING"
    FEWER_TRANSFERS = "FEWER_TRANSFERS"

    @property
    def phrase(self) -> str:
        """개요 안내 문구"""
        return ROUTING_PREFERENCE_PHRASES[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["RoutingPreference"]:
        """문자열에서 변환 (알 수 없으면 None)"""
        if not value:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class TransitVehicleMode(str, Enum):
    """사용자가 선호하는 대중교통 수단"""

    BUS = "BUS"
    SUBWAY = "SUBWAY"
    RAIL = "RAIL"


ROUTING_PREFERENCE_PHRASES = {
    RoutingPreference.LESS_WALKING: "걷는 거리가 적은 경로로 안내합니다.",
    RoutingPreference.FEWER_TRANSFERS: "환승이 적은 경로로 안내합니다.",
}
