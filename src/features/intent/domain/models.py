"""의도 분석 기능의 도메인 모델"""
from dataclasses import dataclass, field
from typing import Any, Optional

from ....shared.exceptions.errors import DecodeError
from .enums import RoutingPreference, TransitVehicleMode, TransportMode

# LLM 응답에 반드시 있어야 하는 키
REQUIRED_KEYS = ("destinationName", "transportMode")


@dataclass(frozen=True)
class LocationIntent:
    """
    사용자 발화에서 추출한 이동 의도

    clarification_needed가 True이면 clarification_question이 있어야 하지만,
    LLM이 지키지 않을 수 있으므로 호출 측에서 확인한다.
    """

    destination_name: str  # 목적지 (인식 실패 시에만 빈 문자열)
    origin_name: str = ""  # 출발지 (빈 문자열 = 현재 위치)
    transport_mode: TransportMode = TransportMode.TRANSIT
    clarification_needed: bool = False
    clarification_question: Optional[str] = None
    preferred_transport_modes: tuple[TransitVehicleMode, ...] = field(default_factory=tuple)
    routing_preference: Optional[RoutingPreference] = None

    @property
    def uses_current_location(self) -> bool:
        """출발지가 현재 위치인지"""
        return not self.origin_name

    @classmethod
    def from_payload(cls, payload: Any) -> "LocationIntent":
        """
        LLM이 돌려준 JSON 객체를 LocationIntent로 변환

        대화 기록을 넘긴 경우 객체 배열이 올 수 있으며, 이때는 마지막(최신) 객체를 쓴다.

        Raises:
            DecodeError: 객체가 아니거나 필수 키가 없을 때
        """
        if isinstance(payload, list):
            objects = [item for item in payload if isinstance(item, dict)]
            if not objects:
                raise DecodeError("Intent array contains no objects")
            payload = objects[-1]

        if not isinstance(payload, dict):
            raise DecodeError(f"Intent payload is not an object: {type(payload).__name__}")

        missing = [key for key in REQUIRED_KEYS if key not in payload]
        if missing:
            raise DecodeError(f"Intent payload missing keys: {', '.join(missing)}")

        destination = _optional_str(payload, "destinationName") or ""
        origin = _optional_str(payload, "originName") or ""
        question = _optional_str(payload, "clarificationQuestion")

        modes: list[TransitVehicleMode] = []
        for raw in payload.get("preferredTransportModes") or []:
            try:
                modes.append(TransitVehicleMode(str(raw).upper()))
            except ValueError:
                continue

        return cls(
            destination_name=destination.strip(),
            origin_name=origin.strip(),
            transport_mode=TransportMode.parse(_optional_str(payload, "transportMode")),
            clarification_needed=_optional_bool(payload, "clarificationNeeded"),
            clarification_question=question.strip() if question else None,
            preferred_transport_modes=tuple(modes),
            routing_preference=RoutingPreference.parse(_optional_str(payload, "routingPreference")),
        )


def _optional_str(payload: dict[str, Any], key: str) -> Optional[str]:
    """문자열 또는 None 값 꺼내기 (다른 타입이면 DecodeError)"""
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"Intent field '{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_bool(payload: dict[str, Any], key: str) -> bool:
    """불리언 값 꺼내기 (없으면 False, 다른 타입이면 DecodeError)"""
    value = payload.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"Intent field '{key}' must be a boolean, got {type(value).__name__}")
    return value
