"""Routes API leg → RouteData 정규화"""
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from ....shared.exceptions.errors import DecodeError, NoRouteFoundError
from ....shared.logging.config import get_logger
from ....shared.utils.text import contains_non_digit, is_numeric, with_object_particle
from ..domain.models import RouteData, RouteStep, StepKind

logger = get_logger(__name__)

VEHICLE_NOUNS = {
    "BUS": "버스",
    "SUBWAY": "지하철",
    "RAIL": "기차",
    "FERRY": "배",
    "TRAM": "트램",
}
DEFAULT_VEHICLE_NOUN = "대중교통"

TRANSFER_SUFFIX = "하차 및 환승."
ARRIVAL_SUFFIX = "하차하여 도착."

# "5 출구", "2-1번 입구" 등 출입구 표기
_GATE_PATTERN = re.compile(r"(\d+(?:-\d+)?)\s*번?\s*(출구|입구)")


def line_display(
    short_name: Optional[str],
    name: Optional[str],
    vehicle_type: Optional[str],
    vehicle_name: Optional[str] = None,
) -> str:
    """
    노선 표시 이름 생성

    예:
        ("143", None, "BUS") -> "143번 버스"
        ("2", None, "SUBWAY") -> "2호선"
        ("신분당선", None, "SUBWAY") -> "신분당선"
        ("경춘선", None, "RAIL", "전철") -> "경춘선"
    """
    raw_line = (short_name or name or "").strip()
    kind = (vehicle_type or "").upper()
    noun = (vehicle_name or "").strip() or VEHICLE_NOUNS.get(kind, DEFAULT_VEHICLE_NOUN)

    if kind == "BUS" or "버스" in noun:
        if not raw_line:
            return noun
        if "버스" in raw_line:
            return raw_line
        if is_numeric(raw_line):
            return f"{raw_line}번 버스"
        return f"{raw_line} 버스"

    if kind in ("SUBWAY", "RAIL") or "지하철" in noun or "전철" in noun:
        if is_numeric(raw_line):
            return f"{raw_line}호선"
        return raw_line or noun

    if raw_line:
        return f"{raw_line} {noun}"
    return noun


def gate_hint(instruction: Optional[str]) -> Optional[str]:
    """도보 안내에서 출입구 정보 추출 ("5 출구 이용" -> "5번 출구")"""
    if not instruction:
        return None
    match = _GATE_PATTERN.search(instruction)
    if not match:
        return None
    return f"{match.group(1)}번 {match.group(2)}"


def ride_detail(duration: str, distance: str) -> str:
    """탑승 시간/거리 보조 문구"""
    if duration:
        detail = f"탑승 시간 약 {duration}"
        if distance:
            detail += f" ({distance})"
        return detail
    if distance:
        return f"{distance} 이동"
    return ""


@dataclass
class _BoardDraft:
    """접미어(하차/환승/도착)가 정해지기 전의 탑승 단계"""

    sentence_head: str
    action: str
    stop_count: int
    duration: str
    distance: str
    vehicle_type: Optional[str]
    entrance_hints: list[str] = field(default_factory=list)


class RouteNormalizer:
    """
    Routes API의 leg를 안내용 단계 목록으로 변환

    1. 도보 단계는 단계로 내보내지 않는다 (출입구 정보만 인접 탑승 단계에 남긴다)
    2. 노선 표시 이름 생성
    3. 안내 문장: 승차 정류장 → 노선 (+ 방면) → 정류장 수 → 하차 정류장
    4. 마지막을 제외한 탑승 단계에는 "하차 및 환승"을 붙인다
    """

    def normalize(self, leg: dict[str, Any]) -> RouteData:
        """
        Args:
            leg: Routes API의 routes[0].legs[0]

        Returns:
            RouteData: 탑승 단계만 포함한 경로

        Raises:
            NoRouteFoundError: 대중교통 단계가 하나도 없을 때
            DecodeError: 응답 형식이 다를 때
        """
        raw_steps = leg.get("steps") or []
        if not isinstance(raw_steps, list):
            raise DecodeError("Route leg 'steps' is not a list")

        drafts: list[_BoardDraft] = []
        pending_hints: list[str] = []

        for raw in raw_steps:
            if not isinstance(raw, dict):
                raise DecodeError("Route step is not an object")

            transit = raw.get("transitDetails")
            if raw.get("travelMode") == "TRANSIT" and isinstance(transit, dict):
                draft = self._board_draft(raw, transit)
                draft.entrance_hints = pending_hints
                pending_hints = []
                drafts.append(draft)
                continue

            hint = gate_hint((raw.get("navigationInstruction") or {}).get("instructions"))
            if hint and hint not in pending_hints:
                pending_hints.append(hint)

        if not drafts:
            raise NoRouteFoundError("No transit step in route")

        steps = tuple(
            self._finalize(draft, is_last=index == len(drafts) - 1, exit_hints=pending_hints)
            for index, draft in enumerate(drafts)
        )

        localized = leg.get("localizedValues") or {}
        total_duration = _text(localized.get("duration")) or _text(localized.get("staticDuration"))
        total_distance = _text(localized.get("distance"))

        logger.info(f"Route normalized: {len(steps)} boarding steps, duration={total_duration}")
        return RouteData(steps=steps, total_duration=total_duration, total_distance=total_distance)

    def _board_draft(self, raw: dict[str, Any], transit: dict[str, Any]) -> _BoardDraft:
        localized = raw.get("localizedValues") or {}
        duration = _text(localized.get("duration")) or _text(localized.get("staticDuration"))
        distance = _text(localized.get("distance"))

        line = transit.get("transitLine") or {}
        vehicle = line.get("vehicle") or {}
        vehicle_type = vehicle.get("type")
        display = line_display(
            short_name=line.get("nameShort"),
            name=line.get("name"),
            vehicle_type=vehicle_type,
            vehicle_name=_text(vehicle.get("name")),
        )

        stops = transit.get("stopDetails") or {}
        departure = (stops.get("departureStop") or {}).get("name") or "승차 정류장"
        arrival = (stops.get("arrivalStop") or {}).get("name") or "하차 정류장"

        headsign = transit.get("headsign") or ""
        direction = f" {headsign} 방면으로" if contains_non_digit(headsign) else ""

        stop_count = transit.get("stopCount") or 0
        if not isinstance(stop_count, int) or stop_count < 0:
            stop_count = 0

        if stop_count > 0:
            head = (
                f"{departure}에서 {with_object_particle(display)} 타고{direction} "
                f"{stop_count}개 정류장 이동 후 {arrival}에서 "
            )
        else:
            head = f"{departure}에서 {with_object_particle(display)} 타고{direction} {arrival}까지 이동 후 "

        return _BoardDraft(
            sentence_head=head,
            action=f"{display} 탑승",
            stop_count=stop_count,
            duration=duration,
            distance=distance,
            vehicle_type=vehicle_type,
        )

    @staticmethod
    def _finalize(draft: _BoardDraft, is_last: bool, exit_hints: list[str]) -> RouteStep:
        if not is_last:
            instruction = draft.sentence_head + TRANSFER_SUFFIX
        elif exit_hints:
            instruction = draft.sentence_head + f"하차하여 {', '.join(exit_hints)}로 나가서 도착."
        else:
            instruction = draft.sentence_head + ARRIVAL_SUFFIX

        detail_parts = []
        if draft.entrance_hints:
            detail_parts.append(f"{', '.join(draft.entrance_hints)} 이용")
        ride = ride_detail(draft.duration, draft.distance)
        if ride:
            detail_parts.append(ride)

        return RouteStep(
            kind=StepKind.BOARD,
            instruction=instruction,
            detail=". ".join(detail_parts),
            action=draft.action,
            stop_count=draft.stop_count,
            duration=draft.duration or None,
            distance=draft.distance or None,
            vehicle_type=draft.vehicle_type,
        )


def _text(value: Any) -> str:
    """{text: ...} 형태의 값에서 문자열 추출"""
    if isinstance(value, dict):
        text = value.get("text")
        return text if isinstance(text, str) else ""
    return ""
