"""경로 개요 안내 문장 생성"""
from typing import Optional

from ....shared.utils.text import with_direction_particle
from ...intent.domain.enums import RoutingPreference
from ...routing.domain.models import RouteData, StepKind
from ..messages import FALLBACK_NOTE


def line_summary(route: RouteData) -> str:
    """주요 이동 수단 요약 ("주요 이동 수단은 4호선, 143번 버스입니다.")"""
    lines = [step.line_label for step in route.steps if step.kind == StepKind.BOARD]
    if not lines:
        return "도보 중심의 경로입니다."
    return f"주요 이동 수단은 {', '.join(lines)}입니다."


def build_overview(
    route: RouteData,
    origin: str,
    destination: str,
    preference: Optional[RoutingPreference] = None,
    weather_advisory: Optional[str] = None,
) -> str:
    """
    안내 시작 시 한 번 읽어줄 개요 문장

    Args:
        route: 정규화된 경로
        origin: 출발지 표시 이름
        destination: 목적지 표시 이름
        preference: 적용된 경로 선호 옵션
        weather_advisory: 날씨 안내 (없으면 생략)

    Returns:
        str: 개요 안내 문장
    """
    sentences = [f"{origin}에서 {with_direction_particle(destination)} 가는 경로를 찾았습니다."]

    if route.fallback_applied:
        sentences.append(FALLBACK_NOTE)
    elif preference is not None:
        sentences.append(preference.phrase)

    sentences.append(line_summary(route))

    if route.total_duration and route.total_distance:
        sentences.append(f"총 소요 시간은 {route.total_duration}, 거리는 {route.total_distance}입니다.")
    elif route.total_duration:
        sentences.append(f"총 소요 시간은 {route.total_duration}입니다.")

    sentences.append(f"총 {route.boarding_count}번 탑승하며, {route.total_stop_count}개 정류장을 거칩니다.")

    overview = " ".join(sentences)
    if weather_advisory:
        overview += f" 참고로, {weather_advisory}"
    return overview
