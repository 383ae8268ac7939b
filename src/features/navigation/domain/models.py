"""내비게이션 기능의 도메인 모델"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ...places.domain.models import Coordinate
from ...routing.domain.models import RouteData, RouteStep


class NavigationStatus(str, Enum):
    """안내 세션 상태"""

    IDLE = "idle"
    LOADING = "loading"
    ACTIVE = "active"


class LocationPermission(str, Enum):
    """위치 권한 상태"""

    GRANTED = "granted"
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    RESTRICTED = "restricted"


class PipelineStage(str, Enum):
    """경로 탐색 파이프라인 단계"""

    INTENT = "intent"
    DESTINATION = "destination"
    ROUTE = "route"


@dataclass(frozen=True)
class LocationContext:
    """경로 요청 시점의 위치 정보 (위치 센서 측이 채워서 전달)"""

    coordinate: Optional[Coordinate] = None
    permission: LocationPermission = LocationPermission.GRANTED

    @property
    def is_denied(self) -> bool:
        return self.permission in (LocationPermission.DENIED, LocationPermission.RESTRICTED)


@dataclass(frozen=True)
class FindRouteResult:
    """
    find_route 호출 결과

    message는 성공 시 개요 안내, 실패 시 실패 문장, 되묻기일 때는 질문이다.
    ignored는 이미 경로를 찾는 중이라 호출을 무시한 경우이다.
    """

    status: NavigationStatus
    message: str = ""
    is_clarification: bool = False
    ignored: bool = False

    @property
    def started(self) -> bool:
        return self.status == NavigationStatus.ACTIVE and not self.ignored


@dataclass
class NavigationSession:
    """
    안내 세션 (NavigationOrchestrator만 변경한다)

    IDLE/LOADING 동안 steps는 비어 있고,
    ACTIVE 동안 0 <= current_step_index < len(steps)이다.
    """

    status: NavigationStatus = NavigationStatus.IDLE
    steps: list[RouteStep] = field(default_factory=list)
    current_step_index: int = 0
    origin: str = ""
    destination: str = ""
    total_duration: str = ""
    total_distance: str = ""
    overview_message: str = ""
    fallback_applied: bool = False

    @property
    def current_step(self) -> Optional[RouteStep]:
        if 0 <= self.current_step_index < len(self.steps):
            return self.steps[self.current_step_index]
        return None

    @property
    def current_instruction(self) -> str:
        """현재 단계 음성 안내"""
        step = self.current_step
        return step.instruction if step else "안내가 종료되었습니다."

    @property
    def current_action(self) -> str:
        """현재 단계의 핵심 행동"""
        step = self.current_step
        return step.action if step else "도착"

    @property
    def current_detail(self) -> str:
        step = self.current_step
        return step.detail if step else ""

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def total_transit_stops(self) -> int:
        """전체 정류장/역 수 합계"""
        return sum(step.stop_count for step in self.steps)

    def begin_loading(self) -> None:
        self.reset()
        self.status = NavigationStatus.LOADING

    def activate(self, route: RouteData, origin: str, destination: str) -> None:
        """LOADING → ACTIVE (비어 있지 않은 경로만)"""
        if route.is_empty:
            raise ValueError("Cannot activate navigation with an empty route")
        self.status = NavigationStatus.ACTIVE
        self.steps = list(route.steps)
        self.current_step_index = 0
        self.origin = origin
        self.destination = destination
        self.total_duration = route.total_duration
        self.total_distance = route.total_distance
        self.fallback_applied = route.fallback_applied
        self.overview_message = ""

    def reset(self) -> None:
        """IDLE로 되돌리고 모든 경로 정보 삭제"""
        self.status = NavigationStatus.IDLE
        self.steps = []
        self.current_step_index = 0
        self.origin = ""
        self.destination = ""
        self.total_duration = ""
        self.total_distance = ""
        self.overview_message = ""
        self.fallback_applied = False

    def to_dict(self) -> dict[str, object]:
        """API 응답용 딕셔너리로 변환"""
        return {
            "status": self.status.value,
            "current_step_index": self.current_step_index,
            "total_steps": self.total_steps,
            "total_transit_stops": self.total_transit_stops,
            "origin": self.origin,
            "destination": self.destination,
            "total_duration": self.total_duration,
            "total_distance": self.total_distance,
            "overview_message": self.overview_message,
            "fallback_applied": self.fallback_applied,
            "current_instruction": self.current_instruction,
            "current_action": self.current_action,
            "current_detail": self.current_detail,
            "steps": [step.to_dict() for step in self.steps],
        }
