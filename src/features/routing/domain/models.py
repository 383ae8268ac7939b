"""경로 기능의 도메인 모델"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StepKind(str, Enum):
    """경로 단계 종류 (현재 정규화 결과는 BOARD만 생성)"""

    WALK = "walk"
    WAIT = "wait"
    BOARD = "board"
    RIDE = "ride"
    ALIGHT = "alight"


@dataclass(frozen=True)
class RouteStep:
    """탑승자에게 안내할 경로 한 단계"""

    kind: StepKind
    instruction: str  # 음성 안내 문장
    detail: str  # 보조 정보 (탑승 시간, 출구 등)
    action: str  # 짧은 라벨 ("143번 버스 탑승")
    stop_count: int = 0  # 정류장 수 (모르면 0)
    duration: Optional[str] = None  # 표시용 소요 시간
    distance: Optional[str] = None  # 표시용 거리
    vehicle_type: Optional[str] = None  # BUS, SUBWAY 등

    def __post_init__(self) -> None:
        if self.stop_count < 0:
            raise ValueError(f"stop_count must be non-negative: {self.stop_count}")

    @property
    def line_label(self) -> str:
        """action에서 " 탑승"을 뺀 노선 표시"""
        return self.action.removesuffix(" 탑승")

    def to_dict(self) -> dict[str, object]:
        """API 응답용 딕셔너리로 변환"""
        return {
            "kind": self.kind.value,
            "instruction": self.instruction,
            "detail": self.detail,
            "action": self.action,
            "stop_count": self.stop_count,
            "duration": self.duration,
            "distance": self.distance,
            "vehicle_type": self.vehicle_type,
        }


@dataclass(frozen=True)
class RouteData:
    """
    정규화된 경로

    steps는 이동 순서를 유지하며, 생성 후 변경되지 않는다.
    fallback_applied는 선호 교통수단 제한을 풀고 다시 검색한 결과임을 나타낸다.
    """

    steps: tuple[RouteStep, ...]
    total_duration: str = ""
    total_distance: str = ""
    fallback_applied: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.steps

    @property
    def boarding_count(self) -> int:
        """도보가 아닌 단계 수"""
        return sum(1 for step in self.steps if step.kind != StepKind.WALK)

    @property
    def total_stop_count(self) -> int:
        """전체 정류장 수 합계"""
        return sum(step.stop_count for step in self.steps)
