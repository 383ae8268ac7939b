"""공용 테스트 픽스처 / 가짜 객체"""
import json
from typing import Any, Optional

import pytest

from src.features.intent.domain.models import LocationIntent
from src.features.places.domain.models import Coordinate, Place
from src.features.routing.domain.models import RouteData, RouteStep, StepKind
from src.shared.exceptions.errors import DigitalCaneError


class FakeResponse:
    """requests.Response 대용"""

    def __init__(self, payload: Any = None, status_code: int = 200, raw: Optional[str] = None) -> None:
        self.status_code = status_code
        if raw is not None:
            self.text = raw
        elif payload is None:
            self.text = ""
        else:
            self.text = json.dumps(payload, ensure_ascii=False)
        self.content = self.text.encode("utf-8")

    def json(self) -> Any:
        return json.loads(self.text)


class FakeHTTPClient:
    """요청을 기록하고 준비된 응답(또는 예외)을 돌려주는 HTTP 클라이언트"""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def _next(self) -> FakeResponse:
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url: str, params: Any = None, headers: Any = None) -> FakeResponse:
        self.calls.append({"method": "GET", "url": url, "params": params, "headers": headers})
        return self._next()

    def post(self, url: str, data: Any = None, json: Any = None, headers: Any = None) -> FakeResponse:
        self.calls.append({"method": "POST", "url": url, "data": data, "json": json, "headers": headers})
        return self._next()

    def close(self) -> None:
        pass


class FakeIntentService:
    """고정 의도(또는 예외)를 돌려주는 의도 분석 서비스"""

    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: list[str] = []

    def resolve(self, utterance: str) -> LocationIntent:
        self.calls.append(utterance)
        if isinstance(self.result, DigitalCaneError):
            raise self.result
        return self.result


class FakeDestinationValidator:
    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: list[str] = []

    def validate(self, name: str) -> Place:
        self.calls.append(name)
        if isinstance(self.result, DigitalCaneError):
            raise self.result
        return self.result


class FakeRouteService:
    def __init__(self, result: Any, default_preference: Any = None) -> None:
        self.result = result
        self.default_preference = default_preference
        self.calls: list[tuple[Any, ...]] = []

    def fetch_route(self, *args: Any) -> RouteData:
        self.calls.append(args)
        if isinstance(self.result, DigitalCaneError):
            raise self.result
        return self.result


def make_place(
    name: str,
    latitude: float = 37.5,
    longitude: float = 127.0,
    address: str = "",
    source: str = "test",
    place_id: Optional[str] = None,
) -> Place:
    """테스트용 장소"""
    return Place(
        place_id=place_id or f"{source}_{name}_{latitude}_{longitude}",
        name=name,
        address=address,
        coordinate=Coordinate(latitude, longitude),
        source=source,
    )


def make_board_step(line: str, stop_count: int = 3, last: bool = False) -> RouteStep:
    """테스트용 탑승 단계"""
    suffix = "하차하여 도착." if last else "하차 및 환승."
    return RouteStep(
        kind=StepKind.BOARD,
        instruction=f"A역에서 {line} 타고 {stop_count}개 정류장 이동 후 B역에서 {suffix}",
        detail="탑승 시간 약 10분",
        action=f"{line} 탑승",
        stop_count=stop_count,
    )


@pytest.fixture
def seoul() -> Coordinate:
    return Coordinate(37.5665, 126.9780)


@pytest.fixture
def two_step_route() -> RouteData:
    return RouteData(
        steps=(make_board_step("2호선", 4), make_board_step("143번 버스", 6, last=True)),
        total_duration="35분",
        total_distance="9.8km",
    )


@pytest.fixture
def coex() -> Place:
    return make_place("코엑스", 37.5116, 127.0592, address="서울특별시 강남구 영동대로 513")


def transit_step(
    line_short: Optional[str],
    vehicle_type: str,
    departure: str,
    arrival: str,
    stop_count: Optional[int] = None,
    headsign: Optional[str] = None,
    vehicle_name: Optional[str] = None,
    line_name: Optional[str] = None,
) -> dict[str, Any]:
    """Routes API 대중교통 step 생성"""
    transit: dict[str, Any] = {
        "stopDetails": {
            "departureStop": {"name": departure},
            "arrivalStop": {"name": arrival},
        },
        "transitLine": {"vehicle": {"type": vehicle_type}},
    }
    if line_short is not None:
        transit["transitLine"]["nameShort"] = line_short
    if line_name is not None:
        transit["transitLine"]["name"] = line_name
    if vehicle_name is not None:
        transit["transitLine"]["vehicle"]["name"] = {"text": vehicle_name}
    if stop_count is not None:
        transit["stopCount"] = stop_count
    if headsign is not None:
        transit["headsign"] = headsign
    return {
        "travelMode": "TRANSIT",
        "transitDetails": transit,
        "localizedValues": {"duration": {"text": "12분"}, "distance": {"text": "5.1km"}},
    }


def walk_step(instruction: str = "") -> dict[str, Any]:
    """Routes API 도보 step 생성"""
    return {
        "travelMode": "WALK",
        "navigationInstruction": {"instructions": instruction},
        "localizedValues": {"distance": {"text": "120m"}},
    }
