"""날씨 / 경로 개요 안내 테스트"""
from dataclasses import replace

import pytest

from src.features.intent.domain.enums import RoutingPreference
from src.features.navigation.messages import FALLBACK_NOTE
from src.features.navigation.services.overview_builder import build_overview, line_summary
from src.features.places.domain.models import Coordinate
from src.features.routing.domain.models import RouteData
from src.features.weather.domain.models import CurrentWeather, describe_weather_code
from src.features.weather.providers.open_meteo_client import OpenMeteoClient
from src.shared.exceptions.errors import DecodeError

from tests.conftest import FakeHTTPClient, FakeResponse


@pytest.mark.parametrize(
    "code,expected",
    [(0, "맑음"), (2, "구름이 조금 있음"), (63, "비가 내림"), (75, "눈이 내림"), (99, "천둥번개가 침"), (7, "흐림")],
)
def test_describe_weather_code(code: int, expected: str) -> None:
    """WMO 코드 → 한국어"""
    assert describe_weather_code(code) == expected


def test_weather_advisory() -> None:
    assert CurrentWeather(temperature=12.5, weather_code=61).advisory == "현재 기온은 12.5도이며, 비가 내림입니다."
    assert CurrentWeather(temperature=3.0, weather_code=0).advisory == "현재 기온은 3도이며, 맑음입니다."


def test_open_meteo_request_and_parse(seoul: Coordinate) -> None:
    """current_weather 조회"""
    http_client = FakeHTTPClient(FakeResponse({"current_weather": {"temperature": 21.4, "weathercode": 1}}))

    weather = OpenMeteoClient(http_client).fetch_current(seoul)

    assert weather == CurrentWeather(temperature=21.4, weather_code=1)
    params = http_client.calls[0]["params"]
    assert params["latitude"] == 37.5665
    assert params["current_weather"] == "true"


@pytest.mark.parametrize("payload", [{}, {"current_weather": {"temperature": "warm", "weathercode": 0}}, [1]])
def test_open_meteo_bad_payload(payload, seoul: Coordinate) -> None:
    """형식 오류는 DecodeError"""
    with pytest.raises(DecodeError):
        OpenMeteoClient(FakeHTTPClient(FakeResponse(payload))).fetch_current(seoul)


def test_overview_full_sentence(two_step_route: RouteData) -> None:
    """개요 문장 구성"""
    overview = build_overview(two_step_route, origin="강남", destination="코엑스")

    assert overview == (
        "강남에서 코엑스로 가는 경로를 찾았습니다. "
        "주요 이동 수단은 2호선, 143번 버스입니다. "
        "총 소요 시간은 35분, 거리는 9.8km입니다. "
        "총 2번 탑승하며, 10개 정류장을 거칩니다."
    )


def test_overview_with_preference_and_weather(two_step_route: RouteData) -> None:
    """선호 옵션 문구와 날씨 안내"""
    overview = build_overview(
        two_step_route,
        origin="현재 위치",
        destination="서울역",
        preference=RoutingPreference.FEWER_TRANSFERS,
        weather_advisory="현재 기온은 3도이며, 맑음입니다.",
    )

    assert overview.startswith("현재 위치에서 서울역으로 가는 경로를 찾았습니다. 환승이 적은 경로로 안내합니다.")
    assert overview.endswith(" 참고로, 현재 기온은 3도이며, 맑음입니다.")


def test_overview_fallback_note_replaces_preference(two_step_route: RouteData) -> None:
    """재조회 결과는 선호 옵션 대신 안내 문구"""
    route = replace(two_step_route, fallback_applied=True)

    overview = build_overview(route, "강남", "코엑스", preference=RoutingPreference.LESS_WALKING)

    assert FALLBACK_NOTE in overview
    assert RoutingPreference.LESS_WALKING.phrase not in overview


def test_overview_without_distance(two_step_route: RouteData) -> None:
    route = replace(two_step_route, total_distance="")
    assert "총 소요 시간은 35분입니다." in build_overview(route, "강남", "코엑스")


def test_line_summary_without_boarding() -> None:
    assert line_summary(RouteData(steps=())) == "도보 중심의 경로입니다."
