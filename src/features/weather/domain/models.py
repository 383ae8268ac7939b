"""날씨 기능의 도메인 모델"""
from dataclasses import dataclass

# WMO weather interpretation codes
_WMO_CONDITIONS = {
    0: "맑음",
    1: "구름이 조금 있음",
    2: "구름이 조금 있음",
    3: "구름이 조금 있음",
    45: "안개가 낌",
    48: "안개가 낌",
    51: "이슬비가 내림",
    53: "이슬비가 내림",
    55: "이슬비가 내림",
    61: "비가 내림",
    63: "비가 내림",
    65: "비가 내림",
    71: "눈이 내림",
    73: "눈이 내림",
    75: "눈이 내림",
    80: "소나기가 내림",
    81: "소나기가 내림",
    82: "소나기가 내림",
    95: "천둥번개가 침",
    96: "천둥번개가 침",
    99: "천둥번개가 침",
}
DEFAULT_CONDITION = "흐림"


def describe_weather_code(code: int) -> str:
    """WMO 코드를 한국어 날씨 표현으로 변환"""
    return _WMO_CONDITIONS.get(code, DEFAULT_CONDITION)


@dataclass(frozen=True)
class CurrentWeather:
    """현재 날씨"""

    temperature: float  # 섭씨
    weather_code: int  # WMO 코드

    @property
    def condition(self) -> str:
        return describe_weather_code(self.weather_code)

    @property
    def advisory(self) -> str:
        """음성 안내 문구"""
        return f"현재 기온은 {self.temperature:g}도이며, {self.condition}입니다."
