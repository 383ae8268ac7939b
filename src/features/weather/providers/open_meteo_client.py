"""Open-Meteo 현재 날씨 클라이언트 (API Key 불필요)"""
from typing import Any

from ....shared.exceptions.errors import DecodeError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ...places.domain.models import Coordinate
from ..domain.models import CurrentWeather

logger = get_logger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"


class OpenMeteoClient:
    """Open-Meteo forecast API의 current_weather 조회"""

    def __init__(self, http_client: HTTPClient, url: str = OPEN_METEO_URL) -> None:
        self.http_client = http_client
        self.url = url

    def fetch_current(self, location: Coordinate) -> CurrentWeather:
        """
        현재 날씨 조회

        Raises:
            ProviderError: 통신 실패 시
            DecodeError: 응답 형식이 다를 때
        """
        params = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "current_weather": "true",
            "timezone": "auto",
        }
        response = self.http_client.get(self.url, params=params)

        try:
            payload: Any = response.json()
            current = payload["current_weather"]
            weather = CurrentWeather(
                temperature=float(current["temperature"]),
                weather_code=int(current["weathercode"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise DecodeError(f"Unexpected Open-Meteo response: {e}") from e

        logger.debug(f"Weather at {location.to_tuple()}: {weather.advisory}")
        return weather
