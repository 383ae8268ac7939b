"""Google Routes API (v2 computeRoutes) 클라이언트"""
from typing import Any, Optional, Sequence, Union

from ....shared.exceptions.errors import DecodeError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ...places.domain.models import Coordinate

logger = get_logger(__name__)

ROUTES_URL = "https://routes.googleapis.com/directions/v2:computeRoutes"

ROUTE_FIELDS = ",".join(
    [
        "routes.legs.steps.navigationInstruction",
        "routes.legs.steps.transitDetails",
        "routes.legs.steps.localizedValues",
        "routes.legs.steps.travelMode",
        "routes.legs.distanceMeters",
        "routes.legs.duration",
        "routes.legs.localizedValues",
    ]
)


class GoogleRoutesClient:
    """대중교통 경로 조회 (응답 해석은 RouteNormalizer가 담당)"""

    def __init__(
        self,
        api_key: str,
        http_client: HTTPClient,
        language_code: str = "ko",
        url: str = ROUTES_URL,
    ) -> None:
        self.api_key = api_key
        self.http_client = http_client
        self.language_code = language_code
        self.url = url

        logger.info("GoogleRoutesClient initialized")

    def compute_transit_leg(
        self,
        origin: Union[str, Coordinate],
        destination: str,
        routing_preference: Optional[str] = None,
        allowed_modes: Optional[Sequence[str]] = None,
    ) -> Optional[dict[str, Any]]:
        """
        대중교통 경로의 첫 번째 leg 조회

        Args:
            origin: 출발지 (주소 문자열 또는 현재 좌표)
            destination: 목적지 주소
            routing_preference: LESS_WALKING / FEWER_TRANSFERS
            allowed_modes: 허용 교통수단 (BUS, SUBWAY, RAIL)

        Returns:
            Optional[dict]: 첫 경로의 첫 leg (경로가 없으면 None)

        Raises:
            ProviderError: 통신 실패 시
            DecodeError: 응답 형식이 다를 때
        """
        body: dict[str, Any] = {
            "origin": self._waypoint(origin),
            "destination": {"address": destination},
            "travelMode": "TRANSIT",
            "languageCode": self.language_code,
            "computeAlternativeRoutes": False,
        }

        transit_preferences: dict[str, Any] = {}
        if routing_preference:
            transit_preferences["routingPreference"] = routing_preference
        if allowed_modes:
            transit_preferences["allowedTravelModes"] = list(allowed_modes)
        if transit_preferences:
            body["transitPreferences"] = transit_preferences

        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": ROUTE_FIELDS,
        }
        response = self.http_client.post(self.url, json=body, headers=headers)
        logger.debug(f"Routes API raw response: {response.text[:2000]}")

        if not response.content:
            return None

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"Routes API returned non-JSON body: {e}") from e

        if not isinstance(payload, dict):
            raise DecodeError("Routes API response is not an object")

        routes = payload.get("routes") or []
        if not isinstance(routes, list):
            raise DecodeError("Routes API 'routes' is not a list")
        if not routes:
            return None

        legs = routes[0].get("legs") if isinstance(routes[0], dict) else None
        if legs is None:
            return None
        if not isinstance(legs, list):
            raise DecodeError("Routes API 'legs' is not a list")
        if not legs:
            return None

        if not isinstance(legs[0], dict):
            raise DecodeError("Routes API leg is not an object")
        return legs[0]

    @staticmethod
    def _waypoint(origin: Union[str, Coordinate]) -> dict[str, Any]:
        if isinstance(origin, Coordinate):
            return {
                "location": {
                    "latLng": {
                        "latitude": origin.latitude,
                        "longitude": origin.longitude,
                    }
                }
            }
        return {"address": origin}
