"""Google Places API (New, v1) 클라이언트"""
import hashlib
from typing import Any, Optional

from ....shared.exceptions.errors import DecodeError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ..domain.models import Coordinate, Place

logger = get_logger(__name__)

PLACES_BASE_URL = "https://places.googleapis.com/v1"

TEXT_SEARCH_FIELDS = ",".join(
    [
        "places.id",
        "places.displayName",
        "places.formattedAddress",
        "places.location",
        "places.types",
    ]
)

NEARBY_SEARCH_FIELDS = ",".join(
    [
        "places.id",
        "places.displayName",
        "places.primaryType",
        "places.types",
        "places.formattedAddress",
        "places.location",
        "places.accessibilityOptions",
        "places.businessStatus",
    ]
)


class GooglePlacesClient:
    """
    Google Places API 클라이언트

    - searchText: 목적지 검증용 텍스트 검색
    - searchNearby: 주변 탐색 2단계 (유료 제공자)
    """

    source_name = "google_places"

    def __init__(
        self,
        api_key: str,
        http_client: HTTPClient,
        language_code: str = "ko",
        base_url: str = PLACES_BASE_URL,
    ) -> None:
        """
        Args:
            api_key: Google Maps Platform API Key
            http_client: HTTP 클라이언트
            language_code: 응답 언어
            base_url: API 기본 URL
        """
        self.api_key = api_key
        self.http_client = http_client
        self.language_code = language_code
        self.base_url = base_url.rstrip("/")

        logger.info("GooglePlacesClient initialized")

    def search_text(self, query: str, max_results: int = 5) -> list[Place]:
        """
        텍스트로 장소 검색

        Args:
            query: 검색어 (장소 이름)
            max_results: 최대 후보 수

        Returns:
            list[Place]: 제공자 관련도 순서의 장소 목록 (좌표 없는 후보 제외)

        Raises:
            ProviderError: 통신 실패 시
            DecodeError: 응답 형식이 다를 때
        """
        if not query:
            return []

        body = {
            "textQuery": query,
            "maxResultCount": max_results,
            "languageCode": self.language_code,
        }
        payload = self._post("places:searchText", body, TEXT_SEARCH_FIELDS)
        places = self._parse_places(payload, fallback_name=query, skip_closed=False)

        logger.debug(f"Text search '{query}': {len(places)} places")
        return places[:max_results]

    def search_nearby(
        self,
        center: Coordinate,
        radius_m: float,
        max_results: int = 20,
    ) -> list[Place]:
        """
        좌표 주변 장소 검색

        Args:
            center: 검색 중심
            radius_m: 반경 (미터)
            max_results: 최대 결과 수 (API 상한 20)

        Returns:
            list[Place]: 영업 중인 장소 목록

        Raises:
            ProviderError: 통신 실패 시
            DecodeError: 응답 형식이 다를 때
        """
        body = {
            "maxResultCount": min(max_results, 20),
            "locationRestriction": {
                "circle": {
                    "center": {
                        "latitude": center.latitude,
                        "longitude": center.longitude,
                    },
                    "radius": radius_m,
                }
            },
            "languageCode": self.language_code,
        }
        payload = self._post("places:searchNearby", body, NEARBY_SEARCH_FIELDS)
        places = self._parse_places(payload, fallback_name=None, skip_closed=True)

        logger.debug(f"Nearby search at {center.to_tuple()} r={radius_m}m: {len(places)} places")
        return places

    def _post(self, method: str, body: dict[str, Any], field_mask: str) -> dict[str, Any]:
        """API 호출 후 JSON 반환"""
        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": field_mask,
        }
        response = self.http_client.post(f"{self.base_url}/{method}", json=body, headers=headers)

        # 결과가 없으면 빈 본문({})이 올 수 있다
        if not response.content:
            return {}

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"Places API returned non-JSON body: {e}") from e

        if not isinstance(payload, dict):
            raise DecodeError("Places API response is not an object")

        return payload

    def _parse_places(
        self,
        payload: dict[str, Any],
        fallback_name: Optional[str],
        skip_closed: bool,
    ) -> list[Place]:
        """
        응답의 places 배열을 Place 목록으로 변환

        Args:
            payload: API 응답
            fallback_name: displayName이 없을 때 쓸 이름 (None이면 해당 후보 제외)
            skip_closed: 영업 중이 아닌 장소 제외 여부
        """
        raw_places = payload.get("places") or []
        if not isinstance(raw_places, list):
            raise DecodeError("Places API 'places' is not a list")

        places: list[Place] = []
        for item in raw_places:
            if not isinstance(item, dict):
                continue

            coordinate = parse_location(item.get("location"))
            if coordinate is None:
                logger.debug(f"Skipping place without coordinate: {item.get('displayName')}")
                continue

            status = item.get("businessStatus")
            if skip_closed and status and status != "OPERATIONAL":
                continue

            name = (item.get("displayName") or {}).get("text") or fallback_name
            if not name:
                continue

            accessibility = item.get("accessibilityOptions") or {}
            places.append(
                Place(
                    place_id=item.get("id") or _synthetic_place_id(name, coordinate),
                    name=name,
                    address=item.get("formattedAddress") or "",
                    coordinate=coordinate,
                    types=frozenset(item.get("types") or []),
                    is_wheelchair_accessible=bool(accessibility.get("wheelchairAccessibleEntrance", False)),
                    source=self.source_name,
                )
            )

        return places


def parse_location(location: Any) -> Optional[Coordinate]:
    """
    location 객체를 좌표로 변환

    {latitude, longitude}(Places v1)와 {lat, lng}(레거시) 모두 허용한다.
    """
    if not isinstance(location, dict):
        return None
    latitude = location.get("latitude", location.get("lat"))
    longitude = location.get("longitude", location.get("lng"))
    return Coordinate.from_optional(latitude, longitude)


def _synthetic_place_id(name: str, coordinate: Coordinate) -> str:
    """ID가 없는 응답용 안정적인 ID (이름+좌표 해시)"""
    key = f"{name}|{coordinate.latitude:.6f}|{coordinate.longitude:.6f}"
    return "gp_" + hashlib.sha256(key.encode("utf-8")).hexdigest()[:12]
