"""Overpass API (OpenStreetMap) 클라이언트 - 주변 탐색 1단계 (저비용 제공자)"""
from typing import Any, Optional

from ....shared.exceptions.errors import DecodeError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ..domain.enums import PlaceCategoryGroup
from ..domain.models import Coordinate, Place

logger = get_logger(__name__)

DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"

# 카테고리 그룹별 (태그 키, 값 정규식). 값이 None이면 키만 있으면 된다.
CATEGORY_TAG_FILTERS: dict[PlaceCategoryGroup, list[tuple[str, Optional[str]]]] = {
    PlaceCategoryGroup.FOOD_DRINK: [
        ("amenity", "restaurant|cafe|fast_food|bar|pub|food_court|ice_cream"),
        ("shop", "bakery|deli|beverages"),
    ],
    PlaceCategoryGroup.SHOPPING_SERVICES: [
        ("shop", None),
        ("amenity", "bank|atm|pharmacy|post_office|hospital|clinic|dentist|doctors|police"),
    ],
    PlaceCategoryGroup.TRANSPORTATION: [
        ("highway", "bus_stop"),
        ("railway", "station|subway_entrance|halt|tram_stop"),
        ("public_transport", "station|stop_position|platform"),
        ("amenity", "bus_station|parking|taxi|bicycle_rental|ferry_terminal"),
    ],
    PlaceCategoryGroup.SOCIAL_ATTRACTIONS: [
        ("tourism", None),
        ("leisure", "park|sports_centre|stadium|playground|garden"),
        (
            "amenity",
            "place_of_worship|library|theatre|cinema|community_centre|townhall|arts_centre|school|university",
        ),
    ],
}

# 이름 없이 의미가 없는 시설물
IGNORED_AMENITIES = {"waste_basket", "bench", "waste_disposal", "power_pole", "street_lamp"}


class OverpassClient:
    """
    Overpass API 클라이언트

    카테고리 그룹 하나당 쿼리 하나를 만든다.
    WILDCARD 그룹은 이름이 있는 모든 노드/건물을 대상으로 한다.
    """

    source_name = "overpass"

    def __init__(
        self,
        http_client: HTTPClient,
        base_url: str = DEFAULT_OVERPASS_URL,
        query_timeout: int = 10,
    ) -> None:
        """
        Args:
            http_client: HTTP 클라이언트
            base_url: Overpass 인터프리터 URL
            query_timeout: 서버 측 쿼리 타임아웃 (초)
        """
        self.http_client = http_client
        self.base_url = base_url
        self.query_timeout = query_timeout

        logger.info("OverpassClient initialized")

    def search_category(
        self,
        group: PlaceCategoryGroup,
        center: Coordinate,
        radius_m: float,
    ) -> list[Place]:
        """
        카테고리 그룹 하나로 주변 장소 검색

        Args:
            group: 카테고리 그룹
            center: 검색 중심
            radius_m: 반경 (미터)

        Returns:
            list[Place]: 이름과 좌표가 있는 장소 목록

        Raises:
            ProviderError: 통신 실패 시
            DecodeError: 응답 형식이 다를 때
        """
        query = self.build_query(group, center, radius_m)
        response = self.http_client.post(self.base_url, data={"data": query})

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"Overpass returned non-JSON body: {e}") from e

        elements = payload.get("elements") if isinstance(payload, dict) else None
        if not isinstance(elements, list):
            raise DecodeError("Overpass response has no 'elements' list")

        places = [place for place in (self._parse_element(e) for e in elements) if place]
        logger.debug(f"Overpass {group.value}: {len(places)} places")
        return places

    def build_query(self, group: PlaceCategoryGroup, center: Coordinate, radius_m: float) -> str:
        """Overpass QL 쿼리 생성"""
        around = f"(around:{radius_m:.0f},{center.latitude},{center.longitude})"

        if group == PlaceCategoryGroup.WILDCARD:
            selectors = [
                f'node["name"]{around};',
                f'way["name"]["building"]{around};',
            ]
        else:
            selectors = []
            for key, values in CATEGORY_TAG_FILTERS[group]:
                tag = f'["{key}"]' if values is None else f'["{key}"~"^({values})$"]'
                selectors.append(f'node{tag}["name"]{around};')
                selectors.append(f'way{tag}["name"]{around};')

        body = "\n  ".join(selectors)
        return f"[out:json][timeout:{self.query_timeout}];\n(\n  {body}\n);\nout center tags;"

    def _parse_element(self, element: Any) -> Optional[Place]:
        """OSM 요소 하나를 Place로 변환 (좌표/이름 없으면 None)"""
        if not isinstance(element, dict):
            return None

        tags = element.get("tags") or {}
        name = tags.get("name:ko") or tags.get("name")
        if not name:
            return None

        if tags.get("amenity") in IGNORED_AMENITIES:
            return None

        # node는 lat/lon, way/relation은 center
        center = element.get("center") or {}
        coordinate = Coordinate.from_optional(
            element.get("lat", center.get("lat")),
            element.get("lon", center.get("lon")),
        )
        if coordinate is None:
            return None

        types = frozenset(
            f"{key}:{tags[key]}"
            for key in ("amenity", "shop", "tourism", "leisure", "highway", "railway", "public_transport", "building")
            if tags.get(key)
        )

        return Place(
            place_id=f"osm_{element.get('type', 'node')}_{element.get('id')}",
            name=name,
            address=_format_address(tags),
            coordinate=coordinate,
            types=types,
            is_wheelchair_accessible=tags.get("wheelchair") == "yes",
            source=self.source_name,
        )


def _format_address(tags: dict[str, str]) -> str:
    """OSM addr:* 태그로 주소 문자열 구성"""
    if tags.get("addr:full"):
        return tags["addr:full"]

    parts = [
        tags.get("addr:city", ""),
        tags.get("addr:district", ""),
        tags.get("addr:street", ""),
        tags.get("addr:housenumber", ""),
    ]
    return " ".join(part for part in parts if part)
