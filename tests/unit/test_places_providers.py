"""장소 제공자 테스트 (Google Places / Overpass / 역지오코딩)"""
from unittest.mock import MagicMock, patch

import googlemaps
import pytest

from src.features.places.domain.enums import PlaceCategoryGroup
from src.features.places.domain.models import Coordinate, Place
from src.features.places.providers.cache_geocoder import CacheGeocoder
from src.features.places.providers.google_maps_geocoder import GoogleMapsGeocoder
from src.features.places.providers.google_places_client import GooglePlacesClient, TEXT_SEARCH_FIELDS
from src.features.places.providers.overpass_client import OverpassClient
from src.shared.exceptions.errors import DecodeError, ProviderError

from tests.conftest import FakeHTTPClient, FakeResponse


def _google_place(name: str, lat: float = 37.5, lng: float = 127.0, **extra: object) -> dict:
    place = {
        "id": f"id-{name}",
        "displayName": {"text": name, "languageCode": "ko"},
        "formattedAddress": f"서울 {name} 주소",
        "location": {"latitude": lat, "longitude": lng},
        "types": ["point_of_interest"],
    }
    place.update(extra)
    return place


def test_search_text_parses_places_in_provider_order() -> None:
    """텍스트 검색 결과는 제공자 순서 유지"""
    http_client = FakeHTTPClient(
        FakeResponse({"places": [_google_place("코엑스"), _google_place("코엑스 아쿠아리움", 37.51, 127.06)]})
    )
    client = GooglePlacesClient(api_key="key", http_client=http_client)

    places = client.search_text("코엑스")

    assert [p.name for p in places] == ["코엑스", "코엑스 아쿠아리움"]
    assert places[0].place_id == "id-코엑스"
    assert places[0].types == frozenset({"point_of_interest"})
    assert places[0].source == "google_places"

    call = http_client.calls[0]
    assert call["url"].endswith("/places:searchText")
    assert call["headers"]["X-Goog-Api-Key"] == "key"
    assert call["headers"]["X-Goog-FieldMask"] == TEXT_SEARCH_FIELDS
    assert call["json"] == {"textQuery": "코엑스", "maxResultCount": 5, "languageCode": "ko"}


def test_search_text_drops_candidates_without_coordinate() -> None:
    """좌표 없는 후보 제외"""
    no_location = _google_place("위치없음")
    del no_location["location"]
    http_client = FakeHTTPClient(FakeResponse({"places": [no_location, _google_place("서울역")]}))

    places = GooglePlacesClient(api_key="key", http_client=http_client).search_text("서울역")

    assert [p.name for p in places] == ["서울역"]


def test_search_text_empty_body_and_empty_query() -> None:
    """빈 응답 본문은 결과 없음, 빈 검색어는 요청하지 않음"""
    http_client = FakeHTTPClient(FakeResponse(None))
    client = GooglePlacesClient(api_key="key", http_client=http_client)

    assert client.search_text("없는장소") == []
    assert client.search_text("") == []
    assert len(http_client.calls) == 1


def test_search_text_schema_mismatch() -> None:
    """places가 배열이 아니면 DecodeError"""
    http_client = FakeHTTPClient(FakeResponse({"places": {"name": "x"}}))
    with pytest.raises(DecodeError):
        GooglePlacesClient(api_key="key", http_client=http_client).search_text("x")


def test_search_text_non_json_body() -> None:
    """JSON이 아닌 본문은 DecodeError"""
    http_client = FakeHTTPClient(FakeResponse(raw="<html>error</html>"))
    with pytest.raises(DecodeError):
        GooglePlacesClient(api_key="key", http_client=http_client).search_text("x")


def test_search_nearby_skips_closed_and_reads_accessibility(seoul: Coordinate) -> None:
    """영업 중이 아닌 장소 제외, 휠체어 입구 정보 반영"""
    http_client = FakeHTTPClient(
        FakeResponse(
            {
                "places": [
                    _google_place("카페", businessStatus="OPERATIONAL",
                                  accessibilityOptions={"wheelchairAccessibleEntrance": True}),
                    _google_place("폐업식당", businessStatus="CLOSED_PERMANENTLY"),
                    _google_place("편의점"),
                ]
            }
        )
    )
    client = GooglePlacesClient(api_key="key", http_client=http_client)

    places = client.search_nearby(seoul, radius_m=100, max_results=50)

    assert [p.name for p in places] == ["카페", "편의점"]
    assert places[0].is_wheelchair_accessible
    assert not places[1].is_wheelchair_accessible

    body = http_client.calls[0]["json"]
    assert body["maxResultCount"] == 20
    assert body["locationRestriction"]["circle"]["radius"] == 100
    assert body["locationRestriction"]["circle"]["center"] == {"latitude": 37.5665, "longitude": 126.978}


def test_accessible_description() -> None:
    """음성 안내용 설명"""
    place = Place(
        place_id="p1",
        name="스타벅스",
        address="서울 중구 세종대로 1",
        coordinate=Coordinate(37.5, 127.0),
        is_wheelchair_accessible=True,
    )
    assert place.accessible_description == "스타벅스. 서울 중구 세종대로 1. 입구에 턱이 없습니다."


def test_overpass_query_contains_group_filters(seoul: Coordinate) -> None:
    """카테고리 그룹별 Overpass QL"""
    client = OverpassClient(http_client=FakeHTTPClient(FakeResponse({"elements": []})), query_timeout=7)

    query = client.build_query(PlaceCategoryGroup.TRANSPORTATION, seoul, 100)
    assert query.startswith("[out:json][timeout:7];")
    assert '["highway"~"^(bus_stop)$"]' in query
    assert "(around:100,37.5665,126.978)" in query
    assert query.endswith("out center tags;")

    wildcard = client.build_query(PlaceCategoryGroup.WILDCARD, seoul, 100)
    assert 'node["name"]' in wildcard


def test_overpass_parses_nodes_and_ways(seoul: Coordinate) -> None:
    """node는 lat/lon, way는 center 사용. 이름 없는 요소 제외"""
    http_client = FakeHTTPClient(
        FakeResponse(
            {
                "elements": [
                    {"type": "node", "id": 1, "lat": 37.5666, "lon": 126.9781,
                     "tags": {"name": "Cafe", "name:ko": "카페", "amenity": "cafe", "wheelchair": "yes"}},
                    {"type": "way", "id": 2, "center": {"lat": 37.5667, "lon": 126.9782},
                     "tags": {"name": "시청", "building": "yes", "addr:city": "서울", "addr:street": "세종대로"}},
                    {"type": "node", "id": 3, "lat": 37.5, "lon": 127.0, "tags": {"amenity": "bench"}},
                    {"type": "node", "id": 4, "tags": {"name": "좌표없음"}},
                ]
            }
        )
    )
    client = OverpassClient(http_client=http_client)

    places = client.search_category(PlaceCategoryGroup.FOOD_DRINK, seoul, 100)

    assert [p.name for p in places] == ["카페", "시청"]
    assert places[0].place_id == "osm_node_1"
    assert places[0].is_wheelchair_accessible
    assert "amenity:cafe" in places[0].types
    assert places[1].address == "서울 세종대로"
    assert http_client.calls[0]["data"]["data"].startswith("[out:json]")


def test_overpass_missing_elements(seoul: Coordinate) -> None:
    """elements가 없으면 DecodeError"""
    client = OverpassClient(http_client=FakeHTTPClient(FakeResponse({"remark": "runtime error"})))
    with pytest.raises(DecodeError):
        client.search_category(PlaceCategoryGroup.WILDCARD, seoul, 100)


@patch("src.features.places.providers.google_maps_geocoder.googlemaps.Client")
def test_reverse_geocode_strips_country(mock_client_cls: MagicMock, seoul: Coordinate) -> None:
    """국가명 접두어 제거"""
    mock_client_cls.return_value.reverse_geocode.return_value = [
        {"formatted_address": "대한민국 서울특별시 중구 세종대로 110"}
    ]
    geocoder = GoogleMapsGeocoder(api_key="AIzaTEST")

    assert geocoder.reverse_geocode(seoul) == "서울특별시 중구 세종대로 110"


@patch("src.features.places.providers.google_maps_geocoder.googlemaps.Client")
def test_reverse_geocode_wraps_api_errors(mock_client_cls: MagicMock, seoul: Coordinate) -> None:
    """googlemaps 예외는 ProviderError"""
    mock_client_cls.return_value.reverse_geocode.side_effect = googlemaps.exceptions.Timeout()
    geocoder = GoogleMapsGeocoder(api_key="AIzaTEST")

    with pytest.raises(ProviderError):
        geocoder.reverse_geocode(seoul)


def test_cache_geocoder_reuses_rounded_coordinate() -> None:
    """약 11m 격자 안에서는 캐시 사용"""
    inner = MagicMock()
    inner.reverse_geocode.return_value = "서울특별시 중구"
    geocoder = CacheGeocoder(inner)

    assert geocoder.reverse_geocode(Coordinate(37.56651, 126.97801)) == "서울특별시 중구"
    assert geocoder.reverse_geocode(Coordinate(37.56652, 126.97802)) == "서울특별시 중구"

    assert inner.reverse_geocode.call_count == 1


def test_cache_geocoder_evicts_oldest_entry() -> None:
    """최대 항목 수를 넘으면 가장 오래된 좌표부터 삭제"""
    inner = MagicMock()
    inner.reverse_geocode.return_value = "서울"
    geocoder = CacheGeocoder(inner, max_entries=2)

    for offset in range(3):
        geocoder.reverse_geocode(Coordinate(37.5 + offset * 0.01, 127.0))

    assert list(geocoder.cache) == ["37.5100,127.0000", "37.5200,127.0000"]

    geocoder.reverse_geocode(Coordinate(37.5, 127.0))
    assert inner.reverse_geocode.call_count == 4
