"""목적지 검증 테스트"""
from unittest.mock import MagicMock

import pytest

from src.features.places.providers.google_places_client import GooglePlacesClient
from src.features.places.services.destination_validator import DestinationValidator
from src.shared.exceptions.errors import PlaceNotFoundError, ProviderError

from tests.conftest import make_place


def _validator(result: object) -> tuple[DestinationValidator, MagicMock]:
    client = MagicMock(spec=GooglePlacesClient)
    if isinstance(result, Exception):
        client.search_text.side_effect = result
    else:
        client.search_text.return_value = result
    return DestinationValidator(client, max_candidates=5), client


def test_first_candidate_is_selected() -> None:
    """제공자 순위 1위 후보 선택"""
    validator, client = _validator([make_place("코엑스"), make_place("코엑스몰")])

    place = validator.validate("  코엑스 ")

    assert place.name == "코엑스"
    client.search_text.assert_called_once_with("코엑스", max_results=5)


def test_no_candidates_raises_place_not_found() -> None:
    """후보 없음"""
    validator, _ = _validator([])
    with pytest.raises(PlaceNotFoundError):
        validator.validate("존재하지않는장소")


def test_blank_name_is_not_searched() -> None:
    """빈 이름은 검색하지 않음"""
    validator, client = _validator([make_place("x")])
    with pytest.raises(PlaceNotFoundError):
        validator.validate("   ")
    client.search_text.assert_not_called()


def test_provider_error_propagates() -> None:
    """통신 실패는 PlaceNotFoundError와 구분"""
    validator, _ = _validator(ProviderError("timeout"))
    with pytest.raises(ProviderError):
        validator.validate("코엑스")
