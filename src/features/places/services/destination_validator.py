"""목적지 검증 서비스"""

from ....shared.exceptions.errors import PlaceNotFoundError
from ....shared.logging.config import get_logger
from ..domain.models import Place
from ..providers.google_places_client import GooglePlacesClient

logger = get_logger(__name__)


class DestinationValidator:
    """
    목적지 검증

    텍스트 검색 결과 중 첫 번째 후보를 선택한다 (제공자 관련도 순위를 신뢰).
    이름이 모호한 경우의 안전장치는 의도 분석 단계의 되묻기 질문이다.
    """

    def __init__(self, places_client: GooglePlacesClient, max_candidates: int = 5) -> None:
        """
        Args:
            places_client: 장소 검색 클라이언트
            max_candidates: 검색 후보 최대 수
        """
        self.places_client = places_client
        self.max_candidates = max_candidates

    def validate(self, name: str) -> Place:
        """
        목적지 이름을 실제 장소로 확인

        Args:
            name: 목적지 이름

        Returns:
            Place: 첫 번째 후보

        Raises:
            PlaceNotFoundError: 후보가 없거나 모두 좌표가 없을 때
            ProviderError: 통신 실패 시
        """
        if not name or not name.strip():
            raise PlaceNotFoundError("Empty destination name")

        candidates = self.places_client.search_text(name.strip(), max_results=self.max_candidates)
        if not candidates:
            logger.warning(f"No place candidates for destination: {name}")
            raise PlaceNotFoundError(f"No place found for '{name}'")

        best = candidates[0]
        logger.info(f"Validated destination: {name} -> {best.name} ({best.address})")
        return best
