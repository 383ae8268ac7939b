"""Google Maps Geocoding API 구현 (역지오코딩: 현재 위치 → 주소 라벨)"""
import re
from typing import Optional

import googlemaps

from ..domain.models import Coordinate
from ....shared.exceptions.errors import ProviderError
from ....shared.logging.config import get_logger

logger = get_logger(__name__)

# 음성 안내에 불필요한 접두어
_COUNTRY_PREFIX = re.compile(r"^(대한민국|South Korea)\s*")


class GoogleMapsGeocoder:
    """Google Maps Geocoding API 구현"""

    def __init__(self, api_key: str, language: str = "ko", timeout: float = 10.0) -> None:
        """
        Args:
            api_key: Google Maps API Key
            language: 결과 언어
            timeout: 요청 타임아웃 (초)
        """
        self.language = language
        try:
            self.client = googlemaps.Client(key=api_key, timeout=timeout, retry_over_query_limit=False)
            logger.info("GoogleMapsGeocoder initialized")
        except Exception as e:
            raise ProviderError(f"Failed to initialize Google Maps client: {e}") from e

    def reverse_geocode(self, coordinate: Coordinate) -> Optional[str]:
        """
        좌표에서 짧은 주소 라벨 조회

        Args:
            coordinate: 좌표

        Returns:
            Optional[str]: 주소 라벨 (결과가 없으면 None)

        Raises:
            ProviderError: API 요청 실패 시
        """
        try:
            logger.debug(f"Reverse geocoding: {coordinate.to_tuple()}")

            results = self.client.reverse_geocode(
                coordinate.to_tuple(),
                language=self.language,
            )

            if not results:
                logger.warning(f"No reverse geocoding results for: {coordinate.to_tuple()}")
                return None

            # 첫 번째 결과 사용
            formatted_address = results[0].get("formatted_address")
            if not formatted_address:
                return None

            label = _COUNTRY_PREFIX.sub("", formatted_address).strip()
            logger.debug(f"Reverse geocoded: {coordinate.to_tuple()} -> {label}")
            return label or None

        except googlemaps.exceptions.ApiError as e:
            raise ProviderError(f"Google Maps API error: {e}") from e
        except googlemaps.exceptions.Timeout as e:
            raise ProviderError(f"Google Maps timeout: {e}") from e
        except googlemaps.exceptions.TransportError as e:
            raise ProviderError(f"Google Maps transport error: {e}") from e
