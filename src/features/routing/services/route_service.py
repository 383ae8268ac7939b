"""경로 조회 서비스"""
from dataclasses import replace
from typing import Optional, Sequence, Union

from ....shared.exceptions.errors import LocationUnavailableError, NoRouteFoundError
from ....shared.logging.config import get_logger
from ...intent.domain.enums import RoutingPreference, TransitVehicleMode
from ...places.domain.models import Coordinate
from ..domain.models import RouteData
from ..providers.google_routes_client import GoogleRoutesClient
from .route_normalizer import RouteNormalizer

logger = get_logger(__name__)

# 출발지를 현재 좌표로 처리하라는 표시
CURRENT_LOCATION = "CURRENT_LOCATION"


class RouteService:
    """
    출발지/목적지로 대중교통 경로를 조회하고 정규화

    자동 재시도는 하지 않는다. 단, 선호 교통수단으로 제한한 요청에 경로가 없으면
    제한을 풀고 한 번 더 조회하며 결과에 fallback_applied를 표시한다.
    """

    def __init__(
        self,
        routes_client: GoogleRoutesClient,
        normalizer: Optional[RouteNormalizer] = None,
        default_preference: Optional[RoutingPreference] = None,
    ) -> None:
        """
        Args:
            routes_client: Routes API 클라이언트
            normalizer: 응답 정규화기
            default_preference: 설정에서 정한 기본 경로 선호 옵션
        """
        self.routes_client = routes_client
        self.normalizer = normalizer or RouteNormalizer()
        self.default_preference = default_preference

    def fetch_route(
        self,
        origin: str,
        destination: str,
        current_location: Optional[Coordinate] = None,
        routing_preference: Optional[RoutingPreference] = None,
        preferred_modes: Sequence[TransitVehicleMode] = (),
    ) -> RouteData:
        """
        경로 조회

        Args:
            origin: 출발지 이름/주소 또는 CURRENT_LOCATION
            destination: 목적지 주소
            current_location: 현재 좌표 (CURRENT_LOCATION일 때 필수)
            routing_preference: 의도에서 추출한 선호 옵션 (설정보다 우선)
            preferred_modes: 허용 교통수단

        Returns:
            RouteData: 탑승 단계가 하나 이상인 경로

        Raises:
            LocationUnavailableError: CURRENT_LOCATION인데 좌표가 없을 때
            NoRouteFoundError: 경로가 없을 때
            DecodeError: 응답 형식이 다를 때
            ProviderError: 통신 실패 시
        """
        if origin == CURRENT_LOCATION:
            if current_location is None:
                raise LocationUnavailableError("Current location required but unavailable")
            request_origin: Union[str, Coordinate] = current_location
        else:
            request_origin = origin

        preference = routing_preference or self.default_preference
        modes = [mode.value for mode in preferred_modes]

        try:
            return self._fetch(request_origin, destination, preference, modes)
        except NoRouteFoundError:
            if not modes:
                raise
            logger.warning(f"No route with modes {modes}, retrying without restrictions")

        route = self._fetch(request_origin, destination, None, [])
        return replace(route, fallback_applied=True)

    def _fetch(
        self,
        origin: Union[str, Coordinate],
        destination: str,
        preference: Optional[RoutingPreference],
        modes: list[str],
    ) -> RouteData:
        logger.info(
            f"Fetching route: {origin} -> {destination} "
            f"(preference={preference.value if preference else None}, modes={modes or None})"
        )
        leg = self.routes_client.compute_transit_leg(
            origin,
            destination,
            routing_preference=preference.value if preference else None,
            allowed_modes=modes or None,
        )
        if leg is None:
            raise NoRouteFoundError(f"No transit route to '{destination}'")

        return self.normalizer.normalize(leg)
