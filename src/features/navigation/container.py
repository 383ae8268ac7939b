"""의존성 조립 (Settings → 클라이언트/서비스)"""

from typing import Optional

from ...infrastructure.config.settings import Settings
from ...infrastructure.gcp.secret_manager import SecretManagerClient, resolve_api_key
from ...shared.exceptions.errors import ConfigurationError
from ...shared.http.client import HTTPClient
from ...shared.logging.config import get_logger
from ..intent.domain.enums import RoutingPreference
from ..intent.providers.base import AbstractIntentProvider
from ..intent.providers.gemini_intent_provider import GeminiIntentProvider
from ..intent.providers.openai_intent_provider import OpenAIIntentProvider
from ..intent.services.intent_service import IntentService
from ..places.providers.cache_geocoder import CacheGeocoder
from ..places.providers.google_maps_geocoder import GoogleMapsGeocoder
from ..places.providers.google_places_client import GooglePlacesClient
from ..places.providers.overpass_client import OverpassClient
from ..places.services.destination_validator import DestinationValidator
from ..places.services.nearby_search_service import NearbySearchService
from ..places.services.proximity_cache import ProximityCache
from ..routing.providers.google_routes_client import GoogleRoutesClient
from ..routing.services.route_service import RouteService
from ..weather.providers.open_meteo_client import OpenMeteoClient
from .orchestrator import NavigationOrchestrator

logger = get_logger(__name__)


class NavigationContainer:
    """
    각 Feature를 조립하는 컨테이너

    싱글턴 대신 여기서 만든 인스턴스를 주입한다.
    """

    def __init__(self, settings: Settings) -> None:
        """
        Args:
            settings: 애플리케이션 설정

        Raises:
            ConfigurationError: 필수 API Key가 없을 때
        """
        self.settings = settings

        # 개발 환경이 아니면 Secret Manager에서 API Key 조회
        self.secret_manager: Optional[SecretManagerClient] = None
        if not settings.is_development and settings.gcp_project_id:
            self.secret_manager = SecretManagerClient(settings.gcp_project_id)

        google_maps_api_key = resolve_api_key(
            settings.google_maps_api_key,
            settings.google_maps_api_key_secret_name,
            self.secret_manager,
        )
        if not google_maps_api_key:
            raise ConfigurationError("Google Maps API key is not configured")

        # 제공자 HTTP 클라이언트
        self.http_client = HTTPClient(
            timeout=settings.provider_timeout,
            max_retries=settings.provider_retry,
            user_agent=settings.user_agent,
        )

        # 장소
        self.places_client = GooglePlacesClient(
            api_key=google_maps_api_key,
            http_client=self.http_client,
            language_code=settings.language_code,
        )
        self.destination_validator = DestinationValidator(
            self.places_client,
            max_candidates=settings.destination_candidate_limit,
        )
        self.overpass_client = OverpassClient(
            http_client=self.http_client,
            base_url=settings.overpass_url,
            query_timeout=int(settings.provider_timeout),
        )
        self.nearby_search_service = NearbySearchService(
            cheap_provider=self.overpass_client,
            rich_provider=self.places_client,
            cache=ProximityCache(threshold_m=settings.nearby_cache_threshold_m) if settings.nearby_cache_enabled else None,
            coverage_threshold=settings.nearby_coverage_threshold,
            default_radius_m=settings.nearby_default_radius,
            rich_max_results=settings.nearby_rich_max_results,
        )
        self.origin_geocoder = CacheGeocoder(
            GoogleMapsGeocoder(
                api_key=google_maps_api_key,
                language=settings.language_code,
                timeout=settings.provider_timeout,
            )
        )

        # 경로
        self.routes_client = GoogleRoutesClient(
            api_key=google_maps_api_key,
            http_client=self.http_client,
            language_code=settings.language_code,
        )
        self.route_service = RouteService(
            self.routes_client,
            default_preference=RoutingPreference.parse(settings.get_routing_preference()),
        )

        # 의도 분석
        self.intent_service = IntentService(self._create_intent_provider(google_maps_api_key))

        # 날씨 (선택)
        self.weather_http_client: Optional[HTTPClient] = None
        self.weather_client: Optional[OpenMeteoClient] = None
        if settings.weather_enabled:
            self.weather_http_client = HTTPClient(
                timeout=settings.weather_timeout,
                max_retries=0,
                user_agent=settings.user_agent,
            )
            self.weather_client = OpenMeteoClient(self.weather_http_client, url=settings.open_meteo_url)

        self.orchestrator = NavigationOrchestrator(
            intent_service=self.intent_service,
            destination_validator=self.destination_validator,
            route_service=self.route_service,
            weather_client=self.weather_client,
            origin_geocoder=self.origin_geocoder,
            weather_timeout=settings.weather_timeout,
        )

        logger.info("NavigationContainer initialized")

    def _create_intent_provider(self, google_maps_api_key: str) -> AbstractIntentProvider:
        """
        설정에 맞는 의도 분석 제공자 생성

        Gemini Key가 없으면 Google Maps Key를 사용한다 (같은 GCP 프로젝트).
        """
        provider = self.settings.intent_provider.lower()

        if provider == "gemini":
            api_key = resolve_api_key(
                self.settings.gemini_api_key,
                self.settings.gemini_api_key_secret_name,
                self.secret_manager,
            )
            if not api_key:
                logger.warning("Gemini API key not found, falling back to Google Maps API key")
                api_key = google_maps_api_key
            return GeminiIntentProvider(
                api_key=api_key,
                model=self.settings.gemini_model,
                timeout=self.settings.provider_timeout,
            )

        if provider == "openai":
            if not self.settings.openai_api_key:
                raise ConfigurationError("OpenAI API key is not configured")
            return OpenAIIntentProvider(
                api_key=self.settings.openai_api_key,
                http_client=self.http_client,
                model=self.settings.openai_model,
                base_url=self.settings.openai_base_url,
            )

        raise ConfigurationError(f"Unknown intent provider: {self.settings.intent_provider}")

    def close(self) -> None:
        """HTTP 세션 종료"""
        self.http_client.close()
        if self.weather_http_client is not None:
            self.weather_http_client.close()
