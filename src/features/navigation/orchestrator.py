"""내비게이션 오케스트레이터"""
import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

from ...shared.exceptions.errors import ClarificationNeeded, DigitalCaneError, PermissionDeniedError
from ...shared.logging.config import get_logger
from ..intent.domain.enums import RoutingPreference
from ..intent.services.intent_service import IntentService
from ..places.domain.models import Coordinate
from ..places.providers.cache_geocoder import CacheGeocoder
from ..places.services.destination_validator import DestinationValidator
from ..routing.domain.models import RouteData
from ..routing.services.route_service import CURRENT_LOCATION, RouteService
from ..weather.providers.open_meteo_client import OpenMeteoClient
from . import messages
from .domain.models import (
    FindRouteResult,
    LocationContext,
    NavigationSession,
    NavigationStatus,
    PipelineStage,
)
from .services.overview_builder import build_overview

logger = get_logger(__name__)

OnFailure = Callable[[str], None]


@dataclass(frozen=True)
class _PipelineOutcome:
    """파이프라인 결과 (route가 None이면 message가 실패 문장 또는 질문)"""

    route: Optional[RouteData] = None
    origin: str = ""
    destination: str = ""
    preference: Optional[RoutingPreference] = None
    message: str = ""
    is_clarification: bool = False


class NavigationOrchestrator:
    """
    음성 명령 → 경로 안내 오케스트레이터

    상태: IDLE → LOADING → ACTIVE → IDLE
    LOADING 동안 의도 분석 → 목적지 검증 → 경로 조회를 순서대로 실행하며,
    실패하면 단계별 안내 문장과 함께 IDLE로 돌아간다 (자동 재시도 없음).

    한 번에 하나의 파이프라인만 실행한다. stop()은 실행 중인 작업을 취소하고,
    세대 번호가 바뀐 뒤 도착한 결과는 버린다.
    """

    def __init__(
        self,
        intent_service: IntentService,
        destination_validator: DestinationValidator,
        route_service: RouteService,
        weather_client: Optional[OpenMeteoClient] = None,
        origin_geocoder: Optional[CacheGeocoder] = None,
        weather_timeout: float = 3.0,
        origin_label_timeout: float = 3.0,
    ) -> None:
        """
        Args:
            intent_service: 의도 분석 서비스
            destination_validator: 목적지 검증 서비스
            route_service: 경로 조회 서비스
            weather_client: 날씨 클라이언트 (없으면 날씨 안내 생략)
            origin_geocoder: 현재 위치 주소 라벨용 역지오코더 (없으면 "현재 위치")
            weather_timeout: 날씨 조회 제한 시간 (초)
            origin_label_timeout: 주소 라벨 조회 제한 시간 (초)
        """
        self.intent_service = intent_service
        self.destination_validator = destination_validator
        self.route_service = route_service
        self.weather_client = weather_client
        self.origin_geocoder = origin_geocoder
        self.weather_timeout = weather_timeout
        self.origin_label_timeout = origin_label_timeout

        self.session = NavigationSession()
        self._generation = 0
        self._task: Optional["asyncio.Task[_PipelineOutcome]"] = None

        logger.info("NavigationOrchestrator initialized")

    @property
    def status(self) -> NavigationStatus:
        return self.session.status

    async def find_route(
        self,
        utterance: str,
        location: LocationContext,
        on_failure: Optional[OnFailure] = None,
    ) -> FindRouteResult:
        """
        발화로 경로를 찾아 안내를 시작

        Args:
            utterance: 사용자 발화
            location: 위치 권한과 현재 좌표
            on_failure: 실패 문장/되묻기 질문을 받을 콜백

        Returns:
            FindRouteResult: 성공 시 ACTIVE와 개요 안내, 실패 시 IDLE과 안내 문장
        """
        if self.session.status != NavigationStatus.IDLE:
            logger.warning(f"find_route ignored while {self.session.status.value}")
            return FindRouteResult(status=self.session.status, ignored=True)

        if location.is_denied:
            return self._fail(messages.failure_message(PermissionDeniedError("Location permission denied")), on_failure)
        if location.coordinate is None:
            return self._fail(messages.LOCATION_ACQUIRING, on_failure)
        if not utterance or not utterance.strip():
            return self._fail(messages.UNRECOGNIZED_DESTINATION, on_failure)

        logger.info(f"Route search requested: '{utterance}'")

        self._generation += 1
        generation = self._generation
        self.session.begin_loading()

        task = asyncio.create_task(self._run_pipeline(utterance.strip(), location.coordinate))
        self._task = task
        try:
            outcome = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.info("Route search cancelled by stop()")
                return FindRouteResult(status=self.session.status, ignored=True)
            self.session.reset()
            raise
        except Exception:
            if generation == self._generation:
                self.session.reset()
            raise
        finally:
            if self._task is task:
                self._task = None

        if generation != self._generation:
            logger.info("Discarding route search result that arrived after stop()")
            return FindRouteResult(status=self.session.status, ignored=True)

        if outcome.route is None:
            self.session.reset()
            return self._fail(outcome.message, on_failure, is_clarification=outcome.is_clarification)

        self.session.activate(outcome.route, origin=outcome.origin, destination=outcome.destination)
        logger.info(
            f"Navigation started: {outcome.origin} -> {outcome.destination} "
            f"({self.session.total_steps} steps)"
        )

        overview = await self._compose_overview(outcome.route, outcome, location.coordinate)
        if generation != self._generation:
            return FindRouteResult(status=self.session.status, ignored=True)

        self.session.overview_message = overview
        return FindRouteResult(status=NavigationStatus.ACTIVE, message=overview)

    def advance_step(self) -> NavigationSession:
        """다음 단계로 이동 (마지막 단계에서는 안내 종료)"""
        if self.session.status != NavigationStatus.ACTIVE:
            logger.warning("advance_step ignored: navigation is not active")
            return self.session

        if self.session.current_step_index < len(self.session.steps) - 1:
            self.session.current_step_index += 1
        else:
            logger.info("Route completed")
            self.session.reset()

        return self.session

    def select_step(self, index: int) -> NavigationSession:
        """
        특정 단계로 이동 (상태는 그대로)

        Raises:
            IndexError: 범위를 벗어난 index
        """
        if self.session.status != NavigationStatus.ACTIVE:
            logger.warning("select_step ignored: navigation is not active")
            return self.session

        if not 0 <= index < len(self.session.steps):
            raise IndexError(f"Step index out of range: {index} (steps={len(self.session.steps)})")

        self.session.current_step_index = index
        return self.session

    def stop(self) -> None:
        """안내 종료 (실행 중인 경로 탐색도 취소)"""
        self._generation += 1
        if self._task is not None and not self._task.done():
            logger.info("Cancelling in-flight route search")
            self._task.cancel()
        self._task = None
        self.session.reset()

    async def _run_pipeline(self, utterance: str, coordinate: Coordinate) -> _PipelineOutcome:
        stage = PipelineStage.INTENT
        try:
            intent = await asyncio.to_thread(self.intent_service.resolve, utterance)
            if intent.clarification_needed:
                raise ClarificationNeeded(intent.clarification_question or "")
            if not intent.destination_name:
                logger.warning("Intent has no destination")
                return _PipelineOutcome(message=messages.UNRECOGNIZED_DESTINATION)

            stage = PipelineStage.DESTINATION
            place = await asyncio.to_thread(self.destination_validator.validate, intent.destination_name)

            stage = PipelineStage.ROUTE
            route = await asyncio.to_thread(
                self.route_service.fetch_route,
                intent.origin_name or CURRENT_LOCATION,
                place.address or place.name,
                coordinate,
                intent.routing_preference,
                intent.preferred_transport_modes,
            )
        except ClarificationNeeded as e:
            logger.info(f"Clarification needed: {e.question}")
            return _PipelineOutcome(message=messages.failure_message(e), is_clarification=True)
        except DigitalCaneError as e:
            logger.warning(f"Route search failed at {stage.value} stage: {type(e).__name__}: {e}")
            return _PipelineOutcome(message=messages.failure_message(e, stage))

        if route.is_empty:
            return _PipelineOutcome(message=messages.NO_ROUTE)

        origin_label = intent.origin_name or await self._current_location_label(coordinate)
        return _PipelineOutcome(
            route=route,
            origin=origin_label,
            destination=place.name,
            preference=intent.routing_preference or self.route_service.default_preference,
        )

    async def _current_location_label(self, coordinate: Coordinate) -> str:
        """현재 위치의 짧은 주소 (실패 시 "현재 위치")"""
        if self.origin_geocoder is None:
            return messages.DEFAULT_ORIGIN_LABEL

        try:
            label = await asyncio.wait_for(
                asyncio.to_thread(self.origin_geocoder.reverse_geocode, coordinate),
                timeout=self.origin_label_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Reverse geocoding timed out; using default origin label")
            return messages.DEFAULT_ORIGIN_LABEL
        except DigitalCaneError as e:
            logger.warning(f"Reverse geocoding failed: {e}")
            return messages.DEFAULT_ORIGIN_LABEL

        return label or messages.DEFAULT_ORIGIN_LABEL

    async def _compose_overview(self, route: RouteData, outcome: _PipelineOutcome, coordinate: Coordinate) -> str:
        """개요 안내 (날씨 실패/지연은 안내를 막지 않음)"""
        advisory: Optional[str] = None
        if self.weather_client is not None:
            try:
                weather = await asyncio.wait_for(
                    asyncio.to_thread(self.weather_client.fetch_current, coordinate),
                    timeout=self.weather_timeout,
                )
                advisory = weather.advisory
            except asyncio.TimeoutError:
                logger.warning("Weather fetch timed out; announcing without weather")
            except DigitalCaneError as e:
                logger.warning(f"Weather fetch failed: {e}")

        return build_overview(
            route,
            origin=outcome.origin,
            destination=outcome.destination,
            preference=outcome.preference,
            weather_advisory=advisory,
        )

    @staticmethod
    def _fail(message: str, on_failure: Optional[OnFailure], is_clarification: bool = False) -> FindRouteResult:
        if on_failure is not None:
            on_failure(message)
        return FindRouteResult(status=NavigationStatus.IDLE, message=message, is_clarification=is_clarification)
