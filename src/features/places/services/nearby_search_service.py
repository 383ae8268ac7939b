"""하이브리드 주변 탐색 서비스"""

import asyncio
from typing import Callable, Hashable, Iterable, Optional

from ....shared.exceptions.errors import DigitalCaneError
from ....shared.logging.config import get_logger
from ....shared.utils.text import compact
from ..domain.enums import STAGE_ONE_GROUPS, PlaceCategoryGroup
from ..domain.models import Coordinate, NearbySearchResult, Place
from ..providers.google_places_client import GooglePlacesClient
from ..providers.overpass_client import OverpassClient
from .proximity_cache import ProximityCache

logger = get_logger(__name__)

PROVIDER_FAILURE_REASON = "provider_failure"

# 1단계 중복 판정 좌표 자릿수 (약 10cm)
DEDUPE_PRECISION = 6


def stage_one_key(place: Place) -> Hashable:
    """1단계 중복 제거 키: (이름, 반올림 위도, 반올림 경도)"""
    return (place.name, *place.coordinate.rounded(DEDUPE_PRECISION))


def name_key(place: Place) -> Hashable:
    """2단계 병합 키: 이름만 (제공자 간 좌표는 비교 불가)"""
    return compact(place.name)


def merge_places(
    batches: Iterable[Iterable[Place]],
    key: Callable[[Place], Hashable],
    seen: Optional[set[Hashable]] = None,
) -> list[Place]:
    """
    여러 결과 목록을 하나로 합치고 중복 제거

    입력 순서대로 처음 나온 항목을 남기므로 같은 입력이면 결과도 같다.

    Args:
        batches: 결과 목록들
        key: 중복 판정 키 함수
        seen: 이미 포함된 키 집합 (갱신됨)

    Returns:
        list[Place]: 병합된 목록
    """
    seen = set() if seen is None else seen
    merged: list[Place] = []
    for batch in batches:
        for place in batch:
            k = key(place)
            if k in seen:
                continue
            seen.add(k)
            merged.append(place)
    return merged


class NearbySearchService:
    """
    하이브리드 주변 탐색 서비스

    처리 흐름:
    1. 근접 캐시 확인 (이동 거리가 임계값 미만이면 즉시 반환)
    2. 1단계: 저비용 제공자(Overpass)에 카테고리 4개 + 와일드카드 1개를 동시에 요청
    3. 결과 개수가 coverage_threshold 이상이면 반환 (비용 절감)
    4. 2단계: 유료 제공자(Google Places)에 한 번 요청해 이름 기준으로 병합
    """

    def __init__(
        self,
        cheap_provider: OverpassClient,
        rich_provider: Optional[GooglePlacesClient] = None,
        cache: Optional[ProximityCache] = None,
        coverage_threshold: int = 5,
        default_radius_m: float = 100.0,
        rich_max_results: int = 20,
    ) -> None:
        """
        Args:
            cheap_provider: 1단계 제공자
            rich_provider: 2단계 제공자 (없으면 2단계 생략)
            cache: 근접 캐시 (없으면 캐시 미사용)
            coverage_threshold: 2단계로 확장하지 않는 최소 결과 수
            default_radius_m: 기본 반경 (미터)
            rich_max_results: 2단계 최대 결과 수
        """
        self.cheap_provider = cheap_provider
        self.rich_provider = rich_provider
        self.cache = cache
        self.coverage_threshold = coverage_threshold
        self.default_radius_m = default_radius_m
        self.rich_max_results = rich_max_results

        logger.info(
            f"NearbySearchService initialized: threshold={coverage_threshold}, "
            f"rich_provider={'on' if rich_provider else 'off'}, cache={'on' if cache else 'off'}"
        )

    async def search_nearby(
        self,
        center: Coordinate,
        radius_m: Optional[float] = None,
    ) -> NearbySearchResult:
        """
        주변 장소 검색

        Args:
            center: 검색 중심 (현재 위치)
            radius_m: 반경 (미터, None이면 기본값)

        Returns:
            NearbySearchResult: 장소 목록. 두 단계 모두 실패하면 failure_reason이 설정된다.
        """
        radius = radius_m or self.default_radius_m

        if self.cache is not None:
            cached = self.cache.get(center)
            if cached is not None:
                return NearbySearchResult(places=cached, from_cache=True)

        stage_one, stage_one_failed = await self._run_stage_one(center, radius)

        if not stage_one_failed and len(stage_one) >= self.coverage_threshold:
            logger.info(f"Nearby search: {len(stage_one)} places from stage 1")
            self._store(center, stage_one)
            return NearbySearchResult(places=stage_one)

        if self.rich_provider is None:
            if stage_one_failed:
                logger.warning("Nearby search failed: stage 1 failed and no rich provider configured")
                return NearbySearchResult(failure_reason=PROVIDER_FAILURE_REASON)
            self._store(center, stage_one)
            return NearbySearchResult(places=stage_one)

        logger.info(
            f"Stage 1 returned {len(stage_one)} places (failed={stage_one_failed}); escalating to rich provider"
        )
        try:
            rich = await asyncio.to_thread(
                self.rich_provider.search_nearby, center, radius, self.rich_max_results
            )
        except DigitalCaneError as e:
            logger.warning(f"Rich provider nearby search failed: {e}")
            if stage_one_failed:
                return NearbySearchResult(failure_reason=PROVIDER_FAILURE_REASON)
            self._store(center, stage_one)
            return NearbySearchResult(places=stage_one)

        seen = {name_key(place) for place in stage_one}
        merged = stage_one + merge_places([rich], key=name_key, seen=seen)

        logger.info(f"Nearby search: {len(stage_one)} from stage 1 + {len(merged) - len(stage_one)} from stage 2")
        self._store(center, merged)
        return NearbySearchResult(places=merged, used_rich_provider=True)

    async def _run_stage_one(self, center: Coordinate, radius_m: float) -> tuple[list[Place], bool]:
        """
        1단계 카테고리 쿼리를 동시에 실행하고 한 번에 병합

        Returns:
            tuple[list[Place], bool]: (병합 결과, 모든 쿼리가 실패했는지)
        """
        outcomes = await asyncio.gather(
            *(self._query_group(group, center, radius_m) for group in STAGE_ONE_GROUPS)
        )

        batches = [places for places in outcomes if places is not None]
        all_failed = not batches

        merged = merge_places(batches, key=stage_one_key)
        return merged, all_failed

    async def _query_group(
        self,
        group: PlaceCategoryGroup,
        center: Coordinate,
        radius_m: float,
    ) -> Optional[list[Place]]:
        """카테고리 그룹 하나 조회 (실패 시 None)"""
        try:
            return await asyncio.to_thread(self.cheap_provider.search_category, group, center, radius_m)
        except DigitalCaneError as e:
            logger.warning(f"Stage 1 query '{group.value}' failed: {e}")
            return None

    def _store(self, center: Coordinate, places: list[Place]) -> None:
        if self.cache is not None:
            self.cache.put(center, places)
