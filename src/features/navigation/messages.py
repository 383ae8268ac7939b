"""사용자에게 들려줄 안내/실패 문장"""
from typing import Optional

from ...shared.exceptions.errors import (
    ClarificationNeeded,
    ConfigurationError,
    DecodeError,
    DigitalCaneError,
    LocationUnavailableError,
    NoRouteFoundError,
    PermissionDeniedError,
    PlaceNotFoundError,
    ProviderError,
    QuotaExceededError,
)
from .domain.models import PipelineStage

PERMISSION_DENIED = "현재 위치를 확인할 수 없습니다. 설정에서 위치 권한을 확인해 주세요."
LOCATION_ACQUIRING = "위치 정보를 수신 중입니다. 잠시 후 다시 시도해 주세요."
LOCATION_UNAVAILABLE = "현재 위치를 사용할 수 없습니다. 출발지를 함께 말씀해 주시거나 잠시 후 다시 시도해 주세요."
UNRECOGNIZED_DESTINATION = "목적지를 명확히 인식하지 못했습니다. 정확한 장소명을 다시 말씀해 주세요."
DEFAULT_CLARIFICATION = "목적지를 다시 말씀해 주시겠어요?"
PLACE_NOT_FOUND = "해당 장소를 찾을 수 없습니다. 정확한 이름을 다시 말씀해 주세요."
NO_ROUTE = "해당 목적지로 가는 대중교통 경로를 찾을 수 없습니다."
QUOTA_EXCEEDED = "서비스 사용량이 초과되었습니다. 잠시 후 다시 시도해 주세요."
CONFIGURATION = "서비스 설정에 문제가 있습니다. 관리자에게 문의해 주세요."
UNKNOWN = "알 수 없는 오류가 발생했습니다. 다시 시도해 주세요."

ROUTE_COMPLETED = "목적지에 도착했습니다. 안내를 종료합니다."
NAVIGATION_STOPPED = "안내를 종료했습니다."
DEFAULT_ORIGIN_LABEL = "현재 위치"

NEARBY_EMPTY = "주변에 안내할 장소가 없습니다."
NEARBY_PROVIDER_FAILURE = "네트워크 문제로 주변 장소를 불러오지 못했습니다. 잠시 후 다시 시도해 주세요."

FALLBACK_NOTE = "요청하신 교통수단으로는 경로가 없어 다른 교통수단을 포함한 경로로 안내합니다."

_PROVIDER_FAILURE_BY_STAGE = {
    PipelineStage.INTENT: "음성 명령을 분석하지 못했습니다. 네트워크 상태를 확인하고 다시 시도해 주세요.",
    PipelineStage.DESTINATION: "목적지를 검색하지 못했습니다. 네트워크 상태를 확인하고 다시 시도해 주세요.",
    PipelineStage.ROUTE: "경로를 검색하지 못했습니다. 네트워크 상태를 확인하고 다시 시도해 주세요.",
}

_DECODE_FAILURE_BY_STAGE = {
    PipelineStage.INTENT: UNRECOGNIZED_DESTINATION,
    PipelineStage.DESTINATION: "목적지 검색 결과를 처리하지 못했습니다. 다시 시도해 주세요.",
    PipelineStage.ROUTE: "경로 정보를 처리하지 못했습니다. 다시 시도해 주세요.",
}


def failure_message(error: DigitalCaneError, stage: Optional[PipelineStage] = None) -> str:
    """
    예외를 짧은 한국어 안내 문장으로 변환

    제공자 원문 메시지는 포함하지 않는다 (로그에만 남긴다).
    """
    if isinstance(error, ClarificationNeeded):
        return error.question or DEFAULT_CLARIFICATION
    if isinstance(error, PermissionDeniedError):
        return PERMISSION_DENIED
    if isinstance(error, LocationUnavailableError):
        return LOCATION_UNAVAILABLE
    if isinstance(error, PlaceNotFoundError):
        return PLACE_NOT_FOUND
    if isinstance(error, NoRouteFoundError):
        return NO_ROUTE
    if isinstance(error, QuotaExceededError):
        return QUOTA_EXCEEDED
    if isinstance(error, ProviderError):
        return _PROVIDER_FAILURE_BY_STAGE.get(stage, _PROVIDER_FAILURE_BY_STAGE[PipelineStage.ROUTE])
    if isinstance(error, DecodeError):
        return _DECODE_FAILURE_BY_STAGE.get(stage, _DECODE_FAILURE_BY_STAGE[PipelineStage.ROUTE])
    if isinstance(error, ConfigurationError):
        return CONFIGURATION
    return UNKNOWN
