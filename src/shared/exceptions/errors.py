"""커스텀 예외 정의"""


class DigitalCaneError(Exception):
    """디지털케인 기저 예외"""

    pass


class ProviderError(DigitalCaneError):
    """외부 제공자(네트워크/HTTP) 오류"""

    pass


class QuotaExceededError(ProviderError):
    """제공자 사용량 초과 (HTTP 429)"""

    pass


class DecodeError(DigitalCaneError):
    """응답 스키마 불일치 / JSON 해석 오류"""

    pass


class PlaceNotFoundError(DigitalCaneError):
    """장소 검색 결과 없음"""

    pass


class NoRouteFoundError(DigitalCaneError):
    """대중교통 경로 없음"""

    pass


class LocationUnavailableError(DigitalCaneError):
    """현재 위치를 사용할 수 없음"""

    pass


class PermissionDeniedError(DigitalCaneError):
    """위치 권한 거부"""

    pass


class ClarificationNeeded(DigitalCaneError):
    """
    추가 질문이 필요한 경우 (오류가 아닌 제어 흐름)

    사용자에게 되물을 질문을 담고 있다.
    """

    def __init__(self, question: str) -> None:
        super().__init__(question)
        self.question = question


class ConfigurationError(DigitalCaneError):
    """설정 오류"""

    pass
