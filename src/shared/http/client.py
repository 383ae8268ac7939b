"""HTTP 클라이언트 (외부 제공자 호출용)"""

from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..exceptions.errors import ProviderError, QuotaExceededError
from ..logging.config import get_logger

logger = get_logger(__name__)


class HTTPClient:
    """
    타임아웃이 있는 HTTP 클라이언트

    Features:
    - 요청별 타임아웃 (무한 대기 방지)
    - 재시도 횟수 설정 (기본 0: 파이프라인은 자동 재시도하지 않음)
    - 세션 관리
    - 429 응답은 QuotaExceededError로 구분
    """

    def __init__(
        self,
        timeout: float = 10.0,
        max_retries: int = 0,
        backoff_factor: float = 0.5,
        status_forcelist: tuple[int, ...] = (500, 502, 503, 504),
        user_agent: Optional[str] = None,
    ):
        """
        Args:
            timeout: 요청 타임아웃 (초)
            max_retries: 최대 재시도 횟수
            backoff_factor: 백오프 계수
            status_forcelist: 재시도 대상 상태 코드
            user_agent: User-Agent 헤더
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.status_forcelist = status_forcelist
        self.user_agent = user_agent or "DigitalCane/1.0"

        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """세션 생성"""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=self.status_forcelist,
            allowed_methods=["HEAD", "GET", "POST"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({"User-Agent": self.user_agent})

        return session

    def get(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> requests.Response:
        """
        GET 요청

        Args:
            url: 요청 URL
            params: 쿼리 파라미터
            headers: 추가 헤더

        Returns:
            응답 객체

        Raises:
            QuotaExceededError: 사용량 초과 (429)
            ProviderError: 요청 실패 시
        """
        logger.debug(f"GET request to {url}")
        try:
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"GET request failed: {url} - {e}")
            raise ProviderError(f"Failed to GET {url}: {e}") from e

        return self._check_response(response, "GET", url)

    def post(
        self,
        url: str,
        data: Optional[Any] = None,
        json: Optional[Any] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> requests.Response:
        """
        POST 요청

        Args:
            url: 요청 URL
            data: 폼 데이터
            json: JSON 데이터
            headers: 추가 헤더

        Returns:
            응답 객체

        Raises:
            QuotaExceededError: 사용량 초과 (429)
            ProviderError: 요청 실패 시
        """
        logger.debug(f"POST request to {url}")
        try:
            response = self.session.post(
                url,
                data=data,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"POST request failed: {url} - {e}")
            raise ProviderError(f"Failed to POST {url}: {e}") from e

        return self._check_response(response, "POST", url)

    def _check_response(
        self, response: requests.Response, method: str, url: str
    ) -> requests.Response:
        """상태 코드 확인"""
        if response.status_code == 429:
            logger.warning(f"{method} request rate limited: {url}")
            raise QuotaExceededError(f"Quota exceeded for {url}")

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(
                f"{method} request failed: {url} (status={response.status_code}) - {response.text[:500]}"
            )
            raise ProviderError(f"{method} {url} returned {response.status_code}") from e

        logger.debug(f"{method} request successful: {url} (status={response.status_code})")
        return response

    def close(self) -> None:
        """세션 종료"""
        if self.session:
            self.session.close()
            logger.debug("HTTP session closed")

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
