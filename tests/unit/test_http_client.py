"""HTTPClient 테스트"""
from unittest.mock import patch

import pytest
import requests

from src.shared.exceptions.errors import ProviderError, QuotaExceededError
from src.shared.http.client import HTTPClient


def _response(status_code: int, body: bytes = b"{}") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.url = "https://example.com/api"
    return response


def test_post_returns_response_on_success() -> None:
    """200 응답은 그대로 반환"""
    client = HTTPClient(timeout=5.0)
    with patch.object(client.session, "post", return_value=_response(200, b'{"ok": true}')) as mock_post:
        response = client.post("https://example.com/api", json={"q": 1}, headers={"X-Test": "1"})

    assert response.json() == {"ok": True}
    kwargs = mock_post.call_args.kwargs
    assert kwargs["timeout"] == 5.0
    assert kwargs["json"] == {"q": 1}
    assert kwargs["headers"] == {"X-Test": "1"}


def test_429_raises_quota_exceeded() -> None:
    """429는 QuotaExceededError (ProviderError의 하위 타입)"""
    client = HTTPClient()
    with patch.object(client.session, "post", return_value=_response(429)):
        with pytest.raises(QuotaExceededError):
            client.post("https://example.com/api", json={})


def test_http_error_raises_provider_error() -> None:
    """그 밖의 HTTP 오류는 ProviderError"""
    client = HTTPClient()
    with patch.object(client.session, "get", return_value=_response(503, b"unavailable")):
        with pytest.raises(ProviderError) as exc_info:
            client.get("https://example.com/api")

    assert not isinstance(exc_info.value, QuotaExceededError)


def test_timeout_raises_provider_error() -> None:
    """타임아웃 등 통신 예외는 ProviderError"""
    client = HTTPClient(timeout=0.1)
    with patch.object(client.session, "get", side_effect=requests.Timeout("timed out")):
        with pytest.raises(ProviderError):
            client.get("https://example.com/api")


def test_default_has_no_retries() -> None:
    """기본 재시도 0회"""
    client = HTTPClient()
    adapter = client.session.get_adapter("https://example.com")
    assert adapter.max_retries.total == 0


def test_context_manager_closes_session() -> None:
    """with 문 종료 시 세션 닫기"""
    client = HTTPClient()
    with patch.object(client.session, "close") as mock_close:
        with client:
            pass
    mock_close.assert_called_once()
