"""OpenAI 호환 Chat Completions 의도 분석 제공자"""

from ....shared.exceptions.errors import DecodeError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from .base import AbstractIntentProvider

logger = get_logger(__name__)


class OpenAIIntentProvider(AbstractIntentProvider):
    """Chat Completions + JSON 모드로 의도를 추출"""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        http_client: HTTPClient,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
    ) -> None:
        """
        Args:
            api_key: API Key
            http_client: HTTP 클라이언트
            model: 모델 이름
            base_url: API 기본 URL
        """
        self.api_key = api_key
        self.http_client = http_client
        self.model = model
        self.base_url = base_url.rstrip("/")

        logger.info(f"OpenAI intent provider initialized (model: {model})")

    def generate_json(self, system_instruction: str, user_text: str) -> str:
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": user_text},
            ],
            "response_format": {"type": "json_object"},
            "temperature": 0,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        response = self.http_client.post(f"{self.base_url}/chat/completions", json=body, headers=headers)

        try:
            payload = response.json()
            content = payload["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise DecodeError(f"Unexpected chat completion response: {e}") from e

        if not isinstance(content, str) or not content:
            raise DecodeError("Chat completion has no text content")

        logger.debug(f"OpenAI raw JSON: {content}")
        return content
