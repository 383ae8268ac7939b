"""Gemini 의도 분석 제공자 (google-genai SDK)"""

from google import genai
from google.genai import errors, types

from ....shared.exceptions.errors import DecodeError, ProviderError, QuotaExceededError
from ....shared.logging.config import get_logger
from .base import AbstractIntentProvider

logger = get_logger(__name__)


class GeminiIntentProvider(AbstractIntentProvider):
    """Gemini structured output(JSON)로 의도를 추출"""

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout: float = 10.0,
        max_output_tokens: int = 1024,
    ) -> None:
        """
        Args:
            api_key: Gemini API Key
            model: 모델 이름
            timeout: 요청 타임아웃 (초)
            max_output_tokens: 최대 출력 토큰
        """
        self.model = model
        self.max_output_tokens = max_output_tokens

        try:
            self.client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=int(timeout * 1000)),
            )
            logger.info(f"Gemini intent provider initialized (model: {model})")
        except Exception as e:
            raise ProviderError(f"Failed to initialize Gemini client: {e}") from e

    def generate_json(self, system_instruction: str, user_text: str) -> str:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            temperature=0.0,
            top_p=0.95,
            top_k=40,
            max_output_tokens=self.max_output_tokens,
        )

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=user_text,
                config=config,
            )
        except errors.APIError as e:
            if e.code == 429:
                raise QuotaExceededError(f"Gemini quota exceeded: {e}") from e
            raise ProviderError(f"Gemini API error ({e.code}): {e}") from e
        except Exception as e:
            raise ProviderError(f"Gemini request failed: {e}") from e

        text = response.text if response is not None else None
        if not text:
            raise DecodeError("Gemini response has no text content")

        logger.debug(f"Gemini raw JSON: {text}")
        return text
