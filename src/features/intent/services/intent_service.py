"""사용자 발화 → LocationIntent 변환 서비스"""
import json
import re

from ....shared.exceptions.errors import DecodeError
from ....shared.logging.config import get_logger
from ..domain.models import LocationIntent
from ..providers.base import AbstractIntentProvider

logger = get_logger(__name__)

SYSTEM_INSTRUCTION = """당신은 시각장애인을 위한 음성 안내 서비스 '디지털케인'의 AI 어시스턴트입니다.
사용자의 대화 내역 전체를 분석하여 최종적인 '목적지(destinationName)'와 '출발지(originName)'를 추출하세요.

CRITICAL RULES:
1. 모든 장소 이름은 한국어(Korean)로 추출하세요.
2. 사용자의 가장 최근 입력(Last Turn)이 이전 대화와 모순된다면, 최근 입력을 우선하여 정보를 업데이트하세요.
3. 장소 이름이 불완전하거나 발음이 비슷한 오타(예: "서오울" -> "서울")가 있다면 대화 문맥과 상식적인 지명으로 교정하세요.
4. "originName"이 명시되지 않았다면 ""로 설정하세요. (현재 위치로 처리됨)
5. "destinationName"을 도저히 알 수 없는 경우에만 ""로 설정하세요. 절대 임의의 장소(예: 서울역)를 지어내지 마세요.
6. 같은 이름의 장소가 여러 곳이거나 목적지를 하나로 특정할 수 없다면 추측하지 말고
   "clarificationNeeded": true 와 짧은 확인 질문("clarificationQuestion")을 돌려주세요.
   예: "강남역 2호선과 신분당선 중 어느 쪽인가요?", "목적지를 다시 말씀해 주시겠어요?"
7. 결과는 반드시 아래의 JSON 형식 하나만 출력하세요. 다른 텍스트는 일절 포함하지 마세요.

Output format:
{"destinationName": "추출된 목적지", "originName": "추출된 출발지", "transportMode": "TRANSIT", "preferredTransportModes": ["BUS", "SUBWAY"], "routingPreference": "LESS_WALKING", "clarificationNeeded": false, "clarificationQuestion": null}

Usage Guide for 'preferredTransportModes':
- If user says "버스로 가고 싶어" -> ["BUS"]
- If user says "지하철이나 기차로 안내해줘" -> ["SUBWAY", "RAIL"]
- If user doesn't specify or says "상관없어" -> null
- Supported values: "BUS", "SUBWAY", "RAIL"

Usage Guide for 'routingPreference':
- If user says "최소 환승으로 가고 싶어", "갈아타기 싫어" -> "FEWER_TRANSFERS"
- If user says "걷기 싫어", "도보 최소화해줘", "다리가 아파" -> "LESS_WALKING"
- If user says nothing specific -> null
- Supported values: "LESS_WALKING", "FEWER_TRANSFERS"
"""

# 일부 모델이 JSON 모드에서도 감싸서 돌려주는 코드 펜스
_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class IntentService:
    """발화를 LLM 제공자에 보내고 응답을 LocationIntent로 해석"""

    def __init__(self, provider: AbstractIntentProvider, system_instruction: str = SYSTEM_INSTRUCTION):
        """
        Args:
            provider: 의도 분석 LLM 어댑터
            system_instruction: 시스템 지시문
        """
        self.provider = provider
        self.system_instruction = system_instruction

    def resolve(self, utterance: str) -> LocationIntent:
        """
        발화에서 이동 의도 추출

        clarification_needed=True인 결과도 정상 반환값이다 (오류 아님).

        Args:
            utterance: 사용자 발화 (대화 기록을 이어붙인 텍스트도 가능)

        Returns:
            LocationIntent: 추출된 의도

        Raises:
            ProviderError: 제공자 통신 오류 (재시도 없음)
            DecodeError: JSON이 아니거나 필수 키가 없을 때
        """
        user_text = (
            f"[CONVERSATION HISTORY]\n{utterance}\n\n"
            "[INSTRUCTION]\nExtract the locations based on the latest turn in the history above. "
            "Respond with JSON only."
        )

        raw = self.provider.generate_json(self.system_instruction, user_text)
        intent = parse_intent_json(raw)

        logger.info(
            f"Intent resolved via {self.provider.name}: "
            f"destination='{intent.destination_name}', origin='{intent.origin_name or 'CURRENT_LOCATION'}', "
            f"clarification={intent.clarification_needed}"
        )
        return intent


def parse_intent_json(raw: str) -> LocationIntent:
    """
    LLM 응답 텍스트를 LocationIntent로 변환

    Raises:
        DecodeError: JSON 파싱 실패 또는 스키마 불일치
    """
    text = (raw or "").strip()
    match = _CODE_FENCE.match(text)
    if match:
        text = match.group(1)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Intent response is not JSON: {text[:200]}")
        raise DecodeError(f"Intent response is not valid JSON: {e}") from e

    return LocationIntent.from_payload(payload)
