"""의도 분석 LLM 제공자의 기저 클래스"""

from abc import ABC, abstractmethod


class AbstractIntentProvider(ABC):
    """
    의도 분석 LLM 어댑터

    제공자마다 다른 요청/응답 형식만 처리하고,
    JSON 텍스트 하나를 돌려준다. 해석은 IntentService가 한 곳에서 한다.
    """

    name: str = "abstract"

    @abstractmethod
    def generate_json(self, system_instruction: str, user_text: str) -> str:
        """
        시스템 지시문과 사용자 발화를 보내 JSON 텍스트를 받는다

        Args:
            system_instruction: 고정 시스템 지시문
            user_text: 사용자 발화

        Returns:
            str: 모델이 생성한 JSON 텍스트

        Raises:
            ProviderError: 통신/HTTP 오류
            DecodeError: 응답에 텍스트가 없을 때
        """
        pass
