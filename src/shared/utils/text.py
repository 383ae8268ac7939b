"""텍스트 처리 유틸리티"""

import re
from typing import Optional

# 한글 음절 범위 (가 ~ 힣)
_HANGUL_START = 0xAC00
_HANGUL_END = 0xD7A3


def has_final_consonant(text: str) -> Optional[bool]:
    """
    마지막 글자의 받침 여부

    Returns:
        받침이 있으면 True, 없으면 False, 마지막 글자가 한글이 아니면 None
    """
    if not text:
        return None

    code = ord(text[-1])
    if _HANGUL_START <= code <= _HANGUL_END:
        return (code - _HANGUL_START) % 28 > 0

    return None


def with_object_particle(text: str) -> str:
    """
    목적격 조사(을/를)를 붙인다

    예: "143번 버스" -> "143번 버스를", "2호선" -> "2호선을"
    한글로 끝나지 않으면 "을(를)"을 붙인다.
    """
    batchim = has_final_consonant(text)
    if batchim is None:
        return text + "을(를)"
    return text + ("을" if batchim else "를")


def with_direction_particle(text: str) -> str:
    """
    방향 조사(으로/로)를 붙인다

    받침이 없거나 ㄹ 받침이면 "로", 그 외 받침은 "으로".
    예: "코엑스" -> "코엑스로", "서울역" -> "서울역으로", "을지로" -> "을지로로"
    """
    if not text:
        return text
    code = ord(text[-1])
    if not (_HANGUL_START <= code <= _HANGUL_END):
        return text + "(으)로"
    final = (code - _HANGUL_START) % 28
    return text + ("로" if final in (0, 8) else "으로")


def is_numeric(text: Optional[str]) -> bool:
    """정수 표기(숫자만)인지 확인"""
    return bool(text) and text.isdigit()


def contains_non_digit(text: Optional[str]) -> bool:
    """숫자가 아닌 문자가 하나라도 포함되어 있는지 확인"""
    if not text:
        return False
    return any(not ch.isdigit() for ch in text)


def compact(text: Optional[str]) -> str:
    """공백을 모두 제거 (이름 비교용)"""
    if not text:
        return ""
    return re.sub(r"\s+", "", text)
