"""장소 기능의 Enum 정의"""
from enum import Enum


class PlaceCategoryGroup(str, Enum):
    """주변 탐색 1단계의 카테고리 그룹"""

    FOOD_DRINK = "food_drink"  # 음식/음료
    SHOPPING_SERVICES = "shopping_services"  # 쇼핑/서비스
    TRANSPORTATION = "transportation"  # 교통
    SOCIAL_ATTRACTIONS = "social_attractions"  # 사회/명소
    WILDCARD = "wildcard"  # 이름 있는 모든 장소


# 1단계에서 병렬로 조회하는 순서
STAGE_ONE_GROUPS: tuple[PlaceCategoryGroup, ...] = (
    PlaceCategoryGroup.FOOD_DRINK,
    PlaceCategoryGroup.SHOPPING_SERVICES,
    PlaceCategoryGroup.TRANSPORTATION,
    PlaceCategoryGroup.SOCIAL_ATTRACTIONS,
    PlaceCategoryGroup.WILDCARD,
)
