"""애플리케이션 설정 (Pydantic Settings)"""
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = Field(
        default="digital-cane-navigator",
        description="프로젝트 이름",
    )
    environment: str = Field(
        default="development",
        description="환경 (development, staging, production)",
    )

    # GCP
    gcp_project_id: Optional[str] = Field(
        default=None,
        description="GCP 프로젝트 ID (Secret Manager / Cloud Logging 사용 시 필요)",
    )

    # API Keys
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Google Maps Platform API Key (로컬 개발용)",
    )
    google_maps_api_key_secret_name: str = Field(
        default="google-maps-api-key",
        description="Google Maps API Key의 Secret Manager 이름",
    )
    gemini_api_key: Optional[str] = Field(
        default=None,
        description="Gemini API Key (없으면 Google Maps API Key 사용)",
    )
    gemini_api_key_secret_name: str = Field(
        default="gemini-api-key",
        description="Gemini API Key의 Secret Manager 이름",
    )
    openai_api_key: Optional[str] = Field(
        default=None,
        description="OpenAI 호환 API Key",
    )

    # Intent
    intent_provider: str = Field(
        default="gemini",
        description="의도 분석 LLM 제공자 (gemini, openai)",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini 모델 이름",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI 호환 모델 이름",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI 호환 API 기본 URL",
    )

    # Providers
    language_code: str = Field(
        default="ko",
        description="제공자 요청 언어 코드",
    )
    provider_timeout: float = Field(
        default=10.0,
        description="외부 제공자 호출 타임아웃 (초)",
    )
    provider_retry: int = Field(
        default=0,
        description="HTTP 재시도 횟수 (파이프라인은 자동 재시도하지 않으므로 기본 0)",
    )
    user_agent: str = Field(
        default="DigitalCane/1.0",
        description="외부 요청 User-Agent",
    )
    overpass_url: str = Field(
        default="https://overpass-api.de/api/interpreter",
        description="Overpass API 엔드포인트",
    )
    open_meteo_url: str = Field(
        default="https://api.open-meteo.com/v1/forecast",
        description="Open-Meteo 엔드포인트",
    )

    # Destination validation
    destination_candidate_limit: int = Field(
        default=5,
        description="목적지 검증 시 장소 후보 최대 개수",
    )

    # Nearby search
    nearby_default_radius: float = Field(
        default=100.0,
        description="주변 탐색 기본 반경 (미터)",
    )
    nearby_coverage_threshold: int = Field(
        default=5,
        description="1단계 결과가 이 개수 미만이면 유료 제공자로 확장",
    )
    nearby_rich_max_results: int = Field(
        default=20,
        description="유료 제공자 주변 검색 결과 최대 개수",
    )
    nearby_cache_enabled: bool = Field(
        default=True,
        description="근접 캐시 사용 여부",
    )
    nearby_cache_threshold_m: float = Field(
        default=15.0,
        description="이 거리 안에서의 재검색은 캐시 사용 (미터)",
    )

    # Routing preference
    prefer_less_walking: bool = Field(
        default=False,
        description="걷는 거리가 적은 경로 우선",
    )
    prefer_fewer_transfers: bool = Field(
        default=False,
        description="환승이 적은 경로 우선",
    )
    routing_preference_priority: Literal["LESS_WALKING", "FEWER_TRANSFERS"] = Field(
        default="LESS_WALKING",
        description="두 선호가 모두 켜졌을 때 우선할 값 (LESS_WALKING, FEWER_TRANSFERS)",
    )

    # Weather
    weather_enabled: bool = Field(
        default=True,
        description="경로 개요 안내에 날씨 정보 포함 여부",
    )
    weather_timeout: float = Field(
        default=3.0,
        description="날씨 조회 타임아웃 (초)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="로그 레벨 (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    gcp_logging_enabled: bool = Field(
        default=False,
        description="Cloud Logging 사용 여부",
    )

    # Server
    port: int = Field(
        default=8080,
        description="HTTP 서버 포트",
    )

    @field_validator("routing_preference_priority", mode="before")
    @classmethod
    def _upper_priority(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    def get_routing_preference(self) -> Optional[str]:
        """
        설정에서 경로 선호 옵션을 결정

        두 옵션은 상호 배타적이며, 모두 켜진 경우 routing_preference_priority를 따른다.
        """
        if self.prefer_less_walking and self.prefer_fewer_transfers:
            return self.routing_preference_priority
        if self.prefer_less_walking:
            return "LESS_WALKING"
        if self.prefer_fewer_transfers:
            return "FEWER_TRANSFERS"
        return None

    @property
    def is_development(self) -> bool:
        """개발 환경 여부"""
        return self.environment.lower() == "development"
