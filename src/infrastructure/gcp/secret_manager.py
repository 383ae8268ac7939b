"""GCP Secret Manager 연동 (API Key 조회)"""
from typing import Optional

from google.cloud import secretmanager

from ...shared.exceptions.errors import ConfigurationError
from ...shared.logging.config import get_logger

logger = get_logger(__name__)


class SecretManagerClient:
    """Secret Manager 클라이언트"""

    def __init__(self, project_id: str):
        """
        Args:
            project_id: GCP 프로젝트 ID
        """
        self.project_id = project_id
        self.client = secretmanager.SecretManagerServiceClient()

    def get_secret(self, secret_name: str, version: str = "latest") -> str:
        """
        시크릿 값 조회

        Args:
            secret_name: 시크릿 이름
            version: 버전 (기본값: latest)

        Returns:
            시크릿 값

        Raises:
            ConfigurationError: 조회 실패 시
        """
        try:
            name = f"projects/{self.project_id}/secrets/{secret_name}/versions/{version}"
            logger.debug(f"Fetching secret: {name}")

            response = self.client.access_secret_version(request={"name": name})
            secret_value = response.payload.data.decode("UTF-8").strip()

            logger.info(f"Successfully fetched secret: {secret_name}")
            return secret_value

        except Exception as e:
            logger.error(f"Failed to fetch secret {secret_name}: {e}")
            raise ConfigurationError(f"Failed to fetch secret {secret_name}: {e}") from e

    def get_secret_or_none(self, secret_name: str, version: str = "latest") -> Optional[str]:
        """
        시크릿 값 조회 (실패 시 None)

        Args:
            secret_name: 시크릿 이름
            version: 버전

        Returns:
            시크릿 값 또는 None
        """
        try:
            return self.get_secret(secret_name, version)
        except ConfigurationError:
            logger.warning(f"Secret {secret_name} not found, returning None")
            return None


def resolve_api_key(
    explicit_value: Optional[str],
    secret_name: str,
    secret_manager: Optional[SecretManagerClient],
) -> Optional[str]:
    """
    API Key 결정

    설정(.env / 환경 변수)에 값이 있으면 그대로 쓰고,
    없으면 Secret Manager에서 조회한다 (개발 환경에서는 secret_manager가 None).

    Args:
        explicit_value: 설정에 직접 지정된 값
        secret_name: Secret Manager 이름
        secret_manager: Secret Manager 클라이언트 (없으면 조회하지 않음)

    Returns:
        API Key 또는 None
    """
    if explicit_value:
        return explicit_value
    if secret_manager is None:
        return None
    return secret_manager.get_secret_or_none(secret_name)
