"""로깅 설정"""
import logging
import re
import sys
from typing import Optional

# 로거 설정 완료 플래그
_logger_configured = False

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 요청 URL/헤더에 섞여 로그로 나갈 수 있는 API Key
_SECRET_PATTERNS = (
    re.compile(r"AIza[0-9A-Za-z_\-]{20,}"),
    re.compile(r"sk-[0-9A-Za-z_\-]{8,}"),
    re.compile(r"(?<=[?&]key=)[^&\s]+"),
)
_REDACTED = "***"

# 로그 레벨을 낮출 서드파티 로거
_NOISY_LOGGERS = ("urllib3", "google", "google_genai", "googlemaps", "httpx")


class SecretRedactingFilter(logging.Filter):
    """로그 메시지의 API Key를 가림"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def redact_secrets(text: str) -> str:
    """문자열 안의 API Key를 *** 로 치환"""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(_REDACTED, text)
    return text


def setup_logging(
    level: str = "INFO",
    enable_cloud_logging: bool = False,
    project_id: Optional[str] = None,
) -> None:
    """
    로깅 설정 (프로세스당 한 번)

    Args:
        level: 로그 레벨 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_cloud_logging: Cloud Logging 사용 여부
        project_id: GCP 프로젝트 ID (Cloud Logging 사용 시 필요)
    """
    global _logger_configured

    if _logger_configured:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(_console_handler(log_level))

    if enable_cloud_logging:
        _attach_cloud_handler(root_logger, log_level, project_id)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logger_configured = True
    logging.info(f"Logging configured with level: {level}")


def _console_handler(log_level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(SecretRedactingFilter())
    return handler


def _attach_cloud_handler(root_logger: logging.Logger, log_level: int, project_id: Optional[str]) -> None:
    """Cloud Logging 핸들러 추가 (운영 환경용, 실패 시 콘솔만 사용)"""
    try:
        from google.cloud import logging as cloud_logging

        client = cloud_logging.Client(project=project_id)
        handler = cloud_logging.handlers.CloudLoggingHandler(client)
    except Exception as e:
        logging.warning(f"Failed to enable Cloud Logging: {e}")
        return

    handler.setLevel(log_level)
    handler.addFilter(SecretRedactingFilter())
    root_logger.addHandler(handler)
    logging.info("Cloud Logging enabled")


def get_logger(name: str) -> logging.Logger:
    """
    이름으로 로거 가져오기

    Args:
        name: 로거 이름 (보통 __name__)

    Returns:
        로거 인스턴스
    """
    return logging.getLogger(name)
