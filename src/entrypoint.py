"""CLI 엔트리포인트"""
import argparse
import asyncio
import sys

from .features.navigation import messages
from .features.navigation.container import NavigationContainer
from .features.navigation.domain.models import LocationContext
from .features.places.domain.models import Coordinate
from .infrastructure.config.settings import Settings
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """인자 파서 생성"""
    parser = argparse.ArgumentParser(description="디지털케인 음성 길안내 도구")

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="환경 변수 파일 경로 (기본값: .env)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="로그 레벨",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    route_parser = subparsers.add_parser("route", help="발화로 대중교통 경로 찾기")
    route_parser.add_argument("utterance", type=str, help='사용자 발화 (예: "강남에서 코엑스까지")')
    route_parser.add_argument("--lat", type=float, required=True, help="현재 위도")
    route_parser.add_argument("--lng", type=float, required=True, help="현재 경도")

    nearby_parser = subparsers.add_parser("nearby", help="주변 장소 탐색")
    nearby_parser.add_argument("--lat", type=float, required=True, help="위도")
    nearby_parser.add_argument("--lng", type=float, required=True, help="경도")
    nearby_parser.add_argument("--radius", type=float, default=None, help="반경 (미터)")

    return parser


async def run_route(container: NavigationContainer, utterance: str, coordinate: Coordinate) -> int:
    """경로를 찾아 개요와 전체 단계를 출력"""
    orchestrator = container.orchestrator
    result = await orchestrator.find_route(utterance, LocationContext(coordinate=coordinate))

    print(result.message)
    if not result.started:
        return 1

    for index, step in enumerate(orchestrator.session.steps, start=1):
        print(f"{index}. {step.instruction}")
        if step.detail:
            print(f"   {step.detail}")
    return 0


async def run_nearby(container: NavigationContainer, coordinate: Coordinate, radius: float) -> int:
    """주변 장소 출력"""
    result = await container.nearby_search_service.search_nearby(coordinate, radius)

    if result.is_provider_failure:
        print(messages.NEARBY_PROVIDER_FAILURE)
        return 1
    if not result.places:
        print(messages.NEARBY_EMPTY)
        return 0

    for place in result.places:
        print(f"- {place.accessible_description}")
    return 0


def main() -> int:
    """
    메인 엔트리포인트

    Returns:
        int: 종료 코드 (0: 성공, 1: 실패, 130: 중단)
    """
    args = build_parser().parse_args()

    try:
        settings = Settings(_env_file=args.env_file)

        if args.log_level:
            settings.log_level = args.log_level

        setup_logging(
            level=settings.log_level,
            enable_cloud_logging=settings.gcp_logging_enabled,
            project_id=settings.gcp_project_id,
        )

        logger.info(f"Environment: {settings.environment}")

        coordinate = Coordinate(args.lat, args.lng)
        container = NavigationContainer(settings)
        try:
            if args.command == "route":
                return asyncio.run(run_route(container, args.utterance, coordinate))
            return asyncio.run(run_nearby(container, coordinate, args.radius))
        finally:
            container.close()

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # SIGINT
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
