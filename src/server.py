"""Cloud Run용 HTTP 서버 (FastAPI)"""
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .features.navigation import messages
from .features.navigation.container import NavigationContainer
from .features.navigation.domain.models import LocationContext, LocationPermission, NavigationStatus
from .features.places.domain.models import Coordinate
from .infrastructure.config.settings import Settings
from .shared.logging.config import get_logger, setup_logging

# 설정 로드
settings = Settings()

# 로깅 설정
setup_logging(
    level=settings.log_level,
    enable_cloud_logging=settings.gcp_logging_enabled,
    project_id=settings.gcp_project_id,
)
logger = get_logger(__name__)

app = FastAPI(
    title="디지털케인 길안내 서비스",
    description="음성 명령으로 대중교통 경로를 찾고 단계별로 안내하는 시각장애인용 길안내 API",
    version="1.0.0",
)

# 한 프로세스 = 한 사용자 기기
_container: Optional[NavigationContainer] = None


def get_container() -> NavigationContainer:
    """컨테이너 (첫 요청 시 생성)"""
    global _container
    if _container is None:
        _container = NavigationContainer(settings)
    return _container


class RouteRequest(BaseModel):
    """경로 탐색 요청"""

    utterance: str = Field(..., description="사용자 발화")
    latitude: Optional[float] = Field(default=None, description="현재 위도 (수신 전이면 생략)")
    longitude: Optional[float] = Field(default=None, description="현재 경도 (수신 전이면 생략)")
    permission: LocationPermission = Field(default=LocationPermission.GRANTED, description="위치 권한 상태")


def _parse_coordinate(latitude: Optional[float], longitude: Optional[float]) -> Optional[Coordinate]:
    """요청 좌표 확인 (생략은 None, 잘못된 값은 422)"""
    if latitude is None and longitude is None:
        return None
    coordinate = Coordinate.from_optional(latitude, longitude)
    if coordinate is None:
        raise HTTPException(status_code=422, detail="Invalid coordinate")
    return coordinate


@app.on_event("startup")
async def startup_event() -> None:
    """시작 시 처리"""
    logger.info("Application starting up")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Project: {settings.project_name}")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """종료 시 처리"""
    logger.info("Application shutting down")
    if _container is not None:
        _container.orchestrator.stop()
        _container.close()


@app.get("/")
async def root() -> dict[str, Any]:
    """루트 엔드포인트"""
    return {
        "service": "디지털케인 길안내 서비스",
        "version": "1.0.0",
        "status": "running",
        "environment": settings.environment,
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크"""
    return {"status": "healthy"}


@app.post("/navigation/route")
async def find_route(
    request: RouteRequest,
    container: NavigationContainer = Depends(get_container),
) -> dict[str, Any]:
    """
    발화로 경로를 찾아 안내 시작

    실패/되묻기도 200으로 돌려주며, message를 그대로 읽어주면 된다.
    """
    location = LocationContext(
        coordinate=_parse_coordinate(request.latitude, request.longitude),
        permission=request.permission,
    )
    result = await container.orchestrator.find_route(request.utterance, location)

    return {
        "status": result.status.value,
        "message": result.message,
        "is_clarification": result.is_clarification,
        "ignored": result.ignored,
        "session": container.orchestrator.session.to_dict(),
    }


@app.post("/navigation/advance")
async def advance_step(container: NavigationContainer = Depends(get_container)) -> dict[str, Any]:
    """다음 단계로 이동"""
    session = container.orchestrator.advance_step()
    message = session.current_instruction if session.status == NavigationStatus.ACTIVE else messages.ROUTE_COMPLETED
    return {"message": message, "session": session.to_dict()}


@app.post("/navigation/select/{index}")
async def select_step(index: int, container: NavigationContainer = Depends(get_container)) -> dict[str, Any]:
    """특정 단계로 이동"""
    try:
        session = container.orchestrator.select_step(index)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"message": session.current_instruction, "session": session.to_dict()}


@app.post("/navigation/stop")
async def stop_navigation(container: NavigationContainer = Depends(get_container)) -> dict[str, Any]:
    """안내 종료"""
    container.orchestrator.stop()
    return {"message": messages.NAVIGATION_STOPPED, "session": container.orchestrator.session.to_dict()}


@app.get("/navigation")
async def get_navigation(container: NavigationContainer = Depends(get_container)) -> dict[str, Any]:
    """현재 안내 세션"""
    return container.orchestrator.session.to_dict()


@app.get("/nearby")
async def nearby(
    lat: float = Query(..., description="위도"),
    lng: float = Query(..., description="경도"),
    radius: Optional[float] = Query(default=None, gt=0, description="반경 (미터)"),
    container: NavigationContainer = Depends(get_container),
) -> dict[str, Any]:
    """주변 장소 탐색"""
    center = Coordinate.from_optional(lat, lng)
    if center is None:
        raise HTTPException(status_code=422, detail="Invalid coordinate")
    result = await container.nearby_search_service.search_nearby(center, radius)

    if result.is_provider_failure:
        message = messages.NEARBY_PROVIDER_FAILURE
    elif not result.places:
        message = messages.NEARBY_EMPTY
    else:
        message = ""

    return {
        "message": message,
        "count": len(result.places),
        "from_cache": result.from_cache,
        "used_rich_provider": result.used_rich_provider,
        "failure_reason": result.failure_reason,
        "places": [
            {**place.to_dict(), "description": place.accessible_description} for place in result.places
        ],
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """전역 예외 핸들러 (내부 오류 내용은 로그에만)"""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": messages.UNKNOWN},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
