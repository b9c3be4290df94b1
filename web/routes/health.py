"""
헬스 체크 엔드포인트

GET /health - 서버 상태 확인
"""

from fastapi import APIRouter, Depends

from core.sync.coordinator import SyncCoordinator
from web.dependencies import get_coordinator
from web.models.responses import HealthResponse

router = APIRouter(tags=["health"])

VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check(
    coordinator: SyncCoordinator = Depends(get_coordinator),
) -> HealthResponse:
    """서버 상태 확인"""
    return HealthResponse(
        status="ok",
        session_state=coordinator.state.value,
        version=VERSION,
    )
