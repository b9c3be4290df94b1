"""
동기화 라우트

명시적 push / pull
"""

from fastapi import APIRouter, Depends

from core.sync.coordinator import SyncCoordinator
from web.dependencies import get_coordinator
from web.models.responses import SyncResponse

router = APIRouter(prefix="/api/sync", tags=["Sync"])


@router.post("/push", response_model=SyncResponse)
async def push_to_remote(
    coordinator: SyncCoordinator = Depends(get_coordinator),
) -> SyncResponse:
    """현재 원장으로 원격 문서 덮어쓰기"""
    await coordinator.push_to_remote()
    session = coordinator.require_session()
    return SyncResponse(status="pushed", institution_names=session.institution_names)


@router.post("/pull", response_model=SyncResponse)
async def pull_from_remote(
    coordinator: SyncCoordinator = Depends(get_coordinator),
) -> SyncResponse:
    """원격 원장으로 전체 교체 (원격 문서 없으면 404)"""
    applied = await coordinator.pull_from_remote()
    session = coordinator.session
    return SyncResponse(
        status="pulled" if applied else "discarded",
        institution_names=session.institution_names if session else [],
    )
