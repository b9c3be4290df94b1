"""
세션 라우트

로그인/로그아웃 및 세션 상태 조회
"""

from fastapi import APIRouter, Depends

from adapters.interfaces import IAuthProvider
from core.sync.coordinator import SyncCoordinator
from web.dependencies import get_auth, get_coordinator
from web.models.requests import LoginRequest
from web.models.responses import SessionResponse

router = APIRouter(prefix="/api/session", tags=["Session"])


def _to_response(coordinator: SyncCoordinator) -> SessionResponse:
    session = coordinator.session
    return SessionResponse(
        state=coordinator.state.value,
        user_id=session.user_id if session else None,
        institution_names=session.institution_names if session else [],
    )


@router.get("", response_model=SessionResponse)
async def get_session_state(
    coordinator: SyncCoordinator = Depends(get_coordinator),
) -> SessionResponse:
    """세션 상태 조회"""
    return _to_response(coordinator)


@router.post("/login", response_model=SessionResponse)
async def login(
    request: LoginRequest,
    auth: IAuthProvider = Depends(get_auth),
    coordinator: SyncCoordinator = Depends(get_coordinator),
) -> SessionResponse:
    """로그인

    로컬 캐시를 먼저 로드하고 원격 데이터가 있으면 교체.
    원격 실패는 에러로 반환하지 않음 (로컬 데이터 유지).
    """
    await auth.sign_in(request.user_id)
    return _to_response(coordinator)


@router.post("/logout", response_model=SessionResponse)
async def logout(
    auth: IAuthProvider = Depends(get_auth),
    coordinator: SyncCoordinator = Depends(get_coordinator),
) -> SessionResponse:
    """로그아웃 (로컬 캐시는 유지)"""
    await auth.sign_out()
    return _to_response(coordinator)
