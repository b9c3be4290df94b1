"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
앱 생명주기(lifespan)에서 생성한 객체를 app.state에서 꺼내 제공.
"""

from fastapi import Request

from adapters.interfaces import IAuthProvider
from adapters.toast.notifier import ToastNotifier
from core.sync.coordinator import SyncCoordinator
from core.sync.session import LedgerSession


def get_coordinator(request: Request) -> SyncCoordinator:
    """동기화 코디네이터 반환"""
    return request.app.state.coordinator


def get_auth(request: Request) -> IAuthProvider:
    """인증 제공자 반환"""
    return request.app.state.auth


def get_toasts(request: Request) -> ToastNotifier:
    """토스트 알림 채널 반환"""
    return request.app.state.notifier


def get_session(request: Request) -> LedgerSession:
    """활성 세션 반환

    Raises:
        NotAuthenticatedError: 로그인 세션 없음 (401로 변환됨)
    """
    return get_coordinator(request).require_session()
