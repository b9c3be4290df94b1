"""
로컬/원격 동기화

세션 생명주기(로그인/로그아웃)와 로컬 캐시·원격 저장소 간 원장 동기화.
"""

from core.sync.coordinator import SyncCoordinator
from core.sync.session import LedgerSession

__all__ = [
    "SyncCoordinator",
    "LedgerSession",
]
