"""
어댑터 레이어

외부 서비스(원격 저장소, 로컬 DB, 알림, 인증)와의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from adapters.interfaces import (
    IAuthProvider,
    INotifier,
    IRemoteStore,
)

__all__ = [
    "IAuthProvider",
    "INotifier",
    "IRemoteStore",
]
