"""
로컬 인증 제공자

외부 인증 서비스 없이 user_id를 직접 받아 로그인 상태를 관리.
IAuthProvider Protocol 준수.
"""

import logging
from typing import Callable

from adapters.interfaces import AuthChangeCallback

logger = logging.getLogger(__name__)


class LocalAuthProvider:
    """로컬 인증 제공자

    sign_in/sign_out 시 구독자 콜백을 순서대로 await.
    같은 사용자로 다시 로그인하면 콜백을 호출하지 않음.
    구독자가 로그인 처리에 실패하면 로그아웃 상태로 되돌림.
    """

    def __init__(self) -> None:
        self._user_id: str | None = None
        self._subscribers: list[AuthChangeCallback] = []

    @property
    def current_user_id(self) -> str | None:
        """현재 로그인 사용자 ID"""
        return self._user_id

    async def sign_in(self, user_id: str) -> None:
        """로그인

        Raises:
            ValueError: 빈 user_id
            Exception: 구독자 콜백 예외 (로그인 상태는 해제됨)
        """
        if not user_id:
            raise ValueError("user_id는 필수입니다")
        if user_id == self._user_id:
            return

        self._user_id = user_id
        logger.info(f"Signed in: {user_id}")
        try:
            await self._notify()
        except Exception:
            if self._user_id == user_id:
                self._user_id = None
            logger.warning(f"Sign-in rolled back: {user_id}")
            raise

    async def sign_out(self) -> None:
        """로그아웃"""
        if self._user_id is None:
            return

        logger.info(f"Signed out: {self._user_id}")
        self._user_id = None
        await self._notify()

    def subscribe(self, callback: AuthChangeCallback) -> Callable[[], None]:
        """사용자 변경 구독"""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def _notify(self) -> None:
        user_id = self._user_id
        for callback in list(self._subscribers):
            await callback(user_id)
