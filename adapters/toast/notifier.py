"""
토스트 알림 채널

저장/동기화 결과를 화면용 토스트 목록으로 보관하고
일정 시간 후 자동으로 닫음.
INotifier Protocol 준수.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from core.constants import Defaults
from core.types import NotificationLevel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Toast:
    """토스트 메시지"""

    id: int
    message: str
    level: str


class ToastNotifier:
    """토스트 알림 서비스

    INotifier Protocol 구현.
    이벤트 루프가 실행 중이면 duration_ms 후 자동 닫힘 예약.

    Args:
        duration_ms: 자동 닫힘 시간 (밀리초, 0 이하면 자동 닫힘 없음)

    사용 예시:
    ```python
    notifier = ToastNotifier(duration_ms=3500)

    await notifier.send("Saved", level="success")
    notifier.toasts  # [Toast(id=0, message="Saved", level="success")]
    ```
    """

    def __init__(self, duration_ms: int = Defaults.TOAST_DURATION_MS):
        self.duration_ms = duration_ms
        self._toasts: list[Toast] = []
        self._next_id = 0
        self._timers: dict[int, asyncio.TimerHandle] = {}

    @property
    def toasts(self) -> list[Toast]:
        """현재 표시 중인 토스트 목록"""
        return list(self._toasts)

    async def send(
        self,
        message: str,
        level: str = NotificationLevel.SUCCESS.value,
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """토스트 추가"""
        self.show(message, level)
        return True

    def show(self, message: str, level: str = NotificationLevel.SUCCESS.value) -> Toast:
        """토스트 추가 (동기)

        Raises:
            ValueError: 알 수 없는 레벨
        """
        level = NotificationLevel(level).value

        toast = Toast(id=self._next_id, message=message, level=level)
        self._next_id += 1
        self._toasts.append(toast)

        if self.duration_ms > 0:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None
            if loop is not None:
                self._timers[toast.id] = loop.call_later(
                    self.duration_ms / 1000,
                    self.dismiss,
                    toast.id,
                )

        logger.debug(f"Toast[{level}] #{toast.id}: {message}")
        return toast

    def dismiss(self, toast_id: int) -> bool:
        """토스트 닫기

        Returns:
            닫힌 토스트가 있었는지 여부
        """
        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.cancel()

        before = len(self._toasts)
        self._toasts = [t for t in self._toasts if t.id != toast_id]
        return len(self._toasts) < before

    def clear(self) -> None:
        """모든 토스트 닫기"""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._toasts.clear()
