"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class Period(str, Enum):
    """조회 기간 (최근 N개월)"""

    FULL_TIME = "full-time"
    PAST_3_MONTHS = "past-3-months"
    PAST_6_MONTHS = "past-6-months"
    PAST_12_MONTHS = "past-12-months"

    @property
    def months(self) -> int | None:
        """조회 개월 수 (None이면 전체 기간)"""
        return PERIOD_MONTHS[self.value]


# 기간 → 개월 수 매핑 (None = 컷오프 없음)
PERIOD_MONTHS: dict[str, int | None] = {
    "full-time": None,
    "past-3-months": 3,
    "past-6-months": 6,
    "past-12-months": 12,
}


class SessionState(str, Enum):
    """세션 상태"""

    LOGGED_OUT = "LOGGED_OUT"
    LOADING = "LOADING"
    READY = "READY"


class NotificationLevel(str, Enum):
    """알림 레벨 (토스트 종류)"""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
