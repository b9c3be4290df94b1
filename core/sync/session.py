"""
사용자 세션 컨텍스트

로그인 시 생성되고 로그아웃 시 폐기되는 세션 단위 상태.
원장(LedgerStore), 선택 집합, 조회 기간, 필터 뷰를 묶음.
세션 객체 자체가 비동기 결과 적용 시의 펜싱 토큰 역할을 함.
"""

from datetime import date
from typing import Mapping

from core.ledger.filter import FilteredView, resolve_lookback_months
from core.ledger.models import InstitutionData
from core.ledger.store import LedgerStore
from core.types import Period


class LedgerSession:
    """사용자 세션

    Args:
        user_id: 로그인 사용자 ID
        windows: 설정된 기간 윈도우 (None이면 기본 윈도우)
    """

    def __init__(
        self,
        user_id: str,
        windows: Mapping[str, int | None] | None = None,
    ):
        self.user_id = user_id
        self.windows = windows
        self.store = LedgerStore()
        self.period: str = Period.FULL_TIME.value
        self._view = FilteredView(self.store, windows=windows)

    def __repr__(self) -> str:
        return f"LedgerSession(user_id={self.user_id!r}, institutions={len(self.store.institutions)})"

    @property
    def institution_names(self) -> list[str]:
        """기관명 목록"""
        return self.store.institution_names

    def set_period(self, period: Period | str) -> None:
        """조회 기간 변경

        Raises:
            ValueError: 알 수 없는 기간
        """
        name = period.value if isinstance(period, Period) else period
        resolve_lookback_months(name, self.windows)
        self.period = name

    def filtered_institutions(
        self,
        period: Period | str | None = None,
        today: date | None = None,
    ) -> list[InstitutionData]:
        """선택 기관 + 기간 필터 결과 (읽기 전용 뷰)"""
        return self._view.get(period or self.period, today=today)
