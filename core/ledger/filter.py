"""
선택 기관 + 조회 기간 필터

원장에서 선택된 기관만 남기고, 최근 N개월 이전 기록을 제외한 뷰를 생성.
원장 자체는 변경하지 않음 (새 InstitutionData 리스트 반환).
"""

import calendar
import logging
from datetime import date
from typing import Iterable, Mapping

from core.ledger.models import InstitutionData
from core.ledger.store import LedgerStore
from core.types import PERIOD_MONTHS, Period

logger = logging.getLogger(__name__)


def subtract_months(day: date, months: int) -> date:
    """N개월 전 날짜

    대상 월의 일수를 넘으면 말일로 보정 (2024-05-31 - 3개월 = 2024-02-29).
    """
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def resolve_lookback_months(
    period: Period | str,
    windows: Mapping[str, int | None] | None = None,
) -> int | None:
    """기간 → 조회 개월 수

    Args:
        period: Period 또는 기간 이름
        windows: 설정된 기간 윈도우 (None이면 기본 윈도우)

    Returns:
        개월 수 (None이면 전체 기간)

    Raises:
        ValueError: 알 수 없는 기간
    """
    name = period.value if isinstance(period, Period) else period
    table = windows if windows is not None else PERIOD_MONTHS
    if name not in table:
        raise ValueError(f"Unknown period: {name!r}. Valid: {sorted(table)}")
    return table[name]


def compute_cutoff(
    today: date,
    period: Period | str,
    windows: Mapping[str, int | None] | None = None,
) -> date | None:
    """컷오프 날짜 (None이면 컷오프 없음)"""
    months = resolve_lookback_months(period, windows)
    if months is None:
        return None
    return subtract_months(today, months)


def filter_institutions(
    institutions: Iterable[InstitutionData],
    selected: Iterable[str],
    period: Period | str = Period.FULL_TIME,
    today: date | None = None,
    windows: Mapping[str, int | None] | None = None,
) -> list[InstitutionData]:
    """선택 기관 + 기간 필터 적용

    컷오프 당일 기록은 포함. 기간 내 기록이 없는 기관도 빈 시퀀스로 남음.
    """
    selected_names = set(selected)
    cutoff = compute_cutoff(today or date.today(), period, windows)

    result: list[InstitutionData] = []
    for inst in institutions:
        if inst.institution not in selected_names:
            continue
        if cutoff is None:
            records = list(inst.investments)
        else:
            records = [r for r in inst.investments if r.date >= cutoff]
        result.append(InstitutionData(institution=inst.institution, investments=records))

    return result


class FilteredView:
    """필터 결과 메모이제이션

    (원장 버전, 선택 버전, 기간, 기준일)이 바뀔 때만 재계산.

    Args:
        store: 대상 LedgerStore
        windows: 설정된 기간 윈도우 (None이면 기본 윈도우)
    """

    def __init__(
        self,
        store: LedgerStore,
        windows: Mapping[str, int | None] | None = None,
    ):
        self.store = store
        self.windows = windows
        self._key: tuple[int, int, str, date] | None = None
        self._result: list[InstitutionData] = []

    def get(
        self,
        period: Period | str = Period.FULL_TIME,
        today: date | None = None,
    ) -> list[InstitutionData]:
        """필터 결과 반환 (입력이 같으면 캐시 사용)

        호출자가 결과를 변경해도 캐시에 영향이 없도록 복사본을 반환.
        """
        day = today or date.today()
        name = period.value if isinstance(period, Period) else period
        key = (self.store.version, self.store.selection_version, name, day)

        if key != self._key:
            self._result = filter_institutions(
                self.store.institutions,
                self.store.selected,
                period=name,
                today=day,
                windows=self.windows,
            )
            self._key = key
            logger.debug(f"Filtered view recomputed: period={name}, today={day}")

        return [inst.copy() for inst in self._result]
