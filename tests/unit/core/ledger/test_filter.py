"""
core/ledger/filter.py 테스트

월 단위 컷오프, 선택 기관 + 기간 필터, 메모이제이션 테스트
"""

from datetime import date

import pytest

from core.ledger.filter import (
    FilteredView,
    compute_cutoff,
    filter_institutions,
    resolve_lookback_months,
    subtract_months,
)
from core.ledger.models import InstitutionData, InvestmentRecord
from core.ledger.store import LedgerStore
from core.types import Period


TODAY = date(2024, 6, 15)


@pytest.fixture
def dated_ledger() -> list[InstitutionData]:
    return [
        InstitutionData(
            institution="Broker A",
            investments=[
                InvestmentRecord.create("2024-01-10", 0, 0),
                InvestmentRecord.create("2024-03-15", 0, 0),
                InvestmentRecord.create("2024-04-01", 0, 0),
            ],
        ),
        InstitutionData(
            institution="Bank B",
            investments=[InvestmentRecord.create("2023-01-01", 0, 0)],
        ),
    ]


class TestSubtractMonths:
    """subtract_months 테스트"""

    def test_simple(self) -> None:
        assert subtract_months(date(2024, 6, 15), 3) == date(2024, 3, 15)

    def test_year_boundary(self) -> None:
        assert subtract_months(date(2024, 2, 10), 3) == date(2023, 11, 10)

    def test_clamps_to_month_end(self) -> None:
        """대상 월 말일로 보정"""
        assert subtract_months(date(2024, 5, 31), 3) == date(2024, 2, 29)
        assert subtract_months(date(2023, 5, 31), 3) == date(2023, 2, 28)

    def test_twelve_months(self) -> None:
        assert subtract_months(date(2024, 2, 29), 12) == date(2023, 2, 28)


class TestResolveLookbackMonths:
    """resolve_lookback_months 테스트"""

    @pytest.mark.parametrize(
        "period,expected",
        [
            (Period.FULL_TIME, None),
            (Period.PAST_3_MONTHS, 3),
            ("past-6-months", 6),
            ("past-12-months", 12),
        ],
    )
    def test_default_windows(self, period, expected) -> None:
        assert resolve_lookback_months(period) == expected

    def test_custom_windows(self) -> None:
        windows = {"full-time": None, "past-24-months": 24}

        assert resolve_lookback_months("past-24-months", windows) == 24

    def test_unknown_period(self) -> None:
        with pytest.raises(ValueError, match="Unknown period"):
            resolve_lookback_months("past-5-years")


class TestComputeCutoff:
    """compute_cutoff 테스트"""

    def test_full_time_has_no_cutoff(self) -> None:
        assert compute_cutoff(TODAY, Period.FULL_TIME) is None

    def test_past_3_months(self) -> None:
        assert compute_cutoff(TODAY, Period.PAST_3_MONTHS) == date(2024, 3, 15)


class TestFilterInstitutions:
    """filter_institutions 테스트"""

    def test_past_3_months_includes_cutoff_day(self, dated_ledger) -> None:
        """컷오프 당일 기록은 포함"""
        result = filter_institutions(
            dated_ledger,
            selected={"Broker A"},
            period=Period.PAST_3_MONTHS,
            today=TODAY,
        )

        assert len(result) == 1
        assert [r.date for r in result[0].investments] == [
            date(2024, 3, 15),
            date(2024, 4, 1),
        ]

    def test_cutoff_boundary(self) -> None:
        """2024-06-15 기준 3개월: 03-14 제외, 03-15 포함"""
        ledger = [
            InstitutionData(
                institution="Broker A",
                investments=[
                    InvestmentRecord.create("2024-03-14", 0, 0),
                    InvestmentRecord.create("2024-03-15", 0, 0),
                ],
            )
        ]

        result = filter_institutions(
            ledger,
            selected={"Broker A"},
            period="past-3-months",
            today=TODAY,
        )

        assert [r.date for r in result[0].investments] == [date(2024, 3, 15)]

    def test_full_time_keeps_everything(self, dated_ledger) -> None:
        result = filter_institutions(
            dated_ledger,
            selected={"Broker A", "Bank B"},
            today=TODAY,
        )

        assert [len(i.investments) for i in result] == [3, 1]

    def test_emptied_institution_kept(self, dated_ledger) -> None:
        """기간 내 기록이 없는 기관도 빈 시퀀스로 남음"""
        result = filter_institutions(
            dated_ledger,
            selected={"Broker A", "Bank B"},
            period=Period.PAST_6_MONTHS,
            today=TODAY,
        )

        assert [i.institution for i in result] == ["Broker A", "Bank B"]
        assert result[1].investments == []

    def test_unselected_excluded(self, dated_ledger) -> None:
        result = filter_institutions(dated_ledger, selected=set(), today=TODAY)

        assert result == []

    def test_selected_unknown_name_ignored(self, dated_ledger) -> None:
        result = filter_institutions(dated_ledger, selected={"Ghost"}, today=TODAY)

        assert result == []

    def test_ledger_order_preserved(self, dated_ledger) -> None:
        result = filter_institutions(
            dated_ledger,
            selected={"Bank B", "Broker A"},
            today=TODAY,
        )

        assert [i.institution for i in result] == ["Broker A", "Bank B"]

    def test_does_not_mutate_input(self, dated_ledger) -> None:
        filter_institutions(
            dated_ledger,
            selected={"Broker A"},
            period=Period.PAST_3_MONTHS,
            today=TODAY,
        )

        assert len(dated_ledger[0].investments) == 3


class TestFilteredView:
    """FilteredView 메모이제이션 테스트"""

    def test_cached_until_inputs_change(self, dated_ledger, monkeypatch) -> None:
        calls: list[str] = []

        def counting_filter(*args, **kwargs):
            calls.append(kwargs["period"])
            return filter_institutions(*args, **kwargs)

        monkeypatch.setattr("core.ledger.filter.filter_institutions", counting_filter)
        store = LedgerStore(dated_ledger)
        view = FilteredView(store)

        first = view.get(Period.FULL_TIME, today=TODAY)
        second = view.get("full-time", today=TODAY)

        assert first == second
        assert calls == ["full-time"]

    def test_caller_mutation_does_not_leak_into_cache(self, dated_ledger) -> None:
        """반환된 결과를 변경해도 다음 조회에 영향 없음"""
        store = LedgerStore(dated_ledger)
        view = FilteredView(store)

        first = view.get(Period.FULL_TIME, today=TODAY)
        first[0].investments.clear()
        first.pop()

        second = view.get(Period.FULL_TIME, today=TODAY)

        assert [len(i.investments) for i in second] == [3, 1]
        assert len(store.get_institution("Broker A").investments) == 3

    def test_recomputed_on_ledger_change(self, dated_ledger) -> None:
        store = LedgerStore(dated_ledger)
        view = FilteredView(store)
        first = view.get(Period.FULL_TIME, today=TODAY)

        store.upsert_records("2024-06-01", {"Broker A": None})
        second = view.get(Period.FULL_TIME, today=TODAY)

        assert first is not second
        assert len(second[0].investments) == 4

    def test_recomputed_on_selection_change(self, dated_ledger) -> None:
        store = LedgerStore(dated_ledger)
        view = FilteredView(store)
        view.get(Period.FULL_TIME, today=TODAY)

        store.toggle_institution("Bank B")

        assert [i.institution for i in view.get(Period.FULL_TIME, today=TODAY)] == ["Broker A"]

    def test_toggle_out_and_back_restores_view(self, dated_ledger) -> None:
        """선택 해제 후 재선택하면 원래 뷰와 동일"""
        store = LedgerStore(dated_ledger)
        view = FilteredView(store)
        original = list(view.get(Period.PAST_12_MONTHS, today=TODAY))

        store.toggle_institution("Broker A")
        assert [i.institution for i in view.get(Period.PAST_12_MONTHS, today=TODAY)] == ["Bank B"]

        store.toggle_institution("Broker A")
        assert view.get(Period.PAST_12_MONTHS, today=TODAY) == original

    def test_recomputed_on_period_change(self, dated_ledger) -> None:
        store = LedgerStore(dated_ledger)
        view = FilteredView(store)

        full = view.get(Period.FULL_TIME, today=TODAY)
        recent = view.get(Period.PAST_3_MONTHS, today=TODAY)

        assert len(full[0].investments) == 3
        assert len(recent[0].investments) == 2

    def test_configured_windows(self, dated_ledger) -> None:
        store = LedgerStore(dated_ledger)
        view = FilteredView(store, windows={"past-24-months": 24})

        result = view.get("past-24-months", today=TODAY)

        assert len(result[1].investments) == 1
