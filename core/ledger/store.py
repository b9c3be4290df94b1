"""
Ledger 저장소

기관별 투자 기록 시퀀스를 메모리에서 관리.
기록 쓰기 경로는 upsert_records 하나뿐이며, 모든 기관의 시퀀스는
날짜 오름차순 + 날짜 중복 없음을 유지.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Mapping

from core.errors import DuplicateInstitutionError, InvalidRecordError, UnknownInstitutionError
from core.ledger.models import (
    InstitutionData,
    InvestmentRecord,
    RecordDelta,
    parse_amount,
    parse_date,
)

logger = logging.getLogger(__name__)


def find_insert_index(records: list[InvestmentRecord], target: date) -> int:
    """target 이상인 첫 기록의 인덱스 (없으면 len(records))"""
    for i, record in enumerate(records):
        if record.date >= target:
            return i
    return len(records)


def merge_record(records: list[InvestmentRecord], record: InvestmentRecord) -> None:
    """정렬된 시퀀스에 기록 병합 (in-place)

    - 같은 날짜가 있으면 덮어쓰기
    - 없으면 정렬 위치에 삽입
    """
    index = find_insert_index(records, record.date)
    if index == len(records):
        records.append(record)
    elif records[index].date == record.date:
        records[index] = record
    else:
        records.insert(index, record)


class LedgerStore:
    """Ledger 저장소

    한 사용자 세션 동안 원장(기관 목록)과 선택 집합을 소유.
    version / selection_version은 변경 시마다 증가하며
    파생 뷰 메모이제이션 키로 사용됨.

    Args:
        institutions: 초기 원장 (None이면 빈 원장)

    사용 예시:
    ```python
    store = LedgerStore()
    store.add_institution("Broker A")
    store.upsert_records("2024-02-01", {"Broker A": RecordDelta(before=100, after=150)})
    ```
    """

    def __init__(self, institutions: Iterable[InstitutionData] | None = None):
        self._institutions: list[InstitutionData] = []
        self._selected: set[str] = set()
        self.version = 0
        self.selection_version = 0
        self.replace(institutions or [])

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    @property
    def institutions(self) -> list[InstitutionData]:
        """원장 (읽기 전용으로 취급할 것)"""
        return self._institutions

    @property
    def institution_names(self) -> list[str]:
        """기관명 목록 (원장 순서)"""
        return [inst.institution for inst in self._institutions]

    @property
    def selected(self) -> frozenset[str]:
        """선택된 기관명 집합"""
        return frozenset(self._selected)

    def get_institution(self, name: str) -> InstitutionData | None:
        """기관 조회"""
        for inst in self._institutions:
            if inst.institution == name:
                return inst
        return None

    def snapshot(self) -> list[InstitutionData]:
        """원장 복사본 (직렬화/비동기 전송용)"""
        return [inst.copy() for inst in self._institutions]

    # -------------------------------------------------------------------------
    # 원장 변경
    # -------------------------------------------------------------------------

    def replace(self, institutions: Iterable[InstitutionData]) -> None:
        """원장 전체 교체 + 선택 초기화 (전체 선택)"""
        self._institutions = [inst.copy() for inst in institutions]
        self._selected = set(self.institution_names)
        self.version += 1
        self.selection_version += 1

    def upsert_records(
        self,
        target_date: date | datetime | str,
        deltas: Mapping[str, RecordDelta | None],
    ) -> list[InvestmentRecord]:
        """기관별 기록 upsert

        before/after가 주어지지 않으면 해당 기관의 최근 투자 후 잔액(없으면 0)을 사용.
        모든 입력을 먼저 검증한 뒤 한 번에 반영 (실패 시 원장 변경 없음).

        Args:
            target_date: 기록 날짜
            deltas: 기관명 → RecordDelta (또는 None)

        Returns:
            반영된 기록 목록 (deltas 순서)

        Raises:
            InvalidRecordError: 날짜/금액이 잘못된 경우
            UnknownInstitutionError: 원장에 없는 기관명
        """
        day = parse_date(target_date)

        # 1단계: 검증 및 기록 생성 (원장 변경 없음)
        pending: list[tuple[InstitutionData, InvestmentRecord]] = []
        for name, delta in deltas.items():
            inst = self.get_institution(name)
            if inst is None:
                raise UnknownInstitutionError(name)

            delta = delta or RecordDelta()
            fallback = inst.latest_amount
            before = parse_amount(delta.before) if delta.before is not None else fallback
            after = parse_amount(delta.after) if delta.after is not None else fallback

            pending.append((
                inst,
                InvestmentRecord(
                    date=day,
                    amount_before_investment=before,
                    amount_after_investment=after,
                ),
            ))

        # 2단계: 반영
        for inst, record in pending:
            merge_record(inst.investments, record)

        if pending:
            self.version += 1
            logger.debug(f"Upserted {len(pending)} record(s) on {day}")

        return [record for _, record in pending]

    def remove_records_by_date(self, target_date: date | datetime | str) -> int:
        """모든 기관에서 해당 날짜 기록 삭제

        Returns:
            삭제된 기록 수 (없어도 에러 아님)
        """
        day = parse_date(target_date)
        removed = 0

        for inst in self._institutions:
            kept = [r for r in inst.investments if r.date != day]
            removed += len(inst.investments) - len(kept)
            inst.investments = kept

        if removed:
            self.version += 1
            logger.debug(f"Removed {removed} record(s) dated {day}")

        return removed

    def add_institution(self, name: str) -> InstitutionData:
        """기관 추가 (빈 기록) + 선택 집합에 추가

        Raises:
            InvalidRecordError: 빈 이름
            DuplicateInstitutionError: 같은 이름(대소문자 구분)이 이미 존재
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidRecordError(f"Invalid institution name: {name!r}")
        if self.get_institution(name) is not None:
            raise DuplicateInstitutionError(name)

        inst = InstitutionData(institution=name)
        self._institutions.append(inst)
        self._selected.add(name)
        self.version += 1
        self.selection_version += 1

        logger.debug(f"Added institution: {name}")
        return inst

    # -------------------------------------------------------------------------
    # 선택 집합 (원장 소속 여부는 검증하지 않음)
    # -------------------------------------------------------------------------

    def toggle_institution(self, name: str) -> bool:
        """선택 토글

        Returns:
            토글 후 선택 여부
        """
        if name in self._selected:
            self._selected.discard(name)
            selected = False
        else:
            self._selected.add(name)
            selected = True
        self.selection_version += 1
        return selected

    def select_all(self) -> None:
        """원장의 모든 기관 선택"""
        self._selected = set(self.institution_names)
        self.selection_version += 1

    def select_none(self) -> None:
        """선택 해제"""
        self._selected = set()
        self.selection_version += 1

