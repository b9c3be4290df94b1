"""
투자 원장 (Investment Ledger)

기관별 투자 전/후 잔액 기록을 날짜순으로 관리하고,
선택 기관 + 조회 기간으로 필터링한 뷰를 제공.

사용 예시:
```python
from core.ledger import LedgerStore, RecordDelta, FilteredView

store = LedgerStore()
store.add_institution("Broker A")
store.upsert_records("2024-02-01", {"Broker A": RecordDelta(before=100, after=150)})

view = FilteredView(store)
institutions = view.get(period="past-3-months")
```
"""

from core.ledger.filter import (
    FilteredView,
    compute_cutoff,
    filter_institutions,
    subtract_months,
)
from core.ledger.models import (
    InstitutionData,
    InvestmentRecord,
    RecordDelta,
    parse_amount,
    parse_date,
)
from core.ledger.serialization import (
    dumps_ledger,
    from_remote_document,
    loads_ledger,
    to_remote_document,
)
from core.ledger.store import LedgerStore

__all__ = [
    # 핵심 클래스
    "LedgerStore",
    "FilteredView",
    # 모델
    "InstitutionData",
    "InvestmentRecord",
    "RecordDelta",
    "parse_amount",
    "parse_date",
    # 필터
    "compute_cutoff",
    "filter_institutions",
    "subtract_months",
    # 직렬화
    "dumps_ledger",
    "loads_ledger",
    "to_remote_document",
    "from_remote_document",
]
