"""
투자 기록 모델

기관별 "투자 전/후 잔액" 스냅샷 데이터 구조.
금액은 반드시 Decimal 사용 (환산/반올림 없이 그대로 보관).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from core.errors import InvalidRecordError


ZERO = Decimal("0")


def parse_date(value: date | datetime | str) -> date:
    """날짜 파싱 (일 단위)

    Args:
        value: date, datetime(일 단위로 절삭) 또는 ISO 8601 문자열

    Returns:
        date

    Raises:
        InvalidRecordError: 날짜로 해석할 수 없는 경우
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as e:
            raise InvalidRecordError(f"Invalid date: {value!r}") from e
    raise InvalidRecordError(f"Invalid date type: {type(value).__name__}")


def parse_amount(value: Decimal | int | float | str) -> Decimal:
    """금액 파싱

    float는 str()을 거쳐 변환하여 0.1 → Decimal("0.1") 유지.

    Raises:
        InvalidRecordError: 숫자가 아니거나, 유한하지 않거나, 음수인 경우
    """
    # bool은 int의 서브클래스이므로 먼저 차단
    if isinstance(value, bool):
        raise InvalidRecordError(f"Invalid amount: {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise InvalidRecordError(f"Invalid amount: {value!r}") from e
    else:
        raise InvalidRecordError(f"Invalid amount type: {type(value).__name__}")

    if not amount.is_finite():
        raise InvalidRecordError(f"Amount must be finite: {value!r}")
    if amount < 0:
        raise InvalidRecordError(f"Amount must be non-negative: {value!r}")

    return amount


@dataclass(frozen=True)
class InvestmentRecord:
    """투자 기록 (불변)

    amount_before_investment: 해당 날짜 입출금 직전 잔액
    amount_after_investment: 해당 날짜 입출금 직후 잔액

    기관 내 정렬 기준은 date 오름차순.
    """

    date: date
    amount_before_investment: Decimal
    amount_after_investment: Decimal

    @classmethod
    def create(
        cls,
        date: date | datetime | str,
        amount_before_investment: Decimal | int | float | str,
        amount_after_investment: Decimal | int | float | str,
    ) -> "InvestmentRecord":
        """검증을 거친 InvestmentRecord 생성"""
        return cls(
            date=parse_date(date),
            amount_before_investment=parse_amount(amount_before_investment),
            amount_after_investment=parse_amount(amount_after_investment),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용 딕셔너리 (금액은 문자열)"""
        return {
            "date": self.date.isoformat(),
            "amount_before_investment": str(self.amount_before_investment),
            "amount_after_investment": str(self.amount_after_investment),
        }


@dataclass
class InstitutionData:
    """기관별 투자 기록 시퀀스

    institution 이름이 식별자 (별도 ID 없음).
    investments는 날짜 오름차순, 날짜 중복 없음.
    """

    institution: str
    investments: list[InvestmentRecord] = field(default_factory=list)

    @property
    def latest(self) -> InvestmentRecord | None:
        """가장 최근 기록"""
        return self.investments[-1] if self.investments else None

    @property
    def latest_amount(self) -> Decimal:
        """가장 최근 투자 후 잔액 (기록 없으면 0)"""
        latest = self.latest
        return latest.amount_after_investment if latest else ZERO

    def copy(self) -> "InstitutionData":
        """복사본 생성 (기록은 불변이므로 리스트만 복사)"""
        return InstitutionData(
            institution=self.institution,
            investments=list(self.investments),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용 딕셔너리"""
        return {
            "institution": self.institution,
            "investments": [r.to_dict() for r in self.investments],
        }


@dataclass(frozen=True)
class RecordDelta:
    """upsert 입력값 (기관별)

    None인 값은 해당 기관의 최근 투자 후 잔액으로 채워짐.
    """

    before: Decimal | int | float | str | None = None
    after: Decimal | int | float | str | None = None
