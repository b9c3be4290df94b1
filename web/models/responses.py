"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화
금액은 정밀도 보존을 위해 문자열로 반환
"""

from pydantic import BaseModel, Field

from core.ledger.models import InstitutionData, InvestmentRecord


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    session_state: str = Field(..., description="세션 상태 (LOGGED_OUT/LOADING/READY)")
    version: str = Field(..., description="버전")


class SessionResponse(BaseModel):
    """세션 상태 응답"""

    state: str = Field(..., description="세션 상태")
    user_id: str | None = Field(default=None, description="로그인 사용자 ID")
    institution_names: list[str] = Field(default_factory=list, description="기관명 목록")


class InvestmentRecordResponse(BaseModel):
    """투자 기록 응답"""

    date: str = Field(..., description="기록 날짜")
    amount_before_investment: str = Field(..., description="투자 전 잔액")
    amount_after_investment: str = Field(..., description="투자 후 잔액")

    @classmethod
    def from_record(cls, record: InvestmentRecord) -> "InvestmentRecordResponse":
        return cls(**record.to_dict())


class InstitutionResponse(BaseModel):
    """기관별 기록 응답"""

    institution: str = Field(..., description="기관명")
    investments: list[InvestmentRecordResponse] = Field(default_factory=list)

    @classmethod
    def from_institution(cls, institution: InstitutionData) -> "InstitutionResponse":
        return cls(
            institution=institution.institution,
            investments=[InvestmentRecordResponse.from_record(r) for r in institution.investments],
        )


class InstitutionListResponse(BaseModel):
    """기관 목록 + 선택 상태 응답"""

    names: list[str] = Field(..., description="기관명 목록 (원장 순서)")
    selected: list[str] = Field(..., description="선택된 기관명 (정렬)")


class FilteredViewResponse(BaseModel):
    """필터 결과 응답"""

    period: str = Field(..., description="적용된 기간")
    institutions: list[InstitutionResponse] = Field(default_factory=list)


class RecordUpsertResponse(BaseModel):
    """기록 upsert 응답"""

    date: str = Field(..., description="기록 날짜")
    records: dict[str, InvestmentRecordResponse] = Field(..., description="기관명 → 반영된 기록")


class RemoveRecordsResponse(BaseModel):
    """기록 삭제 응답"""

    date: str = Field(..., description="삭제 날짜")
    removed: int = Field(..., description="삭제된 기록 수")


class SyncResponse(BaseModel):
    """push/pull 응답"""

    status: str = Field(..., description="결과 (pushed/pulled/discarded)")
    institution_names: list[str] = Field(default_factory=list)


class ToastResponse(BaseModel):
    """토스트 알림 응답"""

    id: int
    message: str
    level: str
