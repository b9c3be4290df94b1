"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """로그인 요청"""

    user_id: str = Field(..., min_length=1, description="사용자 ID")


class InstitutionCreateRequest(BaseModel):
    """기관 추가 요청"""

    name: str = Field(..., min_length=1, description="기관명 (대소문자 구분, 고유)")


class SelectionToggleRequest(BaseModel):
    """선택 토글 요청"""

    name: str = Field(..., description="기관명 (원장에 없어도 허용)")


class PeriodRequest(BaseModel):
    """조회 기간 변경 요청"""

    period: str = Field(..., description="기간 (full-time, past-3-months 등)")


class RecordDeltaRequest(BaseModel):
    """기관별 기록 입력

    생략한 값은 해당 기관의 최근 투자 후 잔액으로 채워짐.
    """

    before: Decimal | None = Field(default=None, ge=0, description="투자 전 잔액")
    after: Decimal | None = Field(default=None, ge=0, description="투자 후 잔액")


class RecordUpsertRequest(BaseModel):
    """기록 upsert 요청"""

    date: dt.date = Field(..., description="기록 날짜 (YYYY-MM-DD)")
    deltas: dict[str, RecordDeltaRequest | None] = Field(
        ...,
        description="기관명 → 입력값",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "date": "2024-02-01",
                    "deltas": {
                        "Broker A": {"before": "100", "after": "150"},
                        "Bank B": None,
                    },
                },
            ]
        }
    }
