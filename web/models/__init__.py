"""
Web API 스키마
"""

from web.models.requests import (
    InstitutionCreateRequest,
    LoginRequest,
    PeriodRequest,
    RecordDeltaRequest,
    RecordUpsertRequest,
    SelectionToggleRequest,
)
from web.models.responses import (
    FilteredViewResponse,
    HealthResponse,
    InstitutionListResponse,
    InstitutionResponse,
    InvestmentRecordResponse,
    RecordUpsertResponse,
    RemoveRecordsResponse,
    SessionResponse,
    SyncResponse,
    ToastResponse,
)

__all__ = [
    # Requests
    "InstitutionCreateRequest",
    "LoginRequest",
    "PeriodRequest",
    "RecordDeltaRequest",
    "RecordUpsertRequest",
    "SelectionToggleRequest",
    # Responses
    "FilteredViewResponse",
    "HealthResponse",
    "InstitutionListResponse",
    "InstitutionResponse",
    "InvestmentRecordResponse",
    "RecordUpsertResponse",
    "RemoveRecordsResponse",
    "SessionResponse",
    "SyncResponse",
    "ToastResponse",
]
