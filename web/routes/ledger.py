"""
원장 API 라우트

기관 목록/추가, 선택 집합, 필터 뷰, 기록 upsert/삭제
"""

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from core.ledger.models import RecordDelta
from core.sync.coordinator import SyncCoordinator
from core.sync.session import LedgerSession
from web.dependencies import get_coordinator, get_session
from web.models.requests import (
    InstitutionCreateRequest,
    PeriodRequest,
    RecordUpsertRequest,
    SelectionToggleRequest,
)
from web.models.responses import (
    FilteredViewResponse,
    InstitutionListResponse,
    InstitutionResponse,
    InvestmentRecordResponse,
    RecordUpsertResponse,
    RemoveRecordsResponse,
)

router = APIRouter(prefix="/api", tags=["Ledger"])


def _list_response(session: LedgerSession) -> InstitutionListResponse:
    return InstitutionListResponse(
        names=session.institution_names,
        selected=sorted(session.store.selected),
    )


# =========================================================================
# 기관
# =========================================================================

@router.get("/institutions", response_model=InstitutionListResponse)
async def list_institutions(
    session: LedgerSession = Depends(get_session),
) -> InstitutionListResponse:
    """기관 목록 + 선택 상태"""
    return _list_response(session)


@router.post(
    "/institutions",
    response_model=InstitutionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_institution(
    request: InstitutionCreateRequest,
    coordinator: SyncCoordinator = Depends(get_coordinator),
) -> InstitutionResponse:
    """기관 추가 (중복 이름은 409)"""
    institution = await coordinator.add_institution(request.name)
    return InstitutionResponse.from_institution(institution)


@router.get("/institutions/filtered", response_model=FilteredViewResponse)
async def get_filtered_institutions(
    period: str | None = Query(default=None, description="기간 (생략 시 세션 기간)"),
    today: dt.date | None = Query(default=None, description="기준일 (생략 시 오늘)"),
    session: LedgerSession = Depends(get_session),
) -> FilteredViewResponse:
    """선택 기관 + 기간 필터 결과"""
    applied = period or session.period
    try:
        institutions = session.filtered_institutions(applied, today=today)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return FilteredViewResponse(
        period=applied,
        institutions=[InstitutionResponse.from_institution(i) for i in institutions],
    )


@router.put("/period", response_model=FilteredViewResponse)
async def set_period(
    request: PeriodRequest,
    session: LedgerSession = Depends(get_session),
) -> FilteredViewResponse:
    """세션 조회 기간 변경"""
    try:
        session.set_period(request.period)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return FilteredViewResponse(
        period=session.period,
        institutions=[
            InstitutionResponse.from_institution(i)
            for i in session.filtered_institutions()
        ],
    )


# =========================================================================
# 선택 집합
# =========================================================================

@router.post("/selection/toggle", response_model=InstitutionListResponse)
async def toggle_institution(
    request: SelectionToggleRequest,
    session: LedgerSession = Depends(get_session),
) -> InstitutionListResponse:
    """기관 선택 토글"""
    session.store.toggle_institution(request.name)
    return _list_response(session)


@router.post("/selection/all", response_model=InstitutionListResponse)
async def select_all(
    session: LedgerSession = Depends(get_session),
) -> InstitutionListResponse:
    """전체 선택"""
    session.store.select_all()
    return _list_response(session)


@router.post("/selection/none", response_model=InstitutionListResponse)
async def select_none(
    session: LedgerSession = Depends(get_session),
) -> InstitutionListResponse:
    """전체 해제"""
    session.store.select_none()
    return _list_response(session)


# =========================================================================
# 기록
# =========================================================================

@router.put("/records", response_model=RecordUpsertResponse)
async def upsert_records(
    request: RecordUpsertRequest,
    coordinator: SyncCoordinator = Depends(get_coordinator),
) -> RecordUpsertResponse:
    """기관별 기록 upsert (같은 날짜는 덮어쓰기)"""
    deltas = {
        name: RecordDelta(before=d.before, after=d.after) if d is not None else None
        for name, d in request.deltas.items()
    }
    records = await coordinator.upsert_records(request.date, deltas)

    return RecordUpsertResponse(
        date=request.date.isoformat(),
        records={
            name: InvestmentRecordResponse.from_record(record)
            for name, record in zip(deltas, records)
        },
    )


@router.delete("/records/{record_date}", response_model=RemoveRecordsResponse)
async def remove_records_by_date(
    record_date: dt.date = Path(..., description="삭제할 날짜 (YYYY-MM-DD)"),
    coordinator: SyncCoordinator = Depends(get_coordinator),
) -> RemoveRecordsResponse:
    """모든 기관에서 해당 날짜 기록 삭제"""
    removed = await coordinator.remove_records_by_date(record_date)
    return RemoveRecordsResponse(date=record_date.isoformat(), removed=removed)
