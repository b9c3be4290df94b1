"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adapters.auth.local import LocalAuthProvider
from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.interfaces import IRemoteStore
from adapters.remote.http_store import HttpRemoteStore
from adapters.toast.notifier import ToastNotifier
from core.config.loader import AppSettings, get_settings
from core.errors import (
    DeserializationError,
    DuplicateInstitutionError,
    InvalidRecordError,
    InvestmentTrackerError,
    NoRemoteDataError,
    NotAuthenticatedError,
    RemoteStoreError,
    SessionNotReadyError,
    UnknownInstitutionError,
)
from core.logging import setup_logging
from core.storage.ledger_cache import LedgerCache
from core.sync.coordinator import SyncCoordinator
from web.routes import health, ledger, notifications, session, sync

logger = logging.getLogger(__name__)

# 예외 → HTTP 상태 코드 (먼저 매칭되는 항목 적용)
ERROR_STATUS: list[tuple[type[InvestmentTrackerError], int]] = [
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (NoRemoteDataError, status.HTTP_404_NOT_FOUND),
    (UnknownInstitutionError, status.HTTP_404_NOT_FOUND),
    (DuplicateInstitutionError, status.HTTP_409_CONFLICT),
    (SessionNotReadyError, status.HTTP_409_CONFLICT),
    (InvalidRecordError, 422),
    (DeserializationError, 422),
    (RemoteStoreError, status.HTTP_502_BAD_GATEWAY),
]


def status_for_error(exc: InvestmentTrackerError) -> int:
    """도메인 예외에 대응하는 HTTP 상태 코드"""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def _handle_domain_error(request: Request, exc: InvestmentTrackerError) -> JSONResponse:
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} 실패: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app(
    settings: AppSettings | None = None,
    remote: IRemoteStore | None = None,
    db_path: Path | str | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """FastAPI 앱 생성

    Args:
        settings: 앱 설정 (None이면 시작 시 settings.yaml 로드)
        remote: 원격 저장소 (None이면 설정의 HttpRemoteStore 사용)
        db_path: 로컬 캐시 DB 경로 (None이면 설정값)
        configure_logging: 시작 시 콘솔/파일 로깅 설정 여부

    Returns:
        FastAPI 인스턴스
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """앱 생명주기 관리"""
        if configure_logging:
            setup_logging("web")

        app_settings = settings or get_settings()

        # 시작 시 - 로컬 캐시 DB 스키마 초기화
        db = SQLiteAdapter(db_path or app_settings.cache.db_path)
        await db.connect()
        await init_schema(db)

        owned_remote: HttpRemoteStore | None = None
        remote_store = remote
        if remote_store is None:
            owned_remote = HttpRemoteStore(
                base_url=app_settings.remote.base_url,
                api_token=app_settings.remote.api_token,
                timeout=app_settings.remote.timeout,
            )
            remote_store = owned_remote

        notifier = ToastNotifier(duration_ms=app_settings.notifications.duration_ms)
        auth = LocalAuthProvider()
        coordinator = SyncCoordinator(
            cache=LedgerCache(db, key_prefix=app_settings.cache.key_prefix),
            remote=remote_store,
            notifier=notifier,
            windows=app_settings.periods,
        )
        unsubscribe = coordinator.bind_auth(auth)

        app.state.settings = app_settings
        app.state.db = db
        app.state.notifier = notifier
        app.state.auth = auth
        app.state.coordinator = coordinator
        logger.info("Web: 초기화 완료")

        yield

        # 종료 시 - 리소스 정리
        unsubscribe()
        await coordinator.close()
        if owned_remote is not None:
            await owned_remote.close()
        notifier.clear()
        await db.close()
        logger.info("Web: 종료 완료")

    app = FastAPI(
        title="Investment Tracker API",
        description="기관별 투자 잔액 기록 및 클라우드 동기화 API",
        version=health.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS 설정 (개발용)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InvestmentTrackerError, _handle_domain_error)

    # =========================================================================
    # API 라우터 등록
    # =========================================================================

    app.include_router(health.router)
    app.include_router(session.router)
    app.include_router(ledger.router)
    app.include_router(sync.router)
    app.include_router(notifications.router)

    return app


app = create_app()
