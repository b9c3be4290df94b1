"""
동기화 코디네이터

로컬 캐시와 원격 저장소 사이의 원장 동기화 정책.

- 로그인: 로컬 캐시 우선 로드 → 원격 pull 시도
  - 성공: 원격으로 전체 교체 후 로컬 캐시에 저장
  - 실패: 조용히 무시하고 로컬 데이터 유지 (오프라인 허용)
- 명시적 push/pull: 결과를 알림으로 전달하고 에러는 호출자에게 전파
- 원장 변경: 로컬 캐시 저장 후 백그라운드 push (실패해도 롤백 없음)
- 로그아웃: 메모리 원장/선택 폐기 (로컬 캐시는 유지)

모든 비동기 결과는 시작 시점의 세션이 여전히 활성 세션일 때만 적용.
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Callable, Mapping

from adapters.interfaces import IAuthProvider, INotifier, IRemoteStore
from core.domain.state_machines import SessionStateMachine
from core.errors import NoRemoteDataError, NotAuthenticatedError, SessionNotReadyError
from core.ledger.models import InstitutionData, InvestmentRecord, RecordDelta
from core.storage.ledger_cache import LedgerCache
from core.sync.session import LedgerSession
from core.types import NotificationLevel, SessionState

logger = logging.getLogger(__name__)


class SyncCoordinator:
    """동기화 코디네이터

    Args:
        cache: 로컬 원장 캐시
        remote: 원격 문서 저장소
        notifier: 알림 채널
        windows: 설정된 기간 윈도우 (None이면 기본 윈도우)

    사용 예시:
    ```python
    coordinator = SyncCoordinator(cache, remote, notifier)
    await coordinator.load_for_user("user-1")

    await coordinator.add_institution("Broker A")
    await coordinator.upsert_records("2024-02-01", {"Broker A": RecordDelta(100, 150)})

    view = coordinator.require_session().filtered_institutions("past-3-months")
    coordinator.clear_data()
    ```
    """

    def __init__(
        self,
        cache: LedgerCache,
        remote: IRemoteStore,
        notifier: INotifier,
        windows: Mapping[str, int | None] | None = None,
    ):
        self.cache = cache
        self.remote = remote
        self.notifier = notifier
        self.windows = windows
        self._machine = SessionStateMachine()
        self._session: LedgerSession | None = None
        self._auth: IAuthProvider | None = None
        self._pending: set[asyncio.Task] = set()

    # -------------------------------------------------------------------------
    # 상태 조회
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        """현재 세션 상태"""
        return SessionState(self._machine.state)

    @property
    def session(self) -> LedgerSession | None:
        """활성 세션 (없으면 None)"""
        return self._session

    @property
    def pending_push_count(self) -> int:
        """진행 중인 백그라운드 push 수"""
        return len(self._pending)

    def require_session(self) -> LedgerSession:
        """활성 세션 반환

        Raises:
            NotAuthenticatedError: 로그인 세션 없음
        """
        if self._session is None:
            raise NotAuthenticatedError()
        return self._session

    def _require_ready(self) -> LedgerSession:
        session = self.require_session()
        if not self._machine.is_ready:
            raise SessionNotReadyError(self._machine.state)
        return session

    def _is_current(self, session: LedgerSession) -> bool:
        """펜싱 검사: 세션이 여전히 활성이고 사용자 ID가 일치하는지"""
        if self._session is not session:
            return False
        if self._auth is not None and self._auth.current_user_id != session.user_id:
            return False
        return True

    # -------------------------------------------------------------------------
    # 세션 생명주기
    # -------------------------------------------------------------------------

    async def load_for_user(self, user_id: str) -> LedgerSession:
        """로그인 시 원장 로드

        로컬 캐시를 먼저 적용한 뒤 원격 pull을 시도.
        원격 실패는 로그만 남기고 로컬 데이터를 유지.

        Raises:
            DeserializationError: 로컬 캐시가 손상된 경우
        """
        if not user_id:
            raise NotAuthenticatedError()

        self._machine.transition(SessionState.LOADING)
        session = LedgerSession(user_id=user_id, windows=self.windows)
        self._session = session
        logger.info(f"세션 로딩 시작: {user_id}")

        try:
            local = await self.cache.load(user_id)
        except Exception:
            if self._is_current(session):
                self._session = None
                self._machine.transition(SessionState.LOGGED_OUT)
            raise

        if not self._is_current(session):
            logger.info(f"세션 변경으로 로컬 로드 결과 폐기: {user_id}")
            return session

        session.store.replace(local)
        logger.info(f"로컬 캐시 로드: {user_id} ({len(local)} institutions)")

        try:
            remote = await self.remote.pull(user_id)
        except NoRemoteDataError:
            logger.info(f"원격 데이터 없음, 로컬 데이터 유지: {user_id}")
        except Exception as e:
            logger.warning(f"원격 pull 실패, 로컬 데이터 유지: {user_id}: {e}")
        else:
            if self._is_current(session):
                session.store.replace(remote)
                await self.cache.save(user_id, session.store.snapshot())
                logger.info(f"원격 데이터로 교체: {user_id} ({len(remote)} institutions)")
            else:
                logger.info(f"세션 변경으로 원격 pull 결과 폐기: {user_id}")

        if self._is_current(session):
            self._machine.transition(SessionState.READY)

        return session

    def clear_data(self) -> None:
        """로그아웃: 메모리 원장/선택 폐기 (로컬 캐시는 유지)"""
        if self._machine.is_logged_out:
            return

        user_id = self._session.user_id if self._session else None
        self._session = None
        self._machine.transition(SessionState.LOGGED_OUT)
        logger.info(f"세션 종료: {user_id}")

    def bind_auth(self, auth: IAuthProvider) -> Callable[[], None]:
        """인증 제공자의 사용자 변경에 세션 생명주기를 연결

        Returns:
            구독 해제 함수
        """
        self._auth = auth
        return auth.subscribe(self._on_auth_change)

    async def _on_auth_change(self, user_id: str | None) -> None:
        if user_id:
            await self.load_for_user(user_id)
        else:
            self.clear_data()

    # -------------------------------------------------------------------------
    # 원장 변경 (로컬 캐시 저장 + 백그라운드 push)
    # -------------------------------------------------------------------------

    async def upsert_records(
        self,
        target_date: date | datetime | str,
        deltas: Mapping[str, RecordDelta | None],
    ) -> list[InvestmentRecord]:
        """기록 upsert 후 저장"""
        session = self._require_ready()
        records = session.store.upsert_records(target_date, deltas)
        await self._save_data(session)
        return records

    async def remove_records_by_date(self, target_date: date | datetime | str) -> int:
        """해당 날짜 기록 삭제 후 저장"""
        session = self._require_ready()
        removed = session.store.remove_records_by_date(target_date)
        await self._save_data(session)
        return removed

    async def add_institution(self, name: str) -> InstitutionData:
        """기관 추가 후 저장"""
        session = self._require_ready()
        institution = session.store.add_institution(name)
        await self._save_data(session)
        return institution

    async def _save_data(self, session: LedgerSession) -> None:
        """원장 전체를 로컬 캐시에 저장하고 백그라운드 push 예약"""
        snapshot = session.store.snapshot()
        await self.cache.save(session.user_id, snapshot)

        task = asyncio.create_task(self._background_push(session, snapshot))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _background_push(
        self,
        session: LedgerSession,
        snapshot: list[InstitutionData],
    ) -> None:
        """백그라운드 push (순서 보장 없음, 마지막 push가 최종)"""
        try:
            await self.remote.push(session.user_id, snapshot)
        except Exception as e:
            if self._is_current(session):
                logger.warning(f"백그라운드 push 실패: {session.user_id}: {e}")
                await self._notify(f"Saved locally, but sync failed: {e}", NotificationLevel.ERROR)
            else:
                logger.info(f"이전 세션의 push 실패 무시: {session.user_id}: {e}")
            return

        if self._is_current(session):
            await self._notify("Data saved and synced", NotificationLevel.SUCCESS)

    async def wait_for_pending_pushes(self) -> None:
        """진행 중인 백그라운드 push 완료 대기"""
        while True:
            pending = [task for task in self._pending if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def close(self) -> None:
        """종료: 진행 중인 백그라운드 push 취소"""
        tasks = list(self._pending)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # -------------------------------------------------------------------------
    # 명시적 push / pull
    # -------------------------------------------------------------------------

    async def push_to_remote(self) -> None:
        """현재 원장으로 원격 문서를 무조건 덮어쓰기

        Raises:
            NotAuthenticatedError: 로그인 세션 없음
            SessionNotReadyError: 로그인 로드가 끝나지 않음
            RemoteStoreError: 원격 저장소 오류
        """
        session = self._require_ready()

        try:
            await self.remote.push(session.user_id, session.store.snapshot())
        except Exception as e:
            if self._is_current(session):
                await self._notify(f"Push failed: {e}", NotificationLevel.ERROR)
            raise

        logger.info(f"원격 push 완료: {session.user_id}")
        if self._is_current(session):
            await self._notify("Data pushed to cloud", NotificationLevel.SUCCESS)

    async def pull_from_remote(self) -> bool:
        """원격 원장으로 전체 교체 후 로컬 캐시에 저장

        Returns:
            적용 여부 (세션이 바뀌었으면 False)

        Raises:
            NotAuthenticatedError: 로그인 세션 없음
            NoRemoteDataError: 원격 문서 없음 (로그인 경로와 달리 전파)
            RemoteStoreError: 원격 저장소 오류
        """
        session = self.require_session()

        try:
            institutions = await self.remote.pull(session.user_id)
        except Exception as e:
            if self._is_current(session):
                await self._notify(f"Pull failed: {e}", NotificationLevel.ERROR)
            raise

        if not self._is_current(session):
            logger.info(f"세션 변경으로 pull 결과 폐기: {session.user_id}")
            return False

        session.store.replace(institutions)
        await self.cache.save(session.user_id, session.store.snapshot())

        logger.info(f"원격 pull 완료: {session.user_id} ({len(institutions)} institutions)")
        await self._notify("Data pulled from cloud", NotificationLevel.SUCCESS)
        return True

    # -------------------------------------------------------------------------
    # 알림
    # -------------------------------------------------------------------------

    async def _notify(self, message: str, level: NotificationLevel) -> None:
        """알림 전송 (알림 실패는 동기화 결과에 영향 없음)"""
        try:
            await self.notifier.send(message, level=level.value)
        except Exception as e:
            logger.error(f"알림 전송 실패: {e}")
