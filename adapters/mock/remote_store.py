"""
Mock 원격 저장소

테스트용 인메모리 원격 문서 저장소.
IRemoteStore Protocol 준수.
"""

import asyncio
from typing import Any

from core.errors import NoRemoteDataError, NotAuthenticatedError, RemoteStoreError
from core.ledger.models import InstitutionData
from core.ledger.serialization import from_remote_document, to_remote_document


class MockRemoteStore:
    """Mock 원격 저장소

    문서는 직렬화된 형태로 보관하여 호출자 객체와 공유되지 않음.

    Args:
        should_fail: True면 모든 호출이 RemoteStoreError (오프라인 시나리오)

    사용 예시:
    ```python
    remote = MockRemoteStore()
    remote.set_document("user-1", institutions)

    # pull을 잠시 멈추기 (경쟁 상태 테스트)
    remote.pull_gate = asyncio.Event()
    task = asyncio.create_task(coordinator.load_for_user("user-1"))
    ...
    remote.pull_gate.set()
    ```
    """

    def __init__(self, should_fail: bool = False):
        self.should_fail = should_fail
        self.documents: dict[str, dict[str, Any]] = {}
        self.pull_count = 0
        self.push_count = 0
        self.pull_gate: asyncio.Event | None = None
        self.push_gate: asyncio.Event | None = None

    def set_document(self, user_id: str, institutions: list[InstitutionData]) -> None:
        """원격 문서 직접 설정 (테스트 준비용)"""
        self.documents[user_id] = to_remote_document(institutions)

    def get_document(self, user_id: str) -> list[InstitutionData] | None:
        """원격 문서 조회 (검증용)"""
        document = self.documents.get(user_id)
        return from_remote_document(document) if document is not None else None

    async def pull(self, user_id: str) -> list[InstitutionData]:
        """원격 원장 조회"""
        self.pull_count += 1
        if self.pull_gate is not None:
            await self.pull_gate.wait()

        self._check(user_id)

        document = self.documents.get(user_id)
        if document is None:
            raise NoRemoteDataError(user_id)
        return from_remote_document(document)

    async def push(self, user_id: str, institutions: list[InstitutionData]) -> None:
        """원격 원장 덮어쓰기"""
        self.push_count += 1
        document = to_remote_document(institutions)
        if self.push_gate is not None:
            await self.push_gate.wait()

        self._check(user_id)
        self.documents[user_id] = document

    def _check(self, user_id: str) -> None:
        if not user_id:
            raise NotAuthenticatedError()
        if self.should_fail:
            raise RemoteStoreError("Mock remote store unavailable")
