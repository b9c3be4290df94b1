"""
HTTP 원격 문서 저장소

사용자별 문서 users/{user_id}/data/investments 를 REST로 읽고 씀.
IRemoteStore Protocol 준수.

- GET  → 200: {"institutions": [...]}, 404: 문서 없음
- PUT  → 문서 전체 덮어쓰기 (동시성 토큰 없음)
"""

import logging
from typing import Any

import httpx

from core.constants import Defaults, RemoteDocument
from core.errors import NoRemoteDataError, NotAuthenticatedError, RemoteStoreError
from core.ledger.models import InstitutionData
from core.ledger.serialization import from_remote_document, to_remote_document

logger = logging.getLogger(__name__)


class HttpRemoteStore:
    """HTTP 원격 문서 저장소

    IRemoteStore Protocol 구현.

    Args:
        base_url: 저장소 API 기본 URL
        api_token: Bearer 토큰 (선택)
        timeout: HTTP 요청 타임아웃 (초)
        transport: httpx 트랜스포트 (테스트용 MockTransport 주입)

    사용 예시:
    ```python
    store = HttpRemoteStore(base_url="https://example.com/api/v1")

    await store.push("user-1", institutions)
    institutions = await store.pull("user-1")
    ```
    """

    def __init__(
        self,
        base_url: str,
        api_token: str | None = None,
        timeout: float = Defaults.REMOTE_TIMEOUT_SEC,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not base_url:
            raise ValueError("base_url은 필수입니다")

        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 반환 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self.api_token:
                headers["Authorization"] = f"Bearer {self.api_token}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def document_path(self, user_id: str) -> str:
        """사용자 문서 경로"""
        if not user_id:
            raise NotAuthenticatedError()
        return (
            f"/{RemoteDocument.COLLECTION}/{user_id}"
            f"/{RemoteDocument.SUBCOLLECTION}/{RemoteDocument.DOCUMENT}"
        )

    async def pull(self, user_id: str) -> list[InstitutionData]:
        """원격 원장 조회"""
        response = await self._request("GET", self.document_path(user_id))

        if response.status_code == 404:
            raise NoRemoteDataError(user_id)

        try:
            document = response.json()
        except ValueError as e:
            raise RemoteStoreError(
                f"Remote store returned non-JSON body: {e}",
                status_code=response.status_code,
            ) from e

        institutions = from_remote_document(document)
        logger.debug(f"Pulled {len(institutions)} institutions for {user_id}")
        return institutions

    async def push(self, user_id: str, institutions: list[InstitutionData]) -> None:
        """원격 원장 덮어쓰기"""
        await self._request(
            "PUT",
            self.document_path(user_id),
            json=to_remote_document(institutions),
        )
        logger.debug(f"Pushed {len(institutions)} institutions for {user_id}")

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """HTTP 요청 + 에러 변환

        404는 호출자가 처리하도록 응답 그대로 반환.
        """
        client = await self._get_client()

        try:
            response = await client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            raise RemoteStoreError(f"Remote store timeout: {method} {path}") from e
        except httpx.HTTPError as e:
            raise RemoteStoreError(f"Remote store HTTP error: {e}") from e

        if response.status_code in (401, 403):
            raise NotAuthenticatedError(
                f"Remote store rejected credentials (status={response.status_code})"
            )

        if response.status_code == 404 and method == "GET":
            return response

        if response.status_code >= 400:
            logger.warning(
                "원격 저장소 요청 실패: %s %s status=%s, body=%s",
                method,
                path,
                response.status_code,
                response.text,
            )
            raise RemoteStoreError(
                f"Remote store error: {method} {path} (status={response.status_code})",
                status_code=response.status_code,
            )

        return response

    # -------------------------------------------------------------------------
    # Context Manager 지원
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "HttpRemoteStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
