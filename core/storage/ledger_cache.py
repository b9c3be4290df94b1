"""
LedgerCache - 로컬 원장 캐시

local_cache 테이블에 사용자별 원장 전체를 JSON으로 저장/조회.
부분 업데이트 없음: 저장할 때마다 원장 전체를 덮어씀.

캐시 키: "investments_" + user_id (같은 기기의 사용자 간 충돌 없음)
"""

import logging

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.ledger.models import InstitutionData
from core.ledger.serialization import dumps_ledger, loads_ledger

logger = logging.getLogger(__name__)


class LedgerCache:
    """로컬 원장 캐시

    Args:
        db: SQLiteAdapter 인스턴스 (init_schema 완료 상태)
        key_prefix: 캐시 키 접두사

    사용 예시:
    ```python
    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        cache = LedgerCache(db)

        await cache.save("user-1", institutions)
        institutions = await cache.load("user-1")
    ```
    """

    def __init__(self, db: SQLiteAdapter, key_prefix: str = Defaults.CACHE_KEY_PREFIX):
        self.db = db
        self.key_prefix = key_prefix

    def cache_key(self, user_id: str) -> str:
        """사용자별 캐시 키"""
        return f"{self.key_prefix}{user_id}"

    async def save(self, user_id: str, institutions: list[InstitutionData]) -> None:
        """원장 전체 저장 (upsert, 단일 트랜잭션)"""
        key = self.cache_key(user_id)
        value_json = dumps_ledger(institutions)

        async with self.db.transaction() as conn:
            await conn.execute(
                """
                INSERT INTO local_cache (cache_key, value_json, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(cache_key) DO UPDATE SET
                    value_json = excluded.value_json,
                    updated_at = excluded.updated_at
                """,
                (key, value_json),
            )

        logger.debug(f"Saved local cache: {key} ({len(institutions)} institutions)")

    async def load(self, user_id: str) -> list[InstitutionData]:
        """원장 조회

        캐시가 없으면 빈 원장 반환 (신규 사용자는 에러 아님).

        Raises:
            DeserializationError: 저장된 값이 손상된 경우
        """
        key = self.cache_key(user_id)
        row = await self.db.fetchone(
            "SELECT value_json FROM local_cache WHERE cache_key = ?",
            (key,),
        )

        if row is None:
            logger.debug(f"No local cache: {key}")
            return []

        return loads_ledger(row[0])

    async def delete(self, user_id: str) -> bool:
        """캐시 삭제

        Returns:
            삭제 여부
        """
        async with self.db.transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM local_cache WHERE cache_key = ?",
                (self.cache_key(user_id),),
            )
            return cursor.rowcount > 0

    async def keys(self) -> list[str]:
        """저장된 캐시 키 목록"""
        rows = await self.db.fetchall(
            "SELECT cache_key FROM local_cache ORDER BY cache_key"
        )
        return [row[0] for row in rows]
