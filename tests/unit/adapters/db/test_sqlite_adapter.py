"""
SQLite 어댑터 테스트

SQLiteAdapter 및 관련 함수 테스트.
"""

from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import (
    SQLiteAdapter,
    get_db_path,
    create_connection,
    init_schema,
)
from core.constants import Paths


class TestGetDbPath:
    """get_db_path 테스트"""

    def test_default(self) -> None:
        """기본 경로"""
        path = get_db_path()

        assert path == Paths.CACHE_DB
        assert isinstance(path, Path)

    def test_string_path(self) -> None:
        """문자열 경로"""
        assert get_db_path("data/other.db") == Path("data/other.db")


class TestCreateConnection:
    """create_connection 테스트"""

    @pytest.mark.asyncio
    async def test_create_connection(self, tmp_path: Path) -> None:
        """연결 생성 (WAL 모드)"""
        conn = await create_connection(tmp_path / "test.db")

        cursor = await conn.execute("PRAGMA journal_mode")
        row = await cursor.fetchone()
        assert row[0].upper() == "WAL"

        await conn.close()

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """부모 디렉토리 생성"""
        db_path = tmp_path / "subdir" / "test.db"

        conn = await create_connection(db_path)

        assert db_path.parent.exists()

        await conn.close()

    @pytest.mark.asyncio
    async def test_in_memory(self) -> None:
        """인메모리 DB는 디렉토리 생성 없음"""
        conn = await create_connection(":memory:")

        cursor = await conn.execute("SELECT 1")
        assert (await cursor.fetchone())[0] == 1

        await conn.close()


class TestSQLiteAdapter:
    """SQLiteAdapter 테스트"""

    @pytest_asyncio.fixture
    async def adapter(self, tmp_path: Path) -> SQLiteAdapter:
        """어댑터 픽스처"""
        adapter = SQLiteAdapter(tmp_path / "test.db")
        await adapter.connect()
        yield adapter
        await adapter.close()

    @pytest.mark.asyncio
    async def test_connect_and_close(self, tmp_path: Path) -> None:
        """연결 및 종료"""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        assert adapter.is_connected is False

        await adapter.connect()
        assert adapter.is_connected is True

        await adapter.close()
        assert adapter.is_connected is False

    @pytest.mark.asyncio
    async def test_not_connected(self, tmp_path: Path) -> None:
        adapter = SQLiteAdapter(tmp_path / "test.db")

        with pytest.raises(RuntimeError):
            await adapter.execute("SELECT 1")

    @pytest.mark.asyncio
    async def test_execute_and_fetch(self, adapter: SQLiteAdapter) -> None:
        """SQL 실행 및 조회"""
        await adapter.execute("CREATE TABLE items (value TEXT)")
        for value in ("B", "A", "C"):
            await adapter.execute("INSERT INTO items (value) VALUES (?)", (value,))
        await adapter.commit()

        row = await adapter.fetchone("SELECT value FROM items WHERE value = ?", ("A",))
        rows = await adapter.fetchall("SELECT value FROM items ORDER BY value")

        assert row[0] == "A"
        assert [r[0] for r in rows] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_transaction_commit(self, adapter: SQLiteAdapter) -> None:
        """트랜잭션 커밋"""
        await adapter.execute("CREATE TABLE tx_test (id INTEGER)")
        await adapter.commit()

        async with adapter.transaction() as conn:
            await conn.execute("INSERT INTO tx_test (id) VALUES (1)")
            await conn.execute("INSERT INTO tx_test (id) VALUES (2)")

        rows = await adapter.fetchall("SELECT id FROM tx_test")
        assert len(rows) == 2

    @pytest.mark.asyncio
    async def test_transaction_rollback(self, adapter: SQLiteAdapter) -> None:
        """트랜잭션 롤백"""
        await adapter.execute("CREATE TABLE tx_test2 (id INTEGER)")
        await adapter.commit()

        with pytest.raises(ValueError):
            async with adapter.transaction() as conn:
                await conn.execute("INSERT INTO tx_test2 (id) VALUES (1)")
                raise ValueError("의도적 에러")

        rows = await adapter.fetchall("SELECT id FROM tx_test2")
        assert len(rows) == 0

    @pytest.mark.asyncio
    async def test_context_manager(self, tmp_path: Path) -> None:
        """컨텍스트 매니저"""
        async with SQLiteAdapter(tmp_path / "ctx_test.db") as adapter:
            assert adapter.is_connected is True

        assert adapter.is_connected is False


class TestInitSchema:
    """init_schema 테스트"""

    @pytest.mark.asyncio
    async def test_creates_local_cache(self) -> None:
        async with SQLiteAdapter(":memory:") as adapter:
            assert await adapter.table_exists("local_cache") is False

            await init_schema(adapter)

            assert await adapter.table_exists("local_cache") is True

    @pytest.mark.asyncio
    async def test_idempotent(self) -> None:
        """여러 번 실행 가능"""
        async with SQLiteAdapter(":memory:") as adapter:
            await init_schema(adapter)
            await init_schema(adapter)

            assert await adapter.table_exists("local_cache") is True

    @pytest.mark.asyncio
    async def test_cache_key_unique(self) -> None:
        """cache_key PRIMARY KEY 제약조건"""
        async with SQLiteAdapter(":memory:") as adapter:
            await init_schema(adapter)
            await adapter.execute(
                "INSERT INTO local_cache (cache_key, value_json) VALUES ('k', '[]')"
            )

            with pytest.raises(aiosqlite.IntegrityError):
                await adapter.execute(
                    "INSERT INTO local_cache (cache_key, value_json) VALUES ('k', '[]')"
                )
