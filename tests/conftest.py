"""
pytest 공통 fixture 정의

설정 파일, 샘플 원장, 로컬 캐시 DB fixture
"""

import tempfile
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import Settings
from core.ledger.models import InstitutionData, InvestmentRecord


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_content = """# 테스트용 settings.yaml
remote:
  base_url: "https://remote.example.com/api/v1/"
  api_token: "test_token_abc"
  timeout: 5

cache:
  db_path: "cache/test_cache.db"
  key_prefix: "test_investments_"

notifications:
  duration_ms: 1000

periods:
  past-24-months: 24
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_minimal(temp_dir: Path) -> Path:
    """remote.base_url만 있는 settings.yaml"""
    settings_path = temp_dir / "settings_minimal.yaml"
    settings_path.write_text(
        'remote:\n  base_url: "https://remote.example.com"\n',
        encoding="utf-8",
    )
    return settings_path


@pytest.fixture(autouse=True)
def reset_settings() -> None:
    """Settings 싱글턴 초기화"""
    Settings.reset()
    yield
    Settings.reset()


# -------------------------------------------------------------------------
# 샘플 원장
# -------------------------------------------------------------------------

@pytest.fixture
def broker_a() -> InstitutionData:
    """기록 2건이 있는 기관"""
    return InstitutionData(
        institution="Broker A",
        investments=[
            InvestmentRecord.create("2024-01-01", "100", "100"),
            InvestmentRecord.create("2024-03-01", "110", "160"),
        ],
    )


@pytest.fixture
def bank_b() -> InstitutionData:
    """기록 1건이 있는 기관"""
    return InstitutionData(
        institution="Bank B",
        investments=[
            InvestmentRecord.create("2024-02-15", "500.25", "700.25"),
        ],
    )


@pytest.fixture
def sample_ledger(broker_a: InstitutionData, bank_b: InstitutionData) -> list[InstitutionData]:
    """샘플 원장 (Broker A, Bank B)"""
    return [broker_a, bank_b]


# -------------------------------------------------------------------------
# DB
# -------------------------------------------------------------------------

@pytest_asyncio.fixture
async def cache_db() -> AsyncGenerator[SQLiteAdapter, None]:
    """스키마가 초기화된 인메모리 DB"""
    async with SQLiteAdapter(":memory:") as db:
        await init_schema(db)
        yield db
