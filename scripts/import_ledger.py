"""
원장 JSON 가져오기

InstitutionData 목록 형식의 JSON 파일을 검증한 뒤
사용자의 로컬 캐시에 기록.

사용법:
    python -m scripts.import_ledger --user-id alice --file investments.json
    python -m scripts.import_ledger --user-id alice --file investments.json --db data/test.db
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.db.sqlite_adapter import SQLiteAdapter, get_db_path, init_schema
from core.errors import DeserializationError
from core.ledger.serialization import loads_ledger
from core.logging import setup_logging
from core.storage.ledger_cache import LedgerCache

logger = logging.getLogger(__name__)


async def import_ledger(user_id: str, source: Path, db_path: Path) -> int:
    """JSON 파일을 로컬 캐시에 저장

    Returns:
        가져온 기관 수

    Raises:
        DeserializationError: JSON 형식/내용이 잘못된 경우
    """
    institutions = loads_ledger(source.read_text(encoding="utf-8"))

    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        cache = LedgerCache(db)
        await cache.save(user_id, institutions)

    records = sum(len(inst.investments) for inst in institutions)
    logger.info(
        f"가져오기 완료: {user_id} ← {source} "
        f"({len(institutions)} institutions, {records} records)"
    )
    return len(institutions)


def main() -> int:
    parser = argparse.ArgumentParser(description="원장 JSON을 로컬 캐시로 가져오기")
    parser.add_argument("--user-id", required=True, help="대상 사용자 ID")
    parser.add_argument("--file", required=True, type=Path, help="InstitutionData 목록 JSON")
    parser.add_argument("--db", type=Path, default=None, help="로컬 캐시 DB 경로")
    args = parser.parse_args()

    setup_logging("scripts")

    if not args.file.exists():
        logger.error(f"파일을 찾을 수 없습니다: {args.file}")
        return 1

    try:
        asyncio.run(import_ledger(args.user_id, args.file, get_db_path(args.db)))
    except DeserializationError as e:
        logger.error(f"원장 형식 오류: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
