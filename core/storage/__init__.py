"""
스토리지 모듈

로컬 원장 캐시 제공
"""

from core.storage.ledger_cache import LedgerCache

__all__ = [
    "LedgerCache",
]
