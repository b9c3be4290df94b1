"""
원격 문서 저장소 어댑터
"""

from adapters.remote.http_store import HttpRemoteStore

__all__ = ["HttpRemoteStore"]
