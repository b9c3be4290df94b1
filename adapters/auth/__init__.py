"""
인증 어댑터
"""

from adapters.auth.local import LocalAuthProvider

__all__ = ["LocalAuthProvider"]
