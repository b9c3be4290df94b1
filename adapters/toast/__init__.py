"""
토스트 알림 어댑터
"""

from adapters.toast.notifier import Toast, ToastNotifier

__all__ = ["Toast", "ToastNotifier"]
