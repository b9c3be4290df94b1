"""
알림 라우트

토스트 목록 조회 및 닫기
"""

from fastapi import APIRouter, Depends, HTTPException

from adapters.toast.notifier import ToastNotifier
from web.dependencies import get_toasts
from web.models.responses import ToastResponse

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("", response_model=list[ToastResponse])
async def list_notifications(
    notifier: ToastNotifier = Depends(get_toasts),
) -> list[ToastResponse]:
    """표시 중인 토스트 목록"""
    return [
        ToastResponse(id=t.id, message=t.message, level=t.level)
        for t in notifier.toasts
    ]


@router.delete("/{toast_id}", status_code=204)
async def dismiss_notification(
    toast_id: int,
    notifier: ToastNotifier = Depends(get_toasts),
) -> None:
    """토스트 닫기"""
    if not notifier.dismiss(toast_id):
        raise HTTPException(status_code=404, detail=f"Notification not found: {toast_id}")
