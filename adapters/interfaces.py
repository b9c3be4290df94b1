"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from core.ledger.models import InstitutionData


@runtime_checkable
class IRemoteStore(Protocol):
    """원격 문서 저장소 인터페이스

    사용자별 단일 문서 {"institutions": [...]}를 통째로 읽고 씀.
    """

    async def pull(self, user_id: str) -> list["InstitutionData"]:
        """원격 원장 조회

        Args:
            user_id: 사용자 ID

        Returns:
            원격 원장

        Raises:
            NoRemoteDataError: 문서가 한 번도 저장되지 않은 경우
            NotAuthenticatedError: 인증 실패
            RemoteStoreError: 네트워크/서버 오류
            DeserializationError: 문서 형식 오류
        """
        ...

    async def push(self, user_id: str, institutions: list["InstitutionData"]) -> None:
        """원격 원장 덮어쓰기 (동시성 토큰 없음)

        Args:
            user_id: 사용자 ID
            institutions: 저장할 원장 전체
        """
        ...


@runtime_checkable
class INotifier(Protocol):
    """알림 채널 인터페이스

    저장/동기화 결과를 사용자에게 전달 (토스트 등).
    """

    async def send(
        self,
        message: str,
        level: str = "success",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송

        Args:
            message: 알림 메시지
            level: 알림 레벨 (success, error, info)
            extra: 추가 데이터 (선택)

        Returns:
            전송 성공 여부
        """
        ...


# 인증 상태 변경 콜백 (user_id 또는 None)
AuthChangeCallback = Callable[[str | None], Awaitable[None]]


@runtime_checkable
class IAuthProvider(Protocol):
    """인증 제공자 인터페이스

    현재 사용자 ID를 제공하고, 변경 시 구독자에게 알림.
    """

    @property
    def current_user_id(self) -> str | None:
        """현재 로그인 사용자 ID (없으면 None)"""
        ...

    async def sign_in(self, user_id: str) -> None:
        """로그인"""
        ...

    async def sign_out(self) -> None:
        """로그아웃"""
        ...

    def subscribe(self, callback: AuthChangeCallback) -> Callable[[], None]:
        """사용자 변경 구독

        Returns:
            구독 해제 함수
        """
        ...
