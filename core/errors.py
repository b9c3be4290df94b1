"""
예외 정의

원장/동기화 처리 중 발생하는 예외 계층.
"""


class InvestmentTrackerError(Exception):
    """모든 도메인 예외의 기본 클래스"""

    pass


class NotAuthenticatedError(InvestmentTrackerError):
    """로그인 세션 없이 원격 작업 시도"""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NoRemoteDataError(InvestmentTrackerError):
    """원격 문서가 존재하지 않음 (한 번도 push되지 않은 사용자)"""

    def __init__(self, user_id: str | None = None):
        self.user_id = user_id
        if user_id:
            super().__init__(f"No remote data found for user: {user_id}")
        else:
            super().__init__("No remote data found")


class DuplicateInstitutionError(InvestmentTrackerError):
    """이미 존재하는 기관명으로 추가 시도"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Institution already exists: {name}")


class UnknownInstitutionError(InvestmentTrackerError):
    """원장에 없는 기관명 참조"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown institution: {name}")


class InvalidRecordError(InvestmentTrackerError, ValueError):
    """잘못된 날짜/금액 입력"""

    pass


class DeserializationError(InvestmentTrackerError):
    """캐시 또는 원격 페이로드 형식 오류"""

    pass


class RemoteStoreError(InvestmentTrackerError):
    """원격 저장소 통신 오류

    Args:
        message: 에러 메시지
        status_code: HTTP 상태 코드 (네트워크 오류면 None)
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class SessionNotReadyError(InvestmentTrackerError):
    """세션 로딩 중 원장 변경 시도"""

    def __init__(self, state: str):
        self.state = state
        super().__init__(f"Session is not ready (state={state})")
