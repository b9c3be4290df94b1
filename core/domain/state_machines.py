"""
State Machines

세션 생명주기 상태 전이 관리.
"""

import logging
from enum import Enum

from core.types import SessionState

logger = logging.getLogger(__name__)


class StateMachineError(Exception):
    """상태 전이 오류"""
    pass


class StateMachine:
    """상태 머신 기본 클래스

    Args:
        initial_state: 초기 상태
        transitions: 허용된 전이 정의 {from_state: [to_states]}
        name: 머신 이름 (로깅용)
    """

    def __init__(
        self,
        initial_state: str | Enum,
        transitions: dict[str, list[str]],
        name: str = "StateMachine",
    ):
        self._state = initial_state.value if isinstance(initial_state, Enum) else initial_state
        self._transitions = transitions
        self._name = name
        self._history: list[tuple[str, str]] = []

    @property
    def state(self) -> str:
        """현재 상태"""
        return self._state

    def can_transition(self, to_state: str | Enum) -> bool:
        """전이 가능 여부 확인"""
        target = to_state.value if isinstance(to_state, Enum) else to_state
        return target in self._transitions.get(self._state, [])

    def transition(self, to_state: str | Enum) -> str:
        """상태 전이

        Raises:
            StateMachineError: 허용되지 않은 전이
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state

        if not self.can_transition(target):
            allowed = self._transitions.get(self._state, [])
            raise StateMachineError(
                f"{self._name}: Cannot transition from {self._state} to {target}. "
                f"Allowed: {allowed}"
            )

        old_state = self._state
        self._state = target
        self._history.append((old_state, target))

        logger.debug(f"{self._name}: {old_state} → {target}")

        return target

    @property
    def history(self) -> list[tuple[str, str]]:
        """상태 전이 이력"""
        return self._history.copy()


class SessionStateMachine(StateMachine):
    """세션 상태 머신

    전이 규칙:
    - LOGGED_OUT → LOADING: 로그인 (로컬 캐시 로드 시작)
    - LOADING → READY: 원격 pull 완료 (성공/실패 무관)
    - LOADING → LOGGED_OUT: 로딩 중 로그아웃
    - LOADING → LOADING: 로딩 중 다른 사용자로 로그인
    - READY → LOADING: 다른 사용자로 재로그인
    - READY → LOGGED_OUT: 로그아웃
    """

    TRANSITIONS: dict[str, list[str]] = {
        "LOGGED_OUT": ["LOADING"],
        "LOADING": ["READY", "LOGGED_OUT", "LOADING"],
        "READY": ["LOADING", "LOGGED_OUT"],
    }

    def __init__(self, initial_state: str | SessionState = SessionState.LOGGED_OUT):
        super().__init__(
            initial_state=initial_state,
            transitions=self.TRANSITIONS,
            name="SessionStateMachine",
        )

    @property
    def is_ready(self) -> bool:
        """세션 사용 가능 여부"""
        return self._state == "READY"

    @property
    def is_logged_out(self) -> bool:
        """로그아웃 상태 여부"""
        return self._state == "LOGGED_OUT"
