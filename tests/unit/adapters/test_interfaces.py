"""
Protocol 인터페이스 테스트

Protocol 타입 검증 및 구현 확인.
"""

from adapters.auth.local import LocalAuthProvider
from adapters.interfaces import IAuthProvider, INotifier, IRemoteStore
from adapters.mock.notifier import MockNotifier
from adapters.mock.remote_store import MockRemoteStore
from adapters.remote.http_store import HttpRemoteStore
from adapters.toast.notifier import ToastNotifier


class TestIRemoteStore:
    """IRemoteStore Protocol 테스트"""

    def test_mock_implements_protocol(self) -> None:
        assert isinstance(MockRemoteStore(), IRemoteStore)

    def test_http_implements_protocol(self) -> None:
        assert isinstance(HttpRemoteStore(base_url="https://example.com"), IRemoteStore)


class TestINotifier:
    """INotifier Protocol 테스트"""

    def test_mock_implements_protocol(self) -> None:
        assert isinstance(MockNotifier(), INotifier)

    def test_toast_implements_protocol(self) -> None:
        assert isinstance(ToastNotifier(), INotifier)


class TestIAuthProvider:
    """IAuthProvider Protocol 테스트"""

    def test_local_implements_protocol(self) -> None:
        assert isinstance(LocalAuthProvider(), IAuthProvider)

    def test_non_implementation(self) -> None:
        assert not isinstance(MockNotifier(), IAuthProvider)
