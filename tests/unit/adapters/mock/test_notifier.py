"""
Mock Notifier 테스트

MockNotifier 테스트.
"""

import pytest

from adapters.mock.notifier import MockNotifier


class TestMockNotifier:
    """MockNotifier 테스트"""

    @pytest.fixture
    def notifier(self) -> MockNotifier:
        """Notifier 픽스처"""
        return MockNotifier()

    @pytest.mark.asyncio
    async def test_send_success(self, notifier: MockNotifier) -> None:
        """알림 전송 성공"""
        result = await notifier.send("Data saved and synced")

        assert result is True
        assert len(notifier.notifications) == 1

    @pytest.mark.asyncio
    async def test_send_records_message(self, notifier: MockNotifier) -> None:
        """메시지 기록 확인"""
        await notifier.send("Push failed: offline", level="error", extra={"user_id": "alice"})

        record = notifier.notifications[0]

        assert record.message == "Push failed: offline"
        assert record.level == "error"
        assert record.extra == {"user_id": "alice"}
        assert record.sent is True
        assert record.timestamp is not None

    @pytest.mark.asyncio
    async def test_send_fail_mode(self) -> None:
        """실패 모드"""
        notifier = MockNotifier(should_fail=True)

        result = await notifier.send("Data pushed to cloud")

        assert result is False
        assert notifier.notifications[0].sent is False

    @pytest.mark.asyncio
    async def test_filter_by_level(self, notifier: MockNotifier) -> None:
        """레벨별 조회"""
        await notifier.send("ok")
        await notifier.send("bad", level="error")
        await notifier.send("fyi", level="info")

        assert [n.message for n in notifier.get_successes()] == ["ok"]
        assert [n.message for n in notifier.get_errors()] == ["bad"]
        assert [n.message for n in notifier.get_by_level("info")] == ["fyi"]

    @pytest.mark.asyncio
    async def test_last_notification_and_clear(self, notifier: MockNotifier) -> None:
        await notifier.send("first")
        await notifier.send("second")

        assert notifier.last_notification.message == "second"
        assert notifier.message_count == 2

        notifier.clear()

        assert notifier.last_notification is None
        assert notifier.message_count == 0
