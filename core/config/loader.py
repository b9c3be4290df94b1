"""
설정 로더

settings.yaml 로드 및 애플리케이션 설정 생성
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths, PROJECT_ROOT
from core.types import PERIOD_MONTHS


@dataclass(frozen=True)
class RemoteConfig:
    """원격 문서 저장소 연결 설정"""

    base_url: str
    api_token: str | None = None
    timeout: float = Defaults.REMOTE_TIMEOUT_SEC


@dataclass(frozen=True)
class CacheConfig:
    """로컬 캐시 설정"""

    db_path: Path = Paths.CACHE_DB
    key_prefix: str = Defaults.CACHE_KEY_PREFIX


@dataclass(frozen=True)
class NotificationConfig:
    """알림(토스트) 설정"""

    duration_ms: int = Defaults.TOAST_DURATION_MS


@dataclass(frozen=True)
class AppSettings:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    remote: RemoteConfig
    cache: CacheConfig = field(default_factory=CacheConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    periods: dict[str, int | None] = field(default_factory=lambda: dict(PERIOD_MONTHS))


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _parse_periods(raw: Any) -> dict[str, int | None]:
    """기간 윈도우 파싱 (기본 윈도우에 추가/덮어쓰기)"""
    periods = dict(PERIOD_MONTHS)
    if raw is None:
        return periods

    if not isinstance(raw, dict):
        raise SettingsLoadError("settings.yaml의 'periods'는 매핑이어야 합니다")

    for name, months in raw.items():
        if months is not None and (
            isinstance(months, bool) or not isinstance(months, int) or months <= 0
        ):
            raise SettingsLoadError(
                f"기간 '{name}'의 개월 수가 잘못되었습니다: {months!r}"
            )
        periods[str(name)] = months

    return periods


def load_settings(path: Path | None = None) -> AppSettings:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppSettings 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"settings.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SettingsLoadError("settings.yaml이 비어 있습니다")

    # remote 검증
    remote_data = data.get("remote") or {}
    base_url = remote_data.get("base_url")
    if not base_url:
        raise SettingsLoadError("settings.yaml의 remote 섹션에 'base_url'이 없습니다")

    remote = RemoteConfig(
        base_url=str(base_url).rstrip("/"),
        api_token=remote_data.get("api_token") or None,
        timeout=float(remote_data.get("timeout", Defaults.REMOTE_TIMEOUT_SEC)),
    )

    # cache (상대 경로는 프로젝트 루트 기준)
    cache_data = data.get("cache") or {}
    db_path = Path(cache_data.get("db_path", Paths.CACHE_DB))
    if not db_path.is_absolute():
        db_path = PROJECT_ROOT / db_path

    cache = CacheConfig(
        db_path=db_path,
        key_prefix=cache_data.get("key_prefix", Defaults.CACHE_KEY_PREFIX),
    )

    notification_data = data.get("notifications") or {}
    notifications = NotificationConfig(
        duration_ms=int(notification_data.get("duration_ms", Defaults.TOAST_DURATION_MS)),
    )

    return AppSettings(
        remote=remote,
        cache=cache,
        notifications=notifications,
        periods=_parse_periods(data.get("periods")),
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _settings: AppSettings | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._settings is None:
            self._settings = load_settings(settings_path)

    @property
    def remote(self) -> RemoteConfig:
        """원격 저장소 설정"""
        assert self._settings is not None
        return self._settings.remote

    @property
    def cache(self) -> CacheConfig:
        """로컬 캐시 설정"""
        assert self._settings is not None
        return self._settings.cache

    @property
    def notifications(self) -> NotificationConfig:
        """알림 설정"""
        assert self._settings is not None
        return self._settings.notifications

    @property
    def periods(self) -> dict[str, int | None]:
        """조회 기간 윈도우 (이름 → 개월 수)"""
        assert self._settings is not None
        return self._settings.periods

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._settings = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
