"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # 로컬 캐시 키 = 접두사 + user_id (같은 기기의 사용자 간 충돌 방지)
    CACHE_KEY_PREFIX: str = "investments_"

    # 토스트 알림 자동 닫힘 시간 (밀리초)
    TOAST_DURATION_MS: int = 3500

    # 원격 저장소 HTTP 타임아웃 (초)
    REMOTE_TIMEOUT_SEC: float = 10.0


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # 로컬 캐시 DB
    CACHE_DB: Path = DATA_DIR / "investments_cache.db"


class RemoteDocument:
    """원격 문서 경로 구성 요소

    문서 경로: users/{user_id}/data/investments
    """

    COLLECTION: str = "users"
    SUBCOLLECTION: str = "data"
    DOCUMENT: str = "investments"
    FIELD: str = "institutions"
