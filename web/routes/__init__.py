"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- session: 로그인/로그아웃
- ledger: 기관/선택/필터 뷰/기록
- sync: 명시적 push/pull
- notifications: 토스트 알림
"""
