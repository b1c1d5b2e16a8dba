# rbac_core/config.py
import logging
import os

# 데이터베이스 연결 문자열. 환경 변수가 없으면 로컬 SQLite 파일을 사용합니다.
DATABASE_URL = os.environ.get("RBAC_DATABASE_URL", "sqlite:///rbac_metadata.db")

LOG_LEVEL = os.environ.get("RBAC_LOG_LEVEL", "INFO")

# 세션 토큰을 담는 요청 헤더 이름
AUTH_HEADER = os.environ.get("RBAC_AUTH_HEADER", "X-Auth-Token")


def configure_logging(level: str = None):
    """스크립트 진입점에서 호출하여 로깅 레벨과 포맷을 설정합니다."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
