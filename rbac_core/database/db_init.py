import logging
import sys

from rbac_core.config import configure_logging
from rbac_core.repositories.sqlalchemy import SqlalchemyPermissionRepository, SqlalchemyRoleRepository
from rbac_core.services.rbac_initializer import initialize_rbac
from .database import engine, SessionLocal, Base
from . import models  # noqa: F401  (테이블 등록)

logger = logging.getLogger(__name__)

def initialize_db(bind=engine, session_factory=SessionLocal):
    """
    DB와 테이블을 생성하고, 권한 카탈로그와 기본 역할을 반영합니다.
    여러 번 실행해도 같은 상태가 되므로 프로세스 시작 시마다 호출해도 됩니다.
    실패하면 예외를 그대로 발생시킵니다.
    """
    # 모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    Base.metadata.create_all(bind=bind)
    logger.info("Tables created.")

    db = session_factory()
    try:
        initialize_rbac(SqlalchemyPermissionRepository(db), SqlalchemyRoleRepository(db))
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def main() -> int:
    configure_logging()
    try:
        initialize_db()
    except Exception as e:
        print(f"RBAC initialization failed: {e}", file=sys.stderr)
        return 1
    print("RBAC initialization script completed.")
    return 0

if __name__ == '__main__':
    sys.exit(main())
