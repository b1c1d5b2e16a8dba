# rbac_core/middleware/services.py
from functools import wraps
from typing import Callable

from sqlalchemy.orm import sessionmaker

from rbac_core.database.database import SessionLocal
from rbac_core.repositories.sqlalchemy import (
    SqlalchemyPermissionRepository, SqlalchemyRoleRepository, SqlalchemyUserRepository,
)
from rbac_core.services.authorization_service import AuthorizationService
from rbac_core.services.role_service import RoleService

SERVICES_ENVIRON_KEY = "services"


def with_db_services(app: Callable, session_factory: sessionmaker = SessionLocal) -> Callable:
    """
    요청마다 DB 세션을 열고, 리포지토리와 서비스를 만들어 environ에 넣어 주는 WSGI 미들웨어입니다.
    게이트보다 바깥쪽에 두어야 게이트가 environ에서 AuthorizationService를 꺼낼 수 있습니다.
    """
    @wraps(app)
    def application(environ, start_response):
        db_session = session_factory()
        result = None
        try:
            # 1. 의존성 생성 (Repositories -> Services)
            user_repo = SqlalchemyUserRepository(db_session)
            role_repo = SqlalchemyRoleRepository(db_session)
            permission_repo = SqlalchemyPermissionRepository(db_session)

            # 2. 생성된 서비스 객체들을 environ을 통해 핸들러에 전달
            environ[SERVICES_ENVIRON_KEY] = {
                "authorization": AuthorizationService(user_repo),
                "roles": RoleService(role_repo, permission_repo, user_repo),
            }
            # 응답 본문은 세션을 닫기 전에 모두 만들어 둡니다.
            result = app(environ, start_response)
            return list(result)
        finally:
            # PEP 3333: 응답 이터러블에 close()가 있으면 반드시 호출해야 합니다.
            if hasattr(result, "close"):
                result.close()
            db_session.close()
    return application


def authorizer_from_environ(environ) -> AuthorizationService:
    """PairedGate의 authorizer_provider로 사용합니다."""
    return environ[SERVICES_ENVIRON_KEY]["authorization"]
