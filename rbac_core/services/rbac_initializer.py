import logging
from typing import Iterable

from rbac_core.repositories.interfaces import IPermissionRepository, IRoleRepository
from rbac_core.services.catalog import DEFAULT_ROLES, DefaultRole, Permission, permission_name, unknown_permissions
from rbac_core.services.exceptions import CatalogError

logger = logging.getLogger(__name__)

class RBACInitializer:
    """카탈로그의 권한과 기본 역할을 저장소에 반영하는 초기화 작업을 담당합니다."""

    def __init__(
        self,
        permission_repo: IPermissionRepository,
        role_repo: IRoleRepository,
        permissions: Iterable[Permission] = Permission,
        default_roles: Iterable[DefaultRole] = DEFAULT_ROLES,
    ):
        self.permission_repo = permission_repo
        self.role_repo = role_repo
        self.permissions = list(permissions)
        self.default_roles = list(default_roles)

    def initialize(self):
        """
        모든 권한을 upsert한 뒤, 기본 역할을 upsert하고 역할별 권한을 연결합니다.

        모든 단계가 개별적으로 멱등(idempotent)이므로 프로세스 시작 시마다 실행해도 되고,
        중간에 실패했다면 처음부터 다시 실행하면 같은 최종 상태에 수렴합니다.

        Raises:
            CatalogError: 기본 역할이 카탈로그에 없는 권한을 참조할 때. 저장소에는 아무것도 쓰지 않습니다.
            Exception: 저장소 오류. 로그를 남긴 뒤 그대로 다시 발생시킵니다.
        """
        unknown = unknown_permissions(self.default_roles)
        if unknown:
            raise CatalogError(f"Default roles reference permissions outside the catalog: {unknown}")

        logger.info("Initializing RBAC: %d permissions, %d default roles", len(self.permissions), len(self.default_roles))
        try:
            # 1. 역할 연결 전에 모든 권한이 존재해야 합니다.
            for permission in self.permissions:
                self.permission_repo.upsert(permission.value, permission.category, permission.description)

            # 2. 기본 역할 생성 및 권한 연결
            for role_config in self.default_roles:
                role = self.role_repo.upsert(role_config.name, role_config.description, is_system=True)
                for name in role_config.permissions:
                    permission = self.permission_repo.find_by_name(permission_name(name))
                    if permission is None:
                        raise CatalogError(f"Permission '{permission_name(name)}' was not seeded.")
                    self.role_repo.assign_permission(role, permission)
                logger.debug("Role '%s' seeded with %d permissions", role_config.name, len(role_config.permissions))
        except Exception:
            logger.exception("Error initializing RBAC")
            raise

        logger.info("RBAC system initialized successfully")


def initialize_rbac(permission_repo: IPermissionRepository, role_repo: IRoleRepository):
    """기본 카탈로그와 기본 역할로 RBAC 초기화를 실행합니다."""
    RBACInitializer(permission_repo, role_repo).initialize()
