import logging
from typing import Iterable, Optional, Set, Union

from sqlalchemy.exc import SQLAlchemyError

from rbac_core.repositories.interfaces import IUserRepository
from rbac_core.services.catalog import ADMIN_ROLE_NAME, PermissionLike, permission_name, permission_names
from rbac_core.services.exceptions import AuthorizationStoreError

logger = logging.getLogger(__name__)

class AuthorizationService:
    """
    사용자 ID를 기준으로 권한과 역할 보유 여부를 판단합니다.

    모든 판단은 저장소를 새로 읽어 수행하며, 데이터가 없으면 거부(fail-closed)로 처리합니다.
    저장소 조회 자체가 실패하면 False를 반환하지 않고 AuthorizationStoreError를 발생시켜
    '권한 없음'과 '판단 불가'를 호출자가 구분할 수 있게 합니다.
    """

    def __init__(self, user_repo: IUserRepository):
        self.user_repo = user_repo

    def get_user_permissions(self, user_id: str) -> Set[str]:
        """
        사용자의 역할에 연결된 모든 권한 이름을 반환합니다.

        Returns:
            권한 이름의 집합. 사용자가 없거나 역할이 없으면 빈 집합.

        Raises:
            AuthorizationStoreError: 저장소 조회에 실패했을 때.
        """
        try:
            user = self.user_repo.find_with_role_and_permissions(user_id)
        except SQLAlchemyError as e:
            logger.warning("Permission lookup failed for user '%s': %s", user_id, e)
            raise AuthorizationStoreError(f"Could not load permissions for user '{user_id}'.") from e

        if user is None or user.role is None:
            return set()
        return {link.permission.name for link in user.role.role_permissions}

    def has_permission(self, user_id: str, permission: PermissionLike) -> bool:
        return permission_name(permission) in self.get_user_permissions(user_id)

    def has_any_permission(self, user_id: str, permissions: Union[PermissionLike, Iterable[PermissionLike]]) -> bool:
        """요구 권한 중 하나라도 있으면 True. 빈 목록이면 False입니다."""
        names = permission_names(permissions)
        if not names:
            return False
        granted = self.get_user_permissions(user_id)
        return any(name in granted for name in names)

    def has_all_permissions(self, user_id: str, permissions: Union[PermissionLike, Iterable[PermissionLike]]) -> bool:
        """요구 권한을 모두 가지고 있으면 True. 빈 목록이면 True입니다."""
        names = permission_names(permissions)
        if not names:
            return True
        granted = self.get_user_permissions(user_id)
        return all(name in granted for name in names)

    def get_role_name(self, user_id: str) -> Optional[str]:
        try:
            return self.user_repo.find_role_name(user_id)
        except SQLAlchemyError as e:
            logger.warning("Role lookup failed for user '%s': %s", user_id, e)
            raise AuthorizationStoreError(f"Could not load role for user '{user_id}'.") from e

    def has_role(self, user_id: str, role_name: str) -> bool:
        return self.get_role_name(user_id) == role_name

    def is_admin(self, user_id: str) -> bool:
        # 대소문자를 구분하는 정확한 일치만 허용합니다. ('Admin'은 관리자가 아님)
        return self.has_role(user_id, ADMIN_ROLE_NAME)
