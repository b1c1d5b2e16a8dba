import logging
from typing import Any, Dict, List, Optional

from rbac_core.database import models
from rbac_core.repositories.interfaces import IPermissionRepository, IRoleRepository, IUserRepository
from rbac_core.services.exceptions import (
    PermissionNotFoundError, RoleAlreadyExistsError, RoleInUseError,
    RoleNotFoundError, SystemRoleError, UserNotFoundError,
)

logger = logging.getLogger(__name__)


class RoleService:
    """역할 관리 화면과 관리자 API를 위한 역할, 권한, 사용자-역할 관리 서비스를 제공합니다."""

    def __init__(self, role_repo: IRoleRepository, permission_repo: IPermissionRepository, user_repo: IUserRepository):
        """
        RoleService를 초기화합니다.

        Args:
            role_repo: 역할 데이터에 접근하기 위한 리포지토리.
            permission_repo: 권한 데이터에 접근하기 위한 리포지토리.
            user_repo: 사용자 데이터에 접근하기 위한 리포지토리 (역할 할당용).
        """
        self.role_repo = role_repo
        self.permission_repo = permission_repo
        self.user_repo = user_repo

    def list_permissions(self) -> Dict[str, Any]:
        """
        모든 권한의 목록과 카테고리별로 묶은 목록을 함께 반환합니다.

        Returns:
            {"permissions": [...], "grouped": {"webtoons": [...], ...}} 형태의 딕셔너리.
        """
        permissions = [self._permission_to_dict(p) for p in self.permission_repo.list_all()]
        grouped: Dict[str, List[Dict[str, Any]]] = {}
        for permission in permissions:
            grouped.setdefault(permission["category"], []).append(permission)
        return {"permissions": permissions, "grouped": grouped}

    def list_roles(self) -> List[Dict[str, Any]]:
        """모든 역할의 목록을 권한, 사용자 수와 함께 조회합니다."""
        user_counts = self.role_repo.count_users_by_role()
        return [self._role_to_dict(role, user_counts.get(role.id, 0)) for role in self.role_repo.list_all()]

    def get_role(self, role_id: int) -> Dict[str, Any]:
        """
        ID로 특정 역할을 조회합니다.

        Raises:
            RoleNotFoundError: 해당 ID의 역할을 찾을 수 없을 때.
        """
        return self._role_to_dict(self._get_role_or_raise(role_id))

    def create_role(self, name: str, description: Optional[str] = None, permission_names: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        새로운 사용자 정의(비시스템) 역할을 생성합니다.

        Raises:
            RoleAlreadyExistsError: 동일한 이름의 역할이 이미 존재할 때.
            PermissionNotFoundError: 존재하지 않는 권한 이름이 포함되었을 때.
        """
        if not name:
            raise ValueError("Role name is required.")
        if self.role_repo.find_by_name(name):
            raise RoleAlreadyExistsError(f"Role '{name}' already exists.")

        permissions = self._resolve_permissions(permission_names or [])
        role = self.role_repo.create(models.Role(name=name, description=description, is_system=False))
        for permission in permissions:
            self.role_repo.assign_permission(role, permission)

        logger.info("Created role '%s' with %d permissions", name, len(permissions))
        return self.get_role(role.id)

    def update_role(self, role_id: int, name: Optional[str] = None, description: Optional[str] = None, permission_names: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        역할의 이름, 설명, 권한 목록을 수정합니다.

        permission_names가 주어지면 기존 권한 연결 전체를 교체합니다.

        Raises:
            RoleNotFoundError: 해당 ID의 역할을 찾을 수 없을 때.
            SystemRoleError: 시스템 역할의 이름을 바꾸려고 할 때.
            RoleAlreadyExistsError: 바꾸려는 이름을 다른 역할이 사용 중일 때.
            PermissionNotFoundError: 존재하지 않는 권한 이름이 포함되었을 때.
        """
        role = self._get_role_or_raise(role_id)

        if name and name != role.name:
            if role.is_system:
                raise SystemRoleError(f"Cannot rename system role '{role.name}'.")
            if self.role_repo.find_by_name(name):
                raise RoleAlreadyExistsError(f"Role '{name}' already exists.")
            role.name = name
        if description is not None:
            role.description = description

        if permission_names is not None:
            permissions = self._resolve_permissions(permission_names)
            self.role_repo.replace_permissions(role, permissions)
        else:
            self.role_repo.update(role)

        logger.info("Updated role '%s'", role.name)
        return self.get_role(role_id)

    def delete_role(self, role_id: int) -> bool:
        """
        역할을 삭제합니다. 시스템 역할과 사용자가 할당된 역할은 삭제할 수 없습니다.

        Raises:
            RoleNotFoundError: 해당 ID의 역할을 찾을 수 없을 때.
            SystemRoleError: 시스템 역할을 삭제하려고 할 때.
            RoleInUseError: 역할이 할당된 사용자가 있을 때.
        """
        role = self._get_role_or_raise(role_id)
        if role.is_system:
            raise SystemRoleError(f"Cannot delete system role '{role.name}'.")
        if self.role_repo.count_users(role.id) > 0:
            raise RoleInUseError(f"Cannot delete role '{role.name}' with assigned users.")

        self.role_repo.delete(role)
        logger.info("Deleted role '%s'", role.name)
        return True

    def assign_user_role(self, user_id: str, role_name: str) -> bool:
        """
        사용자에게 역할을 할당합니다. 기존 역할은 대체됩니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            RoleNotFoundError: 해당 이름의 역할을 찾을 수 없을 때.
        """
        user = self.user_repo.find_by_id(user_id)
        if not user: raise UserNotFoundError(f"User with id '{user_id}' not found.")

        role = self.role_repo.find_by_name(role_name)
        if not role: raise RoleNotFoundError(f"Role '{role_name}' not found.")

        self.user_repo.set_role(user, role)
        return True

    def clear_user_role(self, user_id: str) -> bool:
        user = self.user_repo.find_by_id(user_id)
        if not user: raise UserNotFoundError(f"User with id '{user_id}' not found.")

        self.user_repo.set_role(user, None)
        return True

    def _get_role_or_raise(self, role_id: int) -> models.Role:
        role = self.role_repo.find_by_id(role_id)
        if not role:
            raise RoleNotFoundError(f"Role with id '{role_id}' not found.")
        return role

    def _resolve_permissions(self, names: List[str]) -> List[models.Permission]:
        unique_names = list(dict.fromkeys(names))
        permissions = self.permission_repo.find_by_names(unique_names)
        missing = set(unique_names) - {p.name for p in permissions}
        if missing:
            raise PermissionNotFoundError(f"Permissions not found: {', '.join(sorted(missing))}")
        return permissions

    def _role_to_dict(self, role: models.Role, user_count: Optional[int] = None) -> Dict[str, Any]:
        if user_count is None:
            user_count = self.role_repo.count_users(role.id)
        return {
            "id": role.id,
            "name": role.name,
            "description": role.description,
            "is_system": role.is_system,
            "permissions": role.permission_names,
            "user_count": user_count,
        }

    @staticmethod
    def _permission_to_dict(permission: models.Permission) -> Dict[str, Any]:
        return {
            "id": permission.id,
            "name": permission.name,
            "category": permission.category,
            "description": permission.description,
        }
