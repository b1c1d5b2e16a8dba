# rbac_core/services/exceptions.py
from typing import Iterable

# --- Authorization Exceptions ---
class UnauthenticatedError(Exception):
    """인증된 세션(사용자 ID)을 확인할 수 없을 때"""
    pass

class ForbiddenError(Exception):
    """인증은 되었으나 요구되는 권한이 없을 때"""
    def __init__(self, required_permissions: Iterable[str]):
        self.required_permissions = list(required_permissions)
        super().__init__(f"You don't have permission: {', '.join(self.required_permissions)}")

class AuthorizationStoreError(Exception):
    """권한 저장소 조회에 실패하여 허용 여부를 판단할 수 없을 때"""
    pass

class CatalogError(Exception):
    """기본 역할이 카탈로그에 없는 권한을 참조할 때"""
    pass

# --- General Exceptions ---
class UserNotFoundError(Exception):
    """사용자를 찾을 수 없을 때"""
    pass

class RoleNotFoundError(Exception):
    """역할을 찾을 수 없을 때"""
    pass

class PermissionNotFoundError(Exception):
    """권한을 찾을 수 없을 때"""
    pass

# --- Role Management Exceptions ---
class RoleAlreadyExistsError(Exception):
    """역할 이름이 이미 존재할 때"""
    pass

class SystemRoleError(Exception):
    """시스템 역할의 이름을 바꾸거나 삭제하려고 할 때"""
    pass

class RoleInUseError(Exception):
    """사용자가 할당된 역할을 삭제하려고 할 때"""
    pass
