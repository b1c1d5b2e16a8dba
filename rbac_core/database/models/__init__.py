from .permission import Permission
from .role import Role
from .role_permission import RolePermission
from .user import User

__all__ = ["Permission", "Role", "RolePermission", "User"]
