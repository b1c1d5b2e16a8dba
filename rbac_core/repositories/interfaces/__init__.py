from .permission import IPermissionRepository
from .role import IRoleRepository
from .user import IUserRepository

__all__ = ["IPermissionRepository", "IRoleRepository", "IUserRepository"]
