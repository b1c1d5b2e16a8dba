# rbac_core/services/catalog.py
"""
시스템에서 사용하는 모든 권한 이름과 기본 역할 구성을 정의하는 카탈로그입니다.

권한은 Permission 열거형의 멤버로 표현되며, str을 상속하므로 저장소에는
'webtoons.create'와 같은 문자열 그대로 저장됩니다. 새 권한을 추가하려면 이 파일에
멤버를 추가하고 RBAC 초기화를 다시 실행하면 됩니다.
"""
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Tuple, Union


def category_of(name: str) -> str:
    """권한 이름에서 카테고리를 추출합니다. ('webtoons.create' -> 'webtoons')"""
    return name.split(".", 1)[0]


class Permission(str, Enum):
    # Webtoons
    WEBTOONS_VIEW = "webtoons.view"
    WEBTOONS_CREATE = "webtoons.create"
    WEBTOONS_EDIT = "webtoons.edit"
    WEBTOONS_DELETE = "webtoons.delete"
    WEBTOONS_PUBLISH = "webtoons.publish"

    # Authors
    AUTHORS_VIEW = "authors.view"
    AUTHORS_CREATE = "authors.create"
    AUTHORS_EDIT = "authors.edit"
    AUTHORS_DELETE = "authors.delete"

    # Genres
    GENRES_VIEW = "genres.view"
    GENRES_CREATE = "genres.create"
    GENRES_EDIT = "genres.edit"
    GENRES_DELETE = "genres.delete"

    # Users
    USERS_VIEW = "users.view"
    USERS_CREATE = "users.create"
    USERS_EDIT = "users.edit"
    USERS_DELETE = "users.delete"
    USERS_SUSPEND = "users.suspend"
    USERS_MANAGE_ROLES = "users.manage_roles"

    # Roles & Permissions
    ROLES_VIEW = "roles.view"
    ROLES_CREATE = "roles.create"
    ROLES_EDIT = "roles.edit"
    ROLES_DELETE = "roles.delete"
    PERMISSIONS_MANAGE = "permissions.manage"

    # Analytics
    ANALYTICS_VIEW = "analytics.view"
    ANALYTICS_EXPORT = "analytics.export"

    # System
    SYSTEM_SETTINGS = "system.settings"
    SYSTEM_LOGS = "system.logs"

    @property
    def category(self) -> str:
        return category_of(self.value)

    @property
    def description(self) -> str:
        # WEBTOONS_VIEW -> 'webtoons view'
        return self.name.replace("_", " ").lower()


PermissionLike = Union[Permission, str]

CATEGORIES: Tuple[str, ...] = (
    "webtoons", "authors", "genres", "users", "roles", "permissions", "analytics", "system",
)


def permission_name(permission: PermissionLike) -> str:
    """
    Permission 멤버 또는 문자열을 저장소에 기록되는 문자열 이름으로 변환합니다.

    Enum 멤버의 해시는 값이 아닌 멤버 이름 기준이므로, 문자열 집합과 비교하기 전에
    반드시 이 함수로 정규화해야 합니다.
    """
    if isinstance(permission, Permission):
        return permission.value
    return permission


def permission_names(permissions: Union[PermissionLike, Iterable[PermissionLike]]) -> List[str]:
    """단일 권한 또는 권한 목록을 문자열 이름의 리스트로 변환합니다. 문자열 하나는 권한 하나로 취급합니다."""
    if isinstance(permissions, str):
        return [permission_name(permissions)]
    return [permission_name(p) for p in permissions]


def is_known_permission(name: PermissionLike) -> bool:
    return permission_name(name) in _BY_VALUE


def permissions_by_category() -> Dict[str, List[Permission]]:
    """카테고리별 권한 목록을 카탈로그 선언 순서대로 반환합니다."""
    grouped: Dict[str, List[Permission]] = OrderedDict((c, []) for c in CATEGORIES)
    for permission in Permission:
        grouped.setdefault(permission.category, []).append(permission)
    return grouped


@dataclass(frozen=True)
class DefaultRole:
    name: str
    description: str
    permissions: Tuple[PermissionLike, ...]


ADMIN_ROLE_NAME = "admin"

DEFAULT_ROLES: Tuple[DefaultRole, ...] = (
    DefaultRole(
        name=ADMIN_ROLE_NAME,
        description="Full system access",
        permissions=tuple(Permission),
    ),
    DefaultRole(
        name="moderator",
        description="Can manage content and users",
        permissions=(
            Permission.WEBTOONS_VIEW,
            Permission.WEBTOONS_EDIT,
            Permission.WEBTOONS_DELETE,
            Permission.AUTHORS_VIEW,
            Permission.AUTHORS_EDIT,
            Permission.GENRES_VIEW,
            Permission.GENRES_EDIT,
            Permission.USERS_VIEW,
            Permission.USERS_SUSPEND,
            Permission.ANALYTICS_VIEW,
        ),
    ),
    DefaultRole(
        name="author",
        description="Can create and manage own webtoons",
        permissions=(
            Permission.WEBTOONS_VIEW,
            Permission.WEBTOONS_CREATE,
            Permission.WEBTOONS_EDIT,
            Permission.AUTHORS_VIEW,
            Permission.GENRES_VIEW,
        ),
    ),
    DefaultRole(
        name="reader",
        description="Basic reading access",
        permissions=(
            Permission.WEBTOONS_VIEW,
            Permission.AUTHORS_VIEW,
            Permission.GENRES_VIEW,
        ),
    ),
)


def unknown_permissions(roles: Iterable[DefaultRole]) -> Dict[str, List[str]]:
    """카탈로그에 없는 권한을 참조하는 역할과 그 권한 이름들을 반환합니다."""
    unknown: Dict[str, List[str]] = {}
    for role in roles:
        missing = [permission_name(p) for p in role.permissions if not is_known_permission(p)]
        if missing:
            unknown[role.name] = missing
    return unknown


_BY_VALUE = {p.value: p for p in Permission}
