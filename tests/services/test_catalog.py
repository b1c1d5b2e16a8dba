# tests/services/test_catalog.py
from rbac_core.services.catalog import (
    ADMIN_ROLE_NAME, CATEGORIES, DEFAULT_ROLES, DefaultRole, Permission,
    category_of, is_known_permission, permission_name, permission_names, permissions_by_category, unknown_permissions,
)

def _role(name):
    return next(role for role in DEFAULT_ROLES if role.name == name)

class TestPermissionCatalog:
    def test_category_is_derived_from_name(self):
        """카테고리는 이름의 첫 번째 점 앞부분입니다."""
        assert category_of("webtoons.create") == "webtoons"
        assert category_of("users.manage_roles") == "users"
        assert Permission.PERMISSIONS_MANAGE.category == "permissions"

    def test_every_permission_belongs_to_a_known_category(self):
        for permission in Permission:
            assert permission.category in CATEGORIES

    def test_permission_names_are_unique(self):
        values = [p.value for p in Permission]
        assert len(values) == len(set(values)) == 28

    def test_description_is_derived_from_member_name(self):
        assert Permission.WEBTOONS_VIEW.description == "webtoons view"
        assert Permission.USERS_MANAGE_ROLES.description == "users manage roles"

    def test_permission_name_normalizes_enum_members(self):
        """Enum 멤버와 문자열 모두 저장소 문자열로 변환되어야 합니다."""
        assert permission_name(Permission.GENRES_EDIT) == "genres.edit"
        assert permission_name("genres.edit") == "genres.edit"
        assert permission_name(Permission.GENRES_EDIT) in {"genres.edit"}

    def test_permission_names_wraps_a_single_name(self):
        assert permission_names("genres.edit") == ["genres.edit"]
        assert permission_names(Permission.GENRES_EDIT) == ["genres.edit"]
        assert permission_names([Permission.GENRES_EDIT, "genres.view"]) == ["genres.edit", "genres.view"]
        assert permission_names([]) == []

    def test_is_known_permission(self):
        assert is_known_permission("analytics.export")
        assert is_known_permission(Permission.SYSTEM_LOGS)
        assert not is_known_permission("webtoons.fly")

    def test_permissions_by_category_groups_every_permission(self):
        grouped = permissions_by_category()

        assert list(grouped) == list(CATEGORIES)
        assert grouped["analytics"] == [Permission.ANALYTICS_VIEW, Permission.ANALYTICS_EXPORT]
        assert sum(len(v) for v in grouped.values()) == len(Permission)

class TestDefaultRoles:
    def test_four_system_roles(self):
        assert [role.name for role in DEFAULT_ROLES] == [ADMIN_ROLE_NAME, "moderator", "author", "reader"]

    def test_admin_holds_every_permission(self):
        assert set(_role("admin").permissions) == set(Permission)

    def test_reader_permissions(self):
        assert [permission_name(p) for p in _role("reader").permissions] == [
            "webtoons.view", "authors.view", "genres.view",
        ]

    def test_moderator_can_suspend_but_not_delete_users(self):
        permissions = _role("moderator").permissions
        assert Permission.USERS_SUSPEND in permissions
        assert Permission.USERS_DELETE not in permissions

    def test_default_roles_reference_only_catalog_permissions(self):
        assert unknown_permissions(DEFAULT_ROLES) == {}

    def test_unknown_permissions_are_reported_per_role(self):
        broken = DefaultRole(name="broken", description="", permissions=(Permission.WEBTOONS_VIEW, "webtoons.fly"))
        assert unknown_permissions([broken]) == {"broken": ["webtoons.fly"]}
