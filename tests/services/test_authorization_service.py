# tests/services/test_authorization_service.py
import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from rbac_core.services.authorization_service import AuthorizationService
from rbac_core.services.catalog import Permission
from rbac_core.services.exceptions import AuthorizationStoreError
from rbac_core.repositories.interfaces import IUserRepository

READER_PERMISSIONS = ("webtoons.view", "authors.view", "genres.view")

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_user_repo() -> MagicMock:
    """IUserRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IUserRepository)

@pytest.fixture
def authorization_service(mock_user_repo: MagicMock) -> AuthorizationService:
    return AuthorizationService(mock_user_repo)

@pytest.fixture
def reader(mock_user_repo, user_factory):
    """'reader' 역할을 가진 사용자가 조회되도록 설정합니다."""
    user = user_factory("reader-1", "reader", READER_PERMISSIONS)
    mock_user_repo.find_with_role_and_permissions.return_value = user
    mock_user_repo.find_role_name.return_value = "reader"
    return user

# ===================================================================
#  권한 판단(Decision Engine) 테스트
# ===================================================================
class TestHasPermission:
    def test_reader_scenario(self, authorization_service: AuthorizationService, reader):
        """reader 역할 사용자는 조회 권한만 가집니다."""
        # === Act & Assert ===
        assert authorization_service.has_permission(reader.id, "webtoons.view") is True
        assert authorization_service.has_permission(reader.id, "webtoons.create") is False
        assert authorization_service.has_any_permission(reader.id, ["webtoons.create", "webtoons.view"]) is True

    def test_accepts_catalog_enum_members(self, authorization_service, reader):
        assert authorization_service.has_permission(reader.id, Permission.WEBTOONS_VIEW) is True
        assert authorization_service.has_permission(reader.id, Permission.WEBTOONS_CREATE) is False

    def test_membership_is_exact_string_match(self, authorization_service, reader):
        assert authorization_service.has_permission(reader.id, "webtoons") is False
        assert authorization_service.has_permission(reader.id, "Webtoons.View") is False

    @pytest.mark.parametrize("user_kind", ["missing", "no_role", "empty_role"])
    def test_fail_closed(self, authorization_service, mock_user_repo, user_factory, user_kind):
        """사용자가 없거나, 역할이 없거나, 역할에 권한이 없으면 항상 거부합니다."""
        # === Arrange ===
        users = {
            "missing": None,
            "no_role": user_factory("u-1"),
            "empty_role": user_factory("u-1", "custom", ()),
        }
        mock_user_repo.find_with_role_and_permissions.return_value = users[user_kind]

        # === Act & Assert ===
        for permission in Permission:
            assert authorization_service.has_permission("u-1", permission) is False
        assert authorization_service.get_user_permissions("u-1") == set()

    def test_store_failure_is_not_a_denial(self, authorization_service, mock_user_repo):
        """저장소 오류는 False가 아니라 AuthorizationStoreError로 전달되어야 합니다."""
        # === Arrange ===
        mock_user_repo.find_with_role_and_permissions.side_effect = OperationalError("SELECT", {}, Exception("db down"))

        # === Act & Assert ===
        with pytest.raises(AuthorizationStoreError) as exc_info:
            authorization_service.has_permission("u-1", "webtoons.view")
        assert isinstance(exc_info.value.__cause__, OperationalError)

class TestAnyAndAll:
    @pytest.mark.parametrize("pair", [
        ("webtoons.view", "authors.view"),
        ("webtoons.view", "webtoons.create"),
        ("webtoons.create", "webtoons.view"),
        ("webtoons.create", "users.delete"),
    ])
    def test_any_all_duality(self, authorization_service, reader, pair):
        """any/all 결과는 개별 has_permission 결과의 or/and와 같아야 합니다."""
        first, second = pair
        single = [authorization_service.has_permission(reader.id, p) for p in pair]

        assert authorization_service.has_all_permissions(reader.id, [first, second]) == (single[0] and single[1])
        assert authorization_service.has_any_permission(reader.id, [first, second]) == (single[0] or single[1])

    def test_single_store_read_per_check(self, authorization_service, mock_user_repo, reader):
        authorization_service.has_all_permissions(reader.id, list(READER_PERMISSIONS))
        mock_user_repo.find_with_role_and_permissions.assert_called_once_with(reader.id)

    def test_empty_lists(self, authorization_service, mock_user_repo, reader):
        assert authorization_service.has_any_permission(reader.id, []) is False
        assert authorization_service.has_all_permissions(reader.id, []) is True
        mock_user_repo.find_with_role_and_permissions.assert_not_called()

    def test_single_name_is_one_permission_not_characters(self, authorization_service, reader):
        assert authorization_service.has_any_permission(reader.id, "webtoons.view") is True
        assert authorization_service.has_all_permissions(reader.id, Permission.WEBTOONS_VIEW) is True
        assert authorization_service.has_all_permissions(reader.id, "webtoons.create") is False

class TestRoles:
    def test_get_user_permissions(self, authorization_service, reader):
        assert authorization_service.get_user_permissions(reader.id) == set(READER_PERMISSIONS)

    def test_has_role(self, authorization_service, mock_user_repo, reader):
        assert authorization_service.has_role(reader.id, "reader") is True
        assert authorization_service.has_role(reader.id, "author") is False
        mock_user_repo.find_role_name.assert_called_with(reader.id)

    def test_user_without_role(self, authorization_service, mock_user_repo, user_factory):
        """역할이 없는 사용자는 권한 목록이 비어 있고 어떤 역할도 가지지 않습니다."""
        mock_user_repo.find_with_role_and_permissions.return_value = user_factory("u-2")
        mock_user_repo.find_role_name.return_value = None

        assert authorization_service.get_user_permissions("u-2") == set()
        assert authorization_service.has_role("u-2", "reader") is False

    @pytest.mark.parametrize("role_name, expected", [
        ("admin", True), ("Admin", False), ("ADMIN", False), (" admin", False), (None, False),
    ])
    def test_is_admin_is_exact_case_sensitive_match(self, authorization_service, mock_user_repo, role_name, expected):
        mock_user_repo.find_role_name.return_value = role_name
        assert authorization_service.is_admin("u-1") is expected

    def test_is_admin_does_not_consult_permissions(self, authorization_service, mock_user_repo):
        mock_user_repo.find_role_name.return_value = "admin"

        authorization_service.is_admin("u-1")

        mock_user_repo.find_with_role_and_permissions.assert_not_called()

    def test_role_lookup_failure_propagates(self, authorization_service, mock_user_repo):
        mock_user_repo.find_role_name.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        with pytest.raises(AuthorizationStoreError):
            authorization_service.has_role("u-1", "admin")
