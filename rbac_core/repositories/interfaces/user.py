from abc import ABC, abstractmethod
from typing import Optional
from rbac_core.database import models

class IUserRepository(ABC):
    @abstractmethod
    def create(self, user_model: models.User) -> models.User:
        """새로운 사용자를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[models.User]:
        """고유 ID로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def find_with_role_and_permissions(self, user_id: str) -> Optional[models.User]:
        """
        사용자, 사용자의 역할, 그 역할의 모든 권한을 한 번의 쿼리로 조회합니다.

        역할만 있고 권한이 빠진 부분적인 결과는 반환하지 않습니다.

        Args:
            user_id: 조회할 사용자의 ID.

        Returns:
            역할과 권한이 모두 로드된 User 객체. 사용자가 없으면 None.
        """
        pass

    @abstractmethod
    def find_role_name(self, user_id: str) -> Optional[str]:
        """사용자에게 할당된 역할의 이름만 조회합니다. 역할이 없으면 None."""
        pass

    @abstractmethod
    def set_role(self, user: models.User, role: Optional[models.Role]):
        """사용자의 역할을 지정합니다. None이면 역할을 해제합니다."""
        pass
