from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from rbac_core.database import models

class IRoleRepository(ABC):
    @abstractmethod
    def upsert(self, name: str, description: Optional[str] = None, is_system: bool = False) -> models.Role:
        """
        역할이 없으면 생성하고, 있으면 설명(description)만 갱신합니다.
        이미 존재하는 역할의 is_system 값은 바꾸지 않습니다.
        """
        pass

    @abstractmethod
    def create(self, role_model: models.Role) -> models.Role:
        """새로운 역할을 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def update(self, role: models.Role) -> models.Role:
        """변경된 역할 정보를 저장합니다."""
        pass

    @abstractmethod
    def find_by_id(self, role_id: int) -> Optional[models.Role]:
        """고유 ID로 특정 역할을 권한 목록과 함께 조회합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Role]:
        """이름으로 특정 역할을 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Role]:
        """모든 역할의 목록을 권한 목록과 함께 이름 순으로 조회합니다."""
        pass

    @abstractmethod
    def delete(self, role: models.Role) -> bool:
        """특정 역할과 그 역할의 권한 연결을 삭제합니다."""
        pass

    @abstractmethod
    def count_users(self, role_id: int) -> int:
        """특정 역할이 할당된 사용자의 수를 조회합니다."""
        pass

    @abstractmethod
    def count_users_by_role(self) -> Dict[int, int]:
        """역할 ID별 할당된 사용자 수를 한 번의 쿼리로 조회합니다. 사용자가 없는 역할은 포함되지 않습니다."""
        pass

    @abstractmethod
    def assign_permission(self, role: models.Role, permission: models.Permission):
        """역할에 권한을 연결합니다. 이미 연결되어 있으면 무시합니다."""
        pass

    @abstractmethod
    def replace_permissions(self, role: models.Role, permissions: List[models.Permission]):
        """역할의 권한 연결 전체를 주어진 목록으로 교체합니다."""
        pass
