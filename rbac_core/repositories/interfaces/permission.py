from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from rbac_core.database import models

class IPermissionRepository(ABC):
    @abstractmethod
    def upsert(self, name: str, category: str, description: Optional[str] = None) -> models.Permission:
        """
        권한이 없으면 생성하고, 있으면 설명(description)만 갱신합니다.

        이름과 카테고리는 한 번 생성된 뒤로 절대 바뀌지 않습니다.

        Raises:
            ValueError: category가 이름에서 파생된 카테고리와 다를 때.
        """
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Permission]:
        """이름으로 특정 권한을 조회합니다."""
        pass

    @abstractmethod
    def find_by_names(self, names: Iterable[str]) -> List[models.Permission]:
        """여러 이름에 해당하는 권한들을 한 번에 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Permission]:
        """모든 권한의 목록을 이름 순으로 조회합니다."""
        pass

    @abstractmethod
    def count_links(self) -> int:
        """역할-권한 연결(RolePermission)의 전체 개수를 조회합니다."""
        pass
