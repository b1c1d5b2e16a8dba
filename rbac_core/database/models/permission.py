from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship, validates
from ..database import Base
from rbac_core.services.catalog import category_of

class Permission(Base):
    """
    사용자가 수행할 수 있는 하나의 원자적 기능을 나타냅니다.
    (예: 'webtoons.create', 'users.suspend').
    이름의 첫 번째 점(.) 앞부분이 카테고리가 되며, 카테고리는 항상 이름에서 파생됩니다.
    """
    __tablename__ = "permissions"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    category = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)

    role_permissions = relationship("RolePermission", back_populates="permission", cascade="all, delete-orphan")

    @validates("name")
    def _sync_category(self, key, name):
        self.category = category_of(name)
        return name
