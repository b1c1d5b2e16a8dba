from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship
from ..database import Base

class Role(Base):
    """
    사용자에게 부여되는 권한(Permission)의 묶음을 정의합니다.
    (예: 'admin', 'moderator', 'author', 'reader').
    is_system이 True인 역할은 기본 역할로, 이름 변경과 삭제가 허용되지 않습니다.
    """
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(String, nullable=True)
    is_system = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())

    role_permissions = relationship("RolePermission", back_populates="role", cascade="all, delete-orphan")
    users = relationship("User", back_populates="role")

    @property
    def permission_names(self):
        return sorted(rp.permission.name for rp in self.role_permissions)
