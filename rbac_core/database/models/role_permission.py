from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class RolePermission(Base):
    """
    역할(Role)과 권한(Permission) 사이의 다대다(many-to-many) 관계를
    연결하는 연관 테이블(Association Table) 모델입니다.
    (role_id, permission_id) 복합 기본 키로 같은 권한이 한 역할에 두 번 연결되지 않습니다.
    """
    __tablename__ = "role_permissions"
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True)
    permission_id = Column(Integer, ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True)

    role = relationship("Role", back_populates="role_permissions")
    permission = relationship("Permission", back_populates="role_permissions")
