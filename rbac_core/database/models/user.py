import uuid

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base

class User(Base):
    """
    인증된 주체(principal)를 나타냅니다. id는 외부 인증 시스템이 발급한 불투명한 문자열입니다.
    사용자는 최대 하나의 역할(Role)만 가지며, 역할이 없으면 아무 권한도 없습니다.
    """
    __tablename__ = "users"
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String, unique=True, nullable=False, index=True)

    role_id = Column(Integer, ForeignKey("roles.id", ondelete="SET NULL"), nullable=True)
    role = relationship("Role", back_populates="users")
