from typing import Optional
from sqlalchemy.orm import Session, joinedload
from rbac_core.database import models
from rbac_core.repositories.interfaces import IUserRepository

class SqlalchemyUserRepository(IUserRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, user_model: models.User) -> models.User:
        self.db.add(user_model)
        self.db.commit()
        self.db.refresh(user_model)
        return user_model

    def find_by_id(self, user_id: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.id == user_id).first()

    def find_with_role_and_permissions(self, user_id: str) -> Optional[models.User]:
        return self.db.query(models.User).options(
            joinedload(models.User.role)
            .joinedload(models.Role.role_permissions)
            .joinedload(models.RolePermission.permission)
        ).filter(models.User.id == user_id).first()

    def find_role_name(self, user_id: str) -> Optional[str]:
        row = self.db.query(models.Role.name).join(
            models.User, models.User.role_id == models.Role.id
        ).filter(models.User.id == user_id).first()
        return row[0] if row else None

    def set_role(self, user: models.User, role: Optional[models.Role]):
        user.role = role
        self.db.commit()
