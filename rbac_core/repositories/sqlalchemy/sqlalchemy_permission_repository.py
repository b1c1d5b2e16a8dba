from typing import Iterable, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from rbac_core.database import models
from rbac_core.repositories.interfaces import IPermissionRepository
from rbac_core.services.catalog import category_of

class SqlalchemyPermissionRepository(IPermissionRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def upsert(self, name: str, category: str, description: Optional[str] = None) -> models.Permission:
        if category != category_of(name):
            raise ValueError(f"Category '{category}' does not match permission name '{name}'.")

        permission = self.find_by_name(name)
        if permission is None:
            try:
                permission = models.Permission(name=name, description=description)
                self.db.add(permission)
                self.db.commit()
                self.db.refresh(permission)
                return permission
            except IntegrityError:
                # 다른 프로세스가 같은 이름을 먼저 생성한 경우
                self.db.rollback()
                permission = self.find_by_name(name)
                if permission is None:
                    raise

        if permission.description != description:
            permission.description = description
            self.db.commit()
            self.db.refresh(permission)
        return permission

    def find_by_name(self, name: str) -> Optional[models.Permission]:
        return self.db.query(models.Permission).filter(models.Permission.name == name).first()

    def find_by_names(self, names: Iterable[str]) -> List[models.Permission]:
        names = list(names)
        if not names:
            return []
        return self.db.query(models.Permission).filter(models.Permission.name.in_(names)).all()

    def list_all(self) -> List[models.Permission]:
        return self.db.query(models.Permission).order_by(models.Permission.name.asc()).all()

    def count_links(self) -> int:
        return self.db.query(models.RolePermission).count()
