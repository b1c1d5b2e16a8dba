from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from rbac_core.database import models
from rbac_core.repositories.interfaces import IRoleRepository

class SqlalchemyRoleRepository(IRoleRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def upsert(self, name: str, description: Optional[str] = None, is_system: bool = False) -> models.Role:
        role = self.find_by_name(name)
        if role is None:
            try:
                return self.create(models.Role(name=name, description=description, is_system=is_system))
            except IntegrityError:
                self.db.rollback()
                role = self.find_by_name(name)
                if role is None:
                    raise

        if role.description != description:
            role.description = description
            self.db.commit()
            self.db.refresh(role)
        return role

    def create(self, role_model: models.Role) -> models.Role:
        self.db.add(role_model)
        self.db.commit()
        self.db.refresh(role_model)
        return role_model

    def update(self, role: models.Role) -> models.Role:
        self.db.commit()
        self.db.refresh(role)
        return role

    def find_by_id(self, role_id: int) -> Optional[models.Role]:
        return self.db.query(models.Role).options(
            selectinload(models.Role.role_permissions).joinedload(models.RolePermission.permission)
        ).filter(models.Role.id == role_id).first()

    def find_by_name(self, name: str) -> Optional[models.Role]:
        return self.db.query(models.Role).filter(models.Role.name == name).first()

    def list_all(self) -> List[models.Role]:
        return self.db.query(models.Role).options(
            selectinload(models.Role.role_permissions).joinedload(models.RolePermission.permission)
        ).order_by(models.Role.name.asc()).all()

    def delete(self, role: models.Role) -> bool:
        if role:
            self.db.delete(role)
            self.db.commit()
            return True
        return False

    def count_users(self, role_id: int) -> int:
        return self.db.query(models.User).filter(models.User.role_id == role_id).count()

    def count_users_by_role(self) -> Dict[int, int]:
        rows = self.db.query(models.User.role_id, func.count(models.User.id)).filter(
            models.User.role_id.isnot(None)
        ).group_by(models.User.role_id).all()
        return {role_id: count for role_id, count in rows}

    def assign_permission(self, role: models.Role, permission: models.Permission):
        role_id, permission_id = role.id, permission.id
        try:
            self.db.merge(models.RolePermission(role_id=role_id, permission_id=permission_id))
            self.db.commit()
        except IntegrityError:
            # 다른 프로세스가 같은 연결을 먼저 넣은 경우, 이미 존재하면 무시합니다.
            self.db.rollback()
            if self.db.get(models.RolePermission, (role_id, permission_id)) is None:
                raise

    def replace_permissions(self, role: models.Role, permissions: List[models.Permission]):
        wanted = {p.id: p for p in permissions}
        for link in list(role.role_permissions):
            if link.permission_id not in wanted:
                role.role_permissions.remove(link)

        existing = {link.permission_id for link in role.role_permissions}
        for permission_id, permission in wanted.items():
            if permission_id not in existing:
                role.role_permissions.append(models.RolePermission(permission=permission))
        self.db.commit()
