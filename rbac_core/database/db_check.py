import sys
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from rbac_core.repositories.sqlalchemy import SqlalchemyPermissionRepository, SqlalchemyRoleRepository
from .database import SessionLocal

def describe_rbac(db) -> List[str]:
    """권한, 역할별 권한, 역할-권한 연결 수를 사람이 읽을 수 있는 줄 목록으로 만듭니다."""
    permission_repo = SqlalchemyPermissionRepository(db)
    role_repo = SqlalchemyRoleRepository(db)

    permissions = permission_repo.list_all()
    lines = [f"Permissions: {len(permissions)}"]
    lines += [f"- {p.name}" for p in permissions]

    roles = role_repo.list_all()
    lines += ["", f"Roles: {len(roles)}"]
    for role in roles:
        lines.append(f"- {role.name} (id: {role.id})")
        lines.append("  Permissions:")
        lines += [f"    - {name}" for name in role.permission_names]

    lines += ["", f"Total role-permission links: {permission_repo.count_links()}"]
    return lines

def main() -> int:
    db = SessionLocal()
    try:
        for line in describe_rbac(db):
            print(line)
    except SQLAlchemyError as e:
        print(f"Error checking RBAC: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()
    return 0

if __name__ == '__main__':
    sys.exit(main())
