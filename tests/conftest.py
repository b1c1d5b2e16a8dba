# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rbac_core.database.database import Base
from rbac_core.database import models

# ===================================================================
#  인메모리 SQLite 저장소 Fixture
# ===================================================================

@pytest.fixture
def engine():
    """테스트마다 새로운 인메모리 SQLite 엔진을 만들고 테이블을 생성합니다."""
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()

# ===================================================================
#  메모리 상의 모델 객체 생성 도우미
# ===================================================================

def make_user(user_id="user-1", role_name=None, permissions=()):
    """DB 없이 역할과 권한이 연결된 User 모델을 만듭니다. role_name이 None이면 역할 없음."""
    user = models.User(id=user_id, username=f"name-{user_id}")
    if role_name is not None:
        user.role = models.Role(
            name=role_name,
            role_permissions=[models.RolePermission(permission=models.Permission(name=p)) for p in permissions],
        )
    return user

@pytest.fixture
def user_factory():
    return make_user
