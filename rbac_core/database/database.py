from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from rbac_core.config import DATABASE_URL


def build_engine(url: str = DATABASE_URL):
    """
    SQLAlchemy 엔진을 생성합니다.
    connect_args는 SQLite에서만 필요합니다. (thread-safe 설정)
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = build_engine()

# autocommit=False, autoflush=False로 설정하여, 명시적으로 commit을 호출해야 DB에 반영됩니다.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()
