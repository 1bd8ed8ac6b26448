"""测试夹具：为 pytest 提供数据库、组织数据与客户端的共享配置。"""

import os
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.main import app
from app.packages.system.core.dependencies import get_db
from app.packages.system.db import session as db_session
from app.packages.system.db.init_db import init_db
from app.packages.system.models.organization import Organization

TEST_DB_PATH = os.path.join(os.path.dirname(__file__), "test.db")
TEST_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database() -> Generator[None, None, None]:
    """创建隔离的 SQLite 测试数据库，并在会话结束后清理。"""
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db_session.engine = engine
    db_session.SessionLocal = TestingSessionLocal

    init_db()
    yield

    engine.dispose()
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture()
def db_session_fixture() -> Generator[Session, None, None]:
    """提供给测试用例使用的数据库会话。"""
    session = db_session.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def org_rows(db_session_fixture: Session) -> Generator[Callable[..., None], None, None]:
    """清空组织表并写入给定的行；用例结束后再次清空。"""

    def _seed(*rows) -> None:
        db_session_fixture.query(Organization).delete()
        for row in rows:
            org_id, org_name, parent_id, *rest = row
            db_session_fixture.add(
                Organization(
                    org_id=org_id,
                    org_name=org_name,
                    org_parent_id=parent_id,
                    org_status=rest[0] if rest else "1",
                )
            )
        db_session_fixture.commit()

    yield _seed

    db_session_fixture.rollback()
    db_session_fixture.query(Organization).delete()
    db_session_fixture.commit()


@pytest.fixture()
def client(db_session_fixture):
    """构建 FastAPI TestClient，并注入测试专用的数据库依赖。"""
    def override_get_db() -> Generator[Session, None, None]:
        session = db_session.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
