"""依赖注入模块：封装 FastAPI 中复用度高的依赖函数。"""

from collections.abc import Generator

from sqlalchemy.orm import Session

from app.packages.system.core.config import get_settings
from app.packages.system.db import session as db_session
from app.packages.system.services.organization_service import OrganizationService


def get_db() -> Generator[Session, None, None]:
    """生成一个数据库会话，并在请求结束后自动关闭（成功或异常路径均关闭）。"""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_organization_service() -> OrganizationService:
    """按当前配置构造组织树服务。"""
    return OrganizationService(get_settings().tree_config)
