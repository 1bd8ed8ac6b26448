"""CRUD 基类：为各实体提供通用的数据访问方法。"""

from typing import Generic, List, Type, TypeVar

from sqlalchemy import inspect
from sqlalchemy.orm import Query, Session

from app.packages.system.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """封装常见的只读查询，减少重复代码。"""

    def __init__(self, model: Type[ModelType]):
        self.model = model

    @property
    def primary_key(self):
        return inspect(self.model).primary_key[0]

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[ModelType]:
        query = self.query(db).order_by(self.primary_key.asc())
        return query.offset(skip).limit(limit).all()

    def query(self, db: Session) -> Query:
        return db.query(self.model)
