"""组织 CRUD：负责组织子树的递归检索与结果行解码。"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, aliased

from app.packages.system.core.config import OrganizationTreeConfig
from app.packages.system.core.exceptions import ConnectionFailure, DecodeFailure, QueryFailure
from app.packages.system.crud.base import CRUDBase
from app.packages.system.models.organization import Organization, OrganizationRecord


class CRUDOrganization(CRUDBase[Organization]):
    """提供组织实体的查询方法，仅包含状态为“有效”的组织。"""

    def __init__(self, config: Optional[OrganizationTreeConfig] = None) -> None:
        super().__init__(Organization)
        self.config = config or OrganizationTreeConfig()

    def query(self, db: Session) -> Query:
        return super().query(db).filter(Organization.org_status == self.config.active_status)

    def subtree_statement(self, root_id: str) -> Select:
        """构造递归查询：根组织及其全部有效后代。

        锚点与递归步都要求 `org_status` 为有效值；递归步使用 UNION 去重，
        数据中即便存在环也会在数据库侧收敛。
        """
        active = self.config.active_status
        org_tree = (
            select(Organization.org_id, Organization.org_name, Organization.org_parent_id)
            .where(Organization.org_id == root_id, Organization.org_status == active)
            .cte("org_tree", recursive=True)
        )
        child = aliased(Organization, name="o")
        org_tree = org_tree.union(
            select(child.org_id, child.org_name, child.org_parent_id)
            .join(org_tree, child.org_parent_id == org_tree.c.org_id)
            .where(child.org_status == active)
        )
        return select(org_tree.c.org_id, org_tree.c.org_name, org_tree.c.org_parent_id)

    def fetch_subtree(self, db: Session, root_id: str) -> list[OrganizationRecord]:
        """一次往返取回以 `root_id` 为根的有效组织子树（扁平、无序）。

        根组织不存在或未启用时返回空列表；连接、查询、解码失败分别抛出
        ``ConnectionFailure``、``QueryFailure``、``DecodeFailure``，不做重试。
        """
        if not root_id:
            raise ValueError("root_id must be a non-empty string")

        try:
            db.connection()
        except SQLAlchemyError as exc:
            raise ConnectionFailure(org_id=root_id) from exc

        try:
            rows = db.execute(self.subtree_statement(root_id)).all()
        except SQLAlchemyError as exc:
            raise QueryFailure(org_id=root_id) from exc

        return [self.decode_row(row) for row in rows]

    @staticmethod
    def decode_row(row: Sequence[Any]) -> OrganizationRecord:
        """将 (org_id, org_name, org_parent_id) 行转换为扁平记录。"""
        if len(row) != 3:
            raise DecodeFailure(f"组织数据列数异常：期望 3 列，实际 {len(row)} 列")
        org_id, org_name, parent_id = row
        if org_id is None or not str(org_id).strip():
            raise DecodeFailure("组织数据缺少 org_id")
        if org_name is None:
            raise DecodeFailure(f"组织 {org_id} 缺少 org_name", org_id=str(org_id))
        return OrganizationRecord(
            id=str(org_id),
            name=str(org_name),
            parent_id=None if parent_id is None else str(parent_id),
        )
