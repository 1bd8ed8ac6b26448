"""组织相关业务逻辑：检索有效子树并输出树形结构。"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.system.core.config import OrganizationTreeConfig
from app.packages.system.core.exceptions import AssemblyError, RetrievalError
from app.packages.system.crud.organizations import CRUDOrganization
from app.packages.system.services.organization_tree import OrganizationNode, build_tree, index_records

logger = logging.getLogger(__name__)


class OrganizationService:
    """封装组织子树的检索与组装，每次调用相互独立。"""

    def __init__(
        self,
        config: Optional[OrganizationTreeConfig] = None,
        crud: Optional[CRUDOrganization] = None,
    ) -> None:
        self.config = config or OrganizationTreeConfig()
        self.crud = crud or CRUDOrganization(self.config)

    def get_subtree(self, db: Session, root_id: str) -> OrganizationNode:
        """返回以 `root_id` 为根的有效组织树。"""
        logger.info("org_tree.start root_id=%s", root_id)
        try:
            records = self.crud.fetch_subtree(db, root_id)
        except RetrievalError as exc:
            logger.error("org_tree.retrieval_failed root_id=%s error=%s", root_id, type(exc).__name__, exc_info=True)
            raise

        index = index_records(records)
        if index.duplicates:
            # 查找表保留最后一条记录
            logger.warning(
                "org_tree.duplicate_ids root_id=%s ids=%s", root_id, ",".join(index.duplicates)
            )

        try:
            tree = build_tree(index, root_id, max_depth=self.config.max_depth)
        except AssemblyError as exc:
            logger.warning(
                "org_tree.assembly_failed root_id=%s error=%s org_id=%s",
                root_id,
                type(exc).__name__,
                exc.org_id,
            )
            raise

        node_count = sum(1 for _ in tree.iter_ids())
        if node_count < len(index.lookup):
            logger.debug(
                "org_tree.orphans_skipped root_id=%s count=%s", root_id, len(index.lookup) - node_count
            )
        logger.info("org_tree.done root_id=%s records=%s nodes=%s", root_id, len(records), node_count)
        return tree

    def render_subtree(self, db: Session, root_id: str) -> str:
        """返回子树的紧凑 JSON 文本。"""
        return self.get_subtree(db, root_id).render()

    def list_active(self, db: Session, *, skip: int = 0, limit: int = 100) -> list[dict[str, Any]]:
        """按 `org_id` 升序返回有效组织的扁平列表。"""
        organizations = self.crud.get_multi(db, skip=skip, limit=limit)
        return [
            {"org_id": org.org_id, "org_name": org.org_name, "org_parent_id": org.org_parent_id}
            for org in organizations
        ]
