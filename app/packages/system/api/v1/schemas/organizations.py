"""组织相关的响应模型定义。"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from app.packages.system.api.v1.schemas.common import ResponseEnvelope


class OrganizationItem(BaseModel):
    """有效组织列表中的单项记录。"""

    org_id: str
    org_name: str
    org_parent_id: Optional[str] = None


OrganizationListResponse = ResponseEnvelope[list[OrganizationItem]]


class OrganizationTreeNode(BaseModel):
    """组织树节点；叶子节点不输出 `org_childs`。"""

    org_id: str
    org_name: str
    org_childs: Optional[list[OrganizationTreeNode]] = None


OrganizationTreeResponse = ResponseEnvelope[OrganizationTreeNode]
