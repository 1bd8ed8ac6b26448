"""组织模型：邻接表形式存储的组织机构，以及检索结果的扁平记录。"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.system.core.constants import DEFAULT_ACTIVE_STATUS
from app.packages.system.models.base import Base, TimestampMixin


class Organization(TimestampMixin, Base):
    """组织实体：通过 `org_parent_id` 形成森林，`org_status` 标记是否有效。

    - `org_id` 为不透明字符串主键；
    - `org_name` 不要求唯一；
    - 根组织的 `org_parent_id` 为空。
    """

    __tablename__ = "organization"

    org_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    org_name: Mapped[str] = mapped_column(String(255), nullable=False)
    org_parent_id: Mapped[Optional[str]] = mapped_column(
        String(64), ForeignKey("organization.org_id", ondelete="SET NULL"), nullable=True, index=True
    )
    org_status: Mapped[str] = mapped_column(
        String(1), nullable=False, default=DEFAULT_ACTIVE_STATUS, server_default=DEFAULT_ACTIVE_STATUS, index=True
    )


@dataclass(frozen=True)
class OrganizationRecord:
    """检索结果中的一行：(org_id, org_name, org_parent_id)。"""

    id: str
    name: str
    parent_id: Optional[str] = None
