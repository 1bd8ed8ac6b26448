"""组织树组装：把扁平的父子记录还原为嵌套树，并输出确定性的 JSON 文档。

组装过程不持有指针：先建立 `org_id -> 记录` 与 `父 ID -> 子 ID 列表` 两个索引，
再从根节点按值展开。展开时维护“当前路径”集合以识别环，并限制最大深度。
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

from app.packages.system.core.constants import ORG_CHILDREN_FIELD, ORG_ID_FIELD, ORG_NAME_FIELD
from app.packages.system.core.exceptions import CycleDetected, DepthExceeded, RootMissing
from app.packages.system.models.organization import OrganizationRecord

DEFAULT_MAX_DEPTH = 256


@dataclass
class OrganizationNode:
    """组织树节点，`children` 按 `id` 升序排列。"""

    id: str
    name: str
    children: List["OrganizationNode"] = field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        """转换为输出文档；没有子节点时省略 `org_childs` 字段。"""
        document: Dict[str, Any] = {ORG_ID_FIELD: self.id, ORG_NAME_FIELD: self.name}
        if self.children:
            document[ORG_CHILDREN_FIELD] = [child.to_document() for child in self.children]
        return document

    def render(self) -> str:
        """紧凑 JSON 序列化，相同输入得到逐字节相同的输出。"""
        return json.dumps(self.to_document(), ensure_ascii=False, separators=(",", ":"))

    def iter_ids(self) -> Iterator[str]:
        """先序遍历输出树中的全部 `id`。"""
        yield self.id
        for child in self.children:
            yield from child.iter_ids()


@dataclass(frozen=True)
class RecordIndex:
    lookup: Dict[str, OrganizationRecord]
    children: Dict[str, List[str]]
    # 重复出现的 org_id（按首次重复的顺序），查找表中保留最后一条
    duplicates: List[str]


def index_records(records: Iterable[OrganizationRecord]) -> RecordIndex:
    """建立查找表与父子索引，记录重复的 `org_id`。"""
    lookup: Dict[str, OrganizationRecord] = {}
    duplicates: List[str] = []
    for record in records:
        if record.id in lookup and record.id not in duplicates:
            duplicates.append(record.id)
        lookup[record.id] = record

    children: Dict[str, List[str]] = {}
    for record in lookup.values():
        if record.parent_id is not None:
            children.setdefault(record.parent_id, []).append(record.id)
    for siblings in children.values():
        siblings.sort()

    return RecordIndex(lookup=lookup, children=children, duplicates=duplicates)


def build_tree(index: RecordIndex, root_id: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> OrganizationNode:
    """从 `root_id` 开始展开索引。

    不可达的记录（孤儿）不会被访问，因此不会出现在结果中。

    Raises:
        RootMissing: 索引中没有 `root_id`。
        CycleDetected: 展开路径上再次遇到同一 `org_id`。
        DepthExceeded: 层级深度超过 `max_depth`（根节点深度为 0）。
    """
    if root_id not in index.lookup:
        raise RootMissing(org_id=root_id)

    path: set[str] = set()

    def expand(org_id: str, depth: int) -> OrganizationNode:
        if org_id in path:
            raise CycleDetected(org_id=org_id)
        if depth > max_depth:
            raise DepthExceeded(f"组织层级超过最大深度 {max_depth}", org_id=org_id)

        record = index.lookup[org_id]
        path.add(org_id)
        try:
            children = [expand(child_id, depth + 1) for child_id in index.children.get(org_id, [])]
        finally:
            path.discard(org_id)
        return OrganizationNode(id=record.id, name=record.name, children=children)

    return expand(root_id, 0)


def assemble(
    records: Iterable[OrganizationRecord],
    root_id: str,
    *,
    max_depth: Optional[int] = None,
) -> OrganizationNode:
    """扁平记录 -> 以 `root_id` 为根的组织树（纯函数，无 I/O）。"""
    depth_limit = DEFAULT_MAX_DEPTH if max_depth is None else max_depth
    return build_tree(index_records(records), root_id, max_depth=depth_limit)
