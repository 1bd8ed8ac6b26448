"""组织路由定义：有效组织列表与组织子树。"""

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.packages.system.api.v1.schemas.organizations import (
    OrganizationListResponse,
    OrganizationTreeResponse,
)
from app.packages.system.core.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_OK
from app.packages.system.core.dependencies import get_db, get_organization_service
from app.packages.system.core.exceptions import AppException
from app.packages.system.core.responses import create_response
from app.packages.system.services.organization_service import OrganizationService

router = APIRouter(prefix="/organizations", tags=["organizations"])
legacy_router = APIRouter(tags=["organizations"])


def _require_organization_id(organization_id: str) -> str:
    if not organization_id or not organization_id.strip():
        raise AppException("缺少 organization_id 参数", HTTP_STATUS_BAD_REQUEST)
    return organization_id


@router.get("", response_model=OrganizationListResponse)
def list_organizations(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    service: OrganizationService = Depends(get_organization_service),
) -> OrganizationListResponse:
    """返回有效组织的扁平列表（按 `org_id` 排序）。"""
    data = service.list_active(db, skip=skip, limit=limit)
    return create_response("获取组织机构列表成功", data, HTTP_STATUS_OK)


@router.get("/{organization_id}/tree", response_model=OrganizationTreeResponse)
def get_organization_tree(
    organization_id: str,
    db: Session = Depends(get_db),
    service: OrganizationService = Depends(get_organization_service),
) -> JSONResponse:
    """以统一响应结构返回以 `organization_id` 为根的组织树。

    文档已由组装步骤校验，直接输出，避免深层级树再经过递归响应模型。
    """
    root_id = _require_organization_id(organization_id)
    tree = service.get_subtree(db, root_id)
    return JSONResponse(content=create_response("获取组织树成功", tree.to_document(), HTTP_STATUS_OK))


@legacy_router.post("/GenerateJSONStructure/{organization_id}")
def generate_json_structure(
    organization_id: str,
    db: Session = Depends(get_db),
    service: OrganizationService = Depends(get_organization_service),
) -> Response:
    """兼容接口：直接返回组织树 JSON 文档（`org_id` / `org_name` / `org_childs`）。"""
    root_id = _require_organization_id(organization_id)
    return Response(content=service.render_subtree(db, root_id), media_type="application/json")
