"""异常处理模块：定义组织树相关的业务异常与统一响应格式。

检索与组装组件只负责抛出带类型的异常，由边界层的异常处理器映射为响应码：

- ``RetrievalError``：``ConnectionFailure`` / ``QueryFailure`` / ``DecodeFailure``；
- ``AssemblyError``：``RootMissing`` / ``CycleDetected`` / ``DepthExceeded``。
"""

from typing import Any, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.packages.system.core.responses import create_response


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data


class OrganizationTreeError(Exception):
    """组织树处理失败的基类。"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_msg: str = "组织树处理失败"

    def __init__(self, msg: Optional[str] = None, *, org_id: Optional[str] = None) -> None:
        self.msg = msg or self.default_msg
        self.org_id = org_id
        super().__init__(self.msg)

    @property
    def data(self) -> Optional[dict[str, Any]]:
        if self.org_id is None:
            return None
        return {"org_id": self.org_id}


class RetrievalError(OrganizationTreeError):
    default_msg = "查询组织数据失败"


class ConnectionFailure(RetrievalError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_msg = "数据库连接失败"


class QueryFailure(RetrievalError):
    default_msg = "数据库查询失败"


class DecodeFailure(RetrievalError):
    default_msg = "组织数据解析失败"


class AssemblyError(OrganizationTreeError):
    default_msg = "组织树组装失败"


class RootMissing(AssemblyError):
    status_code = status.HTTP_404_NOT_FOUND
    default_msg = "组织不存在或未启用"


class CycleDetected(AssemblyError):
    """父子关系出现环：同一组织在当前路径上被再次展开。"""

    default_msg = "组织层级存在循环引用"


class DepthExceeded(AssemblyError):
    default_msg = "组织层级超过最大深度"


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """将 FastAPI 的 ``HTTPException`` 转换为统一响应格式。"""
    payload = create_response(exc.detail, getattr(exc, "data", None), exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=payload)


async def organization_tree_exception_handler(request: Request, exc: OrganizationTreeError) -> JSONResponse:
    """将组织树异常映射为对应的响应码。"""
    payload = create_response(exc.msg, exc.data, exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=payload)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底处理：将未捕获异常转换为标准的 500 响应结构。"""
    payload = create_response("服务器内部错误", None, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
