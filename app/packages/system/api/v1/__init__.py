"""API v1 汇总路由：统一挂载所有版本化的子路由。"""

from fastapi import APIRouter

from app.packages.system.api.v1.endpoints import organizations

api_router = APIRouter()
api_router.include_router(organizations.router)

# 兼容旧服务的根路径路由，不带版本前缀
root_router = APIRouter()
root_router.include_router(organizations.legacy_router)
