"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
"""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}
