"""绩效路由

POST /api/performance/worker: 工人绩效（ProjectsSnapshot）
POST /api/performance/manager: 项目经理绩效（ProjectsSnapshot）
"""

import structlog
from fastapi import APIRouter, Depends
from taskflow.core.config import TaskFlowConfig
from taskflow.scoring import (
    ProjectManagerPerformanceCalculator,
    ProjectsSnapshot,
    WorkerPerformanceCalculator,
)

from ..deps import get_config
from ..errors import error_response

log = structlog.get_logger()

router = APIRouter()


def _too_many_projects(snapshot: ProjectsSnapshot, config: TaskFlowConfig):
    """超过单次请求项目上限时返回 413 响应，否则返回 None"""
    count = len(snapshot.projects)
    if count <= config.max_projects_per_request:
        return None
    log.warning(
        "too_many_projects",
        count=count,
        limit=config.max_projects_per_request,
    )
    return error_response(
        413,
        "TOO_MANY_PROJECTS",
        f"At most {config.max_projects_per_request} projects per request, got {count}",
    )


@router.post("/api/performance/worker")
async def worker_performance(
    snapshot: ProjectsSnapshot,
    config: TaskFlowConfig = Depends(get_config),
):
    """计算工人绩效"""
    if (rejected := _too_many_projects(snapshot, config)) is not None:
        return rejected

    result = WorkerPerformanceCalculator.calculate(snapshot.projects)
    return result.model_dump(mode="json", by_alias=True)


@router.post("/api/performance/manager")
async def manager_performance(
    snapshot: ProjectsSnapshot,
    config: TaskFlowConfig = Depends(get_config),
):
    """计算项目经理绩效"""
    if (rejected := _too_many_projects(snapshot, config)) is not None:
        return rejected

    result = ProjectManagerPerformanceCalculator.calculate(snapshot.projects)
    return result.model_dump(mode="json", by_alias=True)
