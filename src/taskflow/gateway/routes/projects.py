"""项目路由

POST /api/projects/progress: 项目进度（PhasesSnapshot）
POST /api/projects/report: 项目报告（ReportSnapshot）
"""

from fastapi import APIRouter, Depends
from taskflow.scoring import (
    PhasesSnapshot,
    ProjectProgressCalculator,
    ProjectReportBuilder,
    ReportSnapshot,
)

from ..deps import get_report_builder

router = APIRouter()


@router.post("/api/projects/progress")
async def project_progress(snapshot: PhasesSnapshot):
    """计算项目进度"""
    result = ProjectProgressCalculator.calculate(snapshot.phases)
    return result.model_dump(mode="json", by_alias=True)


@router.post("/api/projects/report")
async def project_report(
    snapshot: ReportSnapshot,
    builder: ProjectReportBuilder = Depends(get_report_builder),
):
    """构建项目报告"""
    result = builder.build(snapshot.project, snapshot.workers)
    return result.model_dump(mode="json", by_alias=True)
