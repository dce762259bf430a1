"""ProjectReportBuilder -- 项目报告页的数据汇总

报告包含：
- 项目进度（ProjectProgressCalculator）
- 阶段时间线
- 按年 / 月统计的任务数（按计划开始时间）
- 工人状态统计
- 按 WorkerPerformanceCalculator 得分排序的 top workers
"""

from collections import Counter, defaultdict
from collections.abc import Iterable
from datetime import UTC
from typing import Any

import structlog
from taskflow.core.config import DEFAULT_TOP_WORKER_LIMIT
from taskflow.core.models import Project, Task, Worker, WorkerStatus
from taskflow.core.models.dates import is_aware

from .models import (
    CountShare,
    PhaseTimelineEntry,
    ProjectReport,
    ProjectSummary,
    TopWorker,
)
from .progress import ProjectProgressCalculator
from .validation import coerce_project, coerce_workers
from .worker import WorkerPerformanceCalculator

log = structlog.get_logger()


def periodic_task_count(tasks: Iterable[Task]) -> dict[int, dict[int, int]]:
    """按计划开始时间统计每年每月的任务数，年、月均升序

    aware 时间先换算到 UTC 再归入年 / 月；naive 时间按原值归入。
    """
    counts: dict[int, Counter[int]] = defaultdict(Counter)
    for task in tasks:
        start = task.start_date_time
        if is_aware(start):
            start = start.astimezone(UTC)
        counts[start.year][start.month] += 1

    return {
        year: dict(sorted(months.items()))
        for year, months in sorted(counts.items())
    }


def worker_statistics(workers: list[Worker]) -> dict[str, CountShare]:
    """各工人状态的人数与占比"""
    counts = Counter(worker.status for worker in workers)
    total = len(workers)
    return {
        status.value: CountShare(
            count=counts[status],
            percentage=round(counts[status] / total * 100, 1) if total else 0.0,
            display_name=status.display_name,
        )
        for status in WorkerStatus
    }


class ProjectReportBuilder:
    """项目报告构建器

    Usage:
        builder = ProjectReportBuilder(top_worker_limit=config.top_worker_limit)
        report = builder.build(project, workers)
    """

    def __init__(self, top_worker_limit: int = DEFAULT_TOP_WORKER_LIMIT) -> None:
        """
        Args:
            top_worker_limit: 报告中展示的 top workers 数量
        """
        if top_worker_limit < 1:
            raise ValueError(f"top_worker_limit must be >= 1, got {top_worker_limit}")
        self._top_worker_limit = top_worker_limit

    def build(
        self,
        project: Project | dict[str, Any],
        workers: Iterable[Worker | dict[str, Any]] | None = None,
    ) -> ProjectReport:
        """构建项目报告

        Raises:
            InvalidInputError: 项目或工人数据无法校验为合法实体
        """
        project = coerce_project(project)
        worker_list = coerce_workers(workers)

        progress = ProjectProgressCalculator.calculate(project.phases)
        # phase_breakdown 与 project.phases 按位置一一对应；无任务时为空
        phase_weights = [p.weighted_progress for p in progress.phase_breakdown]
        if not phase_weights:
            phase_weights = [0.0] * len(project.phases)

        timeline = [
            PhaseTimelineEntry(
                phase_id=phase.id,
                phase_name=phase.name,
                status=phase.status.value,
                start_date_time=phase.start_date_time,
                completion_date_time=phase.completion_date_time,
                total_tasks=len(phase.tasks),
                weighted_progress=weighted_progress,
            )
            for phase, weighted_progress in zip(project.phases, phase_weights, strict=True)
        ]

        report = ProjectReport(
            project=ProjectSummary(
                id=project.id,
                name=project.name,
                status=project.status.value,
                budget=project.budget,
                start_date_time=project.start_date_time,
                completion_date_time=project.completion_date_time,
                actual_completion_date_time=project.actual_completion_date_time,
            ),
            progress=progress,
            phase_timeline=timeline,
            periodic_task_count=periodic_task_count(project.tasks),
            total_workers=len(worker_list),
            worker_statistics=worker_statistics(worker_list),
            top_workers=self._top_workers(worker_list),
        )

        log.debug(
            "project_report_built",
            project_id=project.id,
            phases=len(timeline),
            workers=len(worker_list),
        )
        return report

    def _top_workers(self, workers: list[Worker]) -> list[TopWorker]:
        """按绩效得分降序，得分相同按姓名、ID 排序"""
        ranked = []
        for worker in workers:
            performance = WorkerPerformanceCalculator.calculate(worker.project_history)
            ranked.append(
                TopWorker(
                    worker_id=worker.id,
                    name=worker.name,
                    overall_score=performance.overall_score,
                    performance_grade=performance.performance_grade,
                    total_projects=performance.total_projects,
                )
            )

        ranked.sort(key=lambda w: (-w.overall_score, w.name, w.worker_id))
        return ranked[: self._top_worker_limit]
