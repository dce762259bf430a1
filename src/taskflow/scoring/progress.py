"""ProjectProgressCalculator -- 按阶段汇总任务进度

层级：Project -> Phases -> Tasks

1. 阶段加权进度 = sum(状态完成度 x 优先级权重) / sum(优先级权重)
2. 项目加权进度 = 各阶段加权进度按任务数加权平均（任务多的阶段影响更大）
3. 简单进度 = completed / (total - cancelled) x 100
4. 状态 x 优先级交叉表、提示与建议

此处的优先级权重与 Task Scorer 不同（3/2/1 而非 5/3/1）。
"""

from collections import Counter
from collections.abc import Iterable
from types import MappingProxyType
from typing import Any

import structlog
from taskflow.core.models import Phase, Task, TaskPriority, WorkStatus

from .grading import performance_grade
from .models import (
    CombinationCell,
    CountShare,
    PhaseProgress,
    PriorityShare,
    ProjectProgress,
)
from .validation import coerce_phases

log = structlog.get_logger()

PRIORITY_WEIGHTS: MappingProxyType[TaskPriority, float] = MappingProxyType(
    {
        TaskPriority.HIGH: 3.0,
        TaskPriority.MEDIUM: 2.0,
        TaskPriority.LOW: 1.0,
    }
)

# 各状态对应的完成百分比
STATUS_COMPLETION: MappingProxyType[WorkStatus, float] = MappingProxyType(
    {
        WorkStatus.PENDING: 0.0,
        WorkStatus.ON_GOING: 50.0,
        WorkStatus.COMPLETED: 100.0,
        WorkStatus.DELAYED: 25.0,  # 假定已有部分进度
        WorkStatus.CANCELLED: 0.0,
    }
)

NO_PHASES_MESSAGE = "No phases found in project"
NO_TASKS_MESSAGE = "No tasks found in any phase"


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def _simple_progress(statuses: Counter) -> float:
    """已完成任务占非取消任务的百分比"""
    total = sum(statuses.values())
    denominator = total - statuses[WorkStatus.CANCELLED]
    return _ratio(statuses[WorkStatus.COMPLETED], denominator) * 100


def _weighted_progress(tasks: list[Task]) -> float:
    total_weighted = 0.0
    total_weight = 0.0
    for task in tasks:
        weight = PRIORITY_WEIGHTS.get(task.priority, 1.0)
        total_weighted += STATUS_COMPLETION.get(task.status, 0.0) * weight
        total_weight += weight
    return _ratio(total_weighted, total_weight)


def _status_breakdown(statuses: Counter, total: int) -> dict[str, CountShare]:
    return {
        status.value: CountShare(
            count=statuses[status],
            percentage=round(_ratio(statuses[status], total) * 100, 1),
            display_name=status.display_name,
        )
        for status in WorkStatus
    }


def _priority_breakdown(priorities: Counter, total: int) -> dict[str, PriorityShare]:
    return {
        priority.value: PriorityShare(
            count=priorities[priority],
            percentage=round(_ratio(priorities[priority], total) * 100, 1),
            display_name=priority.display_name,
            weight=PRIORITY_WEIGHTS[priority],
        )
        for priority in TaskPriority
    }


def _combination_breakdown(tasks: list[Task]) -> dict[str, dict[str, CombinationCell]]:
    """5 x 3 的状态 x 优先级交叉表，百分比相对于任务总数"""
    pairs = Counter((task.status, task.priority) for task in tasks)
    total = len(tasks)
    return {
        status.value: {
            priority.value: CombinationCell(
                count=pairs[(status, priority)],
                percentage=round(_ratio(pairs[(status, priority)], total) * 100, 2),
            )
            for priority in TaskPriority
        }
        for status in WorkStatus
    }


class ProjectProgressCalculator:
    """项目进度计算器

    所有方法均为纯函数，不持有状态。

    Usage:
        progress = ProjectProgressCalculator.calculate(project.phases)
        progress.progress_percentage  # 阶段加权进度 (0-100)
    """

    @staticmethod
    def calculate(phases: Iterable[Phase | dict[str, Any]] | None) -> ProjectProgress:
        """计算项目进度

        Args:
            phases: 有序阶段集合，每个阶段包含有序任务

        Returns:
            ProjectProgress；无阶段或无任务时返回零进度结果和说明信息

        Raises:
            InvalidInputError: 阶段数据无法校验为合法实体
        """
        phase_list = coerce_phases(phases)

        if not phase_list:
            return ProjectProgress(insights=[NO_PHASES_MESSAGE])

        all_tasks = [task for phase in phase_list for task in phase.tasks]
        if not all_tasks:
            return ProjectProgress(insights=[NO_TASKS_MESSAGE])

        phase_breakdown = [
            ProjectProgressCalculator._phase_progress(phase) for phase in phase_list
        ]
        progress = ProjectProgressCalculator._phase_weighted_progress(phase_breakdown)

        statuses = Counter(task.status for task in all_tasks)
        priorities = Counter(task.priority for task in all_tasks)
        total_tasks = len(all_tasks)

        result = ProjectProgress(
            overall_score=round(progress, 2),
            performance_grade=performance_grade(progress),
            progress_percentage=round(progress, 2),
            simple_progress_percentage=round(_simple_progress(statuses), 2),
            weighted_progress=round(progress, 2),
            total_tasks=total_tasks,
            status_breakdown=_status_breakdown(statuses, total_tasks),
            priority_breakdown=_priority_breakdown(priorities, total_tasks),
            combination_breakdown=_combination_breakdown(all_tasks),
            phase_breakdown=phase_breakdown,
            insights=ProjectProgressCalculator._insights(
                statuses, priorities, total_tasks, progress
            ),
            recommendations=ProjectProgressCalculator._recommendations(
                statuses, priorities, total_tasks
            ),
        )

        log.debug(
            "project_progress_calculated",
            phases=len(phase_list),
            total_tasks=total_tasks,
            progress=result.progress_percentage,
        )
        return result

    # ------------------------------------------------------------------
    # 阶段层面
    # ------------------------------------------------------------------

    @staticmethod
    def _phase_progress(phase: Phase) -> PhaseProgress:
        statuses = Counter(task.status for task in phase.tasks)
        priorities = Counter(task.priority for task in phase.tasks)
        total = len(phase.tasks)

        return PhaseProgress(
            phase_id=phase.id,
            phase_name=phase.name,
            total_tasks=total,
            completed_tasks=statuses[WorkStatus.COMPLETED],
            cancelled_tasks=statuses[WorkStatus.CANCELLED],
            weighted_progress=round(_weighted_progress(phase.tasks), 2),
            simple_progress=round(_simple_progress(statuses), 2),
            status_breakdown=_status_breakdown(statuses, total),
            priority_breakdown=_priority_breakdown(priorities, total),
        )

    @staticmethod
    def _phase_weighted_progress(phase_breakdown: list[PhaseProgress]) -> float:
        """按任务数对阶段加权进度求加权平均"""
        total_tasks = 0
        total_weighted = 0.0
        for phase in phase_breakdown:
            total_tasks += phase.total_tasks
            total_weighted += phase.weighted_progress * phase.total_tasks
        return _ratio(total_weighted, total_tasks)

    # ------------------------------------------------------------------
    # 提示与建议
    # ------------------------------------------------------------------

    @staticmethod
    def _insights(
        statuses: Counter,
        priorities: Counter,
        total_tasks: int,
        progress: float,
    ) -> list[str]:
        insights: list[str] = []

        if progress >= 90:
            insights.append("Project is near completion - excellent progress!")
        elif progress >= 70:
            insights.append("Project is on track with good progress.")
        elif progress >= 50:
            insights.append("Project is progressing steadily.")
        elif progress >= 25:
            insights.append("Project needs attention to improve progress.")
        else:
            insights.append("Project requires immediate attention - low progress.")

        delayed = statuses[WorkStatus.DELAYED]
        if delayed > 0:
            delayed_pct = round(_ratio(delayed, total_tasks) * 100, 1)
            insights.append(f"Warning: {delayed} tasks ({delayed_pct}%) are delayed.")

        cancelled = statuses[WorkStatus.CANCELLED]
        if cancelled > 0:
            insights.append(f"Note: {cancelled} tasks have been cancelled.")

        high_priority = priorities[TaskPriority.HIGH]
        if high_priority > statuses[WorkStatus.COMPLETED]:
            insights.append(
                f"Focus needed: {high_priority} high-priority tasks require attention."
            )

        if statuses[WorkStatus.PENDING] > total_tasks * 0.3:
            insights.append("Many tasks are still pending - consider resource allocation.")

        return insights

    @staticmethod
    def _recommendations(
        statuses: Counter,
        priorities: Counter,
        total_tasks: int,
    ) -> list[str]:
        recommendations: list[str] = []

        if statuses[WorkStatus.ON_GOING] > total_tasks * 0.6:
            recommendations.append(
                "Consider if team capacity is sufficient for current workload."
            )

        if priorities[TaskPriority.HIGH] > 0:
            recommendations.append("Prioritize high-priority tasks for maximum impact.")

        if statuses[WorkStatus.DELAYED] > 0:
            recommendations.append(
                "Review delayed tasks and reassign resources if necessary."
            )

        if statuses[WorkStatus.PENDING] > total_tasks * 0.4:
            recommendations.append("Activate pending tasks to maintain project momentum.")

        return recommendations
