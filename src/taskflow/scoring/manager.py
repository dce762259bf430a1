"""ProjectManagerPerformanceCalculator -- 按所管理项目的结果评估项目经理

overall = 0.35 x 完成度 + 0.30 x 时间管理 + 0.35 x 实际进度，截断到 [0, 100]

- 完成度：按项目状态加权（cancelled 为负分），每个项目满分 1.0
- 时间管理：仅统计已完成且有实际完成时间的项目
- 实际进度：对含阶段的项目调用 ProjectProgressCalculator 取平均
"""

from collections import Counter
from collections.abc import Iterable
from types import MappingProxyType
from typing import Any

import structlog
from taskflow.core.models import Project, WorkStatus

from .grading import performance_grade
from .models import (
    CompletionMetric,
    DeliveryDistribution,
    ManagerMetrics,
    ManagerPerformance,
    ProgressDistribution,
    ProgressMetric,
    ProjectStatistics,
    TimeManagementMetric,
)
from .progress import ProjectProgressCalculator
from .validation import coerce_projects

log = structlog.get_logger()

PROJECT_STATUS_WEIGHTS: MappingProxyType[WorkStatus, float] = MappingProxyType(
    {
        WorkStatus.COMPLETED: 1.0,
        WorkStatus.ON_GOING: 0.6,
        WorkStatus.DELAYED: 0.3,
        WorkStatus.PENDING: 0.2,
        WorkStatus.CANCELLED: -0.5,
    }
)

METRIC_WEIGHTS: MappingProxyType[str, float] = MappingProxyType(
    {
        "project_completion": 0.35,
        "time_management": 0.30,
        "project_progress": 0.35,
    }
)

EARLY_DELIVERY_BONUS = 1.3
ON_TIME_MULTIPLIER = 1.0
LATE_PENALTY = 0.7
SEVERELY_LATE_PENALTY = 0.4

# 晚于计划完成时间但仍算按时的天数
ON_TIME_GRACE_DAYS = 2
# 超过计划工期此百分比视为严重延期
SEVERE_DELAY_PERCENT = 20.0

NO_DATA_INSIGHTS = (
    "No projects found for evaluation period.",
    "Start managing projects to build performance history.",
    "Performance metrics will be calculated as projects are completed.",
)


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


class ProjectManagerPerformanceCalculator:
    """项目经理绩效计算器

    Usage:
        performance = ProjectManagerPerformanceCalculator.calculate(managed_projects)
        performance.metrics.time_management.score
    """

    @staticmethod
    def calculate(projects: Iterable[Project | dict[str, Any]] | None) -> ManagerPerformance:
        """计算项目经理综合绩效

        Args:
            projects: 项目经理管理的项目

        Returns:
            ManagerPerformance；无项目时返回全零结果，等级 "N/A"

        Raises:
            InvalidInputError: 项目数据无法校验为合法实体
        """
        project_list = coerce_projects(projects)

        if not project_list:
            return ManagerPerformance(insights=list(NO_DATA_INSIGHTS))

        completion = ProjectManagerPerformanceCalculator._completion_score(project_list)
        timing = ProjectManagerPerformanceCalculator._time_management_score(project_list)
        progress = ProjectManagerPerformanceCalculator._progress_score(project_list)

        weighted = (
            completion.score * METRIC_WEIGHTS["project_completion"]
            + timing.score * METRIC_WEIGHTS["time_management"]
            + progress.score * METRIC_WEIGHTS["project_progress"]
        )
        overall_score = round(_clamp(weighted), 2)

        statistics = ProjectManagerPerformanceCalculator._statistics(project_list)

        result = ManagerPerformance(
            overall_score=overall_score,
            performance_grade=performance_grade(overall_score),
            total_projects=len(project_list),
            metrics=ManagerMetrics(
                project_completion=completion,
                time_management=timing,
                project_progress=progress,
            ),
            statistics=statistics,
            insights=ProjectManagerPerformanceCalculator._insights(
                overall_score, completion, timing, progress, statistics
            ),
            recommendations=ProjectManagerPerformanceCalculator._recommendations(
                completion, timing, progress, statistics
            ),
        )

        log.debug(
            "manager_performance_calculated",
            total_projects=result.total_projects,
            completion_score=completion.score,
            time_score=timing.score,
            progress_score=progress.score,
            overall_score=result.overall_score,
        )
        return result

    # ------------------------------------------------------------------
    # 分项得分
    # ------------------------------------------------------------------

    @staticmethod
    def _completion_score(projects: list[Project]) -> CompletionMetric:
        """项目交付完成度 (0-100)，取消项目会拉低得分"""
        status_counts = Counter(project.status.value for project in projects)
        total_weighted = sum(
            PROJECT_STATUS_WEIGHTS.get(project.status, 0.0) for project in projects
        )
        # 每个项目的最高权重为 1.0（completed）
        max_possible = 1.0 * len(projects)
        score = total_weighted / max_possible * 100 if max_possible > 0 else 0.0

        return CompletionMetric(
            score=round(score, 2),
            status_breakdown=dict(status_counts),
        )

    @staticmethod
    def _time_management_score(projects: list[Project]) -> TimeManagementMetric:
        """按时交付得分，仅评估已完成项目"""
        total = 0.0
        evaluated = 0
        stats: Counter[str] = Counter()

        for project in projects:
            actual = project.actual_completion_date_time
            if project.status != WorkStatus.COMPLETED or actual is None:
                continue

            evaluated += 1
            planned = project.completion_date_time
            days_difference = abs(actual - planned).days
            planned_duration = abs(planned - project.start_date_time).days
            delay_percent = (
                days_difference / planned_duration * 100 if planned_duration > 0 else 0.0
            )

            if actual <= planned:
                total += 100 * EARLY_DELIVERY_BONUS
                stats["early_delivery"] += 1
            elif days_difference <= ON_TIME_GRACE_DAYS:
                total += 100 * ON_TIME_MULTIPLIER
                stats["on_time"] += 1
            elif delay_percent <= SEVERE_DELAY_PERCENT:
                total += 100 * LATE_PENALTY
                stats["late"] += 1
            else:
                total += 100 * SEVERELY_LATE_PENALTY
                stats["severely_late"] += 1

        score = total / evaluated if evaluated > 0 else 0.0

        return TimeManagementMetric(
            score=round(score, 2),
            completed_projects=evaluated,
            time_performance=DeliveryDistribution(**stats),
        )

    @staticmethod
    def _progress_score(projects: list[Project]) -> ProgressMetric:
        """所有含阶段项目的实际进度平均值"""
        total = 0.0
        evaluated = 0
        buckets: Counter[str] = Counter()

        for project in projects:
            if not project.phases:
                continue

            progress = ProjectProgressCalculator.calculate(project.phases)
            percentage = progress.progress_percentage
            total += percentage
            evaluated += 1

            if percentage >= 75:
                buckets["high_progress"] += 1
            elif percentage >= 50:
                buckets["moderate_progress"] += 1
            elif percentage >= 25:
                buckets["low_progress"] += 1
            else:
                buckets["minimal_progress"] += 1

        score = total / evaluated if evaluated > 0 else 0.0

        return ProgressMetric(
            score=round(score, 2),
            evaluated_projects=evaluated,
            progress_distribution=ProgressDistribution(**buckets),
        )

    @staticmethod
    def _statistics(projects: list[Project]) -> ProjectStatistics:
        budgets = [project.budget for project in projects if project.budget > 0]
        total_budget = sum(budgets)
        total_tasks = sum(len(project.tasks) for project in projects)

        return ProjectStatistics(
            total=len(projects),
            by_status=dict(Counter(project.status.value for project in projects)),
            total_budget=round(total_budget, 2),
            average_budget=round(total_budget / len(budgets), 2) if budgets else 0.0,
            total_tasks=total_tasks,
            average_tasks_per_project=round(total_tasks / len(projects), 1),
        )

    # ------------------------------------------------------------------
    # 提示与建议
    # ------------------------------------------------------------------

    @staticmethod
    def _insights(
        overall_score: float,
        completion: CompletionMetric,
        timing: TimeManagementMetric,
        progress: ProgressMetric,
        statistics: ProjectStatistics,
    ) -> list[str]:
        insights: list[str] = []

        if overall_score >= 85:
            insights.append(
                "Exceptional project management performance! "
                "Consistently delivers high-quality projects."
            )
        elif overall_score >= 70:
            insights.append(
                "Good project management with solid track record. "
                "Some areas for improvement identified."
            )
        elif overall_score >= 50:
            insights.append(
                "Average performance with significant room for improvement in multiple areas."
            )
        else:
            insights.append(
                "Performance needs immediate attention. Critical improvement required."
            )

        completed = completion.status_breakdown.get(WorkStatus.COMPLETED.value, 0)
        completion_rate = round(completed / statistics.total * 100, 1)
        if completion_rate >= 80:
            insights.append(f"Strong project completion rate at {completion_rate}%.")
        elif completion_rate < 50:
            insights.append(
                f"Low project completion rate ({completion_rate}%) - focus on delivering projects."
            )

        if timing.completed_projects > 0:
            delivery = timing.time_performance
            on_schedule = delivery.on_time + delivery.early_delivery
            if on_schedule >= timing.completed_projects * 0.7:
                insights.append(
                    "Strong time management - majority of projects delivered on schedule."
                )
            if delivery.severely_late > 0:
                insights.append(
                    "Concern: Some projects severely delayed. "
                    "Review planning and resource allocation."
                )

        if progress.evaluated_projects > 0:
            if progress.score >= 80:
                insights.append(
                    "Excellent progress tracking - projects are advancing steadily "
                    "towards completion."
                )
            elif progress.score >= 60:
                insights.append(
                    "Good progress on active projects - maintain momentum to meet deadlines."
                )
            elif progress.score < 40:
                insights.append(
                    "Warning: Low average progress across projects. "
                    "Consider resource reallocation."
                )

            distribution = progress.progress_distribution
            if distribution.minimal_progress > 0:
                insights.append(
                    f"{distribution.minimal_progress} project(s) with minimal progress "
                    "(<25%) - immediate attention required."
                )
            if distribution.high_progress >= progress.evaluated_projects * 0.6:
                insights.append(
                    "Strong execution - majority of projects showing high progress (≥75%)."
                )

        return insights

    @staticmethod
    def _recommendations(
        completion: CompletionMetric,
        timing: TimeManagementMetric,
        progress: ProgressMetric,
        statistics: ProjectStatistics,
    ) -> list[str]:
        recommendations: list[str] = []

        if completion.status_breakdown.get(WorkStatus.CANCELLED.value, 0) > 0:
            recommendations.append(
                "Investigate reasons for cancelled projects and implement preventive measures."
            )

        delayed = completion.status_breakdown.get(WorkStatus.DELAYED.value, 0)
        if delayed > 0 and delayed >= statistics.total * 0.3:
            recommendations.append(
                "High number of delayed projects - review resource allocation "
                "and planning processes."
            )

        if timing.score < 70:
            recommendations.append("Enhance project scheduling and milestone tracking.")
            recommendations.append(
                "Consider implementing agile methodologies for better time management."
            )

        delivery = timing.time_performance
        if delivery.late + delivery.severely_late > 0:
            recommendations.append("Analyze causes of delays and implement corrective actions.")
            recommendations.append(
                "Build buffer time into project schedules to accommodate "
                "unforeseen challenges."
            )

        if progress.evaluated_projects > 0:
            distribution = progress.progress_distribution
            if distribution.minimal_progress > 0:
                recommendations.append(
                    "Urgently address projects with minimal progress - identify blockers "
                    "and reallocate resources."
                )
            if progress.score < 50:
                recommendations.append(
                    "Implement weekly progress reviews to identify and resolve "
                    "bottlenecks early."
                )
                recommendations.append(
                    "Consider breaking down large tasks into smaller, manageable units "
                    "for better tracking."
                )
            lagging = distribution.minimal_progress + distribution.low_progress
            if lagging >= progress.evaluated_projects * 0.4:
                recommendations.append(
                    "Review team capacity and consider hiring or reassigning resources."
                )
                recommendations.append(
                    "Evaluate if project scope needs adjustment or timeline extension."
                )

        if not recommendations:
            recommendations.append("Continue maintaining high standards of project management.")
            recommendations.append("Share best practices across the organization.")
            recommendations.append("Consider mentoring other project managers.")

        return list(dict.fromkeys(recommendations))
