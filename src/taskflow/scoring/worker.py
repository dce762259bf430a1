"""WorkerPerformanceCalculator -- 汇总工人在所有项目上的任务得分

1. 展开所有项目所有阶段的任务，逐个经 Task Scorer 打分
2. base_score = sum(weighted_score) / sum(max_possible_score) x 100
3. 终止扣分：每个 terminated 项目 -25.0，每个 terminated 任务 -15.0，累加后扣除，下限 0
4. 项目层面指标（完成率、任务数、状态分布）仅用于提示，不参与得分
"""

from collections import Counter
from collections.abc import Iterable
from typing import Any

import structlog
from taskflow.core.models import Project, Task, WorkerStatus, WorkStatus

from .grading import NO_GRADE, performance_grade
from .models import (
    PenaltyBreakdown,
    TaskMetrics,
    TimeDistribution,
    WorkerPerformance,
    WorkerProjectMetrics,
)
from .task_scorer import EARLY, LATE, ON_TIME, score_task
from .validation import coerce_projects

log = structlog.get_logger()

PROJECT_TERMINATION_PENALTY = 25.0
TASK_TERMINATION_PENALTY = 15.0

# 任务终止次数达到此值时建议培训
TRAINING_TERMINATION_THRESHOLD = 3

NO_PROJECTS_MESSAGE = "No projects found for evaluation period"
NO_TASKS_MESSAGE = "No tasks found for evaluation period"


def _dedupe(items: Iterable[str]) -> list[str]:
    """去重并保持首次出现的顺序"""
    return list(dict.fromkeys(items))


class WorkerPerformanceCalculator:
    """工人绩效计算器

    Usage:
        performance = WorkerPerformanceCalculator.calculate(worker.project_history)
        performance.overall_score      # 0-100，已扣除终止惩罚
        performance.performance_grade  # "A+ (Exceptional)" ... "F (Failing)"
    """

    @staticmethod
    def calculate(projects: Iterable[Project | dict[str, Any]] | None) -> WorkerPerformance:
        """计算工人综合绩效

        Args:
            projects: 工人参与的项目；Project.worker_status / Task.worker_status
                标记该工人在项目 / 任务上的状态

        Returns:
            WorkerPerformance；无项目时返回全零结果，等级 "N/A"

        Raises:
            InvalidInputError: 项目数据无法校验为合法实体
        """
        project_list = coerce_projects(projects)

        if not project_list:
            return WorkerPerformance(insights=[NO_PROJECTS_MESSAGE])

        all_tasks = [task for project in project_list for task in project.tasks]

        task_metrics = WorkerPerformanceCalculator._task_metrics(all_tasks)
        penalties = WorkerPerformanceCalculator._penalties(project_list, all_tasks)
        project_metrics = WorkerPerformanceCalculator._project_metrics(project_list)

        overall_score = max(0.0, task_metrics.base_score - penalties.total_penalty)
        overall_score = round(overall_score, 2)
        grade = performance_grade(overall_score) if all_tasks else NO_GRADE

        insights = WorkerPerformanceCalculator._insights(
            project_metrics, penalties, has_tasks=bool(all_tasks)
        )
        recommendations = WorkerPerformanceCalculator._recommendations(
            project_metrics, penalties, overall_score
        )

        result = WorkerPerformance(
            overall_score=overall_score,
            performance_grade=grade,
            total_tasks=len(all_tasks),
            total_projects=len(project_list),
            task_metrics=task_metrics,
            penalties=penalties,
            project_metrics=project_metrics,
            insights=insights,
            recommendations=recommendations,
        )

        log.debug(
            "worker_performance_calculated",
            total_projects=result.total_projects,
            total_tasks=result.total_tasks,
            base_score=task_metrics.base_score,
            total_penalty=penalties.total_penalty,
            overall_score=result.overall_score,
        )
        return result

    # ------------------------------------------------------------------
    # 得分
    # ------------------------------------------------------------------

    @staticmethod
    def _task_metrics(tasks: list[Task]) -> TaskMetrics:
        raw_score = 0.0
        max_possible = 0.0
        timing: Counter[str] = Counter()

        for task in tasks:
            score = score_task(task)
            raw_score += score.weighted_score
            max_possible += score.max_possible_score
            if score.time_performance:
                timing[score.time_performance] += 1

        base_score = raw_score / max_possible * 100 if max_possible > 0 else 0.0

        return TaskMetrics(
            total_tasks=len(tasks),
            raw_score=round(raw_score, 2),
            max_possible_score=round(max_possible, 2),
            base_score=round(base_score, 2),
            time_performance=TimeDistribution(
                early=timing[EARLY],
                on_time=timing[ON_TIME],
                late=timing[LATE],
            ),
        )

    @staticmethod
    def _penalties(projects: list[Project], tasks: list[Task]) -> PenaltyBreakdown:
        terminated_projects = sum(
            1 for p in projects if p.worker_status == WorkerStatus.TERMINATED
        )
        terminated_tasks = sum(
            1 for t in tasks if t.worker_status == WorkerStatus.TERMINATED
        )
        project_penalty = terminated_projects * PROJECT_TERMINATION_PENALTY
        task_penalty = terminated_tasks * TASK_TERMINATION_PENALTY

        return PenaltyBreakdown(
            terminated_projects=terminated_projects,
            terminated_tasks=terminated_tasks,
            project_termination_penalty=project_penalty,
            task_termination_penalty=task_penalty,
            total_penalty=project_penalty + task_penalty,
        )

    @staticmethod
    def _project_metrics(projects: list[Project]) -> WorkerProjectMetrics:
        by_status = Counter(project.status.value for project in projects)
        completion_rates: list[float] = []
        total_tasks = 0

        for project in projects:
            tasks = project.tasks
            total_tasks += len(tasks)
            if tasks:
                completed = sum(1 for t in tasks if t.status == WorkStatus.COMPLETED)
                completion_rates.append(completed / len(tasks) * 100)

        average_completion = (
            sum(completion_rates) / len(completion_rates) if completion_rates else 0.0
        )

        return WorkerProjectMetrics(
            total_projects=len(projects),
            projects_by_status=dict(by_status),
            project_completion_rates=[round(rate, 2) for rate in completion_rates],
            average_project_completion=round(average_completion, 2),
            average_tasks_per_project=round(total_tasks / len(projects), 1),
        )

    # ------------------------------------------------------------------
    # 提示与建议
    # ------------------------------------------------------------------

    @staticmethod
    def _insights(
        metrics: WorkerProjectMetrics,
        penalties: PenaltyBreakdown,
        has_tasks: bool,
    ) -> list[str]:
        insights: list[str] = []
        total = metrics.total_projects

        if not has_tasks:
            insights.append(NO_TASKS_MESSAGE)

        if total >= 10:
            insights.append(f"Experienced worker with involvement in {total} projects.")
        elif total >= 5:
            insights.append(f"Worker has contributed to {total} projects.")
        else:
            insights.append(f"Worker is building experience with {total} project(s).")

        completed = metrics.projects_by_status.get(WorkStatus.COMPLETED.value, 0)
        if completed > 0:
            share = round(completed / total * 100, 1)
            insights.append(
                f"Contributed to {completed} completed projects ({share}% of total)."
            )

        ongoing = metrics.projects_by_status.get(WorkStatus.ON_GOING.value, 0)
        if ongoing > 0:
            insights.append(f"Currently active in {ongoing} ongoing project(s).")

        avg_completion = metrics.average_project_completion
        if avg_completion >= 80:
            insights.append(
                f"Strong task completion rate ({avg_completion}%) across all projects."
            )
        elif avg_completion >= 60:
            insights.append(
                f"Moderate task completion rate ({avg_completion}%) - room for improvement."
            )
        elif avg_completion > 0:
            insights.append(
                f"Low task completion rate ({avg_completion}%) - may need additional support."
            )

        avg_tasks = metrics.average_tasks_per_project
        if avg_tasks >= 20:
            insights.append(
                f"Handles significant workload with average of {avg_tasks} tasks per project."
            )
        elif avg_tasks >= 10:
            insights.append(
                f"Maintains steady workload of {avg_tasks} tasks per project on average."
            )

        if penalties.terminated_projects > 0:
            insights.append(
                f"Terminated from {penalties.terminated_projects} project(s) "
                f"(-{penalties.project_termination_penalty:g} points)."
            )
        if penalties.terminated_tasks > 0:
            insights.append(
                f"Terminated from {penalties.terminated_tasks} task(s) "
                f"(-{penalties.task_termination_penalty:g} points)."
            )

        return _dedupe(insights)

    @staticmethod
    def _recommendations(
        metrics: WorkerProjectMetrics,
        penalties: PenaltyBreakdown,
        overall_score: float,
    ) -> list[str]:
        recommendations: list[str] = []
        total = metrics.total_projects

        if total < 3 and overall_score >= 80:
            recommendations.append(
                "Consider diversifying project experience to build broader skill set."
            )

        if metrics.average_project_completion < 60:
            recommendations.append("Focus on completing more tasks within assigned projects.")
            recommendations.append(
                "Review project task priorities and seek clarification when needed."
            )

        avg_tasks = metrics.average_tasks_per_project
        if avg_tasks > 30:
            recommendations.append(
                "High task volume per project - ensure workload is manageable."
            )
            recommendations.append(
                "Consider discussing task distribution with project manager."
            )
        elif avg_tasks < 5 and total > 5:
            recommendations.append(
                "Low task count per project - consider deeper involvement in fewer projects."
            )

        ongoing = metrics.projects_by_status.get(WorkStatus.ON_GOING.value, 0)
        completed = metrics.projects_by_status.get(WorkStatus.COMPLETED.value, 0)
        if ongoing > 5 and completed < 2:
            recommendations.append(
                "Many ongoing projects with few completions - prioritize finishing current work."
            )

        if overall_score >= 90 and total >= 5:
            recommendations.append(
                "Excellent performance across multiple projects - potential for leadership roles."
            )
            recommendations.append(
                "Consider mentoring other team members on project best practices."
            )

        if penalties.terminated_tasks >= TRAINING_TERMINATION_THRESHOLD:
            recommendations.append(
                "Repeated task terminations - consider additional training or mentoring."
            )
        if penalties.terminated_projects > 0:
            recommendations.append(
                "Review the circumstances of project terminations with the project manager."
            )

        return _dedupe(recommendations)
