"""Task Scorer -- 按优先级、状态、时效为单个任务打分

weighted_score = priority_weight * status_multiplier * time_multiplier
max_possible_score = priority_weight * 1.0 * EARLY_COMPLETION_BONUS

max_possible_score 是单任务得分的理论上限，多任务汇总时作为归一化分母，
因此汇总后的得分不会超过 100。
"""

from datetime import timedelta
from types import MappingProxyType

from taskflow.core.models import Task, TaskPriority, WorkStatus

from .models import TaskScore

PRIORITY_WEIGHTS: MappingProxyType[TaskPriority, float] = MappingProxyType(
    {
        TaskPriority.HIGH: 5.0,
        TaskPriority.MEDIUM: 3.0,
        TaskPriority.LOW: 1.0,
    }
)

# 各状态对绩效的贡献
STATUS_MULTIPLIERS: MappingProxyType[WorkStatus, float] = MappingProxyType(
    {
        WorkStatus.COMPLETED: 1.0,
        WorkStatus.ON_GOING: 0.5,
        WorkStatus.DELAYED: 0.3,
        WorkStatus.PENDING: 0.0,
        WorkStatus.CANCELLED: 0.0,
    }
)

EARLY_COMPLETION_BONUS = 1.2
ON_TIME_MULTIPLIER = 1.0
LATE_PENALTY = 0.8

# 计划完成时间之后仍算按时的宽限期
ON_TIME_GRACE = timedelta(days=1)

EARLY = "early"
ON_TIME = "onTime"
LATE = "late"


def _time_performance(task: Task) -> tuple[float, str]:
    """返回 (time_multiplier, time_performance)

    仅对已完成且计划/实际完成时间齐全的任务评估时效。
    """
    planned = task.completion_date_time
    actual = task.actual_completion_date_time

    if task.status != WorkStatus.COMPLETED or planned is None or actual is None:
        return ON_TIME_MULTIPLIER, ""

    if actual < planned:
        return EARLY_COMPLETION_BONUS, EARLY
    if actual <= planned + ON_TIME_GRACE:
        return ON_TIME_MULTIPLIER, ON_TIME
    return LATE_PENALTY, LATE


def score_task(task: Task) -> TaskScore:
    """为单个任务打分"""
    priority_weight = PRIORITY_WEIGHTS.get(task.priority, 1.0)
    status_multiplier = STATUS_MULTIPLIERS.get(task.status, 0.0)
    time_multiplier, time_performance = _time_performance(task)

    return TaskScore(
        task_id=task.id,
        priority=task.priority.value,
        status=task.status.value,
        priority_weight=priority_weight,
        status_multiplier=status_multiplier,
        time_multiplier=time_multiplier,
        time_performance=time_performance,
        weighted_score=priority_weight * status_multiplier * time_multiplier,
        max_possible_score=priority_weight * 1.0 * EARLY_COMPLETION_BONUS,
    )
