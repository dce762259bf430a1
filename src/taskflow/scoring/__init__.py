"""TaskFlow Scoring -- 绩效与进度评分引擎

纯计算：不做 I/O，不持有状态，输入只读，每次调用返回新的结果值。
"""

# 异常
from .exceptions import InvalidInputError, ScoringError, SnapshotError
from .grading import NO_GRADE, performance_grade

# 计算器
from .manager import ProjectManagerPerformanceCalculator

# 结果模型
from .models import (
    ManagerPerformance,
    PhaseProgress,
    ProjectProgress,
    ProjectReport,
    TaskScore,
    WorkerPerformance,
)
from .progress import ProjectProgressCalculator
from .report import ProjectReportBuilder
from .snapshot import PhasesSnapshot, ProjectsSnapshot, ReportSnapshot, load_snapshot
from .task_scorer import score_task
from .worker import WorkerPerformanceCalculator

__all__ = [
    "score_task",
    "ProjectProgressCalculator",
    "WorkerPerformanceCalculator",
    "ProjectManagerPerformanceCalculator",
    "ProjectReportBuilder",
    "performance_grade",
    "NO_GRADE",
    "TaskScore",
    "PhaseProgress",
    "ProjectProgress",
    "WorkerPerformance",
    "ManagerPerformance",
    "ProjectReport",
    "ProjectsSnapshot",
    "PhasesSnapshot",
    "ReportSnapshot",
    "load_snapshot",
    "ScoringError",
    "InvalidInputError",
    "SnapshotError",
]
