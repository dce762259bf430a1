"""TaskFlow Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import TaskPriority, WorkerStatus, WorkStatus, status_from_dates
from .phase import Phase
from .project import Project
from .task import Task
from .worker import Worker

__all__ = [
    # 枚举
    "WorkStatus",
    "TaskPriority",
    "WorkerStatus",
    "status_from_dates",
    # 实体
    "Task",
    "Phase",
    "Project",
    "Worker",
]
