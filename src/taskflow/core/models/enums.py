"""枚举定义 -- 工作状态、任务优先级、工人状态

WorkStatus 同时用于 Project / Phase / Task。
未知的枚举字符串直接抛出 ValueError（Pydantic 中表现为 ValidationError），不做静默降级。
"""

from datetime import datetime
from enum import StrEnum


class WorkStatus(StrEnum):
    """项目 / 阶段 / 任务的工作状态"""

    PENDING = "pending"
    ON_GOING = "on_going"
    COMPLETED = "completed"
    DELAYED = "delayed"
    CANCELLED = "cancelled"

    @property
    def display_name(self) -> str:
        """可读名称，如 on_going -> "On Going" """
        return self.value.replace("_", " ").title()


class TaskPriority(StrEnum):
    """任务优先级"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def display_name(self) -> str:
        return self.value.title()


class WorkerStatus(StrEnum):
    """工人在项目 / 任务上的状态"""

    # 仅用于已创建但尚未分配到任何项目的工人
    UNASSIGNED = "unassigned"
    ASSIGNED = "assigned"
    TERMINATED = "terminated"

    @property
    def display_name(self) -> str:
        return self.value.title()


def status_from_dates(
    start: datetime,
    completion: datetime,
    now: datetime | None = None,
) -> WorkStatus:
    """根据计划起止时间推断状态

    Args:
        start: 计划开始时间
        completion: 计划完成时间
        now: 参考时间，None 时取当前时间（需与 start/completion 同为 naive 或 aware）

    Returns:
        now < start -> PENDING；start <= now <= completion -> ON_GOING；之后 -> COMPLETED
    """
    if now is None:
        now = datetime.now(start.tzinfo)

    if now < start:
        return WorkStatus.PENDING
    if now <= completion:
        return WorkStatus.ON_GOING
    return WorkStatus.COMPLETED
