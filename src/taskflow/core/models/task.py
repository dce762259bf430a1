"""Task Domain Model -- 项目阶段下的最小工作单元

评分引擎只读取 Task，不修改。
worker_status 取代旧的 additionalInfo['workerStatus'] 动态字段。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .dates import check_same_awareness
from .enums import TaskPriority, WorkerStatus, WorkStatus


class Task(BaseModel):
    """Task 数据模型

    不变量：
    - actual_completion_date_time 仅在 status 为 completed 时存在
    - 所有时间同为 naive 或同为 aware
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="任务 ID")
    name: str = Field(description="任务名称")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="优先级")
    status: WorkStatus = Field(default=WorkStatus.PENDING, description="当前状态")
    start_date_time: datetime = Field(description="计划开始时间")
    completion_date_time: datetime = Field(description="计划完成时间")
    actual_completion_date_time: datetime | None = Field(
        default=None,
        description="实际完成时间（仅 completed 状态）",
    )
    worker_status: WorkerStatus | None = Field(
        default=None,
        description="被评估工人在该任务上的状态",
    )

    @model_validator(mode="after")
    def _check_actual_completion(self) -> "Task":
        if (
            self.actual_completion_date_time is not None
            and self.status != WorkStatus.COMPLETED
        ):
            raise ValueError(
                f"Task {self.id}: actual_completion_date_time requires status "
                f"'completed', got '{self.status.value}'"
            )
        return self

    @model_validator(mode="after")
    def _check_timezones(self) -> "Task":
        check_same_awareness(
            f"Task {self.id}",
            start_date_time=self.start_date_time,
            completion_date_time=self.completion_date_time,
            actual_completion_date_time=self.actual_completion_date_time,
        )
        return self
