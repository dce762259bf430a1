"""Project Domain Model -- Project -> Phase -> Task 层级的根

worker_status 取代旧的 additionalInfo['workerStatus']：
当 Project 作为某个工人的履历传入时，表示该工人在此项目上的状态。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .dates import check_same_awareness
from .enums import WorkerStatus, WorkStatus
from .phase import Phase
from .task import Task


class Project(BaseModel):
    """Project 数据模型"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="项目 ID")
    name: str = Field(description="项目名称")
    budget: float = Field(default=0.0, ge=0.0, description="项目预算")
    start_date_time: datetime = Field(description="计划开始时间")
    completion_date_time: datetime = Field(description="计划完成时间")
    actual_completion_date_time: datetime | None = Field(
        default=None,
        description="实际完成时间",
    )
    status: WorkStatus = Field(default=WorkStatus.PENDING, description="项目状态")
    phases: list[Phase] = Field(default_factory=list, description="有序阶段列表")
    worker_status: WorkerStatus | None = Field(
        default=None,
        description="被评估工人在该项目上的状态",
    )

    @model_validator(mode="after")
    def _check_timezones(self) -> "Project":
        check_same_awareness(
            f"Project {self.id}",
            start_date_time=self.start_date_time,
            completion_date_time=self.completion_date_time,
            actual_completion_date_time=self.actual_completion_date_time,
        )
        return self

    @property
    def tasks(self) -> list[Task]:
        """所有阶段的任务，按阶段顺序、阶段内任务顺序展开"""
        return [task for phase in self.phases for task in phase.tasks]
