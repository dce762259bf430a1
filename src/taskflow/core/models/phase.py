"""Phase Domain Model -- 项目内的有序阶段

阶段起止时间必须落在所属项目范围内，由上游 CRUD 层校验，此处不检查。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .dates import check_same_awareness
from .enums import WorkStatus
from .task import Task


class Phase(BaseModel):
    """Phase 数据模型"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="阶段 ID")
    name: str = Field(description="阶段名称")
    status: WorkStatus = Field(default=WorkStatus.PENDING, description="阶段状态")
    start_date_time: datetime | None = Field(default=None, description="计划开始时间")
    completion_date_time: datetime | None = Field(default=None, description="计划完成时间")
    tasks: list[Task] = Field(default_factory=list, description="有序任务列表")

    @model_validator(mode="after")
    def _check_timezones(self) -> "Phase":
        check_same_awareness(
            f"Phase {self.id}",
            start_date_time=self.start_date_time,
            completion_date_time=self.completion_date_time,
        )
        return self
