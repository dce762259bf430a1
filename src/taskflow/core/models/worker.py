"""Worker Read Model -- 项目报告中的工人视图

project_history 取代旧的 additionalInfo['projectHistory']，
每个 Project 的 worker_status 描述该工人在对应项目上的状态。
"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import WorkerStatus
from .project import Project


class Worker(BaseModel):
    """工人及其项目履历"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="工人 ID")
    name: str = Field(description="工人姓名")
    status: WorkerStatus = Field(
        default=WorkerStatus.ASSIGNED,
        description="在当前报告项目上的状态",
    )
    project_history: list[Project] = Field(
        default_factory=list,
        description="参与过的项目（用于绩效计算）",
    )
