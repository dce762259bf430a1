"""快照信封 -- HTTP 请求体与 CLI 输入文件共用的数据结构

ProjectsSnapshot: {"projects": [...]}            -> worker / manager
PhasesSnapshot:   {"phases": [...]}              -> progress
ReportSnapshot:   {"project": {...}, "workers": [...]} -> report
"""

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError
from taskflow.core.models import Phase, Project, Worker

from .exceptions import InvalidInputError, SnapshotError

SnapshotKind = Literal["projects", "phases", "report"]


class ProjectsSnapshot(BaseModel):
    """项目集合快照"""

    projects: list[Project] = Field(default_factory=list, description="项目列表")


class PhasesSnapshot(BaseModel):
    """单个项目的阶段快照"""

    phases: list[Phase] = Field(default_factory=list, description="有序阶段列表")


class ReportSnapshot(BaseModel):
    """项目报告快照"""

    project: Project = Field(description="报告项目")
    workers: list[Worker] = Field(default_factory=list, description="项目工人")


SNAPSHOT_MODELS: dict[str, type[BaseModel]] = {
    "projects": ProjectsSnapshot,
    "phases": PhasesSnapshot,
    "report": ReportSnapshot,
}


def load_snapshot(path: str | Path, kind: SnapshotKind) -> BaseModel:
    """读取并校验 JSON 快照文件

    Args:
        path: 快照文件路径
        kind: 快照类型（projects / phases / report）

    Returns:
        对应的快照模型实例

    Raises:
        SnapshotError: 文件不可读或不是合法 JSON
        InvalidInputError: JSON 内容无法校验为快照模型
    """
    model = SNAPSHOT_MODELS.get(kind)
    if model is None:
        raise ValueError(f"Unknown snapshot kind: {kind}")

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotError(str(path), e) from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError(
            f"Invalid {kind} snapshot {path}: {e.error_count()} validation error(s)",
            errors=e.errors(include_url=False),
        ) from e
