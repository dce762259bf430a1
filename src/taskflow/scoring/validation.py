"""输入校验 -- 将调用方传入的对象规范化为只读实体

已是实体的对象原样返回；dict 等映射通过 model_validate 校验，
校验失败包装为 InvalidInputError（保留原始 ValidationError 作为 __cause__）。
"""

from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from taskflow.core.models import Phase, Project, Worker

from .exceptions import InvalidInputError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _coerce(model: type[ModelT], items: Iterable[Any] | None, label: str) -> list[ModelT]:
    if items is None:
        return []

    result: list[ModelT] = []
    for index, item in enumerate(items):
        if isinstance(item, model):
            result.append(item)
            continue
        try:
            result.append(model.model_validate(item))
        except ValidationError as e:
            raise InvalidInputError(
                f"Invalid {label} at index {index}: {e.error_count()} validation error(s)",
                errors=e.errors(include_url=False),
            ) from e
    return result


def coerce_projects(projects: Iterable[Any] | None) -> list[Project]:
    """规范化项目集合"""
    return _coerce(Project, projects, "project")


def coerce_phases(phases: Iterable[Any] | None) -> list[Phase]:
    """规范化阶段集合"""
    return _coerce(Phase, phases, "phase")


def coerce_workers(workers: Iterable[Any] | None) -> list[Worker]:
    """规范化工人集合"""
    return _coerce(Worker, workers, "worker")


def coerce_project(project: Any) -> Project:
    """规范化单个项目"""
    return _coerce(Project, [project], "project")[0]
