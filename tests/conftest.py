"""全局 pytest 配置 -- 实体构造 fixture

所有日期为 naive datetime，与调用方保持一致即可。
"""

import copy
from datetime import datetime

import pytest
from taskflow.core.models import (
    Phase,
    Project,
    Task,
    TaskPriority,
    WorkerStatus,
    WorkStatus,
)

START = datetime(2024, 1, 1)
PLANNED = datetime(2024, 1, 10)


@pytest.fixture
def make_task():
    """Task 工厂：make_task("completed", "high", actual=...)"""
    counter = iter(range(1, 10_000))

    def _make(
        status: str = WorkStatus.PENDING,
        priority: str = TaskPriority.MEDIUM,
        *,
        start: datetime = START,
        planned: datetime = PLANNED,
        actual: datetime | None = None,
        worker_status: WorkerStatus | None = None,
    ) -> Task:
        n = next(counter)
        return Task(
            id=f"task-{n}",
            name=f"Task {n}",
            priority=priority,
            status=status,
            start_date_time=start,
            completion_date_time=planned,
            actual_completion_date_time=actual,
            worker_status=worker_status,
        )

    return _make


@pytest.fixture
def make_phase():
    """Phase 工厂：make_phase([task, ...])"""
    counter = iter(range(1, 10_000))

    def _make(tasks: list[Task] | None = None, status: str = WorkStatus.ON_GOING) -> Phase:
        n = next(counter)
        return Phase(id=f"phase-{n}", name=f"Phase {n}", status=status, tasks=tasks or [])

    return _make


@pytest.fixture
def make_project():
    """Project 工厂：make_project("completed", phases=[...], actual=...)"""
    counter = iter(range(1, 10_000))

    def _make(
        status: str = WorkStatus.ON_GOING,
        *,
        phases: list[Phase] | None = None,
        start: datetime = START,
        planned: datetime = datetime(2024, 1, 31),
        actual: datetime | None = None,
        budget: float = 0.0,
        worker_status: WorkerStatus | None = None,
    ) -> Project:
        n = next(counter)
        return Project(
            id=f"project-{n}",
            name=f"Project {n}",
            budget=budget,
            start_date_time=start,
            completion_date_time=planned,
            actual_completion_date_time=actual,
            status=status,
            phases=phases or [],
            worker_status=worker_status,
        )

    return _make


@pytest.fixture
def project_payload() -> dict:
    """JSON 形式的单个项目（HTTP / CLI 快照用）"""
    return {
        "id": "p-1",
        "name": "Warehouse Fit-out",
        "budget": 120000,
        "start_date_time": "2024-01-01T00:00:00",
        "completion_date_time": "2024-03-31T00:00:00",
        "status": "on_going",
        "phases": [
            {
                "id": "ph-1",
                "name": "Design",
                "status": "completed",
                "start_date_time": "2024-01-01T00:00:00",
                "completion_date_time": "2024-01-31T00:00:00",
                "tasks": [
                    {
                        "id": "t-1",
                        "name": "Floor plan",
                        "priority": "high",
                        "status": "completed",
                        "start_date_time": "2024-01-02T00:00:00",
                        "completion_date_time": "2024-01-10T00:00:00",
                        "actual_completion_date_time": "2024-01-08T00:00:00",
                    },
                    {
                        "id": "t-2",
                        "name": "Lighting plan",
                        "priority": "medium",
                        "status": "completed",
                        "start_date_time": "2024-01-05T00:00:00",
                        "completion_date_time": "2024-01-20T00:00:00",
                        "actual_completion_date_time": "2024-01-20T12:00:00",
                    },
                ],
            },
            {
                "id": "ph-2",
                "name": "Build",
                "status": "on_going",
                "start_date_time": "2024-02-01T00:00:00",
                "completion_date_time": "2024-03-31T00:00:00",
                "tasks": [
                    {
                        "id": "t-3",
                        "name": "Shelving",
                        "priority": "high",
                        "status": "on_going",
                        "start_date_time": "2024-02-01T00:00:00",
                        "completion_date_time": "2024-02-28T00:00:00",
                    },
                    {
                        "id": "t-4",
                        "name": "Signage",
                        "priority": "low",
                        "status": "cancelled",
                        "start_date_time": "2024-03-01T00:00:00",
                        "completion_date_time": "2024-03-15T00:00:00",
                    },
                ],
            },
        ],
    }


def _with_utc_offset(node):
    """把所有 *_date_time 字段改为带 UTC 偏移的 ISO 字符串"""
    if isinstance(node, list):
        for item in node:
            _with_utc_offset(item)
    elif isinstance(node, dict):
        for key, value in node.items():
            if key.endswith("_date_time") and isinstance(value, str):
                node[key] = f"{value}+00:00"
            else:
                _with_utc_offset(value)
    return node


@pytest.fixture
def aware_project_payload(project_payload) -> dict:
    """与 project_payload 相同，但所有时间为 aware (UTC)"""
    return _with_utc_offset(copy.deepcopy(project_payload))


@pytest.fixture
def mixed_tz_task() -> dict:
    """计划时间 naive、实际完成时间 aware 的任务"""
    return {
        "id": "t-mixed",
        "name": "Mixed timezone",
        "priority": "high",
        "status": "completed",
        "start_date_time": "2024-01-01T00:00:00",
        "completion_date_time": "2024-01-10T00:00:00",
        "actual_completion_date_time": "2024-01-08T00:00:00Z",
    }
