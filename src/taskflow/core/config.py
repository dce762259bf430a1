"""TaskFlowConfig -- 配置加载

从环境变量加载配置，无效值记录 warning 并回退默认值，不阻塞启动。
"""

import os
from typing import Literal

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

# 报告中默认展示的绩效最佳工人数量
DEFAULT_TOP_WORKER_LIMIT = 5

# 单次请求允许提交的项目数量上限
DEFAULT_MAX_PROJECTS_PER_REQUEST = 500

LOG_FORMATS = ("dev", "json")


class TaskFlowConfig(BaseModel):
    """TaskFlow 配置 -- 从环境变量加载

    环境变量:
        TASKFLOW_LOG_FORMAT: 日志渲染模式（dev/json）
        TASKFLOW_LOG_LEVEL: 日志级别（默认 INFO）
        TASKFLOW_TOP_WORKER_LIMIT: 报告 top workers 数量（默认 5）
        TASKFLOW_MAX_PROJECTS_PER_REQUEST: 单次请求项目上限（默认 500）
    """

    log_format: Literal["dev", "json"] = Field(
        default="dev",
        description="日志渲染模式：dev / json",
    )
    log_level: str = Field(default="INFO", description="日志级别")
    top_worker_limit: int = Field(
        default=DEFAULT_TOP_WORKER_LIMIT,
        ge=1,
        description="报告中展示的 top workers 数量",
    )
    max_projects_per_request: int = Field(
        default=DEFAULT_MAX_PROJECTS_PER_REQUEST,
        ge=1,
        description="单次请求允许的项目数量上限",
    )


def _int_from_env(env_var: str, fallback: int, minimum: int = 1) -> int | None:
    """读取整数环境变量，非整数或小于 minimum 时记录 warning 并返回 None"""
    val = os.environ.get(env_var)
    if not val:
        return None
    try:
        parsed = int(val)
    except ValueError:
        parsed = None

    if parsed is None or parsed < minimum:
        log.warning(
            "invalid_int_config",
            env_var=env_var,
            value=val,
            minimum=minimum,
            fallback=fallback,
        )
        return None
    return parsed


def load_config() -> TaskFlowConfig:
    """从环境变量加载 TaskFlow 配置

    环境变量映射:
        TASKFLOW_LOG_FORMAT -> log_format (默认 "dev")
        TASKFLOW_LOG_LEVEL -> log_level (默认 "INFO")
        TASKFLOW_TOP_WORKER_LIMIT -> top_worker_limit (默认 5)
        TASKFLOW_MAX_PROJECTS_PER_REQUEST -> max_projects_per_request (默认 500)

    Returns:
        TaskFlowConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKFLOW_LOG_FORMAT"):
        if val in LOG_FORMATS:
            kwargs["log_format"] = val
        else:
            log.warning("invalid_log_format_config", value=val, fallback="dev")

    if val := os.environ.get("TASKFLOW_LOG_LEVEL"):
        kwargs["log_level"] = val.upper()

    limit = _int_from_env("TASKFLOW_TOP_WORKER_LIMIT", DEFAULT_TOP_WORKER_LIMIT)
    if limit is not None:
        kwargs["top_worker_limit"] = limit

    max_projects = _int_from_env(
        "TASKFLOW_MAX_PROJECTS_PER_REQUEST", DEFAULT_MAX_PROJECTS_PER_REQUEST
    )
    if max_projects is not None:
        kwargs["max_projects_per_request"] = max_projects

    return TaskFlowConfig(**kwargs)
