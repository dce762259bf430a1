"""依赖注入模块 -- 通过 FastAPI Depends 注入配置与报告构建器

实例在 create_app() 中创建并挂到 app.state。
"""

from fastapi import Request
from taskflow.core.config import TaskFlowConfig
from taskflow.scoring import ProjectReportBuilder


def get_config(request: Request) -> TaskFlowConfig:
    """从 app.state 获取 TaskFlowConfig"""
    return request.app.state.config


def get_report_builder(request: Request) -> ProjectReportBuilder:
    """从 app.state 获取 ProjectReportBuilder"""
    return request.app.state.report_builder
