"""FastAPI 应用主文件

app 创建：配置加载 + 日志初始化 + 中间件 + 路由注册。
评分引擎是纯计算，没有需要在 lifespan 中打开或关闭的资源。
"""

import structlog
from fastapi import FastAPI
from taskflow.core.config import TaskFlowConfig, load_config
from taskflow.scoring import InvalidInputError, ProjectReportBuilder

from .errors import invalid_input_handler
from .middleware.logging_config import setup_logging
from .middleware.logging_mw import RequestLogMiddleware
from .routes import health, performance, projects

log = structlog.get_logger()


def create_app(config: TaskFlowConfig | None = None) -> FastAPI:
    """创建 FastAPI 应用实例

    Args:
        config: 应用配置，None 时从环境变量加载
    """
    if config is None:
        config = load_config()

    app = FastAPI(
        title="TaskFlow Scoring Gateway",
        version="0.1.0",
        description="TaskFlow 绩效与进度评分 API",
    )

    # 初始化日志
    setup_logging(config)

    app.state.config = config
    app.state.report_builder = ProjectReportBuilder(
        top_worker_limit=config.top_worker_limit
    )

    app.add_middleware(RequestLogMiddleware)
    app.add_exception_handler(InvalidInputError, invalid_input_handler)

    # 注册路由
    app.include_router(performance.router, tags=["performance"])
    app.include_router(projects.router, tags=["projects"])
    app.include_router(health.router, tags=["health"])

    log.info(
        "gateway_created",
        log_format=config.log_format,
        top_worker_limit=config.top_worker_limit,
        max_projects_per_request=config.max_projects_per_request,
    )
    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
