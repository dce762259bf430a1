"""structlog 配置 -- 由 TaskFlowConfig 决定渲染模式与级别

dev：控制台彩色输出；json：每行一个 JSON 对象，异常展开为结构化 traceback。
请求日志由 RequestLogMiddleware 的 request_completed 事件记录，
uvicorn 自带的 access log 降到 WARNING 以免重复。
"""

import logging

import structlog
from taskflow.core.config import TaskFlowConfig

SHARED_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
)


def _render_chain(log_format: str) -> list[structlog.types.Processor]:
    """最终渲染前的处理器：json 模式展开异常，dev 模式交给 ConsoleRenderer"""
    if log_format == "json":
        return [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        structlog.dev.ConsoleRenderer(),
    ]


def setup_logging(config: TaskFlowConfig) -> None:
    """配置 structlog 与标准库 logging 共用一个 handler"""
    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=_render_chain(config.log_format),
            foreign_pre_chain=list(SHARED_PROCESSORS),
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    level = logging.getLevelNamesMapping().get(config.log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
