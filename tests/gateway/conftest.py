"""gateway 测试配置 -- FastAPI app + httpx AsyncClient"""

import logging
from collections.abc import AsyncGenerator

import pytest_asyncio
import structlog
from httpx import ASGITransport, AsyncClient
from taskflow.core.config import TaskFlowConfig


@pytest_asyncio.fixture
async def config() -> TaskFlowConfig:
    """测试用配置，测试可覆盖此 fixture"""
    return TaskFlowConfig()


@pytest_asyncio.fixture
async def app(config: TaskFlowConfig):
    """创建测试用 FastAPI app 实例"""
    from taskflow.gateway.main import create_app

    application = create_app(config)
    yield application

    # 恢复日志配置
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
