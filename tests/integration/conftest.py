"""集成测试配置 -- 完整 app（环境变量配置）+ AsyncClient"""

import logging
from collections.abc import AsyncGenerator

import pytest_asyncio
import structlog
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def integration_app(monkeypatch):
    """通过环境变量配置的 app 实例"""
    monkeypatch.setenv("TASKFLOW_LOG_FORMAT", "json")
    monkeypatch.setenv("TASKFLOW_TOP_WORKER_LIMIT", "2")
    monkeypatch.setenv("TASKFLOW_MAX_PROJECTS_PER_REQUEST", "50")

    from taskflow.gateway.main import create_app

    app = create_app()
    yield app

    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
