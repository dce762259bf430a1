"""评分路由测试

POST /api/performance/worker | manager, /api/projects/progress | report
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient
from taskflow.core.config import TaskFlowConfig


class TestWorkerPerformance:
    """POST /api/performance/worker"""

    async def test_worker_performance(self, client: AsyncClient, project_payload):
        """返回 camelCase 的工人绩效"""
        resp = await client.post(
            "/api/performance/worker", json={"projects": [project_payload]}
        )
        assert resp.status_code == 200

        data = resp.json()
        assert data["overallScore"] == pytest.approx(68.45)
        assert data["performanceGrade"] == "C (Average)"
        assert data["taskMetrics"]["timePerformance"] == {"early": 1, "onTime": 1, "late": 0}

    async def test_empty_projects(self, client: AsyncClient):
        """空列表返回 N/A 而非错误"""
        resp = await client.post("/api/performance/worker", json={"projects": []})
        assert resp.status_code == 200
        assert resp.json()["performanceGrade"] == "N/A"

    async def test_unknown_status_rejected(self, client: AsyncClient, project_payload):
        """未知状态返回 422"""
        project_payload["status"] = "archived"
        resp = await client.post(
            "/api/performance/worker", json={"projects": [project_payload]}
        )
        assert resp.status_code == 422


class TestManagerPerformance:
    """POST /api/performance/manager"""

    async def test_manager_performance(self, client: AsyncClient, project_payload):
        """返回项目经理绩效"""
        resp = await client.post(
            "/api/performance/manager", json={"projects": [project_payload]}
        )
        assert resp.status_code == 200

        data = resp.json()
        assert data["metrics"]["projectCompletion"]["score"] == pytest.approx(60.0)
        assert data["metrics"]["projectProgress"]["score"] == pytest.approx(68.75)
        assert data["overallScore"] == pytest.approx(45.06)


class TestProjectLimit:
    """单次请求项目上限"""

    @pytest_asyncio.fixture
    async def config(self) -> TaskFlowConfig:
        return TaskFlowConfig(max_projects_per_request=1)

    @pytest.mark.parametrize("path", ["/api/performance/worker", "/api/performance/manager"])
    async def test_too_many_projects(self, client: AsyncClient, project_payload, path):
        """超过上限返回 413 + 统一错误格式"""
        resp = await client.post(path, json={"projects": [project_payload, project_payload]})
        assert resp.status_code == 413
        assert resp.json()["error"]["code"] == "TOO_MANY_PROJECTS"

    async def test_at_limit_accepted(self, client: AsyncClient, project_payload):
        """等于上限时正常处理"""
        resp = await client.post(
            "/api/performance/worker", json={"projects": [project_payload]}
        )
        assert resp.status_code == 200


class TestProjectRoutes:
    """POST /api/projects/progress | report"""

    async def test_progress(self, client: AsyncClient, project_payload):
        """项目进度"""
        resp = await client.post(
            "/api/projects/progress", json={"phases": project_payload["phases"]}
        )
        assert resp.status_code == 200

        data = resp.json()
        assert data["progressPercentage"] == pytest.approx(68.75)
        assert data["simpleProgressPercentage"] == pytest.approx(66.67)
        assert len(data["phaseBreakdown"]) == 2
        assert data["combinationBreakdown"]["completed"]["high"]["count"] == 1

    async def test_progress_without_phases(self, client: AsyncClient):
        """无阶段时返回说明"""
        resp = await client.post("/api/projects/progress", json={"phases": []})
        assert resp.status_code == 200
        assert resp.json()["insights"] == ["No phases found in project"]

    async def test_report(self, client: AsyncClient, project_payload):
        """项目报告"""
        workers = [
            {"id": "w-1", "name": "Ada", "project_history": [project_payload]},
            {"id": "w-2", "name": "Bo", "status": "terminated"},
        ]
        resp = await client.post(
            "/api/projects/report", json={"project": project_payload, "workers": workers}
        )
        assert resp.status_code == 200

        data = resp.json()
        assert data["project"]["name"] == "Warehouse Fit-out"
        assert data["totalWorkers"] == 2
        assert data["workerStatistics"]["terminated"]["count"] == 1
        assert [w["workerId"] for w in data["topWorkers"]] == ["w-1", "w-2"]
        assert data["periodicTaskCount"]["2024"] == {"1": 2, "2": 1, "3": 1}


class TestTopWorkerLimit:
    """报告 top workers 数量来自配置"""

    @pytest_asyncio.fixture
    async def config(self) -> TaskFlowConfig:
        return TaskFlowConfig(top_worker_limit=1)

    async def test_limit_applied(self, client: AsyncClient, project_payload):
        workers = [
            {"id": "w-1", "name": "Ada"},
            {"id": "w-2", "name": "Bo"},
        ]
        resp = await client.post(
            "/api/projects/report", json={"project": project_payload, "workers": workers}
        )
        assert resp.status_code == 200
        assert len(resp.json()["topWorkers"]) == 1


class TestTimezones:
    """aware / 混用时区的请求体"""

    async def test_aware_dates(self, client: AsyncClient, aware_project_payload):
        """aware 时间正常评分"""
        resp = await client.post(
            "/api/performance/worker", json={"projects": [aware_project_payload]}
        )
        assert resp.status_code == 200
        assert resp.json()["overallScore"] == pytest.approx(68.45)

    async def test_aware_report_dates_serialized_with_offset(
        self, client: AsyncClient, aware_project_payload
    ):
        """报告中的时间保留 UTC 偏移"""
        resp = await client.post(
            "/api/projects/report", json={"project": aware_project_payload}
        )
        assert resp.status_code == 200
        assert resp.json()["project"]["startDateTime"] == "2024-01-01T00:00:00Z"

    @pytest.mark.parametrize("path", ["/api/performance/worker", "/api/performance/manager"])
    async def test_mixed_timezones_rejected(
        self, client: AsyncClient, project_payload, mixed_tz_task, path
    ):
        """混用 naive / aware 时间返回 422 而不是 500"""
        project_payload["phases"][0]["tasks"].append(mixed_tz_task)

        resp = await client.post(path, json={"projects": [project_payload]})
        assert resp.status_code == 422
