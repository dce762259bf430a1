"""TaskFlowConfig + load_config 单元测试"""

import pytest
from pydantic import ValidationError
from taskflow.core.config import TaskFlowConfig, load_config

ENV_VARS = [
    "TASKFLOW_LOG_FORMAT",
    "TASKFLOW_LOG_LEVEL",
    "TASKFLOW_TOP_WORKER_LIMIT",
    "TASKFLOW_MAX_PROJECTS_PER_REQUEST",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestTaskFlowConfig:
    """TaskFlowConfig 数据模型测试"""

    def test_default_values(self):
        """默认值验证"""
        config = TaskFlowConfig()
        assert config.log_format == "dev"
        assert config.log_level == "INFO"
        assert config.top_worker_limit == 5
        assert config.max_projects_per_request == 500

    def test_limits_must_be_positive(self):
        """数量上限至少为 1"""
        with pytest.raises(ValidationError):
            TaskFlowConfig(top_worker_limit=0)
        with pytest.raises(ValidationError):
            TaskFlowConfig(max_projects_per_request=0)


class TestLoadConfig:
    """load_config() 环境变量映射测试"""

    def test_default_when_no_env(self):
        """无环境变量时使用默认值"""
        assert load_config() == TaskFlowConfig()

    def test_env_mapping(self, monkeypatch):
        """环境变量映射到对应字段"""
        monkeypatch.setenv("TASKFLOW_LOG_FORMAT", "json")
        monkeypatch.setenv("TASKFLOW_LOG_LEVEL", "debug")
        monkeypatch.setenv("TASKFLOW_TOP_WORKER_LIMIT", "3")
        monkeypatch.setenv("TASKFLOW_MAX_PROJECTS_PER_REQUEST", "20")

        config = load_config()
        assert config.log_format == "json"
        assert config.log_level == "DEBUG"
        assert config.top_worker_limit == 3
        assert config.max_projects_per_request == 20

    def test_invalid_int_falls_back(self, monkeypatch):
        """非整数值回退默认值，不阻塞启动"""
        monkeypatch.setenv("TASKFLOW_TOP_WORKER_LIMIT", "many")
        monkeypatch.setenv("TASKFLOW_MAX_PROJECTS_PER_REQUEST", "1e3")

        config = load_config()
        assert config.top_worker_limit == 5
        assert config.max_projects_per_request == 500

    def test_invalid_log_format_falls_back(self, monkeypatch):
        """未知日志格式回退 dev"""
        monkeypatch.setenv("TASKFLOW_LOG_FORMAT", "xml")
        assert load_config().log_format == "dev"

    @pytest.mark.parametrize(
        ("env_var", "value"),
        [
            ("TASKFLOW_TOP_WORKER_LIMIT", "0"),
            ("TASKFLOW_MAX_PROJECTS_PER_REQUEST", "-1"),
        ],
    )
    def test_below_minimum_falls_back(self, monkeypatch, env_var, value):
        """小于 1 的整数同样回退默认值"""
        monkeypatch.setenv(env_var, value)

        config = load_config()
        assert config.top_worker_limit == 5
        assert config.max_projects_per_request == 500
