"""CLI 入口模块 -- python -m taskflow.scoring <command> <snapshot.json>

支持的命令：
  worker    工人绩效（projects 快照）
  manager   项目经理绩效（projects 快照）
  progress  项目进度（phases 快照）
  report    项目报告（report 快照）
"""

import json
import logging
import sys

import structlog
from pydantic import BaseModel
from taskflow.core.config import load_config

from .exceptions import ScoringError
from .manager import ProjectManagerPerformanceCalculator
from .progress import ProjectProgressCalculator
from .report import ProjectReportBuilder
from .snapshot import load_snapshot
from .worker import WorkerPerformanceCalculator

COMMANDS = {
    "worker": "工人绩效（projects 快照）",
    "manager": "项目经理绩效（projects 快照）",
    "progress": "项目进度（phases 快照）",
    "report": "项目报告（report 快照）",
}


def _print_usage() -> None:
    print("用法: python -m taskflow.scoring <command> <snapshot.json>")
    print("命令:")
    for name, description in COMMANDS.items():
        print(f"  {name:<9} {description}")


def _configure_logging() -> None:
    """CLI 日志输出到 stderr，stdout 只保留 JSON 结果"""
    level = getattr(logging, load_config().log_level, logging.INFO)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def run(command: str, snapshot_path: str) -> BaseModel:
    """执行单个命令并返回结果模型"""
    if command in ("worker", "manager"):
        snapshot = load_snapshot(snapshot_path, "projects")
        if command == "worker":
            return WorkerPerformanceCalculator.calculate(snapshot.projects)
        return ProjectManagerPerformanceCalculator.calculate(snapshot.projects)

    if command == "progress":
        snapshot = load_snapshot(snapshot_path, "phases")
        return ProjectProgressCalculator.calculate(snapshot.phases)

    if command == "report":
        snapshot = load_snapshot(snapshot_path, "report")
        builder = ProjectReportBuilder(top_worker_limit=load_config().top_worker_limit)
        return builder.build(snapshot.project, snapshot.workers)

    raise ValueError(f"Unknown command: {command}")


def main(argv: list[str] | None = None) -> int:
    """CLI 主入口，返回退出码"""
    args = sys.argv[1:] if argv is None else argv

    if len(args) != 2:
        _print_usage()
        return 1

    command, snapshot_path = args
    if command not in COMMANDS:
        print(f"未知命令: {command}")
        print(f"可用命令: {', '.join(COMMANDS)}")
        return 1

    _configure_logging()

    try:
        result = run(command, snapshot_path)
    except ScoringError as e:
        print(f"错误: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
