"""评分结果模型 -- 每次计算生成的新值，不缓存、不修改

Python 属性使用 snake_case；序列化为 JSON API 响应时使用 camelCase alias：
    result.model_dump(mode="json", by_alias=True)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ScoreModel(BaseModel):
    """所有结果模型的基类：只读 + camelCase alias"""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ----------------------------------------------------------------------
# Task Scorer
# ----------------------------------------------------------------------


class TaskScore(ScoreModel):
    """单个任务的评分明细"""

    task_id: str
    priority: str
    status: str
    priority_weight: float
    status_multiplier: float
    time_multiplier: float
    time_performance: str = Field(description="early / onTime / late / 空字符串")
    weighted_score: float
    max_possible_score: float = Field(description="满状态 + 提前完成奖励的理论上限")


# ----------------------------------------------------------------------
# 通用分布
# ----------------------------------------------------------------------


class CountShare(ScoreModel):
    """计数 + 占比"""

    count: int = 0
    percentage: float = 0.0
    display_name: str = ""


class PriorityShare(CountShare):
    """优先级计数 + 占比 + 进度权重"""

    weight: float = 0.0


class CombinationCell(ScoreModel):
    """状态 x 优先级交叉表的单元格"""

    count: int = 0
    percentage: float = 0.0


# ----------------------------------------------------------------------
# Progress Aggregator
# ----------------------------------------------------------------------


class PhaseProgress(ScoreModel):
    """单个阶段的进度"""

    phase_id: str
    phase_name: str
    total_tasks: int
    completed_tasks: int
    cancelled_tasks: int
    weighted_progress: float
    simple_progress: float
    status_breakdown: dict[str, CountShare]
    priority_breakdown: dict[str, PriorityShare]


class ProjectProgress(ScoreModel):
    """项目整体进度 -- 阶段加权 + 状态/优先级分布 + 提示"""

    overall_score: float = 0.0
    performance_grade: str = "N/A"
    progress_percentage: float = 0.0
    simple_progress_percentage: float = 0.0
    weighted_progress: float = 0.0
    total_tasks: int = 0
    status_breakdown: dict[str, CountShare] = Field(default_factory=dict)
    priority_breakdown: dict[str, PriorityShare] = Field(default_factory=dict)
    combination_breakdown: dict[str, dict[str, CombinationCell]] = Field(
        default_factory=dict
    )
    phase_breakdown: list[PhaseProgress] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


# ----------------------------------------------------------------------
# Worker Performance
# ----------------------------------------------------------------------


class TimeDistribution(ScoreModel):
    """已完成任务的时效分布"""

    early: int = 0
    on_time: int = 0
    late: int = 0


class TaskMetrics(ScoreModel):
    """任务层面的原始得分"""

    total_tasks: int = 0
    raw_score: float = 0.0
    max_possible_score: float = 0.0
    base_score: float = Field(default=0.0, description="扣罚前的归一化得分 (0-100)")
    time_performance: TimeDistribution = Field(default_factory=TimeDistribution)


class PenaltyBreakdown(ScoreModel):
    """终止（terminated）扣分明细"""

    terminated_projects: int = 0
    terminated_tasks: int = 0
    project_termination_penalty: float = 0.0
    task_termination_penalty: float = 0.0
    total_penalty: float = 0.0


class WorkerProjectMetrics(ScoreModel):
    """项目层面的辅助指标，不参与得分"""

    total_projects: int = 0
    projects_by_status: dict[str, int] = Field(default_factory=dict)
    project_completion_rates: list[float] = Field(default_factory=list)
    average_project_completion: float = 0.0
    average_tasks_per_project: float = 0.0


class WorkerPerformance(ScoreModel):
    """工人综合绩效"""

    overall_score: float = 0.0
    performance_grade: str = "N/A"
    total_tasks: int = 0
    total_projects: int = 0
    task_metrics: TaskMetrics = Field(default_factory=TaskMetrics)
    penalties: PenaltyBreakdown = Field(default_factory=PenaltyBreakdown)
    project_metrics: WorkerProjectMetrics = Field(default_factory=WorkerProjectMetrics)
    insights: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


# ----------------------------------------------------------------------
# Project Manager Performance
# ----------------------------------------------------------------------


class CompletionMetric(ScoreModel):
    """项目交付完成度"""

    score: float = 0.0
    status_breakdown: dict[str, int] = Field(default_factory=dict)
    description: str = "Project delivery and completion effectiveness"


class DeliveryDistribution(ScoreModel):
    """已完成项目的交付时效分布"""

    early_delivery: int = 0
    on_time: int = 0
    late: int = 0
    severely_late: int = 0


class TimeManagementMetric(ScoreModel):
    """按时交付记录"""

    score: float = 0.0
    completed_projects: int = 0
    time_performance: DeliveryDistribution = Field(default_factory=DeliveryDistribution)
    description: str = "On-time project delivery track record"


class ProgressDistribution(ScoreModel):
    """项目进度分档"""

    high_progress: int = 0
    moderate_progress: int = 0
    low_progress: int = 0
    minimal_progress: int = 0


class ProgressMetric(ScoreModel):
    """项目实际进度"""

    score: float = 0.0
    evaluated_projects: int = 0
    progress_distribution: ProgressDistribution = Field(
        default_factory=ProgressDistribution
    )
    description: str = "Actual task completion progress across all managed projects"


class ManagerMetrics(ScoreModel):
    project_completion: CompletionMetric = Field(default_factory=CompletionMetric)
    time_management: TimeManagementMetric = Field(default_factory=TimeManagementMetric)
    project_progress: ProgressMetric = Field(default_factory=ProgressMetric)


class ProjectStatistics(ScoreModel):
    """所管理项目的统计"""

    total: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)
    total_budget: float = 0.0
    average_budget: float = 0.0
    total_tasks: int = 0
    average_tasks_per_project: float = 0.0


class ManagerPerformance(ScoreModel):
    """项目经理综合绩效"""

    overall_score: float = 0.0
    performance_grade: str = "N/A"
    total_projects: int = 0
    metrics: ManagerMetrics = Field(default_factory=ManagerMetrics)
    statistics: ProjectStatistics = Field(default_factory=ProjectStatistics)
    insights: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


# ----------------------------------------------------------------------
# Project Report
# ----------------------------------------------------------------------


class ProjectSummary(ScoreModel):
    id: str
    name: str
    status: str
    budget: float
    start_date_time: datetime
    completion_date_time: datetime
    actual_completion_date_time: datetime | None = None


class PhaseTimelineEntry(ScoreModel):
    """阶段时间线条目"""

    phase_id: str
    phase_name: str
    status: str
    start_date_time: datetime | None = None
    completion_date_time: datetime | None = None
    total_tasks: int = 0
    weighted_progress: float = 0.0


class TopWorker(ScoreModel):
    worker_id: str
    name: str
    overall_score: float
    performance_grade: str
    total_projects: int


class ProjectReport(ScoreModel):
    """项目报告 -- 进度、阶段时间线、按月任务数、工人统计、top workers"""

    project: ProjectSummary
    progress: ProjectProgress
    phase_timeline: list[PhaseTimelineEntry] = Field(default_factory=list)
    periodic_task_count: dict[int, dict[int, int]] = Field(default_factory=dict)
    total_workers: int = 0
    worker_statistics: dict[str, CountShare] = Field(default_factory=dict)
    top_workers: list[TopWorker] = Field(default_factory=list)
