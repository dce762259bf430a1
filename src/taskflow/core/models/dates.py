"""日期校验 -- 同一实体内的时间必须同为 naive 或同为 aware

naive 与 aware datetime 无法比较或相减，混用会让评分计算在运行时失败，
因此在模型校验阶段拒绝。
"""

from datetime import datetime


def is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


def check_same_awareness(owner: str, **dates: datetime | None) -> None:
    """校验给定时间的时区感知一致

    Args:
        owner: 实体描述，用于错误信息，如 "Task t-1"
        dates: 字段名 -> 时间，None 忽略

    Raises:
        ValueError: 同时存在 naive 与 aware 时间
    """
    present = {name: value for name, value in dates.items() if value is not None}
    aware = sorted(name for name, value in present.items() if is_aware(value))
    if aware and len(aware) != len(present):
        naive = sorted(set(present) - set(aware))
        raise ValueError(
            f"{owner}: cannot mix timezone-aware ({', '.join(aware)}) "
            f"and naive ({', '.join(naive)}) datetimes"
        )
