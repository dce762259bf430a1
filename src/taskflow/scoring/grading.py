"""绩效等级 -- 工人与项目经理共用的 9 档划分"""

NO_GRADE = "N/A"

# (下限, 等级) 按下限降序排列，低于最后一档为 F
GRADE_BANDS: tuple[tuple[float, str], ...] = (
    (90.0, "A+ (Exceptional)"),
    (85.0, "A (Excellent)"),
    (80.0, "B+ (Very Good)"),
    (75.0, "B (Good)"),
    (70.0, "C+ (Above Average)"),
    (65.0, "C (Average)"),
    (60.0, "D+ (Below Average)"),
    (50.0, "D (Poor)"),
)
FAILING_GRADE = "F (Failing)"


def performance_grade(score: float) -> str:
    """将 0-100 得分映射为等级"""
    for floor, grade in GRADE_BANDS:
        if score >= floor:
            return grade
    return FAILING_GRADE
