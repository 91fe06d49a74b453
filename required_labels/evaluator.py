from typing import Optional, Sequence

from .types.evaluation import ComparisonMode, EvaluationResult

VIOLATION_LABELS = {
    ComparisonMode.EXACTLY: "exactly",
    ComparisonMode.MINIMUM: "at least",
    ComparisonMode.MAXIMUM: "at most",
}


def find_violation(size: int, count: int, mode: ComparisonMode) -> Optional[str]:
    if mode is ComparisonMode.EXACTLY:
        failed = size != count
    elif mode is ComparisonMode.MINIMUM:
        failed = size < count
    else:
        failed = size > count
    return VIOLATION_LABELS[mode] if failed else None


def evaluate(intersection: Sequence[str], count: int, mode: ComparisonMode) -> EvaluationResult:
    violated = find_violation(len(intersection), count, mode)
    return EvaluationResult(
        intersection=tuple(intersection),
        passed=violated is None,
        violated_mode=violated,
    )
