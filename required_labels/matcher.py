import re
from typing import List, Sequence, Tuple

from .errors import PatternError
from .types.evaluation import MatchMode


def compile_patterns(patterns: Sequence[str]) -> List["re.Pattern[str]"]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, re.IGNORECASE))
        except re.error as e:
            raise PatternError(pattern, str(e)) from e
    return compiled


def match_exact(applied: Sequence[str], patterns: Sequence[str]) -> Tuple[str, ...]:
    # keyed by pattern: reports the pattern text, in pattern order
    lowered = {label.lower() for label in applied}
    return tuple(p for p in patterns if p.lower() in lowered)


def match_regex(applied: Sequence[str], patterns: Sequence[str]) -> Tuple[str, ...]:
    # keyed by label: reports the applied label, in label order
    compiled = compile_patterns(patterns)
    return tuple(
        label for label in applied
        if any(rx.search(label) for rx in compiled)
    )


def intersect(applied: Sequence[str], patterns: Sequence[str], mode: MatchMode) -> Tuple[str, ...]:
    if mode is MatchMode.REGEX:
        return match_regex(applied, patterns)
    return match_exact(applied, patterns)
