import re
from typing import List, Tuple

_SEPARATOR_RE = re.compile(r"[,\n]")


def normalize_patterns(raw: str, use_regex: bool) -> Tuple[str, ...]:
    """Split the ``labels`` input into an ordered tuple of patterns.

    Regular expressions may contain commas, so in regex mode only newlines
    separate patterns and each line is kept as written. Exact names may be
    separated by commas or newlines and are trimmed. Blank entries and repeats
    are dropped in both modes.
    """
    if use_regex:
        tokens = raw.split("\n")
    else:
        tokens = [t.strip() for t in _SEPARATOR_RE.split(raw)]

    patterns: List[str] = []
    for token in tokens:
        if not token.strip() or token in patterns:
            continue
        patterns.append(token)
    return tuple(patterns)
