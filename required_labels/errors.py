"""Error kinds raised while checking labels.

Every failure the entry point knows how to report derives from
``LabelCheckError``; ``kind`` lets callers branch without matching on
message text. A label count that misses the threshold is not an error: it is
an ``EvaluationResult`` with ``passed=False``.
"""


class LabelCheckError(Exception):
    kind = "unknown"


class ConfigurationError(LabelCheckError):
    """Bad or missing action input."""

    kind = "configuration"


class IdentityError(LabelCheckError):
    """The issue / pull request number could not be determined."""

    kind = "identity"


class PatternError(LabelCheckError):
    """A label pattern is not a valid regular expression."""

    kind = "pattern"

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid label pattern [{pattern}]: {reason}")
        self.pattern = pattern


class PlatformError(LabelCheckError):
    """The GitHub API call failed."""

    kind = "platform"

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code
