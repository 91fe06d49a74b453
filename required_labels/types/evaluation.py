from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Tuple

from ..errors import ConfigurationError


class MatchMode(Enum):
    EXACT = "exact"
    REGEX = "regex"


class ComparisonMode(Enum):
    EXACTLY = "exactly"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"

    @classmethod
    def parse(cls, raw: str) -> "ComparisonMode":
        for mode in cls:
            if mode.value == raw:
                return mode
        allowed = ", ".join(m.value for m in cls)
        raise ConfigurationError(f"Unknown mode input [{raw}]. Must be one of: {allowed}")


class ExitType(Enum):
    SUCCESS = "success"
    FAILURE = "failure"

    @classmethod
    def parse(cls, raw: str) -> "ExitType":
        for exit_type in cls:
            if exit_type.value == raw:
                return exit_type
        allowed = ", ".join(e.value for e in cls)
        raise ConfigurationError(f"Unknown exit_code input [{raw}]. Must be one of: {allowed}")


class CommentAction(Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class EvaluationResult:
    intersection: Tuple[str, ...]
    passed: bool
    violated_mode: Optional[str] = None


@dataclass(frozen=True)
class StatusComment:
    id: int
    body: str


@dataclass(frozen=True)
class RunContext:
    owner: str
    repo: str
    issue_number: int
    marker: str

    @property
    def repo_full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class IssuesApi(Protocol):
    async def list_labels(self, owner: str, repo: str, issue_number: int) -> List[str]:
        ...

    async def list_comments(self, owner: str, repo: str, issue_number: int) -> List[StatusComment]:
        ...

    async def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> StatusComment:
        ...

    async def update_comment(self, owner: str, repo: str, comment_id: int, body: str) -> StatusComment:
        ...

    async def delete_comment(self, owner: str, repo: str, comment_id: int) -> None:
        ...
