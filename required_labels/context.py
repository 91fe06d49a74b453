import json
import re
from pathlib import Path
from typing import Any, Dict, Optional

from .config import Settings
from .errors import ConfigurationError, IdentityError
from .types.evaluation import RunContext

# e.g. refs/heads/gh-readonly-queue/main/pr-17-a3c310584587d4b97c2df0cb46fe050cc46a15d6
_MERGE_QUEUE_RE = re.compile(r"pr-(\d+)-")


def marker_token(workflow: str, job: str, action: str) -> str:
    """Hidden comment that identifies this step's status comment."""
    return f"<!-- {workflow}/{job}/{action} -->\n"


def load_event(event_path: str) -> Dict[str, Any]:
    if not event_path:
        return {}
    try:
        return json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def issue_number_from_event(payload: Dict[str, Any]) -> Optional[int]:
    for key in ("issue", "pull_request"):
        number = (payload.get(key) or {}).get("number")
        if number:
            return int(number)
    number = payload.get("number")
    return int(number) if number else None


def issue_number_from_merge_queue_ref(ref: str) -> int:
    last_part = ref.split("/")[-1]
    m = _MERGE_QUEUE_RE.search(last_part)
    if not m:
        raise IdentityError(f"Unable to parse a pull request number from merge queue ref [{ref}]")
    return int(m.group(1))


def resolve_context(s: Settings, payload: Optional[Dict[str, Any]] = None) -> RunContext:
    if payload is None:
        payload = load_event(s.GITHUB_EVENT_PATH)

    if "/" not in s.GITHUB_REPOSITORY:
        raise ConfigurationError(f"GITHUB_REPOSITORY must be owner/repo, got [{s.GITHUB_REPOSITORY}]")
    owner, repo = s.GITHUB_REPOSITORY.split("/", 1)

    issue_number = issue_number_from_event(payload)
    if issue_number is None and s.GITHUB_EVENT_NAME == "merge_group":
        issue_number = issue_number_from_merge_queue_ref(s.GITHUB_REF)
        print(f"[labels] merge_group event detected and issue_number parsed as {issue_number}")
    if issue_number is None:
        raise IdentityError(f"No issue or pull request number found for event [{s.GITHUB_EVENT_NAME}]")

    return RunContext(
        owner=owner,
        repo=repo,
        issue_number=issue_number,
        marker=marker_token(s.GITHUB_WORKFLOW, s.GITHUB_JOB, s.GITHUB_ACTION),
    )
