import os
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

if not os.getenv("GITHUB_ACTIONS"):
    load_dotenv(override=False)

_COUNT_RE = re.compile(r"[0-9]+")

DEFAULT_MESSAGE = (
    "Label error. Requires {{ errorString }} {{ count }} of: {{ provided }}. "
    "Found: {{ applied }}"
)


def _env_number(env: Mapping[str, str], key: str, default: str, cast: Callable[[str], Any]) -> Any:
    raw = env.get(key, default)
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid {key} [{raw}]. Must be a number") from None


class Settings:
    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        env = os.environ if environ is None else environ
        self.GITHUB_API_URL = env.get("GITHUB_API_URL", "https://api.github.com")
        self.GITHUB_REPOSITORY = env.get("GITHUB_REPOSITORY", "")
        self.GITHUB_EVENT_NAME = env.get("GITHUB_EVENT_NAME", "")
        self.GITHUB_EVENT_PATH = env.get("GITHUB_EVENT_PATH", "")
        self.GITHUB_REF = env.get("GITHUB_REF", "")
        self.GITHUB_WORKFLOW = env.get("GITHUB_WORKFLOW", "")
        self.GITHUB_JOB = env.get("GITHUB_JOB", "")
        self.GITHUB_ACTION = env.get("GITHUB_ACTION", "")
        self.GITHUB_OUTPUT = env.get("GITHUB_OUTPUT", "")
        self.HTTP_TIMEOUT = _env_number(env, "REQUIRED_LABELS_HTTP_TIMEOUT", "15", float)
        self.HTTP_ATTEMPTS = _env_number(env, "REQUIRED_LABELS_HTTP_ATTEMPTS", "4", int)


def get_input(env: Mapping[str, str], name: str, required: bool = False) -> str:
    # runner exposes `with:` values as INPUT_<NAME>, spaces become underscores
    key = "INPUT_" + name.replace(" ", "_").upper()
    value = (env.get(key) or "").strip()
    if required and not value:
        raise ConfigurationError(f"Input required and not supplied: {name}")
    return value


def parse_bool(raw: str) -> bool:
    # anything other than the literal "true" is false
    return raw == "true"


@dataclass(frozen=True)
class ActionInputs:
    token: str
    mode: str
    count: str
    exit_type: str
    add_comment: bool
    use_regex: bool
    labels: str
    message: str

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "ActionInputs":
        return cls(
            token=get_input(env, "token", required=True),
            mode=get_input(env, "mode", required=True),
            count=get_input(env, "count", required=True),
            exit_type=get_input(env, "exit_type") or "failure",
            add_comment=parse_bool(get_input(env, "add_comment")),
            use_regex=parse_bool(get_input(env, "use_regex")),
            labels=get_input(env, "labels", required=True),
            message=get_input(env, "message") or DEFAULT_MESSAGE,
        )


def parse_count(raw: str) -> int:
    # plain ASCII digits only; int() would also take "+3", "1_0" and other scripts
    if not _COUNT_RE.fullmatch(raw):
        raise ConfigurationError(f"Invalid count input [{raw}]. Must be a non-negative integer")
    return int(raw)
