import uuid
from typing import Sequence

from .types.evaluation import ExitType


def escape_data(value: str) -> str:
    # https://docs.github.com/actions/using-workflows/workflow-commands-for-github-actions
    return str(value).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class Reporter:
    """Talks to the runner: workflow commands on stdout, outputs to $GITHUB_OUTPUT."""

    def __init__(self, output_path: str = ""):
        self._output_path = output_path
        self.outputs = {}
        self.failed = False

    def debug(self, message: str) -> None:
        print(f"::debug::{escape_data(message)}")

    def warning(self, message: str) -> None:
        print(f"::warning::{escape_data(message)}")

    def set_failed(self, message: str) -> None:
        self.failed = True
        print(f"::error::{escape_data(message)}")

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value
        if not self._output_path:
            print(f"{name}={value}")
            return
        with open(self._output_path, "a", encoding="utf-8") as f:
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                f.write(f"{name}={value}\n")

    def report_success(self, intersection: Sequence[str]) -> None:
        self.set_output("labels", ",".join(intersection))
        self.set_output("status", "success")

    def report_failure(self, message: str, exit_type: ExitType) -> None:
        self.set_output("status", "failure")
        if exit_type is ExitType.SUCCESS:
            self.warning(message)
            return
        self.set_failed(message)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0
