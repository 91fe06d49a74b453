import asyncio
import os
from typing import Any, Dict, Mapping, Optional

from .comments import CommentManager
from .config import ActionInputs, Settings, parse_count
from .context import resolve_context
from .errors import ConfigurationError, LabelCheckError
from .evaluator import evaluate
from .github import GitHubClient
from .matcher import intersect
from .patterns import normalize_patterns
from .reporter import Reporter
from .templating import render
from .types.evaluation import ComparisonMode, ExitType, IssuesApi, MatchMode


async def check_labels(
    s: Settings,
    env: Mapping[str, str],
    reporter: Reporter,
    gh: Optional[IssuesApi] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    inputs = ActionInputs.from_env(env)
    match_mode = MatchMode.REGEX if inputs.use_regex else MatchMode.EXACT

    reporter.debug(f"gather labels: {inputs.labels}")
    patterns = normalize_patterns(inputs.labels, inputs.use_regex)

    ctx = resolve_context(s, payload)

    client = None
    if gh is None:
        client = gh = GitHubClient(
            inputs.token,
            base_url=s.GITHUB_API_URL,
            timeout=s.HTTP_TIMEOUT,
            max_attempts=s.HTTP_ATTEMPTS,
        )
    comments = CommentManager(gh, ctx, enabled=inputs.add_comment)

    try:
        # bad mode / exit_type / count still go through the comment path
        try:
            mode = ComparisonMode.parse(inputs.mode)
            exit_type = ExitType.parse(inputs.exit_type)
            count = parse_count(inputs.count)
        except ConfigurationError as e:
            severity = ExitType.SUCCESS if inputs.exit_type == ExitType.SUCCESS.value else ExitType.FAILURE
            await comments.report_failure(str(e))
            reporter.report_failure(str(e), severity)
            return

        # read from the API rather than the event payload in case an earlier
        # step changed the labels
        reporter.debug(f"fetch the labels for {ctx.repo_full_name}#{ctx.issue_number} using the API")
        applied = await gh.list_labels(ctx.owner, ctx.repo, ctx.issue_number)

        intersection = intersect(applied, patterns, match_mode)
        result = evaluate(intersection, count, mode)
        print(f"[labels] matched [{', '.join(result.intersection)}], requires {mode.value} {count}")

        message = ""
        if not result.passed:
            message = render(inputs.message, {
                "mode": mode.value,
                "count": count,
                "errorString": result.violated_mode,
                "provided": ", ".join(patterns),
                "applied": ", ".join(applied),
            })

        action = await comments.sync(result.passed, message)
        reporter.debug(f"status comment: {action.value}")

        if result.passed:
            reporter.report_success(result.intersection)
        else:
            reporter.report_failure(message, exit_type)
    finally:
        if client is not None:
            await client.close()


async def run(
    s: Settings,
    env: Mapping[str, str],
    gh: Optional[IssuesApi] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> Reporter:
    reporter = Reporter(s.GITHUB_OUTPUT)
    try:
        await check_labels(s, env, reporter, gh=gh, payload=payload)
    except LabelCheckError as e:
        reporter.set_failed(str(e))
    except Exception as e:
        reporter.set_failed(str(e) or type(e).__name__)
    return reporter


def main() -> int:
    try:
        s = Settings()
    except ConfigurationError as e:
        reporter = Reporter(os.getenv("GITHUB_OUTPUT", ""))
        reporter.set_failed(str(e))
        return reporter.exit_code
    reporter = asyncio.run(run(s, os.environ))
    return reporter.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
