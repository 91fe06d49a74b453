import pytest

from required_labels.comments import CommentManager
from required_labels.context import marker_token
from required_labels.types.evaluation import CommentAction, RunContext, StatusComment

MARKER = marker_token("CI", "labels", "check")

def make_ctx():
    return RunContext(
        owner="org",
        repo="repo",
        issue_number=7,
        marker=MARKER,
    )

@pytest.mark.asyncio
async def test_failure_creates_marked_comment(fake_gh):
    manager = CommentManager(fake_gh, make_ctx())
    action = await manager.report_failure("Label error")
    assert action is CommentAction.CREATED
    assert len(fake_gh.comments) == 1
    assert fake_gh.comments[0].body == MARKER + "Label error"
    assert fake_gh.comments[0].body.startswith("<!-- CI/labels/check -->\n")

@pytest.mark.asyncio
async def test_repeated_failure_updates_same_comment(fake_gh):
    manager = CommentManager(fake_gh, make_ctx())
    await manager.report_failure("first")
    first_id = fake_gh.comments[0].id

    action = await manager.report_failure("second")
    assert action is CommentAction.UPDATED
    assert [c.id for c in fake_gh.comments] == [first_id]
    assert fake_gh.comments[0].body == MARKER + "second"

@pytest.mark.asyncio
async def test_pass_after_failure_removes_comment(fake_gh):
    manager = CommentManager(fake_gh, make_ctx())
    await manager.report_failure("broken")

    assert await manager.clear() is CommentAction.DELETED
    assert await manager.clear() is CommentAction.UNCHANGED
    assert not [c for c in fake_gh.comments if MARKER in c.body]

@pytest.mark.asyncio
async def test_other_comments_are_left_alone(fake_gh):
    fake_gh.comments = [
        StatusComment(id=1, body="LGTM"),
        StatusComment(id=2, body="<!-- Other/job/step -->\nnot ours"),
    ]
    manager = CommentManager(fake_gh, make_ctx())
    await manager.report_failure("broken")
    await manager.clear()
    assert [c.id for c in fake_gh.comments] == [1, 2]

@pytest.mark.asyncio
async def test_first_marked_comment_wins(fake_gh):
    fake_gh.comments = [
        StatusComment(id=10, body=MARKER + "old"),
        StatusComment(id=11, body=MARKER + "duplicate"),
    ]
    manager = CommentManager(fake_gh, make_ctx())
    await manager.report_failure("new")
    assert fake_gh.comments[0].body == MARKER + "new"
    assert fake_gh.comments[1].body == MARKER + "duplicate"

@pytest.mark.asyncio
async def test_disabled_manager_never_calls_api(fake_gh):
    manager = CommentManager(fake_gh, make_ctx(), enabled=False)
    assert await manager.sync(passed=False, message="broken") is CommentAction.SKIPPED
    assert await manager.sync(passed=True) is CommentAction.SKIPPED
    assert fake_gh.calls == []
