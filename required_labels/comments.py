from typing import Optional

from .types.evaluation import CommentAction, IssuesApi, RunContext, StatusComment


class CommentManager:
    """Keeps at most one marked status comment on the issue.

    The comment is found by the marker token embedded at the start of its
    body. A failing run creates it or rewrites it in place; a passing run
    deletes it. Find-then-act is not atomic, so two runs racing on the same
    issue can still both create a comment.
    """

    def __init__(self, gh: IssuesApi, ctx: RunContext, enabled: bool = True):
        self._gh = gh
        self._ctx = ctx
        self._enabled = enabled

    def body_for(self, message: str) -> str:
        return f"{self._ctx.marker}{message}"

    async def find(self) -> Optional[StatusComment]:
        comments = await self._gh.list_comments(self._ctx.owner, self._ctx.repo, self._ctx.issue_number)
        for comment in comments:
            if self._ctx.marker in comment.body:
                return comment
        return None

    async def report_failure(self, message: str) -> CommentAction:
        if not self._enabled:
            return CommentAction.SKIPPED

        body = self.body_for(message)
        existing = await self.find()
        if existing is not None:
            await self._gh.update_comment(self._ctx.owner, self._ctx.repo, existing.id, body)
            print(f"[comments] updated comment {existing.id} on {self._ctx.repo_full_name}#{self._ctx.issue_number}")
            return CommentAction.UPDATED

        created = await self._gh.create_comment(self._ctx.owner, self._ctx.repo, self._ctx.issue_number, body)
        print(f"[comments] created comment {created.id} on {self._ctx.repo_full_name}#{self._ctx.issue_number}")
        return CommentAction.CREATED

    async def clear(self) -> CommentAction:
        if not self._enabled:
            return CommentAction.SKIPPED

        existing = await self.find()
        if existing is None:
            return CommentAction.UNCHANGED

        await self._gh.delete_comment(self._ctx.owner, self._ctx.repo, existing.id)
        print(f"[comments] deleted comment {existing.id} on {self._ctx.repo_full_name}#{self._ctx.issue_number}")
        return CommentAction.DELETED

    async def sync(self, passed: bool, message: str = "") -> CommentAction:
        if passed:
            return await self.clear()
        return await self.report_failure(message)
