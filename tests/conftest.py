from typing import List

import pytest

from required_labels.types.evaluation import StatusComment


class FakeGitHub:
    def __init__(self, labels=None, comments=None):
        self.labels: List[str] = list(labels or [])
        self.comments: List[StatusComment] = list(comments or [])
        self.calls: List[str] = []
        self._next_id = 1000

    async def list_labels(self, owner, repo, issue_number):
        self.calls.append("list_labels")
        return list(self.labels)

    async def list_comments(self, owner, repo, issue_number):
        self.calls.append("list_comments")
        return list(self.comments)

    async def create_comment(self, owner, repo, issue_number, body):
        self.calls.append("create_comment")
        self._next_id += 1
        comment = StatusComment(id=self._next_id, body=body)
        self.comments.append(comment)
        return comment

    async def update_comment(self, owner, repo, comment_id, body):
        self.calls.append("update_comment")
        updated = StatusComment(id=comment_id, body=body)
        self.comments = [updated if c.id == comment_id else c for c in self.comments]
        return updated

    async def delete_comment(self, owner, repo, comment_id):
        self.calls.append("delete_comment")
        self.comments = [c for c in self.comments if c.id != comment_id]


@pytest.fixture
def fake_gh():
    return FakeGitHub()
