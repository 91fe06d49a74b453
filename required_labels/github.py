import asyncio
import random
import httpx
from typing import Any, Dict, List, Optional

from .errors import PlatformError
from .types.evaluation import StatusComment

GITHUB_API = "https://api.github.com"
PER_PAGE = 100


def _is_retryable(resp: httpx.Response) -> bool:
    if resp.status_code == 429 or 500 <= resp.status_code < 600:
        return True
    # 403 is only transient when it is a rate limit; a bad token stays bad
    if resp.status_code == 403:
        return (
            resp.headers.get("Retry-After") is not None
            or resp.headers.get("X-RateLimit-Remaining") == "0"
        )
    return False


def _retry_after(resp: httpx.Response) -> Optional[float]:
    # only the delay-seconds form; an HTTP-date falls back to backoff
    try:
        return float(resp.headers["Retry-After"])
    except (KeyError, ValueError):
        return None


def _json(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError as e:
        raise PlatformError(
            f"{resp.request.method} {resp.request.url} returned a non-JSON body",
            status_code=resp.status_code,
        ) from e


class GitHubClient:
    def __init__(
        self,
        token: str,
        base_url: str = GITHUB_API,
        timeout: float = 15.0,
        max_attempts: int = 4,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._max_attempts = max(1, max_attempts)
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        delay = 1.0
        for attempt in range(self._max_attempts):
            try:
                resp = await self._client.request(method, url, params=params, json=json)
            except httpx.HTTPError as e:
                raise PlatformError(f"{method} {url} failed: {e}") from e

            if resp.is_success:
                return resp

            # backoff on rate limit / transient errors
            if _is_retryable(resp) and attempt + 1 < self._max_attempts:
                sleep_s = _retry_after(resp)
                if sleep_s is None:
                    sleep_s = delay + random.uniform(0, delay * 0.25)
                await asyncio.sleep(sleep_s)
                delay *= 2
                continue
            break

        message = resp.reason_phrase
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            message = body["message"]
        raise PlatformError(
            f"{method} {url} returned {resp.status_code}: {message}",
            status_code=resp.status_code,
        )

    async def paginate(self, url: str, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        items: List[Any] = []
        next_url: Optional[str] = url
        next_params = dict(params or {})
        next_params.setdefault("per_page", PER_PAGE)
        while next_url:
            resp = await self.request("GET", next_url, params=next_params)
            items.extend(_json(resp))
            # the next link already carries the query string
            next_url = resp.links.get("next", {}).get("url")
            next_params = None
        return items

    async def list_labels(self, owner: str, repo: str, issue_number: int) -> List[str]:
        data = await self.paginate(f"/repos/{owner}/{repo}/issues/{issue_number}/labels")
        return [label["name"] for label in data]

    async def list_comments(self, owner: str, repo: str, issue_number: int) -> List[StatusComment]:
        data = await self.paginate(f"/repos/{owner}/{repo}/issues/{issue_number}/comments")
        return [StatusComment(id=int(c["id"]), body=c.get("body") or "") for c in data]

    async def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> StatusComment:
        resp = await self.request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            json={"body": body},
        )
        data = _json(resp)
        return StatusComment(id=int(data["id"]), body=data.get("body") or body)

    async def update_comment(self, owner: str, repo: str, comment_id: int, body: str) -> StatusComment:
        resp = await self.request(
            "PATCH",
            f"/repos/{owner}/{repo}/issues/comments/{comment_id}",
            json={"body": body},
        )
        data = _json(resp)
        return StatusComment(id=int(data["id"]), body=data.get("body") or body)

    async def delete_comment(self, owner: str, repo: str, comment_id: int) -> None:
        await self.request("DELETE", f"/repos/{owner}/{repo}/issues/comments/{comment_id}")
