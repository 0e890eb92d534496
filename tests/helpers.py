"""Test helpers for gw2palette.

HTTP traffic goes through FakeSession, an in-memory stand-in for
aiohttp.ClientSession that records every request and replays queued
responses per URL.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

from gw2palette.shared.constants import HTTPStatusCodes

API_URL = "https://api.guildwars2.com"
GUARDIAN_URL = f"{API_URL}/v2/professions/Guardian"
WARRIOR_URL = f"{API_URL}/v2/professions/Warrior"

GUARDIAN_RESPONSE: dict[str, Any] = {
    "id": "Guardian",
    "name": "Guardian",
    "skills_by_palette": [
        [1, 12343],
        [2, 12417],
        [3, 12371],
        [999, None],
    ],
}

WARRIOR_RESPONSE: dict[str, Any] = {
    "id": "Warrior",
    "name": "Warrior",
    "skills_by_palette": [
        [1, 14401],
        [2, 14405],
    ],
}


class FakeResponse:
    """Canned response usable as ``async with session.get(...) as response``."""

    def __init__(
        self,
        status: int = HTTPStatusCodes.OK,
        body: Any = None,
        *,
        reason: str = "OK",
        raw: str | None = None,
        delay: float = 0.0,
        error: BaseException | None = None,
    ) -> None:
        self.status = status
        self.reason = reason
        self._body = body
        self._raw = raw
        self._delay = delay
        self._error = error

    async def __aenter__(self) -> FakeResponse:
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def json(self, content_type: str | None = "application/json") -> Any:
        if self._raw is not None:
            return json.loads(self._raw)
        return self._body


class FakeSession:
    """Records GET requests and replays queued responses per URL.

    The last queued response for a URL is repeated; unknown URLs get a 404.
    """

    def __init__(self) -> None:
        self.closed = False
        self.requests: list[tuple[str, dict[str, str]]] = []
        self._routes: dict[str, list[FakeResponse]] = {}

    def add(self, url: str, *responses: FakeResponse) -> None:
        self._routes.setdefault(url, []).extend(responses)

    def add_json(self, url: str, body: Any, status: int = HTTPStatusCodes.OK) -> None:
        self.add(url, FakeResponse(status=status, body=body))

    def get(self, url: str, headers: dict[str, str] | None = None, **kwargs: Any) -> FakeResponse:
        self.requests.append((url, dict(headers or {})))
        queue = self._routes.get(url)
        if not queue:
            return FakeResponse(status=HTTPStatusCodes.NOT_FOUND, reason="Not Found", body={"text": "no such id"})
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def request_count(self, url: str | None = None) -> int:
        if url is None:
            return len(self.requests)
        return sum(1 for requested, _ in self.requests if requested == url)

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
