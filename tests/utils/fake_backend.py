import asyncio
import json
from typing import List, Optional

import httpx


def unauthorized_body(message: str = "Token expired") -> dict:
    return {"success": False, "error": {"code": "UNAUTHORIZED", "message": message}}


class FakeBackend:
    """httpx.MockTransport handler imitating the tournament backend.

    Accepts ``Bearer <valid_token>`` and answers 401 to anything else. Every
    response is produced after a yield to the event loop so that concurrent
    requests are all in flight before the first 401 comes back.
    """

    def __init__(
        self,
        valid_token: Optional[str] = "fresh",
        refresh_status: int = 200,
        refresh_body: Optional[dict] = None,
        refresh_delay: float = 0.05,
    ):
        self.valid_token = valid_token
        self.refresh_status = refresh_status
        self.refresh_body = refresh_body or {
            "success": True,
            "data": {"accessToken": "fresh", "refreshToken": "valid-2"},
        }
        self.refresh_delay = refresh_delay
        self.requests: List[httpx.Request] = []
        self.refresh_calls: List[dict] = []
        self.refresh_requests: List[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/auth/refresh-token"):
            self.refresh_requests.append(request)
            self.refresh_calls.append(json.loads(request.content))
            await asyncio.sleep(self.refresh_delay)
            return httpx.Response(self.refresh_status, json=self.refresh_body)

        self.requests.append(request)
        await asyncio.sleep(0)
        if self.valid_token and request.headers.get("Authorization") == f"Bearer {self.valid_token}":
            return httpx.Response(200, json={"success": True, "data": {"path": request.url.path}})
        return httpx.Response(401, json=unauthorized_body())

    def authorizations(self) -> List[Optional[str]]:
        return [r.headers.get("Authorization") for r in self.requests]
