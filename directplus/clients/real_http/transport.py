"""
Real Direct Plus HTTP transport.

Used when the gateway talks to the Paybox platforms.
"""

from __future__ import annotations

from typing import Dict, Optional

import httpx

from directplus.contracts.interfaces import Transport


class HttpxTransport(Transport):
    def __init__(
        self,
        timeout_seconds: float = 20.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self._client = client

    async def post(self, url: str, body: str) -> bytes:
        headers: Dict[str, str] = {"Content-Type": "application/x-www-form-urlencoded"}

        if self._client is not None:
            response = await self._client.post(url, content=body, headers=headers)
            response.raise_for_status()
            return response.content

        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            response = await client.post(url, content=body, headers=headers)
            response.raise_for_status()
            return response.content
