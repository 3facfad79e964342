"""URL liveness checker."""

import asyncio
from typing import List, Optional

import httpx

from ..config.models import DEFAULT_USER_AGENT
from .models import LinkCheckResult


class LivenessChecker:
    """Classify URLs as reachable or not.

    Each check issues a HEAD request and, only if that request fails to
    complete, retries once with GET for servers that reject HEAD. Redirects
    are followed and every request is bounded by ``timeout``.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize liveness checker.

        Args:
            timeout: Per-request timeout in seconds
            user_agent: User-Agent header sent with every request
            transport: Optional transport override (used by tests)
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    def client(self) -> httpx.AsyncClient:
        """Create a client configured for liveness checks."""
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
            transport=self.transport,
        )

    async def _request(self, method: str, url: str) -> LinkCheckResult:
        # Only the status line matters; the body is never read.
        async with self.client() as client:
            async with client.stream(method, url) as response:
                return LinkCheckResult(
                    url=url,
                    status=response.status_code,
                    ok=200 <= response.status_code < 400,
                    redirected=bool(response.history),
                    final_url=str(response.url),
                )

    async def _timed_request(self, method: str, url: str) -> LinkCheckResult:
        """Request with a deadline covering the whole exchange, redirects included."""
        return await asyncio.wait_for(self._request(method, url), self.timeout)

    async def check(self, url: str) -> LinkCheckResult:
        """Check a single URL. Never raises."""
        try:
            return await self._timed_request("HEAD", url)
        except (httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError):
            pass

        try:
            return await self._timed_request("GET", url)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            return LinkCheckResult(url=url, error="Request timed out")
        except httpx.HTTPError as e:
            return LinkCheckResult(url=url, error=str(e) or type(e).__name__)
        except Exception as e:
            return LinkCheckResult(url=url, error=f"Unexpected error: {e}")

    async def check_many(self, urls: List[str]) -> List[LinkCheckResult]:
        """Check URLs concurrently, results in input order."""
        return list(await asyncio.gather(*(self.check(url) for url in urls)))
