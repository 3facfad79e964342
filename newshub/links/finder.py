"""Replacement finder for dead URLs."""

from typing import List, Optional, Tuple
from urllib.parse import quote, urlsplit, urlunsplit

import httpx

from .checker import LivenessChecker
from .models import Replacement

WAYBACK_AVAILABILITY_URL = "https://archive.org/wayback/available"
WAYBACK_LOOKUP_URL = "https://web.archive.org/web/*/{url}"
SEARCH_URL = "https://www.google.com/search?q={query}"


def url_variants(url: str) -> List[Tuple[str, str]]:
    """Mechanical rewrites of a URL, in the order they are tried."""
    parts = urlsplit(url)
    if not parts.netloc:
        return []

    variants = []
    if parts.scheme == "https":
        variants.append(("scheme", urlunsplit(parts._replace(scheme="http"))))
    elif parts.scheme == "http":
        variants.append(("scheme", urlunsplit(parts._replace(scheme="https"))))

    if parts.netloc.lower().startswith("www."):
        variants.append(("strip-www", urlunsplit(parts._replace(netloc=parts.netloc[4:]))))
    else:
        variants.append(("add-www", urlunsplit(parts._replace(netloc="www." + parts.netloc))))

    return variants


def manual_lookup_hints(url: str, context: str = "") -> List[str]:
    """Search and archive URLs for looking up a replacement by hand."""
    try:
        host = urlsplit(url).hostname or url
    except ValueError:
        host = url
    query = f"{host} {context}".strip()
    return [
        SEARCH_URL.format(query=quote(query, safe="")),
        WAYBACK_LOOKUP_URL.format(url=url),
    ]


class ReplacementFinder:
    """Try a fixed sequence of rewrites and keep the first that is reachable."""

    def __init__(self, checker: LivenessChecker) -> None:
        self.checker = checker

    async def lookup_archive(self, url: str) -> Optional[str]:
        """Closest web-archive snapshot of ``url``, if the archive has one."""
        try:
            async with self.checker.client() as client:
                response = await client.get(WAYBACK_AVAILABILITY_URL, params={"url": url})
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError):
            return None

        if not isinstance(data, dict):
            return None
        closest = (data.get("archived_snapshots") or {}).get("closest") or {}
        if closest.get("available") and closest.get("url"):
            return closest["url"]
        return None

    async def find(self, url: str, context: str = "") -> Replacement:
        """Find a working replacement for a URL known to be unreachable."""
        try:
            variants = url_variants(url)
        except ValueError as e:
            return Replacement(found=False, error=str(e), suggestions=manual_lookup_hints(url, context))

        tried = {url}
        for method, candidate in variants:
            if candidate in tried:
                continue
            tried.add(candidate)

            result = await self.checker.check(candidate)
            new_url = result.final_url or candidate
            if result.ok and new_url != url:
                return Replacement(found=True, new_url=new_url, method=method)

        snapshot = await self.lookup_archive(url)
        if snapshot and snapshot not in tried:
            result = await self.checker.check(snapshot)
            if result.ok:
                return Replacement(found=True, new_url=result.final_url or snapshot, method="archive")

        return Replacement(found=False, suggestions=manual_lookup_hints(url, context))
