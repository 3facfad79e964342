"""Data models for link checking and reconciliation."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class LinkCheckResult(BaseModel):
    """Result of probing one URL."""

    url: str = Field(..., description="URL that was checked")
    status: int = Field(0, description="Final HTTP status, 0 if no response")
    ok: bool = Field(False, description="Whether the URL is reachable")
    redirected: bool = Field(False, description="Whether redirects were followed")
    final_url: Optional[str] = Field(None, description="URL after redirects")
    error: Optional[str] = Field(None, description="Error message if the check failed")


class Replacement(BaseModel):
    """Result of looking for a working variant of a dead URL."""

    found: bool = Field(..., description="Whether a working variant was found")
    new_url: Optional[str] = Field(None, description="Replacement URL")
    method: Optional[str] = Field(None, description="Which rewrite produced it")
    suggestions: List[str] = Field(default_factory=list, description="Manual lookup URLs")
    error: Optional[str] = Field(None, description="Error message if lookup failed")


class UrlOutcome(BaseModel):
    """What happened to one broken URL."""

    url: str = Field(..., description="Broken URL")
    status: int = Field(0, description="Status observed by the liveness check")
    fixed: bool = Field(False, description="Whether the URL was replaced in the file")
    new_url: Optional[str] = Field(None, description="Replacement URL")
    method: Optional[str] = Field(None, description="Which rewrite produced the replacement")
    suggestions: List[str] = Field(default_factory=list, description="Manual lookup URLs")
    error: Optional[str] = Field(None, description="Liveness check error")


class FileReport(BaseModel):
    """Reconciliation result for one article file."""

    file: str = Field(..., description="Article file name")
    urls_checked: int = Field(0, description="Unique external URLs checked")
    broken: int = Field(0, description="URLs that failed the liveness check")
    fixed: int = Field(0, description="Broken URLs replaced in the file")
    urls: List[UrlOutcome] = Field(default_factory=list, description="Broken URL details")
    error: Optional[str] = Field(None, description="File-level error")

    @property
    def still_broken(self) -> int:
        return self.broken - self.fixed


class ReconcileSummary(BaseModel):
    """Aggregate counts across all files."""

    total_articles: int = 0
    total_urls: int = 0
    total_broken: int = 0
    total_fixed: int = 0
    still_broken: int = 0
    file_errors: int = 0


class ReconcileReport(BaseModel):
    """The url-validation report."""

    timestamp: datetime = Field(..., description="When the run finished")
    summary: ReconcileSummary = Field(..., description="Aggregate counts")
    details: List[FileReport] = Field(default_factory=list, description="Per-file results")
