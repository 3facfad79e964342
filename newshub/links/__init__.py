"""URL liveness checking and reconciliation."""

from .checker import LivenessChecker
from .finder import ReplacementFinder, manual_lookup_hints, url_variants
from .models import (
    FileReport,
    LinkCheckResult,
    ReconcileReport,
    ReconcileSummary,
    Replacement,
    UrlOutcome,
)
from .reconciler import (
    Reconciler,
    build_report,
    extract_urls,
    print_reconcile_summary,
    replace_url,
    save_report,
)

__all__ = [
    "FileReport",
    "LinkCheckResult",
    "LivenessChecker",
    "ReconcileReport",
    "ReconcileSummary",
    "Reconciler",
    "Replacement",
    "ReplacementFinder",
    "UrlOutcome",
    "build_report",
    "extract_urls",
    "manual_lookup_hints",
    "print_reconcile_summary",
    "replace_url",
    "save_report",
    "url_variants",
]
