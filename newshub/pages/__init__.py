"""Article page generation and maintenance."""

from .enricher import ArticleEnricher, EnrichmentResult, print_enrichment_summary
from .generator import (
    ArticleGenerator,
    GenerationResult,
    print_generation_summary,
    render_article,
    sanitize_filename,
)
from .trending import TrendingResult, expire_trending, is_too_old, print_trending_summary
from .validator import (
    ValidationReport,
    print_validation_report,
    save_validation_report,
    validate_articles,
    validate_page,
)
from .verifier import (
    VerificationReport,
    analyze_article,
    print_verification_report,
    save_verification_report,
    verify_articles,
)

__all__ = [
    "ArticleEnricher",
    "ArticleGenerator",
    "EnrichmentResult",
    "GenerationResult",
    "TrendingResult",
    "ValidationReport",
    "VerificationReport",
    "analyze_article",
    "print_validation_report",
    "save_validation_report",
    "validate_articles",
    "validate_page",
    "expire_trending",
    "is_too_old",
    "print_enrichment_summary",
    "print_generation_summary",
    "print_trending_summary",
    "print_verification_report",
    "render_article",
    "sanitize_filename",
    "save_verification_report",
    "verify_articles",
]
