"""Tests for the HTML structure validator."""

import json

from newshub.models import SourceArticle
from newshub.pages.generator import render_article
from newshub.pages.validator import save_validation_report, validate_articles, validate_page

from .conftest import page_html

WELL_FORMED = """
<div class="article-container">
  <a href="../index.html" class="back-link">Back</a>
  <div class="article-content"><p>Text</p></div>
</div>
"""

HEAD = """
<title>Story</title>
<meta name="viewport" content="width=device-width">
<style>.article-container { max-width: 1200px; }</style>
"""


def _page(body: str) -> str:
    return page_html(HEAD + body, id="a")


class TestValidatePage:
    def test_generated_page_is_valid(self):
        article = SourceArticle(
            id="a1",
            title="Story",
            banner_image="https://img.example.com/a.jpg",
            source_url="https://news.example.com/a",
            full_content="<p>Body</p>",
        )

        validation = validate_page(render_article(article), "story.html")

        assert validation.structure.issues == []
        assert validation.compatibility.issues == []
        assert validation.valid is True
        assert validation.structure.stats.images == 1

    def test_bare_page_reports_missing_structure(self):
        validation = validate_page("<html><body><p>Hi</p></body></html>", "bare.html")

        assert validation.valid is False
        assert validation.structure.issues == [
            "Missing article-id meta tag",
            "Missing title tag",
            "Missing viewport meta tag (not responsive)",
            "Missing .article-container div",
            "Missing back navigation link",
        ]
        assert validation.compatibility.issues == ["Missing .article-content wrapper"]

    def test_layout_hazards(self):
        body = WELL_FORMED + """
<img src="a.jpg">
<img src="b.jpg" alt="B">
<div style="width: 1500px"></div>
<table><tr><td>1</td></tr></table>
<div><iframe src="https://www.youtube.com/embed/x"></iframe></div>
<link rel="stylesheet" href="https://cdn.example.com/site.css">
"""
        validation = validate_page(_page(body), "a.html")

        issues = validation.structure.issues
        assert "Image 1 missing alt text" in issues
        assert "Image 2 missing alt text" not in issues
        assert "Element has fixed width > 1200px which may break container" in issues
        assert "Tables found without responsive wrapper - may overflow on mobile" in issues
        assert "Iframe 1 missing responsive wrapper" in issues
        assert "Stylesheet link 1 not relative: https://cdn.example.com/site.css" in issues
        assert validation.compatibility.issues == ["Element with fixed width > 1200px found"]
        assert validation.structure.stats.videos == 1
        assert validation.structure.stats.tables == 1

    def test_constrained_width_and_wrapped_embeds_pass(self):
        body = WELL_FORMED + """
<div style="width: 1500px; max-width: 100%"></div>
<div class="table-responsive"><table><tr><td>1</td></tr></table></div>
<div style="position: relative; padding-bottom: 56.25%"><iframe src="https://player.vimeo.com/video/1"></iframe></div>
"""
        validation = validate_page(_page(body), "a.html")

        assert validation.valid is True
        assert validation.structure.stats.videos == 1

    def test_many_inline_styles(self):
        body = WELL_FORMED + '<span style="color: red">x</span>' * 11

        validation = validate_page(_page(body), "a.html")

        assert "High inline style usage (11 elements) - may cause container conflicts" in validation.structure.issues

    def test_magazine_layout_needs_its_stylesheet(self):
        body = WELL_FORMED + '<div class="magazine-article"></div>'

        without_css = validate_page(_page(body), "a.html")
        with_css = validate_page(_page('<link rel="stylesheet" href="../css/article-magazine.css">' + body), "a.html")

        assert without_css.compatibility.has_magazine_layout is True
        assert without_css.compatibility.issues == ["Magazine layout used but CSS may not be loaded"]
        assert with_css.compatibility.compatible is True


class TestValidateArticles:
    def test_summary_and_report(self, articles_dir, make_page, tmp_path):
        make_page("good.html", HEAD + WELL_FORMED, id="good")
        make_page("bad.html", "<p>No structure</p>", id="bad")
        (articles_dir / "index.html").write_text("<html></html>", encoding="utf-8")

        report = validate_articles(articles_dir)

        assert report.summary.total_articles == 2
        assert report.summary.valid_articles == 1
        assert report.summary.articles_with_issues == 1
        assert {d.filename: d.valid for d in report.details} == {"bad.html": False, "good.html": True}

        path = tmp_path / "reports" / "html-validation-report.json"
        save_validation_report(report, path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["summary"]["valid_articles"] == 1
        assert len(data["details"]) == 2

    def test_unreadable_page_is_reported(self, articles_dir):
        (articles_dir / "broken.html").write_bytes(b"\xff\xfe\xfa")

        report = validate_articles(articles_dir)

        assert report.details[0].error is not None
        assert report.summary.articles_with_issues == 1
