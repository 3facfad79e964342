"""Tests for URL reconciliation of article pages."""

import asyncio
import json

import httpx
import pytest

from newshub.links.checker import LivenessChecker
from newshub.links.finder import ReplacementFinder
from newshub.links.models import FileReport
from newshub.links.reconciler import Reconciler, build_report, extract_urls, replace_url, save_report


def make_reconciler(handler, batch_size: int = 5) -> Reconciler:
    checker = LivenessChecker(timeout=1.0, transport=httpx.MockTransport(handler))
    return Reconciler(checker, ReplacementFinder(checker), batch_size=batch_size)


def dead_links(request):
    """Every URL is gone and the archive has no snapshot."""
    if request.url.host == "archive.org":
        return httpx.Response(200, json={"archived_snapshots": {}})
    return httpx.Response(404)


class TestExtractUrls:
    def test_collects_external_urls_once_in_document_order(self):
        content = """
        <a href="https://news.example.com/story">story</a>
        <img src="https://img.example.com/a.jpg">
        <a href="https://news.example.com/story">again</a>
        <a href="../index.html">home</a>
        <a href="mailto:editor@example.com">mail</a>
        <iframe src="https://www.youtube.com/embed/abc"></iframe>
        <img src="data:image/svg+xml;base64,AAAA">
        """
        assert extract_urls(content) == [
            "https://news.example.com/story",
            "https://img.example.com/a.jpg",
            "https://www.youtube.com/embed/abc",
        ]

    def test_scheme_match_ignores_case(self):
        content = '<a href="HTTP://Example.com/A">a</a><img src="Https://img.example.com/b.jpg">'
        assert extract_urls(content) == ["HTTP://Example.com/A", "Https://img.example.com/b.jpg"]


class TestReplaceUrl:
    def test_replaces_every_occurrence(self):
        content = '<a href="http://x.com/a">http://x.com/a</a><img src="http://x.com/a">'
        assert replace_url(content, "http://x.com/a", "https://x.com/a").count("https://x.com/a") == 3

    def test_replaces_escaped_form(self):
        content = '<a href="https://x.com/?a=1&amp;b=2">link</a>'
        updated = replace_url(content, "https://x.com/?a=1&b=2", "https://y.com/?a=1&b=2")
        assert updated == '<a href="https://y.com/?a=1&amp;b=2">link</a>'

    def test_longer_url_sharing_the_prefix_is_untouched(self):
        content = '<img src="http://a.example/img"><img src="http://a.example/img2.jpg"><a href="http://a.example/img/">dir</a>'
        updated = replace_url(content, "http://a.example/img", "https://a.example/img")
        assert updated == (
            '<img src="https://a.example/img"><img src="http://a.example/img2.jpg"><a href="http://a.example/img/">dir</a>'
        )


class TestReconcileFile:
    def test_broken_url_is_fixed_everywhere(self, articles_dir):
        path = articles_dir / "story.html"
        path.write_text(
            '<p><a href="http://example.com/a">one</a> and <a href="http://example.com/a">two</a></p>',
            encoding="utf-8",
        )

        def handler(request):
            if str(request.url) == "http://example.com/a":
                raise httpx.ConnectError("refused", request=request)
            if str(request.url) == "https://example.com/a":
                return httpx.Response(200)
            return httpx.Response(404)

        report = asyncio.run(make_reconciler(handler).reconcile_file(path))

        assert report.urls_checked == 1
        assert report.broken == 1
        assert report.fixed == 1
        assert report.still_broken == 0
        assert report.urls[0].fixed
        assert report.urls[0].new_url == "https://example.com/a"
        assert report.urls[0].method == "scheme"

        content = path.read_text(encoding="utf-8")
        assert "http://example.com/a" not in content
        assert content.count("https://example.com/a") == 2

    def test_unfixable_url_leaves_file_untouched(self, articles_dir):
        path = articles_dir / "story.html"
        original = '<p><a href="https://gone.example.com/x">gone</a></p>'
        path.write_text(original, encoding="utf-8")

        def handler(request):
            return dead_links(request)

        report = asyncio.run(make_reconciler(handler).reconcile_file(path))

        assert report.broken == 1
        assert report.fixed == 0
        assert not report.urls[0].fixed
        assert report.urls[0].status == 404
        assert len(report.urls[0].suggestions) == 2
        assert path.read_text(encoding="utf-8") == original

    def test_fixing_a_prefix_url_leaves_the_longer_url_alone(self, articles_dir):
        path = articles_dir / "story.html"
        path.write_text(
            '<img src="http://a.example/img"> <img src="http://a.example/img2.jpg">',
            encoding="utf-8",
        )

        def handler(request):
            if str(request.url) == "https://a.example/img":
                return httpx.Response(200)
            return dead_links(request)

        report = asyncio.run(make_reconciler(handler).reconcile_file(path))

        assert report.broken == 2
        assert report.fixed == 1
        assert path.read_text(encoding="utf-8") == (
            '<img src="https://a.example/img"> <img src="http://a.example/img2.jpg">'
        )

    def test_healthy_file_is_not_rewritten(self, articles_dir):
        path = articles_dir / "story.html"
        path.write_text('<a href="https://ok.example.com/">ok</a>', encoding="utf-8")
        mtime = path.stat().st_mtime_ns

        report = asyncio.run(make_reconciler(lambda r: httpx.Response(200)).reconcile_file(path))

        assert report.urls_checked == 1
        assert report.broken == 0
        assert report.urls == []
        assert path.stat().st_mtime_ns == mtime

    def test_batches_cover_every_url(self, articles_dir):
        links = "".join(f'<a href="https://example.com/{i}">{i}</a>' for i in range(7))
        path = articles_dir / "many.html"
        path.write_text(links, encoding="utf-8")
        seen = []

        def handler(request):
            seen.append(request.url.path)
            return httpx.Response(200)

        report = asyncio.run(make_reconciler(handler, batch_size=3).reconcile_file(path))

        assert report.urls_checked == 7
        assert sorted(seen) == sorted(f"/{i}" for i in range(7))

    def test_unreadable_file(self, articles_dir):
        path = articles_dir / "bad.html"
        path.write_bytes(b"\xff\xfe\xfa")

        report = asyncio.run(make_reconciler(lambda r: httpx.Response(200)).reconcile_file(path))

        assert report.error
        assert report.urls_checked == 0


class TestReconcileDirectory:
    def test_summary(self, articles_dir):
        (articles_dir / "a.html").write_text('<a href="http://example.com/a">a</a>', encoding="utf-8")
        (articles_dir / "b.html").write_text('<img src="https://dead.example.com/b.jpg">', encoding="utf-8")
        (articles_dir / "c.html").write_text("<p>no links</p>", encoding="utf-8")

        def handler(request):
            if str(request.url) == "https://example.com/a":
                return httpx.Response(200)
            return dead_links(request)

        report = make_reconciler(handler).reconcile_directory_sync(articles_dir)

        assert report.summary.total_articles == 3
        assert report.summary.total_urls == 2
        assert report.summary.total_broken == 2
        assert report.summary.total_fixed == 1
        assert report.summary.still_broken == 1
        assert [d.file for d in report.details] == ["a.html", "b.html", "c.html"]

    def test_missing_directory(self, tmp_path):
        reconciler = make_reconciler(lambda r: httpx.Response(200))
        with pytest.raises(FileNotFoundError):
            reconciler.reconcile_directory_sync(tmp_path / "missing")


class TestReport:
    def test_build_and_save(self, tmp_path):
        details = [
            FileReport(file="a.html", urls_checked=3, broken=2, fixed=1),
            FileReport(file="b.html", error="unreadable"),
        ]
        report = build_report(details)

        assert report.summary.total_urls == 3
        assert report.summary.still_broken == 1
        assert report.summary.file_errors == 1

        path = tmp_path / "reports" / "url-validation-report.json"
        save_report(report, path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert isinstance(data["timestamp"], str)
        assert data["summary"]["total_fixed"] == 1
        assert data["details"][1]["error"] == "unreadable"
