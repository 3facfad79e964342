"""Tests for trending flag expiry."""

import pendulum
import pytest

from newshub.indexing.markers import read_marker
from newshub.pages.trending import expire_trending, is_too_old

NOW = pendulum.datetime(2025, 11, 20, 12, tz="UTC")


class TestIsTooOld:
    def test_boundary(self):
        assert not is_too_old(NOW.subtract(days=3), 3, NOW)
        assert is_too_old(NOW.subtract(days=3, hours=1), 3, NOW)
        assert not is_too_old(NOW.subtract(days=1), 3, NOW)


class TestExpireTrending:
    def test_expires_only_old_trending_articles(self, make_page, articles_dir):
        old = make_page("old.html", id="o", publish_date="2025-11-10", is_trending="true")
        fresh = make_page("fresh.html", id="f", publish_date="2025-11-19", is_trending="true")
        quiet = make_page("quiet.html", id="q", publish_date="2025-11-01", is_trending="false")
        quiet_before = quiet.read_text(encoding="utf-8")

        result = expire_trending(articles_dir, 3, now=NOW)

        assert result.processed == 3
        assert result.expired == ["old.html"]
        assert result.still_trending == ["fresh.html"]
        assert read_marker(old.read_text(encoding="utf-8"), "article-trending") == "false"
        assert read_marker(fresh.read_text(encoding="utf-8"), "article-trending") == "true"
        assert quiet.read_text(encoding="utf-8") == quiet_before

    def test_skips_missing_and_invalid_dates(self, make_page, articles_dir):
        make_page("nodate.html", id="n", is_trending="true")
        make_page("baddate.html", id="b", publish_date="someday", is_trending="true")

        result = expire_trending(articles_dir, 3, now=NOW)

        assert result.processed == 0
        assert sorted(result.skipped) == ["baddate.html", "nodate.html"]
        assert result.expired == []

    def test_second_run_changes_nothing(self, make_page, articles_dir):
        make_page("old.html", id="o", publish_date="2025-11-10", is_trending="true")

        expire_trending(articles_dir, 3, now=NOW)
        result = expire_trending(articles_dir, 3, now=NOW)

        assert result.expired == []

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            expire_trending(tmp_path / "missing", 3, now=NOW)
