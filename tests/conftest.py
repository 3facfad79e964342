"""Shared fixtures for the NewsHub tests."""

import html
from pathlib import Path

import pytest

from newshub.indexing.markers import META_MARKERS


def page_html(body: str = "", **fields: str) -> str:
    """Minimal article page carrying the given metadata markers."""
    lines = ["<!DOCTYPE html>", "<html>", "<head>"]
    written = set()
    for field, value in fields.items():
        name = META_MARKERS[field]
        if name in written:
            continue
        written.add(name)
        lines.append(f'<meta name="{name}" content="{html.escape(str(value))}">')
    lines += ["</head>", f"<body>{body}</body>", "</html>"]
    return "\n".join(lines)


@pytest.fixture
def articles_dir(tmp_path: Path) -> Path:
    path = tmp_path / "articles"
    path.mkdir()
    return path


@pytest.fixture
def make_page(articles_dir: Path):
    """Write an article page into the articles directory."""

    def _make(filename: str, body: str = "", **fields: str) -> Path:
        path = articles_dir / filename
        path.write_text(page_html(body, **fields), encoding="utf-8")
        return path

    return _make
