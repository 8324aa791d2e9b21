"""Shared fixtures: small blog projects laid out on disk."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from staticblog.layout import ProjectLayout

POST_LAYOUT = "<html><head><title>{{ Title }}</title></head><body>{{ Body }}</body></html>\n"
INDEX_LAYOUT = "<html><head><title>{{ Title }}</title></head><main>{{ Body }}</main></html>\n"


def write_post(root: Path, name: str, title: str, date: str, draft: bool = False, body: str = "Text.") -> Path:
    path = root / "posts" / name
    path.write_text(
        f"---\ntitle: {title}\npublishDate: {date}\ndraft: {'true' if draft else 'false'}\n---\n{body}\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A valid project with the 'basic' theme and an existing dist folder."""
    for name in ("dist", "posts", "pages", "themes/basic/layouts"):
        (tmp_path / name).mkdir(parents=True)
    (tmp_path / "themes/basic/layouts/posts.html").write_text(POST_LAYOUT, encoding="utf-8")
    (tmp_path / "themes/basic/layouts/index.html").write_text(INDEX_LAYOUT, encoding="utf-8")
    (tmp_path / "config.json").write_text(json.dumps({"title": "My Blog", "theme": "basic"}), encoding="utf-8")
    return tmp_path


@pytest.fixture
def layout(project: Path) -> ProjectLayout:
    return ProjectLayout(project, Path("dist"))
