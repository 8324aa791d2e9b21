from __future__ import annotations

import html
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from pathlib import Path

from .config import SiteConfig
from .content import PostRecord, parse_post
from .errors import ContentParseError
from .render import render_template, write_text
from .utils import format_timestamp, pascal_case

INDEX_LIMIT = 10


@dataclass(frozen=True)
class PostFailure:
    path: Path
    reason: str


@dataclass
class PostBatch:
    records: list[PostRecord] = field(default_factory=list)
    failures: list[PostFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def list_post_files(posts_dir: Path) -> list[Path]:
    return sorted((path for path in posts_dir.glob("*.md") if path.is_file()), key=lambda p: p.name)


def post_bindings(record: PostRecord, config: SiteConfig) -> dict[str, str]:
    fm = record.frontmatter
    bindings = {}
    for key, value in fm.extra.items():
        name = pascal_case(key)
        if name:
            bindings[name] = html.escape(str(value))
    bindings.update(
        {
            "Title": html.escape(fm.title),
            "PublishDate": format_timestamp(fm.publish_date),
            "Draft": "true" if fm.draft else "false",
            "Slug": html.escape(record.slug),
            "SiteTitle": html.escape(config.title),
            "Body": record.rendered_body,
        }
    )
    return bindings


def render_post_page(record: PostRecord, layout_text: str, config: SiteConfig) -> str:
    return render_template(layout_text, post_bindings(record, config))


def collect_posts(posts_dir: Path, layout_text: str, config: SiteConfig, workers: int = 1) -> PostBatch:
    post_files = list_post_files(posts_dir)

    def render_one(path: Path) -> PostRecord | PostFailure:
        try:
            record = parse_post(path)
        except ContentParseError as exc:
            return PostFailure(path, exc.reason)
        return replace(record, html=render_post_page(record, layout_text, config))

    workers = max(1, int(workers or 1))
    if workers > 1 and len(post_files) > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(post_files))) as executor:
            results = list(executor.map(render_one, post_files))
    else:
        results = [render_one(path) for path in post_files]

    batch = PostBatch()
    for result in results:
        if isinstance(result, PostFailure):
            batch.failures.append(result)
        else:
            batch.records.append(result)
    return batch


def write_posts(records: list[PostRecord], output_dir: Path) -> list[Path]:
    written = []
    for record in records:
        target = output_dir / "posts" / f"{record.slug}.html"
        write_text(target, record.html)
        written.append(target)
    return written


def select_index_posts(posts: list[PostRecord], limit: int = INDEX_LIMIT) -> list[PostRecord]:
    published = [post for post in posts if not post.frontmatter.draft]
    published.sort(key=lambda p: (p.frontmatter.title.lower(), p.slug))
    published.sort(key=lambda p: p.frontmatter.publish_date, reverse=True)
    return published[:limit]


def build_index_body(posts: list[PostRecord]) -> str:
    parts = []
    for post in posts:
        parts.append(f"<h2>{html.escape(post.frontmatter.title)}</h2>\n")
        parts.append(f"{post.excerpt}\n")
    return "".join(parts)


def render_index_page(posts: list[PostRecord], layout_text: str, config: SiteConfig) -> str:
    selected = select_index_posts(posts)
    return render_template(
        layout_text,
        {
            "Title": html.escape(config.title),
            "Body": build_index_body(selected),
        },
    )


def build_index(posts: list[PostRecord], layout_text: str, config: SiteConfig, output_dir: Path) -> Path:
    target = output_dir / "index.html"
    write_text(target, render_index_page(posts, layout_text, config))
    return target
