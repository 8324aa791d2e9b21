from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import markdown
import yaml

from .errors import ContentParseError, MissingFrontmatter
from .render import split_excerpt
from .utils import naive_utc, normalize_key, parse_bool

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]
KNOWN_FIELDS = {"title", "publishdate", "draft"}


@dataclass(frozen=True)
class Frontmatter:
    title: str
    publish_date: dt.datetime
    draft: bool = False
    extra: dict = field(default_factory=dict)


@dataclass(frozen=True)
class PostRecord:
    source_path: Path
    slug: str
    frontmatter: Frontmatter
    rendered_body: str
    excerpt: str
    html: str = ""


def split_front_matter(text: str, path: Optional[Path] = None) -> tuple[str, str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() != "---":
        raise MissingFrontmatter(path)

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        raise ContentParseError(path, "unterminated frontmatter block (missing closing '---')")

    header = "\n".join(lines[1:end])
    body = "\n".join(lines[end + 1 :])
    return header, body


def parse_publish_date(value: object, path: Optional[Path] = None) -> dt.datetime:
    if isinstance(value, dt.datetime):
        return naive_utc(value)
    if isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time(0, 0))
    if isinstance(value, str) and value.strip():
        try:
            return naive_utc(dt.datetime.fromisoformat(value.strip()))
        except ValueError:
            pass
        raise ContentParseError(path, f"invalid publishDate {value!r}")
    raise ContentParseError(path, "missing publishDate")


def frontmatter_from_mapping(meta: dict, path: Optional[Path] = None) -> Frontmatter:
    known = {}
    extra = {}
    for key, value in meta.items():
        normalized = normalize_key(key)
        if normalized in KNOWN_FIELDS:
            known[normalized] = value
        else:
            extra[str(key)] = value

    title = known.get("title")
    if title is None or not str(title).strip():
        raise ContentParseError(path, "missing title")
    return Frontmatter(
        title=str(title).strip(),
        publish_date=parse_publish_date(known.get("publishdate"), path),
        draft=parse_bool(known.get("draft")),
        extra=extra,
    )


def parse_front_matter(text: str, path: Optional[Path] = None) -> tuple[Frontmatter, str]:
    header, body = split_front_matter(text, path)
    try:
        meta = yaml.safe_load(header)
    except (yaml.YAMLError, ValueError) as exc:
        raise ContentParseError(path, f"malformed frontmatter: {exc}") from exc
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise ContentParseError(path, "frontmatter must be a mapping")
    return frontmatter_from_mapping(meta, path), body


def render_markdown(body: str) -> str:
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS)
    return md.convert(body)


def parse_post(path: Path) -> PostRecord:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ContentParseError(path, f"not valid UTF-8: {exc}") from exc
    frontmatter, body = parse_front_matter(raw_text, path)
    html_content = render_markdown(body)
    excerpt_source = split_excerpt(body)
    excerpt = html_content if excerpt_source is None else render_markdown(excerpt_source)
    return PostRecord(
        source_path=path,
        slug=path.stem,
        frontmatter=frontmatter,
        rendered_body=html_content,
        excerpt=excerpt,
    )
