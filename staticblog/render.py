from __future__ import annotations

import re
from pathlib import Path

MORE_RE = re.compile(r"^[ \t]*<!--\s*more\s*-->[ \t]*$", re.IGNORECASE | re.MULTILINE)
TOKEN_RE = re.compile(r"\{\{ (\w+) \}\}")


def render_template(template: str, bindings: dict[str, str]) -> str:
    """Replace every ``{{ Name }}`` marker with its binding.

    Single pass over the template: markers without a binding stay verbatim,
    and marker-like text inside a substituted value is never expanded.
    """
    return TOKEN_RE.sub(lambda match: bindings.get(match.group(1), match.group(0)), template)


def split_excerpt(source: str) -> str | None:
    """Return the Markdown before a standalone ``<!--more-->`` line, if any."""
    match = MORE_RE.search(source)
    if match is None:
        return None
    return source[: match.start()].rstrip()


def read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        handle.write(text)
