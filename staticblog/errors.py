from __future__ import annotations

from pathlib import Path


class SiteBuildError(Exception):
    pass


class StructureError(SiteBuildError):
    pass


class ConfigError(SiteBuildError):
    pass


class ContentParseError(SiteBuildError):
    def __init__(self, path: Path | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}" if path is not None else reason)


class MissingFrontmatter(ContentParseError):
    def __init__(self, path: Path | None) -> None:
        super().__init__(path, "no frontmatter block found (expected a leading '---' line)")
