from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import SiteConfig, load_config
from .errors import ConfigError, StructureError

POST_LAYOUT = "posts.html"
INDEX_LAYOUT = "index.html"


@dataclass(frozen=True)
class ProjectLayout:
    working_dir: Path
    output: Path
    config_name: str = "config.json"

    @property
    def output_dir(self) -> Path:
        return self.working_dir / self.output

    @property
    def themes_dir(self) -> Path:
        return self.working_dir / "themes"

    @property
    def posts_dir(self) -> Path:
        return self.working_dir / "posts"

    @property
    def pages_dir(self) -> Path:
        return self.working_dir / "pages"

    @property
    def config_path(self) -> Path:
        path = Path(self.config_name)
        if path.is_absolute():
            return path
        return self.working_dir / path

    def theme_dir(self, theme: str) -> Path:
        return self.themes_dir / theme

    def layout_path(self, theme: str, name: str) -> Path:
        return self.theme_dir(theme) / "layouts" / name


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: str = ""
    config: Optional[SiteConfig] = None


def check_layout(layout: ProjectLayout) -> SiteConfig:
    """Run the structure checks in order, raising on the first one that fails.

    Later checks depend on earlier ones (the theme checks need the parsed
    config), so nothing after a failure is evaluated.
    """
    output_dir = layout.output_dir
    if not output_dir.is_dir():
        raise StructureError(f"Output folder '{output_dir.resolve()}' does not exist")
    if not layout.themes_dir.is_dir():
        raise StructureError("themes folder is missing")
    if not layout.posts_dir.is_dir():
        raise StructureError("posts folder is missing")
    if not layout.pages_dir.is_dir():
        raise StructureError("pages folder is missing")
    if not layout.config_path.is_file():
        raise StructureError(f"{layout.config_path.name} file is missing")

    config = load_config(layout.config_path)

    themes_root = layout.themes_dir.resolve()
    theme_root = layout.theme_dir(config.theme).resolve()
    outside = theme_root == themes_root or not theme_root.is_relative_to(themes_root)
    if Path(config.theme).is_absolute() or outside:
        raise ConfigError(f"Theme '{config.theme}' must name a folder inside themes")
    if not layout.theme_dir(config.theme).is_dir():
        raise ConfigError(f"Theme folder '{config.theme}' does not exist")
    for name in (POST_LAYOUT, INDEX_LAYOUT):
        if not layout.layout_path(config.theme, name).is_file():
            raise ConfigError(f"Theme '{config.theme}' is missing layouts/{name}")
    return config


def validate_project(layout: ProjectLayout) -> ValidationResult:
    try:
        config = check_layout(layout)
    except (StructureError, ConfigError) as exc:
        print(str(exc), file=sys.stderr)
        return ValidationResult(False, str(exc))
    return ValidationResult(True, config=config)
