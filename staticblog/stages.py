from __future__ import annotations

import abc
import enum
import sys
from dataclasses import dataclass, field
from typing import Optional

from .config import SiteConfig
from .content import PostRecord
from .errors import SiteBuildError
from .layout import INDEX_LAYOUT, POST_LAYOUT, ProjectLayout
from .pages import PostBatch, build_index, collect_posts, write_posts
from .render import read_template


class BuildState(enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    BUILDING_POSTS = "building-posts"
    BUILDING_PAGES = "building-pages"
    BUILDING_INDEX = "building-index"
    MINIFYING = "minifying"
    DONE = "done"
    FAILED = "failed"


@dataclass
class BuildContext:
    """Everything one build run shares between its stages."""

    layout: ProjectLayout
    config: SiteConfig
    workers: int = 1
    skip_invalid: bool = False
    templates: dict[str, str] = field(default_factory=dict)
    posts: list[PostRecord] = field(default_factory=list)
    batch: Optional[PostBatch] = None

    def template(self, name: str) -> str:
        if name not in self.templates:
            self.templates[name] = read_template(self.layout.layout_path(self.config.theme, name))
        return self.templates[name]


class BuildStage(abc.ABC):
    state = BuildState.IDLE

    @abc.abstractmethod
    def run(self, context: BuildContext) -> None:
        ...


class PostStage(BuildStage):
    state = BuildState.BUILDING_POSTS

    def run(self, context: BuildContext) -> None:
        batch = collect_posts(
            context.layout.posts_dir,
            context.template(POST_LAYOUT),
            context.config,
            workers=context.workers,
        )
        context.batch = batch
        for failure in batch.failures:
            label = "Skipping post" if context.skip_invalid else "Invalid post"
            print(f"{label} {failure.path}: {failure.reason}", file=sys.stderr)
        if not batch.ok and not context.skip_invalid:
            raise SiteBuildError(f"{len(batch.failures)} post(s) failed to build; nothing was written")
        context.layout.output_dir.joinpath("posts").mkdir(exist_ok=True)
        write_posts(batch.records, context.layout.output_dir)
        context.posts = list(batch.records)


class PageStage(BuildStage):
    """Placeholder for static pages.

    A real implementation would walk ``layout.pages_dir`` the way PostStage
    walks the posts folder and render each file through a page layout.
    """

    state = BuildState.BUILDING_PAGES

    def run(self, context: BuildContext) -> None:
        return None


class IndexStage(BuildStage):
    state = BuildState.BUILDING_INDEX

    def run(self, context: BuildContext) -> None:
        build_index(context.posts, context.template(INDEX_LAYOUT), context.config, context.layout.output_dir)


class MinifyStage(BuildStage):
    state = BuildState.MINIFYING

    def run(self, context: BuildContext) -> None:
        print("Minification is not implemented yet; output left as-is.", file=sys.stderr)


def default_stages(minify: bool = False) -> list[BuildStage]:
    stages: list[BuildStage] = [PostStage(), PageStage(), IndexStage()]
    if minify:
        stages.append(MinifyStage())
    return stages
