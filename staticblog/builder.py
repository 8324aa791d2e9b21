from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from .errors import SiteBuildError
from .layout import ProjectLayout, validate_project
from .stages import BuildContext, BuildStage, BuildState, default_stages

EXIT_OK = 0
EXIT_INVALID_PROJECT = 1
EXIT_BUILD_FAILED = 2


class Builder:
    def __init__(
        self,
        layout: ProjectLayout,
        stages: Optional[list[BuildStage]] = None,
        workers: int = 1,
        skip_invalid: bool = False,
    ) -> None:
        self.layout = layout
        self.stages = stages if stages is not None else default_stages()
        self.workers = workers
        self.skip_invalid = skip_invalid
        self.state = BuildState.IDLE
        self.context: Optional[BuildContext] = None

    def run(self) -> int:
        self.state = BuildState.VALIDATING
        result = validate_project(self.layout)
        if not result.ok:
            self.state = BuildState.FAILED
            return EXIT_INVALID_PROJECT

        print(f"Building in folder {self.layout.working_dir} and distributing to {self.layout.output_dir}")
        self.context = BuildContext(
            layout=self.layout,
            config=result.config,
            workers=self.workers,
            skip_invalid=self.skip_invalid,
        )
        for stage in self.stages:
            self.state = stage.state
            try:
                stage.run(self.context)
            except (SiteBuildError, OSError) as exc:
                print(f"Build failed while {stage.state.value}: {exc}", file=sys.stderr)
                self.state = BuildState.FAILED
                return EXIT_BUILD_FAILED

        self.state = BuildState.DONE
        return EXIT_OK


def build_site(
    working_dir: Path,
    output: Path,
    config_name: str = "config.json",
    workers: int = 1,
    skip_invalid: bool = False,
    minify: bool = False,
) -> int:
    layout = ProjectLayout(Path(working_dir), Path(output), config_name)
    builder = Builder(layout, default_stages(minify), workers=workers, skip_invalid=skip_invalid)
    return builder.run()
