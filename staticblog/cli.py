from __future__ import annotations

import argparse
import os
import time
from pathlib import Path
from typing import Optional, Sequence

from .builder import EXIT_OK, build_site


def resolve_workers(value: int) -> int:
    if value <= 0:
        value = os.cpu_count() or 1
    return max(1, min(value, 32))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="staticblog", description="Static Markdown blog builder.")
    commands = parser.add_subparsers(dest="command", required=True)

    build = commands.add_parser("build", help="Build the website")
    build.add_argument("-f", "--force", action="store_true", default=False, help="Force a full build.")
    build.add_argument(
        "-o",
        "--output",
        required=True,
        help="Location to write out the rendered site, relative to the working directory.",
    )
    build.add_argument(
        "-d",
        "--directory",
        default=".",
        help="The directory to run the build against. Default current directory.",
    )
    build.add_argument("-m", "--minify", action="store_true", default=False, help="Minify the output HTML.")
    build.add_argument(
        "-c",
        "--config",
        default="config.json",
        help="Site config file (JSON/TOML/YAML), relative to the working directory.",
    )
    build.add_argument(
        "-w",
        "--workers",
        default=1,
        type=int,
        help="Number of worker threads for rendering posts (0 = auto).",
    )
    build.add_argument(
        "--skip-invalid",
        action="store_true",
        default=False,
        help="Skip posts that fail to parse instead of failing the build.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    start = time.perf_counter()
    status = build_site(
        Path(args.directory),
        Path(args.output),
        config_name=args.config,
        workers=resolve_workers(args.workers),
        skip_invalid=args.skip_invalid,
        minify=args.minify,
    )
    elapsed = time.perf_counter() - start
    if status == EXIT_OK:
        print(f"Build completed in {elapsed:.2f}s.")
    return status
