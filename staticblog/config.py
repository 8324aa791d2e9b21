from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import ConfigError


@dataclass(frozen=True)
class SiteConfig:
    title: str
    theme: str
    extra: dict = field(default_factory=dict)


def parse_config_text(text: str, suffix: str, source: Path | str = "config") -> dict:
    suffix = suffix.lower()
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in config file {source}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {source}: {exc}") from exc
        if data is None:
            data = {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file {source}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping: {source}")
    return data


def site_config_from_mapping(data: dict, source: Path | str = "config") -> SiteConfig:
    values = {}
    extra = {}
    for key, value in data.items():
        lowered = str(key).lower()
        if lowered in {"title", "theme"}:
            values[lowered] = value
        else:
            extra[key] = value
    for key in ("title", "theme"):
        value = values.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"Config file {source} must define a non-empty string '{key}'")
    return SiteConfig(title=values["title"], theme=values["theme"].strip(), extra=extra)


def load_config(path: Path) -> SiteConfig:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Error while reading config: {exc}") from exc
    return site_config_from_mapping(parse_config_text(text, path.suffix, path), path)
