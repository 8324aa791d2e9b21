from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from staticblog.layout import ProjectLayout, validate_project


def remove(path: Path) -> None:
    if path.is_dir():
        shutil.rmtree(path)
    else:
        path.unlink()


class TestValidateProject:
    def test_valid_project(self, layout: ProjectLayout):
        result = validate_project(layout)
        assert result.ok
        assert result.config.title == "My Blog"
        assert result.config.theme == "basic"

    @pytest.mark.parametrize(
        "missing, message",
        [
            ("dist", "Output folder"),
            ("themes", "themes folder is missing"),
            ("posts", "posts folder is missing"),
            ("pages", "pages folder is missing"),
            ("config.json", "config.json file is missing"),
            ("themes/basic", "Theme folder 'basic' does not exist"),
            ("themes/basic/layouts/posts.html", "layouts/posts.html"),
            ("themes/basic/layouts/index.html", "layouts/index.html"),
        ],
    )
    def test_each_check_fails_alone(self, project: Path, layout: ProjectLayout, missing: str, message: str, capsys):
        remove(project / missing)
        result = validate_project(layout)
        assert not result.ok
        assert message in result.reason
        assert message in capsys.readouterr().err
        assert result.config is None

    def test_checks_short_circuit(self, project: Path, layout: ProjectLayout):
        remove(project / "posts")
        remove(project / "config.json")
        result = validate_project(layout)
        assert result.reason == "posts folder is missing"

    def test_missing_output_names_folder_and_writes_nothing(self, project: Path, layout: ProjectLayout):
        remove(project / "dist")
        before = sorted(p for p in project.rglob("*"))
        result = validate_project(layout)
        assert not result.ok
        assert str((project / "dist").resolve()) in result.reason
        assert sorted(p for p in project.rglob("*")) == before

    def test_unparsable_config(self, project: Path, layout: ProjectLayout):
        (project / "config.json").write_text("{", encoding="utf-8")
        result = validate_project(layout)
        assert not result.ok
        assert "Invalid JSON" in result.reason

    def test_custom_config_name(self, project: Path):
        (project / "site.json").write_text(json.dumps({"title": "Other", "theme": "basic"}), encoding="utf-8")
        result = validate_project(ProjectLayout(project, Path("dist"), "site.json"))
        assert result.config.title == "Other"

    @pytest.mark.parametrize("theme", [".", "..", "../outside", "basic/../.."])
    def test_theme_must_stay_inside_themes(self, project: Path, layout: ProjectLayout, theme: str):
        (project / "outside" / "layouts").mkdir(parents=True)
        (project / "config.json").write_text(json.dumps({"title": "T", "theme": theme}), encoding="utf-8")
        result = validate_project(layout)
        assert not result.ok
        assert "must name a folder inside themes" in result.reason

    def test_absolute_theme_rejected(self, project: Path, layout: ProjectLayout):
        theme = str((project / "themes" / "basic").resolve())
        (project / "config.json").write_text(json.dumps({"title": "T", "theme": theme}), encoding="utf-8")
        result = validate_project(layout)
        assert not result.ok
        assert "must name a folder inside themes" in result.reason
