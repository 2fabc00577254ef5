"""Shared fixtures: throwaway sites built under tmp_path."""

from pathlib import Path

import pytest

from pressroom.config import BuildConfig

DEFAULT_LAYOUT_SOURCE = "<h1>{{ title }}</h1>{{ body }}"


class Site:
    """Content, templates and output roots of a site under construction."""

    def __init__(self, root: Path):
        self.root = root
        self.content = root / "content"
        self.templates = root / "templates"
        self.output = root / "dist"
        self.content.mkdir()
        self.templates.mkdir()

    def write_content(self, relative_path: str, text: str) -> Path:
        return self._write(self.content / relative_path, text)

    def write_template(self, relative_path: str, text: str) -> Path:
        return self._write(self.templates / relative_path, text)

    def config(self, **overrides) -> BuildConfig:
        values = dict(
            content_path=self.content,
            templates_path=self.templates,
            output_path=self.output,
            layouts={"default": "default.html.jinja"},
        )
        values.update(overrides)
        return BuildConfig(**values)

    @staticmethod
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path


@pytest.fixture
def site(tmp_path):
    """Site with a default layout rendering `<h1>{{ title }}</h1>{{ body }}`."""
    site = Site(tmp_path)
    site.write_template("default.html.jinja", DEFAULT_LAYOUT_SOURCE)
    return site
