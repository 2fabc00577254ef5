"""Unit tests for build configuration loading."""

from pathlib import Path

import pytest

from pressroom.config import (
    DEFAULT_EXTENSIONS,
    DEFAULT_TARGET_EXTENSION,
    BuildConfig,
    load_build_config,
)
from pressroom.contexts.templating.registries import TEMPLATE_EXTENSIONS
from pressroom.exceptions import ConfigurationError


@pytest.mark.unit
def test_build_config_defaults():
    config = BuildConfig()

    assert config.extensions == DEFAULT_EXTENSIONS
    assert config.target_extension == DEFAULT_TARGET_EXTENSION
    assert config.template_extensions == TEMPLATE_EXTENSIONS
    assert config.layouts == {}
    assert config.fail_fast is False


@pytest.mark.unit
def test_build_config_normalizes_values():
    config = BuildConfig(
        content_path="content",
        extensions=["md", ".txt"],
        target_extension="htm",
        template_extensions=["j2"],
    )

    assert config.content_path == Path("content")
    assert config.extensions == (".md", ".txt")
    assert config.target_extension == ".htm"
    assert config.template_extensions == (".j2",)


@pytest.mark.unit
def test_load_without_file_uses_defaults_and_overrides(tmp_path):
    config = load_build_config(None, output_path=tmp_path / "out", fail_fast=True, layouts=None)

    assert config.output_path == tmp_path / "out"
    assert config.fail_fast is True
    assert config.layouts == {}


@pytest.mark.unit
def test_load_yaml(tmp_path):
    config_file = tmp_path / "site.yaml"
    config_file.write_text(
        "content_path: src/content\n"
        "templates_path: /abs/templates\n"
        "layouts:\n"
        "  default: default.html.jinja\n"
        "  post: blog/post.html.jinja\n"
        "markdown_options:\n"
        "  typographer: false\n"
        "callbacks:\n"
        "  before_compile: mysite.hooks:add_nav\n"
        "data:\n"
        "  url: https://example.org\n"
        "  feed: ${data.url}/feed.xml\n"
    )

    config = load_build_config(config_file)

    assert config.content_path == tmp_path / "src/content"
    assert config.templates_path == Path("/abs/templates")
    assert config.layouts == {"default": "default.html.jinja", "post": "blog/post.html.jinja"}
    assert config.markdown_options == {"typographer": False}
    assert config.callbacks == {"before_compile": "mysite.hooks:add_nav"}
    assert config.data["feed"] == "https://example.org/feed.xml"
    assert config.extensions == DEFAULT_EXTENSIONS


@pytest.mark.unit
def test_overrides_beat_file(tmp_path):
    config_file = tmp_path / "site.yaml"
    config_file.write_text("output_path: public\nfail_fast: false\n")

    config = load_build_config(config_file, output_path=tmp_path / "elsewhere", fail_fast=True)

    assert config.output_path == tmp_path / "elsewhere"
    assert config.fail_fast is True


@pytest.mark.unit
def test_callables_accepted_as_overrides():
    def hook(doc):
        return doc

    config = load_build_config(None, callbacks={"before_markdown": hook})

    assert config.callbacks["before_markdown"] is hook


@pytest.mark.unit
def test_unknown_key_in_file(tmp_path):
    config_file = tmp_path / "site.yaml"
    config_file.write_text("layout: default\n")

    with pytest.raises(ConfigurationError, match="Unknown config keys"):
        load_build_config(config_file)


@pytest.mark.unit
def test_unknown_override():
    with pytest.raises(ConfigurationError, match="Unknown config override"):
        load_build_config(None, renderer_options={})


@pytest.mark.unit
def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Unable to load config"):
        load_build_config(tmp_path / "missing.yaml")


@pytest.mark.unit
def test_invalid_yaml(tmp_path):
    config_file = tmp_path / "site.yaml"
    config_file.write_text("layouts: [unclosed\n")

    with pytest.raises(ConfigurationError):
        load_build_config(config_file)
