"""
Integration tests for the build_site.py CLI.
"""

import importlib.util
import sys
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "build_site.py"


def load_cli():
    spec = importlib.util.spec_from_file_location("build_site", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.app


app = load_cli()
runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logger():
    """The CLI replaces loguru sinks; put back a plain stderr sink afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


def write_config(site, **extra):
    lines = ["layouts:", "  default: default.html.jinja"]
    lines.extend(f"{key}: {value}" for key, value in extra.items())
    config_file = site.root / "site.yaml"
    config_file.write_text("\n".join(lines) + "\n")
    return config_file


def build_args(site, *extra):
    return [
        "build",
        str(site.content),
        str(site.templates),
        str(site.output),
        "--config",
        str(write_config(site)),
        "--log-dir",
        str(site.root / "logs"),
        *extra,
    ]


@pytest.mark.integration
def test_no_command_shows_help():
    result = runner.invoke(app, [])

    assert result.exit_code == 0
    assert "build" in result.output
    assert "sizes" in result.output


@pytest.mark.integration
def test_build_success(site):
    site.write_content("index.md", "---\ntitle: Home\n---\nWelcome\n")

    result = runner.invoke(app, build_args(site, "--sizes"))

    assert result.exit_code == 0, result.output
    assert "Build succeeded" in result.output
    assert (site.output / "index.html").exists()
    assert (site.root / "logs" / "render.log").exists()


@pytest.mark.integration
def test_build_with_paths_from_config(site):
    site.write_content("index.md", "Welcome\n")
    config_file = write_config(site, content_path="content", templates_path="templates", output_path="dist")

    result = runner.invoke(
        app, ["build", "--config", str(config_file), "--log-dir", str(site.root / "logs")]
    )

    assert result.exit_code == 0, result.output
    assert (site.output / "index.html").exists()


@pytest.mark.integration
def test_build_failure_exit_code(site):
    site.write_content("a.md", "---\nlayout: nope\n---\n")
    site.write_content("b.md", "B\n")

    result = runner.invoke(app, build_args(site))

    assert result.exit_code == 1
    assert "a.md" in result.output
    assert (site.output / "b.html").exists()


@pytest.mark.integration
def test_fail_fast_exit_code(site):
    site.write_content("a.md", "---\nlayout: nope\n---\n")
    site.write_content("b.md", "B\n")

    result = runner.invoke(app, build_args(site, "--fail-fast"))

    assert result.exit_code == 1
    assert not (site.output / "b.html").exists()


@pytest.mark.integration
def test_missing_default_layout_exit_code(site):
    site.write_content("a.md", "A\n")
    config_file = site.root / "empty.yaml"
    config_file.write_text("fail_fast: false\n")

    result = runner.invoke(
        app,
        [
            "build",
            str(site.content),
            str(site.templates),
            str(site.output),
            "--config",
            str(config_file),
            "--log-dir",
            str(site.root / "logs"),
        ],
    )

    assert result.exit_code == 1
    assert not site.output.exists()


@pytest.mark.integration
def test_sizes_command(site):
    site.output.mkdir()
    (site.output / "index.html").write_text("x" * 10)

    result = runner.invoke(app, ["sizes", str(site.output)])

    assert result.exit_code == 0
    assert "10B\tindex.html" in result.output
