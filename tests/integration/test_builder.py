"""
Integration tests for site builds - content tree in, mirrored HTML tree out.
"""

import pytest

from pressroom.contexts.rendering.builder import SiteBuilder, walk_tree, write_output
from pressroom.exceptions import ConfigurationError, LayoutNotFoundError, WriteError


@pytest.mark.integration
def test_walk_tree_order_and_filter(site):
    site.write_content("index.md", "")
    site.write_content("guide/intro.md", "")
    site.write_content("guide/notes.txt", "")
    site.write_content("guide/README.MD", "")
    site.write_content("a.md", "")
    (site.content / "empty").mkdir()

    assert walk_tree(site.content, [".md"]) == [
        "a.md",
        "empty/",
        "guide/",
        "guide/README.MD",
        "guide/intro.md",
        "index.md",
    ]
    assert "guide/notes.txt" in walk_tree(site.content)


@pytest.mark.integration
def test_build_mirrors_tree(site):
    site.write_content("index.md", "---\ntitle: Home\n---\nWelcome\n")
    site.write_content("guide/intro.markdown", "---\ntitle: Intro\n---\n# Start\n")
    site.write_content("guide/image.png", "not a document")
    (site.content / "guide" / "empty").mkdir()

    result = SiteBuilder(site.config()).build()

    assert result.success
    assert result.directories == ["guide/", "guide/empty/"]
    assert result.written == ["guide/intro.html", "index.html"]
    assert (site.output / "guide" / "empty").is_dir()
    assert not (site.output / "guide" / "image.html").exists()
    assert (site.output / "index.html").read_text(encoding="utf-8") == "<h1>Home</h1><p>Welcome</p>\n"
    assert (site.output / "guide" / "intro.html").read_text(encoding="utf-8").startswith(
        '<h1>Intro</h1><h1 id="start">'
    )


@pytest.mark.integration
def test_missing_layout_does_not_stop_siblings(site):
    """Test that a bad layout fails one document while the sibling is written."""
    site.write_content("a.md", "---\nlayout: nope\n---\nA\n")
    site.write_content("b.md", "---\ntitle: B\n---\nB\n")

    result = SiteBuilder(site.config()).build()

    assert not result.success
    assert result.written == ["b.html"]
    assert len(result.failures) == 1

    failure = result.failures[0]
    assert failure.path == "a.md"
    assert failure.phase == "resolve_layout"
    assert isinstance(failure.error, LayoutNotFoundError)
    assert "nope.html.jinja" in str(failure.error)
    assert not (site.output / "a.html").exists()
    assert (site.output / "b.html").exists()


@pytest.mark.integration
def test_fail_fast_stops_at_first_failure(site):
    site.write_content("a.md", "---\nlayout: nope\n---\nA\n")
    site.write_content("b.md", "B\n")

    with pytest.raises(LayoutNotFoundError):
        SiteBuilder(site.config(fail_fast=True)).build()

    assert not (site.output / "b.html").exists()


@pytest.mark.integration
def test_configuration_error_before_any_output(site):
    site.write_content("a.md", "A\n")

    with pytest.raises(ConfigurationError):
        SiteBuilder(site.config(layouts={})).build()

    assert not site.output.exists()


@pytest.mark.integration
def test_invalid_callback_is_configuration_error(site):
    site.write_content("a.md", "A\n")

    with pytest.raises(ConfigurationError):
        SiteBuilder(site.config(callbacks={"after_compile": "no_such_module_xyz:hook"})).build()

    assert not site.output.exists()


@pytest.mark.integration
def test_explicit_paths(site):
    site.write_content("a.md", "A\n")
    site.write_content("docs/b.md", "B\n")

    result = SiteBuilder(site.config()).build(["docs/", "docs/b.md"])

    assert result.written == ["docs/b.html"]
    assert not (site.output / "a.html").exists()


@pytest.mark.integration
def test_target_extension(site):
    site.write_content("feed.md", "x\n")

    result = SiteBuilder(site.config(target_extension=".htm")).build()

    assert result.written == ["feed.htm"]


@pytest.mark.integration
def test_template_edits_picked_up_between_passes(site):
    """Test that each pass compiles templates afresh."""
    site.write_content("a.md", "x\n")
    builder = SiteBuilder(site.config())

    builder.build()
    site.write_template("default.html.jinja", "v2 {{ body }}")
    builder.build()

    assert (site.output / "a.html").read_text(encoding="utf-8") == "v2 <p>x</p>\n"


@pytest.mark.integration
def test_rebuild_is_idempotent(site):
    site.write_content("guide/a.md", "x\n")
    builder = SiteBuilder(site.config())

    first = builder.build()
    second = builder.build()

    assert first.written == second.written == ["guide/a.html"]
    assert second.success


@pytest.mark.integration
def test_write_output_creates_parents(tmp_path):
    target = tmp_path / "deep" / "er" / "page.html"
    write_output(target, "<p>é</p>")

    assert target.read_text(encoding="utf-8") == "<p>é</p>"


@pytest.mark.integration
def test_write_output_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")

    with pytest.raises(WriteError) as exc_info:
        write_output(blocker / "page.html", "<p></p>")

    assert exc_info.value.phase == "write"
    assert exc_info.value.output_path == blocker / "page.html"
