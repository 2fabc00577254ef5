"""Unit tests for front-matter parsing."""

import pytest

from pressroom.contexts.content.frontmatter import parse_front_matter
from pressroom.exceptions import MalformedFrontMatterError


@pytest.mark.unit
def test_document_without_front_matter_is_all_body():
    """Test that text without an opening delimiter is returned unchanged."""
    text = "# Title\n\nSome text.\n\n"
    parsed = parse_front_matter(text)

    assert parsed.attributes == {}
    assert parsed.body == text
    assert parsed.body_begin == 1


@pytest.mark.unit
def test_basic_front_matter():
    """Test attributes, raw block and exact body."""
    parsed = parse_front_matter("---\ntitle: Hi\ntags: [a, b]\n---\n# Hello\n\n")

    assert parsed.attributes == {"title": "Hi", "tags": ["a", "b"]}
    assert parsed.frontmatter == "title: Hi\ntags: [a, b]"
    assert parsed.body == "# Hello\n\n"
    assert parsed.body_begin == 5


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "= yaml =\ntitle: Hi\n= yaml =\nBody",
        "---\ntitle: Hi\n...\nBody",
        "\ufeff---\ntitle: Hi\n---\nBody",
        "---   \ntitle: Hi\n---\t\nBody",
    ],
)
def test_delimiter_variants(text):
    """Test alternate opening/closing tokens, BOM and trailing whitespace."""
    parsed = parse_front_matter(text)

    assert parsed.attributes == {"title": "Hi"}
    assert parsed.body == "Body"


@pytest.mark.unit
def test_windows_line_endings_preserved_in_body():
    """Test that CRLF delimiters close the block and the body keeps its CRLFs."""
    parsed = parse_front_matter("---\r\ntitle: Hi\r\n---\r\nLine one\r\nLine two\r\n")

    assert parsed.attributes == {"title": "Hi"}
    assert parsed.body == "Line one\r\nLine two\r\n"


@pytest.mark.unit
def test_empty_block():
    """Test that an empty block yields no attributes."""
    parsed = parse_front_matter("---\n---\nBody\n")

    assert parsed.attributes == {}
    assert parsed.body == "Body\n"


@pytest.mark.unit
def test_keys_coerced_to_strings():
    """Test that non-string YAML keys become strings."""
    parsed = parse_front_matter("---\n1: one\ntrue: yes\n---\n")

    assert parsed.attributes == {"1": "one", "True": True}
    assert parsed.body == ""


@pytest.mark.unit
def test_numerically_equal_keys_both_kept():
    """Test that 1 and 1.0 stay separate attributes."""
    parsed = parse_front_matter("---\n1: int\n1.0: float\n---\n")

    assert parsed.attributes == {"1": "int", "1.0": "float"}


@pytest.mark.unit
def test_nested_mapping_keys_coerced():
    parsed = parse_front_matter("---\nmenu:\n  1: first\n  2: second\n---\n")

    assert parsed.attributes == {"menu": {"1": "first", "2": "second"}}


@pytest.mark.unit
def test_keys_colliding_as_strings_rejected():
    """Test that 1 and "1" cannot both be attributes."""
    with pytest.raises(MalformedFrontMatterError) as exc_info:
        parse_front_matter('---\n1: int\n"1": str\n---\n')

    assert exc_info.value.line == 3


@pytest.mark.unit
def test_horizontal_rule_later_in_body_is_not_front_matter():
    """Test that '---' only opens a block on the first line."""
    text = "Intro\n\n---\n\nMore\n"
    parsed = parse_front_matter(text)

    assert parsed.attributes == {}
    assert parsed.body == text


@pytest.mark.unit
def test_unclosed_block():
    """Test that an opening delimiter without a closing one is rejected."""
    with pytest.raises(MalformedFrontMatterError) as exc_info:
        parse_front_matter("---\ntitle: Hi\n# Body\n")

    assert exc_info.value.line == 1
    assert "never closed" in str(exc_info.value)


@pytest.mark.unit
def test_invalid_yaml_reports_document_line():
    """Test that YAML errors carry the line in the document."""
    with pytest.raises(MalformedFrontMatterError) as exc_info:
        parse_front_matter("---\ntitle: Hi\ntags: [a, b\n---\nBody\n")

    assert exc_info.value.line is not None
    assert exc_info.value.line >= 2
    assert exc_info.value.cause is not None


@pytest.mark.unit
def test_non_mapping_block():
    """Test that a YAML list is not accepted as attributes."""
    with pytest.raises(MalformedFrontMatterError, match="must be a mapping"):
        parse_front_matter("---\n- a\n- b\n---\nBody\n")
