"""Tests for documentation block parsing."""

from __future__ import annotations

import pytest

from hooksig.domain.docblock import (
    DocBlockError,
    DocTag,
    InvalidTag,
    ParamTag,
    parse_docblock,
    parse_param,
    recover_array_shape,
)

HASH_NOTATION_DOC = """/**
 * Filters the query arguments.
 *
 * @since 4.0.0
 *
 * @param array $args {
 *     Query arguments.
 *
 *     @type int    $number Maximum results.
 *     @type string $order  Sort direction.
 * }
 * @param string $context Where the query runs.
 */"""


class TestParseDocblock:
    def test_summary_and_tags(self) -> None:
        block = parse_docblock(HASH_NOTATION_DOC)
        assert block.summary == "Filters the query arguments."
        assert [tag.name for tag in block.tags] == ["since", "param", "param"]
        assert block.tags[0] == DocTag("since", "4.0.0")

    def test_nested_type_lines_stay_in_param(self) -> None:
        block = parse_docblock(HASH_NOTATION_DOC)
        params = block.tags_by_name("param")
        assert len(params) == 2
        first = params[0]
        assert isinstance(first, ParamTag)
        assert first.type_text == "array"
        assert first.variable == "args"
        assert "@type int    $number" in first.description
        assert first.description.rstrip().endswith("}")

    def test_single_line_block(self) -> None:
        block = parse_docblock("/** @param int $id Post ID. */")
        assert block.summary == ""
        assert block.tags == (ParamTag("int", "id", "Post ID."),)

    def test_multiline_tag_content(self) -> None:
        block = parse_docblock("/**\n * @param string $title The title,\n *   continued.\n */")
        (tag,) = block.tags
        assert isinstance(tag, ParamTag)
        assert tag.description == "The title,\n  continued."

    @pytest.mark.parametrize("text", ["// comment", "/* plain */", "", "/**/"])
    def test_not_a_docblock(self, text: str) -> None:
        with pytest.raises(DocBlockError):
            parse_docblock(text)


class TestParseParam:
    def test_type_variable_description(self) -> None:
        assert parse_param("int|null $id The ID.") == ParamTag("int|null", "id", "The ID.")

    def test_untyped(self) -> None:
        assert parse_param("$value The value.") == ParamTag(None, "value", "The value.")

    def test_type_only(self) -> None:
        assert parse_param("WP_Post") == ParamTag("WP_Post", None, "")

    def test_empty(self) -> None:
        assert parse_param("") == ParamTag(None, None, "")

    def test_shape_with_spaces(self) -> None:
        tag = parse_param("array{ id: int, title: string } $post Post data.")
        assert tag == ParamTag("array{ id: int, title: string }", "post", "Post data.")

    def test_callable_keeps_bracketed_spaces(self) -> None:
        tag = parse_param("callable(int, string):bool $cb Callback.")
        assert tag == ParamTag("callable(int, string):bool", "cb", "Callback.")

    @pytest.mark.parametrize("variable", ["&$query", "...$args", "&...$refs"])
    def test_variable_forms(self, variable: str) -> None:
        tag = parse_param(f"array {variable} Items.")
        assert isinstance(tag, ParamTag)
        assert tag.variable == variable.lstrip("&.").lstrip("$")

    @pytest.mark.parametrize("content", ["array{ id: int $x", "array<int $x", "int) $x", "'open $x"])
    def test_unbalanced_type_is_invalid(self, content: str) -> None:
        tag = parse_param(content)
        assert isinstance(tag, InvalidTag)
        assert tag.name == "param"
        assert tag.content == content


class TestRecoverArrayShape:
    def test_recovers_fields_in_order(self) -> None:
        content = "Args. { @type int $number Max. @type string $order Dir. }"
        assert recover_array_shape(["array"], content) == ["array{ number: int, order: string }"]

    def test_absent_types_are_eligible(self) -> None:
        assert recover_array_shape(None, "{ @type bool $flag }") == ["array{ flag: bool }"]

    @pytest.mark.parametrize(
        ("types", "content"),
        [
            (["string"], "{ @type int $id }"),
            (["array", "null"], "{ @type int $id }"),
            (["array"], "No nested block. @type int $id"),
            (["array"], "{ outer { @type int $id } }"),
            (["array"], "{ no typed lines }"),
        ],
    )
    def test_not_recovered(self, types: list[str], content: str) -> None:
        assert recover_array_shape(types, content) is None
