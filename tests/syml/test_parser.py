from __future__ import annotations

import pytest

from syml import DuplicateKeyError, ErrorKind, ParserOptions, SymlParseError, SymlParser, parse


def test_nested_mapping_one_step_deeper() -> None:
    assert parse("a:\n  b: 1\n") == {"a": {"b": "1"}}


def test_nested_line_with_wrong_indentation_is_rejected() -> None:
    with pytest.raises(SymlParseError) as excinfo:
        parse("a:\n b: 1\n")
    error = excinfo.value
    assert error.kind is ErrorKind.INDENTATION_MISMATCH
    assert error.residual_offset == 3
    assert error.offset == 4


def test_item_run_becomes_list() -> None:
    assert parse("a:\n  - x\n  - y\n") == {"a": ["x", "y"]}


def test_value_on_same_line_is_a_scalar() -> None:
    assert parse("a: b\n") == {"a": "b"}


def test_duplicate_keys_keep_last_value() -> None:
    assert parse("a: 1\na: 2\n") == {"a": "2"}


def test_strict_mode_rejects_duplicate_keys() -> None:
    with pytest.raises(DuplicateKeyError) as excinfo:
        parse("a: 1\na: 2\n", strict_duplicates=True)
    assert excinfo.value.key == "a"
    assert excinfo.value.offset == 5
    assert excinfo.value.kind is ErrorKind.DUPLICATE_KEY


def test_strict_mode_checks_nested_mappings() -> None:
    parser = SymlParser(ParserOptions(strict_duplicates=True))
    assert parser.parse("a:\n  b: 1\nc:\n  b: 2\n") == {"a": {"b": "1"}, "c": {"b": "2"}}
    with pytest.raises(DuplicateKeyError):
        parser.parse("a:\n  b: 1\n  b: 2\n")


def test_full_line_comments_are_ignored() -> None:
    source = "# full line comment\na: 1\n  # indented comment\nb: 2\n"
    assert parse(source) == {"a": "1", "b": "2"}


def test_trailing_comment_after_scalar_is_not_stripped() -> None:
    with pytest.raises(SymlParseError) as excinfo:
        parse("a: 1 # note\n")
    assert excinfo.value.offset == 4
    assert "line ending" in excinfo.value.expected


def test_trailing_spaces_after_scalar_are_rejected() -> None:
    with pytest.raises(SymlParseError):
        parse("a: b  \n")


def test_missing_final_newline_is_accepted() -> None:
    assert parse("a: b") == {"a": "b"}
    assert parse("a:\n  b: c") == {"a": {"b": "c"}}


@pytest.mark.parametrize("source", ["", "\n", "# only a comment\n\n", "   \n"])
def test_documents_without_statements_are_empty(source: str) -> None:
    assert parse(source) == {}


def test_blank_lines_between_statements_are_skipped() -> None:
    assert parse("a: 1\n\n   \nb: 2\n") == {"a": "1", "b": "2"}


def test_crlf_line_endings() -> None:
    assert parse("a: 1\r\nb:\r\n  - x\r\n") == {"a": "1", "b": ["x"]}


def test_key_without_nested_block_is_empty_mapping() -> None:
    assert parse("a:\nb: c\n") == {"a": {}, "b": "c"}


def test_deeply_nested_structures() -> None:
    source = (
        "a:\n"
        "  b:\n"
        "    c: d\n"
        "  e:\n"
        "    - f\n"
        "    - \n"
        "      h: i\n"
    )
    assert parse(source) == {"a": {"b": {"c": "d"}, "e": ["f", {"h": "i"}]}}


def test_list_of_lists() -> None:
    assert parse("a:\n  - \n    - x\n    - y\n  - z\n") == {"a": [["x", "y"], "z"]}


def test_items_and_properties_do_not_mix_at_one_level() -> None:
    with pytest.raises(SymlParseError):
        parse("a:\n  - x\n  b: y\n")


def test_custom_indent_step() -> None:
    assert parse("a:\n    b: c\n", indent_step=4) == {"a": {"b": "c"}}
    with pytest.raises(SymlParseError):
        parse("a:\n    b: c\n")


def test_separator_whitespace_is_optional() -> None:
    assert parse("a : b\nc:d\n") == {"a": "b", "c": "d"}


def test_multi_word_and_quoted_keys() -> None:
    assert parse('foo bar: baz\n"a:b": c\n') == {"foo bar": "baz", "a:b": "c"}


def test_bytes_and_text_input_agree() -> None:
    assert parse(b"a: b\n") == parse("a: b\n")
    assert parse(bytearray(b"a: b\n")) == {"a": "b"}


def test_unicode_text_and_byte_offsets() -> None:
    assert parse("ключ: значение\n") == {"ключ": "значение"}
    with pytest.raises(SymlParseError) as excinfo:
        parse('é: "\\q"\n')
    assert excinfo.value.offset == 6


def test_residual_input_reports_attempted_productions() -> None:
    with pytest.raises(SymlParseError) as excinfo:
        parse("a: b\n%bad\n")
    error = excinfo.value
    assert error.kind is ErrorKind.RESIDUAL_INPUT
    assert error.offset == 5
    assert error.residual_offset == 5
    assert {"comment", "line ending", "plain scalar"} <= set(error.expected)


def test_top_level_items_are_not_accepted() -> None:
    with pytest.raises(SymlParseError):
        parse("- x\n")


def test_lockfile_document(lockfile_text: str) -> None:
    assert parse(lockfile_text) == {
        "__metadata": {"version": "6", "cacheKey": "8"},
        "lodash@npm:^4.17.21": {
            "version": "4.17.21",
            "resolution": "lodash@npm:4.17.21",
            "checksum": "eb835a2e51d381e561e508ce932ea50a8e5a68f4ebdd771ea240d3048244a8d1",
            "languageName": "node",
            "linkType": "hard",
        },
        "my-app@workspace:.": {
            "version": "0.0.0-use.local",
            "resolution": "my-app@workspace:.",
            "dependencies": {"lodash": "^4.17.21"},
            "bin": {"my-app": "./bin/cli.js"},
            "languageName": "unknown",
            "linkType": "soft",
        },
    }


def test_parser_logs_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("DEBUG", logger="syml.parser"):
        parse("a: b\n")
    assert any("top-level keys" in record.getMessage() for record in caplog.records)


@pytest.mark.parametrize(("source", "offset"), [("a: b\r", 4), ("a:\r", 2)])
def test_trailing_lone_carriage_return_is_rejected(source: str, offset: int) -> None:
    with pytest.raises(SymlParseError) as excinfo:
        parse(source)
    assert excinfo.value.offset == offset
    assert "line ending" in excinfo.value.expected


def test_lone_carriage_return_mid_document_is_rejected() -> None:
    with pytest.raises(SymlParseError) as excinfo:
        parse("a: b\rc: d\n")
    assert excinfo.value.offset == 4
