"""Tests for the built-in operations: casing, line helpers, and every transform."""

import random

import pytest

from textpipe_core.errors import OperationExecutionError
from textpipe_core.operations.casing import convert_case, split_words
from textpipe_core.operations.data import slugify
from textpipe_core.operations.lines import join_lines, map_lines, split_lines
from textpipe_core.operations.registry import BUILTIN_OPERATIONS


# ── Word segmentation ──────────────────────────────────────────────


class TestSplitWords:
    @pytest.mark.parametrize(
        "text",
        ["hello world", "helloWorld", "hello-world", "hello_world", "HelloWorld", "  hello   world  "],
    )
    def test_hello_world_variants(self, text):
        assert [w.lower() for w in split_words(text)] == ["hello", "world"]

    def test_mixed_delimiters(self):
        assert split_words("Hello-World baz_qux") == ["Hello", "World", "baz", "qux"]

    def test_acronym_boundary(self):
        assert split_words("HTTPServer") == ["HTTP", "Server"]
        assert split_words("parseHTTPResponse") == ["parse", "HTTP", "Response"]

    def test_digit_then_upper(self):
        assert split_words("version2Update") == ["version2", "Update"]

    def test_punctuation_is_a_boundary(self):
        assert split_words("a.b,c") == ["a", "b", "c"]

    def test_empty(self):
        assert split_words("") == []
        assert split_words("--__  ") == []


# ── Case conversion ────────────────────────────────────────────────


class TestConvertCase:
    @pytest.mark.parametrize(
        "mode,expected",
        [
            ("upper", "HELLO WORLD"),
            ("lower", "hello world"),
            ("title", "Hello World"),
            ("camel", "helloWorld"),
            ("snake", "hello_world"),
            ("kebab", "hello-world"),
            ("pascal", "HelloWorld"),
            ("constant", "HELLO_WORLD"),
        ],
    )
    def test_mode_table(self, mode, expected):
        assert convert_case("hello world", mode) == expected

    @pytest.mark.parametrize(
        "mode,expected",
        [
            ("camel", "helloWorld"),
            ("snake", "hello_world"),
            ("kebab", "hello-world"),
            ("pascal", "HelloWorld"),
            ("constant", "HELLO_WORLD"),
        ],
    )
    def test_joining_modes_agree_across_spellings(self, mode, expected):
        for source in ("helloWorld", "hello-world", "hello_world", "HELLO WORLD"):
            assert convert_case(source, mode) == expected

    @pytest.mark.parametrize(
        "mode,expected",
        [
            ("upper", "HELLO-WORLD BAZ_QUX"),
            ("lower", "hello-world baz_qux"),
            ("title", "Hello-World Baz_Qux"),
            ("camel", "helloWorldBazQux"),
            ("snake", "hello_world_baz_qux"),
            ("kebab", "hello-world-baz-qux"),
            ("pascal", "HelloWorldBazQux"),
            ("constant", "HELLO_WORLD_BAZ_QUX"),
        ],
    )
    def test_mixed_delimiter_input(self, mode, expected):
        assert convert_case("Hello-World baz_qux", mode) == expected

    def test_acronyms(self):
        assert convert_case("HTTPServer", "snake") == "http_server"
        assert convert_case("HTTPServer", "pascal") == "HttpServer"

    @pytest.mark.parametrize(
        "mode", ["upper", "lower", "title", "camel", "snake", "kebab", "pascal", "constant"]
    )
    def test_empty_maps_to_empty(self, mode):
        assert convert_case("", mode) == ""

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unsupported case mode"):
            convert_case("x", "sponge")


# ── Line helpers ───────────────────────────────────────────────────


class TestLineHelpers:
    def test_trailing_newline_is_not_a_line(self):
        assert split_lines("a\nb\n") == (["a", "b"], "\n")
        assert split_lines("a\nb") == (["a", "b"], "")

    def test_empty(self):
        assert split_lines("") == ([""], "")
        assert join_lines([], "\n") == ""

    def test_map_lines_keeps_crlf(self):
        assert map_lines(" a \r\nb ", str.strip) == "a\r\nb"


# ── Transforms ─────────────────────────────────────────────────────


class TestTrim:
    def test_whole_text(self, registry):
        assert registry.apply("trim", {"lines": False}, "  hello world \n") == "hello world"

    def test_per_line_preserves_line_count(self, registry):
        text = "  a  \n b\n\n   c\n"
        result = registry.apply("trim", {"lines": True}, text)
        assert result == "a\nb\n\nc\n"
        assert result.count("\n") == text.count("\n")

    def test_per_line_keeps_crlf(self, registry):
        assert registry.apply("trim", {"lines": True}, " a \r\n b\r\n") == "a\r\nb\r\n"


class TestDedupe:
    def test_case_insensitive_keep_first(self, registry):
        config = {"keep": "first", "caseSensitive": False}
        assert registry.apply("dedupe", config, "Foo\nfoo\nBar") == "Foo\nBar"

    def test_case_sensitive_keeps_both(self, registry):
        assert registry.apply("dedupe", {}, "Foo\nfoo\nFoo") == "Foo\nfoo"

    def test_keep_last(self, registry):
        config = {"keep": "last", "caseSensitive": False}
        assert registry.apply("dedupe", config, "Foo\nfoo\nBar") == "foo\nBar"
        assert registry.apply("dedupe", {"keep": "last"}, "a\nb\na\nc") == "b\na\nc"

    def test_trailing_newline_preserved(self, registry):
        assert registry.apply("dedupe", {}, "a\nb\na\n") == "a\nb\n"

    def test_crlf_lines_compare_by_content(self, registry):
        assert registry.apply("dedupe", {}, "a\r\nb\r\na\r\n") == "a\r\nb\r\n"

    @pytest.mark.parametrize("keep", ["first", "last"])
    @pytest.mark.parametrize("case_sensitive", [True, False])
    def test_idempotent(self, registry, keep, case_sensitive):
        config = {"keep": keep, "caseSensitive": case_sensitive}
        text = "b\nA\na\nb\n\nB\nc\n\na"
        once = registry.apply("dedupe", config, text)
        assert registry.apply("dedupe", config, once) == once


class TestChangeCase:
    def test_default_mode_is_upper(self, registry):
        assert registry.apply("change-case", {}, "hello world") == "HELLO WORLD"

    def test_per_line_by_default(self, registry):
        assert registry.apply("change-case", {"mode": "snake"}, "helloWorld\nfooBar\n") == (
            "hello_world\nfoo_bar\n"
        )

    def test_whole_text_joins_across_lines(self, registry):
        config = {"mode": "snake", "lines": False}
        assert registry.apply("change-case", config, "helloWorld\nfooBar") == "hello_world_foo_bar"


class TestFilterLines:
    def test_drops_empty_lines(self, registry):
        assert registry.apply("filter-lines", {}, "a\n\n  \nb\n") == "a\n  \nb\n"

    def test_trim_drops_whitespace_only(self, registry):
        assert registry.apply("filter-lines", {"trim": True}, "a\n\n  \nb\n") == "a\nb\n"

    def test_all_empty(self, registry):
        assert registry.apply("filter-lines", {}, "\n\n") == ""


class TestReplace:
    def test_literal(self, registry):
        assert registry.apply("replace", {"find": ".", "replace": "!"}, "a.b.c") == "a!b!c"

    def test_literal_replacement_is_not_a_template(self, registry):
        assert registry.apply("replace", {"find": "x", "replace": r"\1"}, "x") == r"\1"

    def test_case_insensitive(self, registry):
        config = {"from": "foo", "to": "bar", "caseInsensitive": True}
        assert registry.apply("replace", config, "Foo foo FOO") == "bar bar bar"

    def test_regex_groups(self, registry):
        config = {"find": r"(\w+)@(\w+)", "replace": r"\2 at \1", "regex": True}
        assert registry.apply("replace", config, "me@host") == "host at me"

    def test_per_line_anchors(self, registry):
        config = {"find": "^", "replace": "> ", "regex": True}
        assert registry.apply("replace", config, "a\nb") == "> a\nb"
        assert registry.apply("replace", {**config, "lines": True}, "a\nb") == "> a\n> b"

    def test_empty_find_is_identity(self, registry):
        assert registry.apply("replace", {"find": "", "replace": "x"}, "abc") == "abc"

    def test_malformed_pattern_fails(self, registry):
        with pytest.raises(OperationExecutionError) as exc_info:
            registry.apply("replace", {"find": "(", "regex": True}, "abc")
        assert exc_info.value.kind == "replace"
        assert "invalid pattern" in exc_info.value.reason

    def test_bad_group_reference_fails(self, registry):
        config = {"find": "a", "replace": r"\2", "regex": True}
        with pytest.raises(OperationExecutionError, match="invalid replacement"):
            registry.apply("replace", config, "abc")


class TestSortLines:
    def test_alphabetical_ignores_case(self, registry):
        assert registry.apply("sort-lines", {}, "b\nA\nc\n") == "A\nb\nc\n"

    def test_descending(self, registry):
        assert registry.apply("sort-lines", {"direction": "desc"}, "b\nA\nc") == "c\nb\nA"

    def test_numeric(self, registry):
        text = "10 x\n2 y\n-1 z\nnone"
        assert registry.apply("sort-lines", {"numeric": True}, text) == "-1 z\nnone\n2 y\n10 x"


class TestReverseJoinSplit:
    def test_reverse(self, registry):
        assert registry.apply("reverse-lines", {}, "a\nb\nc\n") == "c\nb\na\n"

    def test_join(self, registry):
        assert registry.apply("join-lines", {"separator": ", "}, "a\nb\nc") == "a, b, c"
        assert registry.apply("join-lines", {}, "a\r\nb\n") == "a b\n"

    def test_split(self, registry):
        assert registry.apply("split-lines", {}, "a,b,c") == "a\nb\nc"
        assert registry.apply("split-lines", {"separator": " | "}, "x | y") == "x\ny"


class TestNumberLines:
    def test_defaults(self, registry):
        assert registry.apply("number-lines", {}, "a\nb\n") == "1. a\n2. b\n"

    def test_start_prefix_separator(self, registry):
        config = {"start": 10, "prefix": "#", "separator": ": "}
        assert registry.apply("number-lines", config, "x\ny") == "#10: x\n#11: y"


class TestShuffleLines:
    def test_seeded_permutation(self, registry):
        lines = ["a", "b", "c", "d", "e"]
        expected = list(lines)
        random.Random(7).shuffle(expected)
        result = registry.apply("shuffle-lines", {"seed": 7}, "\n".join(lines) + "\n")
        assert result == "\n".join(expected) + "\n"

    def test_same_seed_same_order(self, registry):
        text = "\n".join(str(i) for i in range(20))
        first = registry.apply("shuffle-lines", {"seed": 3}, text)
        assert registry.apply("shuffle-lines", {"seed": 3}, text) == first
        assert sorted(first.split("\n")) == sorted(text.split("\n"))


class TestWrapLines:
    def test_prefix_and_suffix(self, registry):
        config = {"prefix": "<li>", "suffix": "</li>"}
        assert registry.apply("wrap-lines", config, "a\nb\n") == "<li>a</li>\n<li>b</li>\n"


class TestWordWrap:
    def test_breaks_at_words(self, registry):
        assert registry.apply("word-wrap", {"width": 10}, "the quick brown fox") == "the quick\nbrown fox"

    def test_long_words_are_not_split(self, registry):
        assert registry.apply("word-wrap", {"width": 3}, "abcdef gh") == "abcdef\ngh"

    def test_blank_lines_kept(self, registry):
        assert registry.apply("word-wrap", {"width": 5}, "a\n\nb") == "a\n\nb"

    def test_zero_width_rejected(self, registry):
        [violation] = registry.validate("word-wrap", {"width": 0})
        assert violation.field == "width"


class TestIndent:
    def test_indent_skips_blank_lines(self, registry):
        assert registry.apply("indent", {}, "a\n\n  b\n") == "  a\n\n    b\n"

    def test_dedent_removes_one_level(self, registry):
        assert registry.apply("indent", {"mode": "dedent"}, "    a\n b\nc") == "  a\nb\nc"

    def test_tabs(self, registry):
        assert registry.apply("indent", {"useTabs": True}, "a") == "\ta"
        assert registry.apply("indent", {"mode": "dedent", "useTabs": True}, "\t\ta\nb") == "\ta\nb"


class TestExtractMatches:
    def test_one_match_per_line(self, registry):
        assert registry.apply("extract-matches", {"pattern": r"\d+"}, "a1 b22\nc333") == "1\n22\n333"

    def test_case_insensitive(self, registry):
        config = {"pattern": "foo", "caseInsensitive": True}
        assert registry.apply("extract-matches", config, "Foo FOO bar") == "Foo\nFOO"

    def test_no_match_is_empty(self, registry):
        assert registry.apply("extract-matches", {"pattern": "z"}, "abc") == ""

    def test_malformed_pattern_fails(self, registry):
        with pytest.raises(OperationExecutionError, match="invalid pattern"):
            registry.apply("extract-matches", {"pattern": "(["}, "abc")


class TestKeepRemoveLines:
    text = "ok\nerror 1\nfine\nERR 2\n"

    def test_keep_literal(self, registry):
        assert registry.apply("keep-lines", {"pattern": "err"}, self.text) == "error 1\n"

    def test_keep_case_insensitive(self, registry):
        config = {"pattern": "err", "caseInsensitive": True}
        assert registry.apply("keep-lines", config, self.text) == "error 1\nERR 2\n"

    def test_literal_pattern_is_escaped(self, registry):
        assert registry.apply("keep-lines", {"pattern": "a.c"}, "abc\na.c") == "a.c"

    def test_keep_regex(self, registry):
        config = {"pattern": r"^\d", "regex": True}
        assert registry.apply("keep-lines", config, "1a\nb\n2c") == "1a\n2c"

    def test_remove(self, registry):
        assert registry.apply("remove-lines", {"pattern": "#"}, "a\n# c\nb") == "a\nb"

    def test_empty_pattern_is_identity(self, registry):
        assert registry.apply("remove-lines", {}, self.text) == self.text


class TestRemoveChars:
    @pytest.mark.parametrize(
        "config,text,expected",
        [
            ({}, "a1b2c3", "abc"),
            ({"mode": "punctuation"}, "Hello, world! (ok)", "Hello world ok"),
            ({"mode": "non-ascii"}, "héllo wörld", "hllo wrld"),
            ({"mode": "custom", "custom": "aeiou"}, "education", "dctn"),
        ],
    )
    def test_modes(self, registry, config, text, expected):
        assert registry.apply("remove-chars", config, text) == expected


class TestEncodeDecode:
    @pytest.mark.parametrize(
        "mode,text,expected",
        [
            ("url-encode", "a b&c/d", "a%20b%26c%2Fd"),
            ("url-decode", "a%20b%26c%2Fd", "a b&c/d"),
            ("base64-encode", "hello", "aGVsbG8="),
            ("base64-decode", "aGVs\nbG8=", "hello"),
            ("html-encode", '<a href="x">&</a>', "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"),
            ("html-decode", "&lt;b&gt; &amp; &#39;", "<b> & '"),
        ],
    )
    def test_modes(self, registry, mode, text, expected):
        assert registry.apply("encode-decode", {"mode": mode}, text) == expected

    def test_invalid_base64_fails(self, registry):
        with pytest.raises(OperationExecutionError, match="not valid Base64"):
            registry.apply("encode-decode", {"mode": "base64-decode"}, "!!!")


class TestEscape:
    def test_json_round(self, registry):
        raw = 'say "hi"\n\tend'
        escaped = registry.apply("escape", {}, raw)
        assert escaped == r'say \"hi\"\n\tend'
        assert registry.apply("escape", {"mode": "json-unescape"}, escaped) == raw

    def test_regex_escape(self, registry):
        assert registry.apply("escape", {"mode": "regex-escape"}, "a.b*c") == r"a\.b\*c"

    def test_bad_json_escape_fails(self, registry):
        with pytest.raises(OperationExecutionError, match="not a valid JSON string body"):
            registry.apply("escape", {"mode": "json-unescape"}, r"bad \x")


class TestPadAlign:
    def test_left_is_default(self, registry):
        assert registry.apply("pad-align", {"width": 5}, "ab\nc") == "ab   \nc    "

    def test_right_with_fill_char(self, registry):
        config = {"align": "right", "width": 4, "char": "0"}
        assert registry.apply("pad-align", config, "7\n42") == "0007\n0042"

    def test_center(self, registry):
        assert registry.apply("pad-align", {"align": "center", "width": 5}, "a") == "  a  "

    def test_fill_must_be_one_char(self, registry):
        [violation] = registry.validate("pad-align", {"char": "ab"})
        assert violation.field == "char"


class TestNumbers:
    def test_format_defaults(self, registry):
        assert registry.apply("format-numbers", {}, "total 1234.5 and 7") == "total 1,234.50 and 7.00"

    def test_format_negative(self, registry):
        assert registry.apply("format-numbers", {}, "-1234567.891") == "-1,234,567.89"

    def test_format_without_separators(self, registry):
        config = {"decimals": 0, "thousands": False}
        assert registry.apply("format-numbers", config, "1234.6") == "1235"

    def test_increment(self, registry):
        assert registry.apply("increment-numbers", {}, "item 1, item 9") == "item 2, item 10"

    def test_increment_hyphen_is_not_a_sign(self, registry):
        assert registry.apply("increment-numbers", {"delta": -1}, "x-1 and -1") == "x-0 and -2"

    def test_increment_keeps_zero_padding(self, registry):
        assert registry.apply("increment-numbers", {}, "file009.txt") == "file010.txt"


class TestSlugifyQuote:
    def test_slugify_function(self):
        assert slugify("Héllo, World!") == "hello-world"

    def test_slugify_per_line(self, registry):
        assert registry.apply("slugify", {}, "Foo Bar\nBaz_Qux") == "foo-bar\nbaz-qux"
        assert registry.apply("slugify", {"lines": False}, "Foo\nBar") == "foo-bar"

    def test_quote_add(self, registry):
        assert registry.apply("quote", {}, "a\nb") == '"a"\n"b"'
        assert registry.apply("quote", {"char": "'", "lines": False}, "x\ny") == "'x\ny'"

    def test_quote_remove_one_pair(self, registry):
        assert registry.apply("quote", {"mode": "remove"}, '"a"\nb\n""c""') == 'a\nb\n"c"'
        assert registry.apply("quote", {"mode": "remove"}, '"') == '"'


# ── Totality ───────────────────────────────────────────────────────


@pytest.mark.parametrize("op_cls", BUILTIN_OPERATIONS, ids=lambda cls: cls.kind)
def test_every_operation_maps_empty_to_empty(registry, op_cls):
    assert registry.apply(op_cls.kind, {}, "") == ""


@pytest.mark.parametrize("op_cls", BUILTIN_OPERATIONS, ids=lambda cls: cls.kind)
def test_every_operation_is_deterministic(registry, op_cls):
    text = "  b,a\nA\n\nb  \n"
    assert registry.apply(op_cls.kind, {}, text) == registry.apply(op_cls.kind, {}, text)
