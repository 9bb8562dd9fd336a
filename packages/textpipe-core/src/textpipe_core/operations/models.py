"""Typed configuration variants, one per built-in operation kind."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from textpipe_core.operations.base import OperationConfig

CaseMode = Literal["upper", "lower", "title", "camel", "snake", "kebab", "pascal", "constant"]


class TrimConfig(OperationConfig):
    lines: bool = False


class DedupeConfig(OperationConfig):
    keep: Literal["first", "last"] = "first"
    case_sensitive: bool = True


class ChangeCaseConfig(OperationConfig):
    mode: CaseMode = "upper"
    lines: bool = True


class FilterLinesConfig(OperationConfig):
    """Drops empty lines; ``trim`` also drops whitespace-only lines."""

    trim: bool = False


class ReplaceConfig(OperationConfig):
    """``from``/``to`` on the wire; ``find``/``replace`` in Python."""

    find: str = Field(default="", alias="from")
    replace: str = Field(default="", alias="to")
    regex: bool = False
    case_insensitive: bool = False
    lines: bool = False


class SortLinesConfig(OperationConfig):
    direction: Literal["asc", "desc"] = "asc"
    numeric: bool = False


class JoinLinesConfig(OperationConfig):
    separator: str = " "


class SplitLinesConfig(OperationConfig):
    separator: str = Field(default=",", min_length=1)


class NumberLinesConfig(OperationConfig):
    start: int = 1
    prefix: str = ""
    separator: str = ". "


class ShuffleLinesConfig(OperationConfig):
    """The seed makes the permutation reproducible."""

    seed: int = 0


class WrapLinesConfig(OperationConfig):
    prefix: str = ""
    suffix: str = ""


class WordWrapConfig(OperationConfig):
    width: int = Field(default=80, ge=1)


class IndentConfig(OperationConfig):
    mode: Literal["indent", "dedent"] = "indent"
    size: int = Field(default=2, ge=0)
    use_tabs: bool = False


class ExtractMatchesConfig(OperationConfig):
    pattern: str = ""
    case_insensitive: bool = False


class LineMatchConfig(OperationConfig):
    """Shared by keep-lines and remove-lines."""

    pattern: str = ""
    regex: bool = False
    case_insensitive: bool = False


class RemoveCharsConfig(OperationConfig):
    mode: Literal["digits", "punctuation", "non-ascii", "custom"] = "digits"
    custom: str = ""


class EncodeDecodeConfig(OperationConfig):
    mode: Literal[
        "url-encode",
        "url-decode",
        "base64-encode",
        "base64-decode",
        "html-encode",
        "html-decode",
    ] = "url-encode"


class EscapeConfig(OperationConfig):
    mode: Literal["json-escape", "json-unescape", "regex-escape"] = "json-escape"


class PadAlignConfig(OperationConfig):
    align: Literal["left", "center", "right"] = "left"
    width: int = Field(default=20, ge=0)
    char: str = Field(default=" ", min_length=1, max_length=1)


class FormatNumbersConfig(OperationConfig):
    decimals: int = Field(default=2, ge=0, le=20)
    thousands: bool = True


class IncrementNumbersConfig(OperationConfig):
    delta: int = 1


class SlugifyConfig(OperationConfig):
    lines: bool = True


class QuoteConfig(OperationConfig):
    mode: Literal["add", "remove"] = "add"
    char: str = Field(default='"', min_length=1)
    lines: bool = True
