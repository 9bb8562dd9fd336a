"""Line-oriented operations: dedupe, filter, sort, reorder, number, wrap and indent."""

from __future__ import annotations

import random
import re
import textwrap
from collections.abc import Callable

from textpipe_core.operations.base import Operation, OperationConfig
from textpipe_core.operations.models import (
    DedupeConfig,
    FilterLinesConfig,
    IndentConfig,
    JoinLinesConfig,
    NumberLinesConfig,
    ShuffleLinesConfig,
    SortLinesConfig,
    SplitLinesConfig,
    WordWrapConfig,
    WrapLinesConfig,
)

_LEADING_NUMBER_RE = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def split_lines(text: str) -> tuple[list[str], str]:
    """Split on ``\\n``. Returns the lines and the final newline, if any.

    A trailing newline terminates the last line rather than starting an
    empty one, so ``"a\\nb\\n"`` has two lines.
    """
    if text.endswith("\n"):
        return text[:-1].split("\n"), "\n"
    return text.split("\n"), ""


def join_lines(lines: list[str], trailing: str = "") -> str:
    if not lines:
        return ""
    return "\n".join(lines) + trailing


def map_lines(text: str, fn: Callable[[str], str]) -> str:
    """Apply ``fn`` to the body of every line, keeping ``\\r\\n`` endings intact."""
    lines, trailing = split_lines(text)
    out = []
    for line in lines:
        if line.endswith("\r"):
            out.append(fn(line[:-1]) + "\r")
        else:
            out.append(fn(line))
    return join_lines(out, trailing)


def map_each_line(text: str, fn: Callable[[str], str]) -> str:
    """Like ``map_lines``, but empty text has no lines and stays empty."""
    return map_lines(text, fn) if text else text


class DedupeLines(Operation):
    kind = "dedupe"
    label = "Remove Duplicate Lines"
    description = "Keep only the first or last occurrence of each line."
    category = "Lines"
    config_model = DedupeConfig

    def apply(self, config: DedupeConfig, text: str) -> str:
        lines, trailing = split_lines(text)

        def key(line: str) -> str:
            k = line.rstrip("\r")
            return k if config.case_sensitive else k.casefold()

        ordered = lines if config.keep == "first" else list(reversed(lines))
        seen: set[str] = set()
        kept = []
        for line in ordered:
            k = key(line)
            if k in seen:
                continue
            seen.add(k)
            kept.append(line)

        if config.keep == "last":
            kept.reverse()
        return join_lines(kept, trailing)


class FilterLines(Operation):
    kind = "filter-lines"
    label = "Remove Empty Lines"
    description = "Drop blank lines, optionally including whitespace-only ones."
    category = "Lines"
    config_model = FilterLinesConfig

    def apply(self, config: FilterLinesConfig, text: str) -> str:
        lines, trailing = split_lines(text)
        if config.trim:
            kept = [line for line in lines if line.strip()]
        else:
            kept = [line for line in lines if line.rstrip("\r")]
        return join_lines(kept, trailing)


def _numeric_key(line: str) -> float:
    m = _LEADING_NUMBER_RE.match(line)
    return float(m.group(1)) if m else 0.0


class SortLines(Operation):
    kind = "sort-lines"
    label = "Sort Lines"
    description = "Sort lines alphabetically or by leading number."
    category = "Lines"
    config_model = SortLinesConfig

    def apply(self, config: SortLinesConfig, text: str) -> str:
        lines, trailing = split_lines(text)
        reverse = config.direction == "desc"
        if config.numeric:
            ordered = sorted(lines, key=_numeric_key, reverse=reverse)
        else:
            ordered = sorted(lines, key=lambda line: (line.casefold(), line), reverse=reverse)
        return join_lines(ordered, trailing)


class ReverseLines(Operation):
    kind = "reverse-lines"
    label = "Reverse Lines"
    description = "Reverse the order of lines."
    category = "Lines"

    def apply(self, config: OperationConfig, text: str) -> str:
        lines, trailing = split_lines(text)
        return join_lines(lines[::-1], trailing)


class JoinLines(Operation):
    kind = "join-lines"
    label = "Join Lines"
    description = "Join all lines into one using a separator."
    category = "Lines"
    config_model = JoinLinesConfig

    def apply(self, config: JoinLinesConfig, text: str) -> str:
        lines, trailing = split_lines(text)
        return config.separator.join(line.rstrip("\r") for line in lines) + trailing


class SplitLines(Operation):
    kind = "split-lines"
    label = "Split Into Lines"
    description = "Break text into lines at every occurrence of a separator."
    category = "Lines"
    config_model = SplitLinesConfig

    def apply(self, config: SplitLinesConfig, text: str) -> str:
        return "\n".join(text.split(config.separator))


class NumberLines(Operation):
    kind = "number-lines"
    label = "Number Lines"
    description = "Prefix every line with its line number."
    category = "Lines"
    config_model = NumberLinesConfig

    def apply(self, config: NumberLinesConfig, text: str) -> str:
        if not text:
            return text
        lines, trailing = split_lines(text)
        numbered = [
            f"{config.prefix}{config.start + i}{config.separator}{line}"
            for i, line in enumerate(lines)
        ]
        return join_lines(numbered, trailing)


class ShuffleLines(Operation):
    kind = "shuffle-lines"
    label = "Shuffle Lines"
    description = "Randomly reorder lines; the same seed gives the same order."
    category = "Lines"
    config_model = ShuffleLinesConfig

    def apply(self, config: ShuffleLinesConfig, text: str) -> str:
        lines, trailing = split_lines(text)
        random.Random(config.seed).shuffle(lines)
        return join_lines(lines, trailing)


class WrapLines(Operation):
    kind = "wrap-lines"
    label = "Wrap Lines"
    description = "Add a prefix and a suffix to every line."
    category = "Structure"
    config_model = WrapLinesConfig

    def apply(self, config: WrapLinesConfig, text: str) -> str:
        return map_each_line(text, lambda line: f"{config.prefix}{line}{config.suffix}")


class WordWrap(Operation):
    kind = "word-wrap"
    label = "Word Wrap"
    description = "Break long lines at word boundaries to fit a width."
    category = "Structure"
    config_model = WordWrapConfig

    def apply(self, config: WordWrapConfig, text: str) -> str:
        def wrap(line: str) -> str:
            wrapped = textwrap.wrap(
                line,
                width=config.width,
                expand_tabs=False,
                break_long_words=False,
                break_on_hyphens=False,
            )
            return "\n".join(wrapped) if wrapped else line

        return map_each_line(text, wrap)


class Indent(Operation):
    """Indent or dedent non-blank lines by one level.

    A level is ``size`` spaces, or a single tab when ``use_tabs`` is set.
    Dedent removes at most one level and never touches other characters.
    """

    kind = "indent"
    label = "Indent / Dedent"
    description = "Add or remove one level of indentation on every line."
    category = "Structure"
    config_model = IndentConfig

    def apply(self, config: IndentConfig, text: str) -> str:
        unit = "\t" if config.use_tabs else " " * config.size

        def indent(line: str) -> str:
            return unit + line if line.strip() else line

        def dedent(line: str) -> str:
            if config.use_tabs:
                return line[1:] if line.startswith("\t") else line
            spaces = len(line) - len(line.lstrip(" "))
            return line[min(spaces, config.size):]

        return map_each_line(text, indent if config.mode == "indent" else dedent)
