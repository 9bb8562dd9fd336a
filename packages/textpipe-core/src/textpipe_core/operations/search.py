"""Pattern-driven operations: extract matches, keep or remove matching lines."""

from __future__ import annotations

import re

from textpipe_core.errors import OperationExecutionError
from textpipe_core.operations.base import Operation
from textpipe_core.operations.lines import join_lines, split_lines
from textpipe_core.operations.models import ExtractMatchesConfig, LineMatchConfig


def compile_pattern(
    kind: str, pattern: str, *, regex: bool = True, case_insensitive: bool = False
) -> re.Pattern[str]:
    """Compile ``pattern``, escaping it first unless ``regex`` is set.

    A malformed expression raises OperationExecutionError for ``kind``.
    """
    flags = re.IGNORECASE if case_insensitive else 0
    if not regex:
        return re.compile(re.escape(pattern), flags)
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise OperationExecutionError(kind, f"invalid pattern {pattern!r}: {e}") from e


class ExtractMatches(Operation):
    kind = "extract-matches"
    label = "Extract Matches"
    description = "Output every regex match, one per line."
    category = "Search"
    config_model = ExtractMatchesConfig

    def apply(self, config: ExtractMatchesConfig, text: str) -> str:
        if not config.pattern:
            return text
        pattern = compile_pattern(self.kind, config.pattern, case_insensitive=config.case_insensitive)
        return "\n".join(m.group(0) for m in pattern.finditer(text) if m.group(0))


class _LineMatch(Operation):
    category = "Search"
    config_model = LineMatchConfig
    keep_matching: bool

    def apply(self, config: LineMatchConfig, text: str) -> str:
        if not config.pattern:
            return text
        pattern = compile_pattern(
            self.kind,
            config.pattern,
            regex=config.regex,
            case_insensitive=config.case_insensitive,
        )
        lines, trailing = split_lines(text)
        kept = [
            line
            for line in lines
            if bool(pattern.search(line.rstrip("\r"))) is self.keep_matching
        ]
        return join_lines(kept, trailing)


class KeepLines(_LineMatch):
    kind = "keep-lines"
    label = "Keep Matching Lines"
    description = "Keep only lines containing the text or pattern."
    keep_matching = True


class RemoveLines(_LineMatch):
    kind = "remove-lines"
    label = "Remove Matching Lines"
    description = "Drop lines containing the text or pattern."
    keep_matching = False
