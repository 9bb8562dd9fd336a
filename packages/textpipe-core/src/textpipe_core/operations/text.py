"""Whole-text operations: trim, change case, find and replace."""

from __future__ import annotations

import re

from textpipe_core.errors import OperationExecutionError
from textpipe_core.operations.base import Operation
from textpipe_core.operations.casing import convert_case
from textpipe_core.operations.lines import map_lines
from textpipe_core.operations.models import ChangeCaseConfig, ReplaceConfig, TrimConfig
from textpipe_core.operations.search import compile_pattern


class Trim(Operation):
    kind = "trim"
    label = "Trim Whitespace"
    description = "Strip leading and trailing whitespace from the text or from every line."
    config_model = TrimConfig

    def apply(self, config: TrimConfig, text: str) -> str:
        if config.lines:
            return map_lines(text, str.strip)
        return text.strip()


class ChangeCase(Operation):
    kind = "change-case"
    label = "Change Case"
    description = "Convert to UPPER, lower, Title, camelCase, snake_case, kebab-case, PascalCase or CONSTANT_CASE."
    config_model = ChangeCaseConfig

    def apply(self, config: ChangeCaseConfig, text: str) -> str:
        if config.lines:
            return map_lines(text, lambda line: convert_case(line, config.mode))
        return convert_case(text, config.mode)


class Replace(Operation):
    kind = "replace"
    label = "Find & Replace"
    description = "Replace every match of a literal string or regular expression."
    category = "Search"
    config_model = ReplaceConfig

    def apply(self, config: ReplaceConfig, text: str) -> str:
        if not config.find:
            return text

        pattern = compile_pattern(
            self.kind, config.find, regex=config.regex, case_insensitive=config.case_insensitive
        )
        if config.regex:
            # Template may use group references like \1 or \g<name>
            repl = config.replace
        else:
            repl = lambda m: config.replace  # noqa: E731

        def substitute(segment: str) -> str:
            try:
                return pattern.sub(repl, segment)
            except (re.error, IndexError) as e:
                raise OperationExecutionError(
                    self.kind, f"invalid replacement {config.replace!r}: {e}"
                ) from e

        if config.lines:
            return map_lines(text, substitute)
        return substitute(text)
