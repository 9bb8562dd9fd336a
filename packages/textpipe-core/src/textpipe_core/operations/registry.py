"""Catalog of operation kinds, keyed by kind identifier."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from textpipe_core.errors import (
    ConfigValidationError,
    OperationExecutionError,
    UnknownOperationKind,
    Violation,
)
from textpipe_core.operations.base import Operation, OperationCategory, OperationConfig, violations_from
from textpipe_core.operations.data import (
    EncodeDecode,
    Escape,
    FormatNumbers,
    IncrementNumbers,
    PadAlign,
    Quote,
    RemoveChars,
    Slugify,
)
from textpipe_core.operations.lines import (
    DedupeLines,
    FilterLines,
    Indent,
    JoinLines,
    NumberLines,
    ReverseLines,
    ShuffleLines,
    SortLines,
    SplitLines,
    WordWrap,
    WrapLines,
)
from textpipe_core.operations.search import ExtractMatches, KeepLines, RemoveLines
from textpipe_core.operations.text import ChangeCase, Replace, Trim

logger = logging.getLogger(__name__)

BUILTIN_OPERATIONS: tuple[type[Operation], ...] = (
    Trim,
    Replace,
    ChangeCase,
    SortLines,
    JoinLines,
    SplitLines,
    FilterLines,
    DedupeLines,
    ReverseLines,
    NumberLines,
    ShuffleLines,
    WrapLines,
    WordWrap,
    Indent,
    ExtractMatches,
    KeepLines,
    RemoveLines,
    RemoveChars,
    EncodeDecode,
    Escape,
    PadAlign,
    FormatNumbers,
    IncrementNumbers,
    Slugify,
    Quote,
)


class OperationInfo(BaseModel):
    """Listing entry used to populate an operation picker."""

    model_config = ConfigDict(frozen=True)

    kind: str
    label: str
    description: str = ""
    category: OperationCategory = "Text"
    default_config: dict[str, Any] = {}


class OperationRegistry:
    """Open registry of operations.

    The pipeline and executor only ever talk to operations through this
    class, so registering a new kind needs no changes anywhere else.
    """

    def __init__(self, operations: Iterable[Operation] = ()) -> None:
        self._operations: dict[str, Operation] = {}
        for op in operations:
            self.register(op)

    def register(self, operation: Operation, *, replace: bool = False) -> None:
        kind = operation.kind
        if kind in self._operations and not replace:
            raise ValueError(f"Operation kind {kind!r} is already registered")
        self._operations[kind] = operation
        logger.debug("Registered operation %s (%s)", kind, type(operation).__name__)

    def unregister(self, kind: str) -> None:
        if kind not in self._operations:
            raise UnknownOperationKind(kind)
        del self._operations[kind]

    def __contains__(self, kind: object) -> bool:
        return kind in self._operations

    def __len__(self) -> int:
        return len(self._operations)

    def kinds(self) -> list[str]:
        return list(self._operations)

    def get(self, kind: str) -> Operation:
        try:
            return self._operations[kind]
        except KeyError:
            raise UnknownOperationKind(kind) from None

    def list(self) -> Iterator[OperationInfo]:
        """Yield an entry per registered operation, in registration order.

        Each call returns a fresh iterator.
        """
        for op in list(self._operations.values()):
            yield OperationInfo(
                kind=op.kind,
                label=op.label,
                description=op.description,
                category=op.category,
                default_config=op.default_config().to_mapping(),
            )

    def default_config(self, kind: str) -> dict[str, Any]:
        return self.get(kind).default_config().to_mapping()

    def validate(self, kind: str, config: Any) -> list[Violation]:
        """Return every field-level problem with ``config``. Empty means valid."""
        op = self.get(kind)
        if isinstance(config, OperationConfig):
            if isinstance(config, op.config_model):
                return []
            return [
                Violation(
                    "<config>",
                    f"wrong type: expected {op.config_model.__name__}, got {type(config).__name__}",
                )
            ]
        if not isinstance(config, Mapping):
            return [Violation("<config>", "wrong type: expected a mapping of field names to values")]
        try:
            op.parse_config(config)
        except ValidationError as e:
            return violations_from(e)
        return []

    def parse(self, kind: str, config: Any) -> OperationConfig:
        """Return the typed config for ``kind``. Raises ConfigValidationError."""
        op = self.get(kind)
        if isinstance(config, op.config_model):
            return config
        violations = self.validate(kind, config)
        if violations:
            raise ConfigValidationError(kind, violations)
        return op.parse_config(config)

    def apply(self, kind: str, config: Any, text: str) -> str:
        """Run one transform.

        Raises UnknownOperationKind or ConfigValidationError for bad arguments
        and OperationExecutionError when the transform itself fails.
        """
        op = self.get(kind)
        parsed = self.parse(kind, config)
        try:
            return op.apply(parsed, text)
        except OperationExecutionError:
            raise
        except Exception as e:
            raise OperationExecutionError(kind, f"{type(e).__name__}: {e}") from e


def builtin_registry() -> OperationRegistry:
    """A registry holding the built-in operations only."""
    return OperationRegistry(cls() for cls in BUILTIN_OPERATIONS)
