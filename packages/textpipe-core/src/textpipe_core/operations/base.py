"""Abstract operation interface and configuration base model."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from textpipe_core.errors import Violation

OperationCategory = Literal["Text", "Lines", "Structure", "Search", "Data"]


class OperationConfig(BaseModel):
    """Base for every operation's typed configuration.

    Unknown fields are rejected and values are not coerced across types, so a
    config that validates is exactly the shape the transform expects. On the
    wire fields are camelCase (``caseSensitive``); the Python attribute names
    are accepted too.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_mapping(self) -> dict[str, Any]:
        """Plain wire mapping, keyed by alias."""
        return self.model_dump(by_alias=True)


class Operation(ABC):
    """One kind of text transform.

    Subclasses set the class attributes and implement ``apply``. ``apply`` must
    be pure: the same config and input always produce the same output. A
    transform that cannot handle its input raises ``OperationExecutionError``.
    """

    kind: ClassVar[str]
    label: ClassVar[str]
    description: ClassVar[str] = ""
    category: ClassVar[OperationCategory] = "Text"
    config_model: ClassVar[type[OperationConfig]] = OperationConfig

    def default_config(self) -> OperationConfig:
        return self.config_model()

    def canonical_keys(self, raw: Mapping[str, Any]) -> dict[str, Any]:
        """Rename Python attribute names in ``raw`` to their wire aliases.

        Keys that are not fields pass through so validation can report them.
        """
        fields = self.config_model.model_fields
        out: dict[str, Any] = {}
        for key, value in raw.items():
            info = fields.get(key)
            out[info.alias if info is not None and info.alias else key] = value
        return out

    def parse_config(self, raw: Mapping[str, Any]) -> OperationConfig:
        """Validate a raw mapping. Raises pydantic's ValidationError."""
        return self.config_model.model_validate(self.canonical_keys(raw))

    @abstractmethod
    def apply(self, config: Any, text: str) -> str:
        """Transform ``text`` according to ``config``."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r})"


def _reason(error: Mapping[str, Any]) -> str:
    err_type = error.get("type", "")
    msg = error.get("msg", "invalid value")
    if err_type == "extra_forbidden":
        return "unknown field"
    if err_type.endswith("_type") or err_type.endswith("_parsing") or err_type == "model_type":
        return f"wrong type: {msg}"
    return f"out-of-domain value: {msg}"


def violations_from(exc: ValidationError) -> list[Violation]:
    """Flatten a pydantic ValidationError into field-level violations."""
    violations = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "<config>"
        violations.append(Violation(field=field, reason=_reason(error)))
    return violations
