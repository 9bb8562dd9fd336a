"""Operation kinds, their configuration variants, and the registry."""

from textpipe_core.operations.base import Operation, OperationConfig
from textpipe_core.operations.casing import convert_case, split_words
from textpipe_core.operations.data import (
    EncodeDecode,
    Escape,
    FormatNumbers,
    IncrementNumbers,
    PadAlign,
    Quote,
    RemoveChars,
    Slugify,
    slugify,
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
from textpipe_core.operations.models import (
    ChangeCaseConfig,
    DedupeConfig,
    EncodeDecodeConfig,
    EscapeConfig,
    ExtractMatchesConfig,
    FilterLinesConfig,
    FormatNumbersConfig,
    IncrementNumbersConfig,
    IndentConfig,
    JoinLinesConfig,
    LineMatchConfig,
    NumberLinesConfig,
    PadAlignConfig,
    QuoteConfig,
    RemoveCharsConfig,
    ReplaceConfig,
    ShuffleLinesConfig,
    SlugifyConfig,
    SortLinesConfig,
    SplitLinesConfig,
    TrimConfig,
    WordWrapConfig,
    WrapLinesConfig,
)
from textpipe_core.operations.registry import (
    BUILTIN_OPERATIONS,
    OperationInfo,
    OperationRegistry,
    builtin_registry,
)
from textpipe_core.operations.search import ExtractMatches, KeepLines, RemoveLines
from textpipe_core.operations.text import ChangeCase, Replace, Trim

__all__ = [
    "BUILTIN_OPERATIONS",
    "ChangeCase",
    "ChangeCaseConfig",
    "DedupeConfig",
    "DedupeLines",
    "EncodeDecode",
    "EncodeDecodeConfig",
    "Escape",
    "EscapeConfig",
    "ExtractMatches",
    "ExtractMatchesConfig",
    "FilterLines",
    "FilterLinesConfig",
    "FormatNumbers",
    "FormatNumbersConfig",
    "IncrementNumbers",
    "IncrementNumbersConfig",
    "Indent",
    "IndentConfig",
    "JoinLines",
    "JoinLinesConfig",
    "KeepLines",
    "LineMatchConfig",
    "NumberLines",
    "NumberLinesConfig",
    "Operation",
    "OperationConfig",
    "OperationInfo",
    "OperationRegistry",
    "PadAlign",
    "PadAlignConfig",
    "Quote",
    "QuoteConfig",
    "RemoveChars",
    "RemoveCharsConfig",
    "RemoveLines",
    "Replace",
    "ReplaceConfig",
    "ReverseLines",
    "ShuffleLines",
    "ShuffleLinesConfig",
    "Slugify",
    "SlugifyConfig",
    "SortLines",
    "SortLinesConfig",
    "SplitLines",
    "SplitLinesConfig",
    "Trim",
    "TrimConfig",
    "WordWrap",
    "WordWrapConfig",
    "WrapLines",
    "WrapLinesConfig",
    "builtin_registry",
    "convert_case",
    "slugify",
    "split_words",
]
