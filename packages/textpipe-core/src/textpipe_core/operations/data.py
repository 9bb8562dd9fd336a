"""Character, encoding and number operations."""

from __future__ import annotations

import base64
import html
import json
import re
import unicodedata
from decimal import Decimal
from urllib.parse import quote, unquote

from textpipe_core.errors import OperationExecutionError
from textpipe_core.operations.base import Operation
from textpipe_core.operations.lines import map_each_line
from textpipe_core.operations.models import (
    EncodeDecodeConfig,
    EscapeConfig,
    FormatNumbersConfig,
    IncrementNumbersConfig,
    PadAlignConfig,
    QuoteConfig,
    RemoveCharsConfig,
    SlugifyConfig,
)

# A leading minus only counts when it is not glued to a word ("item-1")
_INTEGER_RE = re.compile(r"(?<!\w)-?\d+|\d+")
_NUMBER_RE = re.compile(r"(?<!\w)-?\d+(?:\.\d+)?|\d+(?:\.\d+)?")
_SLUG_JUNK_RE = re.compile(r"[^a-z0-9]+")

# Characters encodeURIComponent leaves alone
_URL_SAFE = "-_.!~*'()"


class RemoveChars(Operation):
    kind = "remove-chars"
    label = "Remove Characters"
    description = "Strip digits, punctuation, non-ASCII or a custom set of characters."
    config_model = RemoveCharsConfig

    def apply(self, config: RemoveCharsConfig, text: str) -> str:
        if config.mode == "digits":
            drop = lambda ch: unicodedata.category(ch) == "Nd"  # noqa: E731
        elif config.mode == "punctuation":
            drop = lambda ch: unicodedata.category(ch).startswith("P")  # noqa: E731
        elif config.mode == "non-ascii":
            drop = lambda ch: ord(ch) > 127  # noqa: E731
        else:
            custom = set(config.custom)
            drop = custom.__contains__
        return "".join(ch for ch in text if not drop(ch))


class EncodeDecode(Operation):
    kind = "encode-decode"
    label = "Encode / Decode"
    description = "URL, Base64 or HTML entity encoding and decoding."
    category = "Data"
    config_model = EncodeDecodeConfig

    def apply(self, config: EncodeDecodeConfig, text: str) -> str:
        mode = config.mode
        if mode == "url-encode":
            return quote(text, safe=_URL_SAFE)
        if mode == "url-decode":
            return unquote(text, errors="strict")
        if mode == "base64-encode":
            return base64.b64encode(text.encode("utf-8")).decode("ascii")
        if mode == "base64-decode":
            try:
                return base64.b64decode("".join(text.split()), validate=True).decode("utf-8")
            except ValueError as e:
                raise OperationExecutionError(self.kind, f"not valid Base64 text: {e}") from e
        if mode == "html-encode":
            return html.escape(text)
        return html.unescape(text)


class Escape(Operation):
    kind = "escape"
    label = "Escape / Unescape"
    description = "Escape text for a JSON string or a regular expression."
    category = "Data"
    config_model = EscapeConfig

    def apply(self, config: EscapeConfig, text: str) -> str:
        if config.mode == "json-escape":
            return json.dumps(text, ensure_ascii=False)[1:-1]
        if config.mode == "json-unescape":
            try:
                return json.loads(f'"{text}"', strict=False)
            except json.JSONDecodeError as e:
                raise OperationExecutionError(self.kind, f"not a valid JSON string body: {e.msg}") from e
        return re.escape(text)


class PadAlign(Operation):
    kind = "pad-align"
    label = "Pad / Align"
    description = "Pad every line to a width, aligned left, center or right."
    category = "Structure"
    config_model = PadAlignConfig

    def apply(self, config: PadAlignConfig, text: str) -> str:
        pad = {"left": str.ljust, "center": str.center, "right": str.rjust}[config.align]
        return map_each_line(text, lambda line: pad(line, config.width, config.char))


class FormatNumbers(Operation):
    kind = "format-numbers"
    label = "Format Numbers"
    description = "Round numbers to fixed decimals, with optional thousands separators."
    category = "Data"
    config_model = FormatNumbersConfig

    def apply(self, config: FormatNumbersConfig, text: str) -> str:
        fmt = f"{',' if config.thousands else ''}.{config.decimals}f"
        return _NUMBER_RE.sub(lambda m: format(Decimal(m.group(0)), fmt), text)


class IncrementNumbers(Operation):
    kind = "increment-numbers"
    label = "Increment Numbers"
    description = "Add a fixed amount to every integer, keeping zero padding."
    category = "Data"
    config_model = IncrementNumbersConfig

    def apply(self, config: IncrementNumbersConfig, text: str) -> str:
        def bump(m: re.Match[str]) -> str:
            raw = m.group(0)
            value = int(raw) + config.delta
            digits = raw.lstrip("-")
            if len(digits) > 1 and digits.startswith("0"):
                return ("-" if value < 0 else "") + str(abs(value)).zfill(len(digits))
            return str(value)

        return _INTEGER_RE.sub(bump, text)


def slugify(text: str) -> str:
    """ASCII, lowercase, hyphen-separated: ``"Héllo, World!"`` -> ``"hello-world"``."""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _SLUG_JUNK_RE.sub("-", ascii_text.lower()).strip("-")


class Slugify(Operation):
    kind = "slugify"
    label = "Slugify"
    description = "Turn text into URL-friendly slugs."
    config_model = SlugifyConfig

    def apply(self, config: SlugifyConfig, text: str) -> str:
        if config.lines:
            return map_each_line(text, slugify)
        return slugify(text)


class Quote(Operation):
    kind = "quote"
    label = "Quote / Unquote"
    description = "Wrap text in quotes, or strip one matching pair."
    config_model = QuoteConfig

    def apply(self, config: QuoteConfig, text: str) -> str:
        q = config.char

        def add(s: str) -> str:
            return f"{q}{s}{q}"

        def remove(s: str) -> str:
            if len(s) >= 2 * len(q) and s.startswith(q) and s.endswith(q):
                return s[len(q) : -len(q)]
            return s

        fn = add if config.mode == "add" else remove
        if config.lines:
            return map_each_line(text, fn)
        return fn(text) if text else text
