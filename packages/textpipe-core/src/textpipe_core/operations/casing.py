"""Word segmentation and case conversion."""

from __future__ import annotations

import re

# Runs of letters/digits, i.e. \w without the underscore
_ALNUM_RUN_RE = re.compile(r"[^\W_]+")


def split_words(text: str) -> list[str]:
    """Split ``text`` into words.

    Boundaries are any non-alphanumeric character (whitespace, hyphen,
    underscore, punctuation), a lower-or-digit to upper transition
    (``helloWorld``), and the end of an acronym (``HTTPServer``).
    """
    words: list[str] = []
    current: list[str] = []

    for i, ch in enumerate(text):
        if not ch.isalnum():
            if current:
                words.append("".join(current))
                current = []
            continue

        if current and ch.isupper():
            prev = current[-1]
            nxt = text[i + 1] if i + 1 < len(text) else ""
            if prev.islower() or prev.isdigit() or (prev.isupper() and nxt.islower()):
                words.append("".join(current))
                current = []

        current.append(ch)

    if current:
        words.append("".join(current))
    return words


def _title(text: str) -> str:
    return _ALNUM_RUN_RE.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), text)


def convert_case(text: str, mode: str) -> str:
    """Convert ``text`` to the given case mode.

    upper, lower and title rewrite letters in place and keep delimiters.
    The joining modes rebuild the text from its words.
    """
    if mode == "upper":
        return text.upper()
    if mode == "lower":
        return text.lower()
    if mode == "title":
        return _title(text)

    words = split_words(text)
    if mode == "camel":
        if not words:
            return ""
        return words[0].lower() + "".join(w.capitalize() for w in words[1:])
    if mode == "pascal":
        return "".join(w.capitalize() for w in words)
    if mode == "snake":
        return "_".join(w.lower() for w in words)
    if mode == "kebab":
        return "-".join(w.lower() for w in words)
    if mode == "constant":
        return "_".join(w.upper() for w in words)
    raise ValueError(f"Unsupported case mode: {mode!r}")
