"""Parsing of the ``AxB`` style numeric pairs accepted on the command line."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

T = TypeVar("T")


def parse_pair(text: str, separator: str, convert: Callable[[str], T]) -> Optional[tuple[T, T]]:
    """Split ``text`` at the first ``separator`` and convert both halves.

    Returns ``None`` when the separator is missing, either half contains
    whitespace or an underscore, or either half fails to convert.

    >>> parse_pair("400x800", "x", int)
    (400, 800)
    >>> parse_pair("1.2", ",", float) is None
    True
    """

    index = text.find(separator)
    if index < 0:
        return None
    halves = text[:index], text[index + 1:]
    # int() and float() would otherwise accept padding and digit separators.
    if any(char.isspace() or char == "_" for half in halves for char in half):
        return None
    try:
        return convert(halves[0]), convert(halves[1])
    except ValueError:
        return None


def parse_complex(text: str) -> Optional[complex]:
    pair = parse_pair(text, ",", float)
    if pair is None:
        return None
    return complex(*pair)


def parse_size(text: str) -> Optional[tuple[int, int]]:
    return parse_pair(text, "x", int)
