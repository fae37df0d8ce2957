"""Reading XPM pixmaps into images."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from os import PathLike

from raycub.colors import lookup_color
from raycub.image import Image

TRANSPARENT = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_DECIMAL = re.compile(r"\s*([+-]?\d+)")
_HEX = re.compile(r"\s*([+-]?)(0[xX])?([0-9a-fA-F]+)")
_NAME_LIMIT = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


def split_words(text: str) -> list[str]:
    """Split a line into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def find(text: str, needle: str) -> int:
    """Return the position of ``needle`` in ``text``, or -1."""
    if not needle:
        raise ValueError("needle must not be empty")
    return text.find(needle)


def find_unquoted(text: str, needle: str) -> int:
    """Return the first position of ``needle`` outside double quotes, or -1."""
    if not needle:
        raise ValueError("needle must not be empty")
    in_quotes = False
    for pos in range(len(text) - len(needle) + 1):
        if text[pos] == '"':
            in_quotes = not in_quotes
        if not in_quotes and text.startswith(needle, pos):
            return pos
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside strings with spaces.

    The result has the same length as the input.
    """
    while (start := find_unquoted(text, "/*")) != -1:
        end = find(text[start + 2:], "*/")
        stop = len(text) if end == -1 else start + end + 4
        text = _blank(text, start, stop)
    while (start := find_unquoted(text, "//")) != -1:
        end = find(text[start + 2:], "\n")
        stop = len(text) if end == -1 else start + end + 3
        text = _blank(text, start, stop)
    return text


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings."""
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            return
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1:closing]
        pos = closing + 1


def _parse_hex(digits: str) -> int:
    match = _HEX.match(digits)
    if match is None:
        return 0
    sign, _, value = match.groups()
    number = int(value, 16)
    return -number if sign == "-" else number


def text_to_rgb(name: str, suffix: str | None) -> int:
    """Turn an XPM colour specification into a 0xRRGGBB value.

    ``#`` introduces a hexadecimal value. Otherwise ``name`` (joined with
    ``suffix`` when given) is looked up among the named colours; ``None``
    gives -1 and an unknown name gives 0.
    """
    if name.startswith("#"):
        return _parse_hex(name[1:])
    if suffix is not None:
        name = f"{name} {suffix}"[:_NAME_LIMIT]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _atoi(text: str) -> int:
    match = _DECIMAL.match(text)
    return int(match.group(1)) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before the {what}") from None


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"XPM header needs four values: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if 0 in values:
        raise XpmError(f"invalid XPM header: {line!r}")
    return values


def _parse_color(line: str, cpp: int) -> tuple[str, int]:
    words = split_words(line[cpp:])
    try:
        index = words.index("c") + 1
    except ValueError:
        index = len(words)
    if index >= len(words):
        raise XpmError(f"colour definition without a 'c' value: {line!r}")
    suffix = words[index + 1] if index + 1 < len(words) else None
    return line[:cpp], text_to_rgb(words[index], suffix)


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from the strings of an XPM document.

    Pixels whose colour is ``None`` become 0xFF000000; characters with no
    colour definition become 0.
    """
    source = iter(lines)
    width, height, ncolors, cpp = _parse_header(_next_line(source, "header"))
    if width < 0 or height < 0 or ncolors < 0 or cpp < 0:
        raise XpmError("XPM header values must be positive")

    colors: dict[str, int] = {}
    for _ in range(ncolors):
        key, rgb = _parse_color(_next_line(source, "colour table"), cpp)
        # Short keys let later definitions replace earlier ones; longer
        # keys keep the first definition.
        if cpp <= 2:
            colors[key] = rgb
        else:
            colors.setdefault(key, rgb)

    pixels: list[int] = []
    for _ in range(height):
        row = _next_line(source, "pixel rows")
        if len(row) < width * cpp:
            raise XpmError(f"pixel row too short: {row!r}")
        for start in range(0, width * cpp, cpp):
            color = colors.get(row[start:start + cpp], 0)
            pixels.append(TRANSPARENT if color == -1 else color)
    return Image(width, height, pixels)


def read_xpm_file(path: str | PathLike[str]) -> Image:
    """Read an XPM file and return its image."""
    with open(path, encoding="latin-1") as handle:
        text = handle.read()
    return parse_xpm(quoted_lines(strip_comments(text)))