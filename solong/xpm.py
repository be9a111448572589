"""Reading XPM images into plain pixel grids."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from solong.colors import text_to_rgb

__all__ = [
    "XpmError",
    "XpmImage",
    "strip_comments",
    "split_words",
    "quoted_lines",
    "parse_xpm",
    "parse_xpm_text",
    "load_xpm",
]

TRANSPARENT = 0xFF000000
_MASK = 0xFFFFFFFF

_BLOCK_COMMENT = re.compile(r'"[^"]*(?:"|\Z)|/\*.*?(?:\*/|\Z)', re.S)
_LINE_COMMENT = re.compile(r'"[^"]*(?:"|\Z)|//[^\n]*\n?')
_WORD_SEP = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: pixels are 32-bit values stored row by row."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self.pixels[y * self.width + x]


def _blank(match: re.Match[str]) -> str:
    found = match.group(0)
    return found if found.startswith('"') else " " * len(found)


def strip_comments(text: str) -> str:
    """Replace C comments outside quoted strings by spaces, keeping offsets."""
    text = _BLOCK_COMMENT.sub(_blank, text)
    return _LINE_COMMENT.sub(_blank, text)


def split_words(text: str) -> list[str]:
    """Split ``text`` on runs of spaces and tabs."""
    return [word for word in _WORD_SEP.split(text) if word]


def quoted_lines(text: str) -> list[str]:
    """Return the contents of successive double-quoted strings."""
    return _QUOTED.findall(text)


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def _read_palette(lines, count: int, cpp: int) -> dict[str, int]:
    palette: dict[str, int] = {}
    for _ in range(count):
        line = next(lines, None)
        if line is None:
            raise XpmError("missing colour definition")
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"colour line without 'c' key: {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"colour line without colour: {line!r}")
        end = words[index + 2] if index + 2 < len(words) else None
        rgb = text_to_rgb(words[index + 1], end)
        key = line[:cpp]
        # Short keys use a direct table where the last definition wins;
        # longer keys are searched so that the first definition wins.
        if cpp <= 2 or key not in palette:
            palette[key] = rgb
    return palette


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode XPM data given as its quoted strings, header first."""
    rows = iter(lines)
    header = next(rows, None)
    if header is None:
        raise XpmError("missing header")
    words = split_words(header)
    if len(words) < 4:
        raise XpmError(f"incomplete header: {header!r}")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid header: {header!r}")

    palette = _read_palette(rows, ncolors, cpp)

    pixels: list[int] = []
    for _ in range(height):
        line = next(rows, None)
        if line is None:
            raise XpmError("missing pixel row")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row too short: {line!r}")
        for start in range(0, width * cpp, cpp):
            color = palette.get(line[start:start + cpp], 0)
            if color == -1:
                color = TRANSPARENT
            pixels.append(color & _MASK)
    return XpmImage(width, height, tuple(pixels))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode the text of an XPM file."""
    return parse_xpm(quoted_lines(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode the XPM file at ``path``."""
    try:
        text = Path(path).read_bytes().decode("latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)