"""Loading and validating ``.ber`` game maps."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "MapError",
    "GameMap",
    "check_extension",
    "read_map_lines",
    "parse_map",
    "check_reachable",
    "load_map",
]

EXTENSION = ".ber"
MAX_FILE_LINES = 18
MAX_WIDTH = 31
MAX_ROW_INDEX = 16

WALL = "1"
FLOOR = "0"
PLAYER = "P"
ITEM = "C"
EXIT = "E"

_WALL_ERROR = "walls map must contain only '1'"


class MapError(ValueError):
    """Raised when a map file is missing, malformed or unplayable."""


@dataclass
class GameMap:
    """A validated map: rows of tile characters plus what was found on them."""

    rows: list[str]
    player: tuple[int, int]
    items: int
    exits: int

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def tile(self, x: int, y: int) -> str:
        """Return the tile character at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"tile ({x}, {y}) outside the map")
        return self.rows[y][x]


def check_extension(path: str | Path) -> str:
    """Return ``path`` as a string if it names a ``.ber`` file."""
    name = str(path)
    if len(name) <= len(EXTENSION) or not name.endswith(EXTENSION):
        raise MapError("filename error")
    return name


def read_map_lines(path: str | Path, max_lines: int) -> list[str]:
    """Read the lines of a map file, keeping their line feeds."""
    lines: list[str] = []
    try:
        with open(path, "rb") as handle:
            for raw in handle:
                lines.append(raw.decode("latin-1"))
                if len(lines) >= max_lines:
                    break
    except OSError as exc:
        raise MapError("open file error") from exc
    if not lines or len(lines) >= max_lines:
        raise MapError("empty file or too big")
    return lines


def _check_dimensions(lines: list[str]) -> list[str]:
    if not lines:
        raise MapError("empty file or too big")
    first = lines[0]
    width = len(first) - 1 if first.endswith("\n") else len(first)
    if width > MAX_WIDTH:
        raise MapError("map width must be equal or less than 30 tiles")
    last = len(lines) - 1
    rows = []
    for index, line in enumerate(lines):
        row = line[:-1] if line.endswith("\n") and index < last else line
        if len(row) != width:
            raise MapError("lenght lines aren't equivalent to width")
        if index > MAX_ROW_INDEX:
            raise MapError("map height must be equal or less than 16 tiles")
        rows.append(row)
    return rows


def _check_walls(rows: list[str]) -> None:
    if any(ch != WALL for ch in rows[0] + rows[-1]):
        raise MapError(_WALL_ERROR)
    for row in rows[1:-1]:
        if row[0] != WALL or row[-1] != WALL:
            raise MapError(_WALL_ERROR)


def parse_map(lines: Iterable[str]) -> GameMap:
    """Validate map lines (as read from the file) and build a GameMap."""
    rows = _check_dimensions(list(lines))
    players = items = exits = 0
    player = (0, 0)
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch in (FLOOR, WALL):
                continue
            if ch == PLAYER:
                players += 1
                player = (x, y)
            elif ch == ITEM:
                items += 1
            elif ch == EXIT:
                exits += 1
            else:
                raise MapError("map contains bad character")
    if players != 1 or not items or exits != 1:
        raise MapError("Must contains 1 'P', 1 'E' and at least 1 'C'")
    _check_walls(rows)
    return GameMap(rows=rows, player=player, items=items, exits=exits)


def check_reachable(game_map: GameMap) -> frozenset[tuple[int, int]]:
    """Flood-fill from the player; return the cells reached.

    An exit is reached but not crossed.  Raises MapError unless every item
    and every exit can be reached.
    """
    items_left = game_map.items
    exits_left = game_map.exits
    reached: set[tuple[int, int]] = set()
    pending = [game_map.player]
    while pending:
        x, y = pending.pop()
        if (x, y) in reached or not (0 <= y < game_map.height and 0 <= x < game_map.width):
            continue
        tile = game_map.rows[y][x]
        if tile == EXIT:
            reached.add((x, y))
            exits_left -= 1
        elif tile in (FLOOR, ITEM, PLAYER):
            reached.add((x, y))
            if tile == ITEM:
                items_left -= 1
            pending.extend(((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)))
    if items_left or exits_left:
        raise MapError("Flood fill failed")
    return frozenset(reached)


def load_map(path: str | Path) -> GameMap:
    """Load a ``.ber`` file and check that it is a playable map."""
    check_extension(path)
    game_map = parse_map(read_map_lines(path, MAX_FILE_LINES))
    check_reachable(game_map)
    return game_map