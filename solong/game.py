"""Game state and player movement on a validated map."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from solong.gamemap import EXIT, FLOOR, ITEM, WALL, GameMap

__all__ = ["Direction", "MoveOutcome", "Game", "KEY_BINDINGS", "KEY_ESCAPE"]


class Direction(Enum):
    """A step on the grid as (dx, dy); y grows downwards."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class MoveOutcome(Enum):
    """What happened after a key press or a move."""

    BLOCKED = "blocked"
    MOVED = "moved"
    EXIT_LOCKED = "exit_locked"
    WON = "won"
    QUIT = "quit"


# Key codes of the W, S, A and D keys and of Escape on a Mac keyboard.
KEY_BINDINGS: dict[int, Direction] = {
    13: Direction.UP,
    1: Direction.DOWN,
    0: Direction.LEFT,
    2: Direction.RIGHT,
}
KEY_ESCAPE = 53


class Game:
    """A running game: the tiles, the player and the counters."""

    def __init__(self, game_map: GameMap, out: Callable[[str], object] = print):
        self.rows: list[list[str]] = [list(row) for row in game_map.rows]
        self.position: tuple[int, int] = game_map.player
        self.items: int = game_map.items
        self.moves: int = 0
        self.facing: Direction = Direction.UP
        self._out = out

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def tile(self, x: int, y: int) -> str:
        """Return the current tile character at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"tile ({x}, {y}) outside the map")
        return self.rows[y][x]

    def move(self, direction: Direction) -> MoveOutcome:
        """Try to move the player one step in ``direction``."""
        x, y = self.position
        tx, ty = x + direction.dx, y + direction.dy
        target = self.tile(tx, ty)
        if target == WALL:
            return MoveOutcome.BLOCKED
        if target == EXIT:
            if self.items:
                self._out(f"{self.items} shoal(s) of fish to eat!")
                return MoveOutcome.EXIT_LOCKED
            return MoveOutcome.WON
        if target == ITEM:
            self.items -= 1
        self.rows[ty][tx] = FLOOR
        self.position = (tx, ty)
        self.facing = direction
        self.moves += 1
        self._out(f"Moves : {self.moves}")
        return MoveOutcome.MOVED

    def handle_key(self, key: int) -> MoveOutcome | None:
        """React to a key code; unknown keys are ignored and give None."""
        if key == KEY_ESCAPE:
            return MoveOutcome.QUIT
        direction = KEY_BINDINGS.get(key)
        if direction is None:
            return None
        return self.move(direction)

    def exit_message(self) -> str:
        """The line shown when the game ends."""
        if self.items:
            return "Exit game :  GAME OVER  /!\\"
        return "Exit game :  win  ><>"