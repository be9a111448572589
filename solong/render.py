"""Drawing the map with pygame and running the game window."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import pygame

from solong.game import Direction, Game, MoveOutcome
from solong.gamemap import EXIT, FLOOR, ITEM, PLAYER, WALL, MapError, load_map
from solong.xpm import XpmError, XpmImage, load_xpm

__all__ = ["TileSet", "xpm_to_surface", "draw_map", "run", "main"]

TILE_SIZE = 64
DEFAULT_IMAGE_DIR = "bin/img"
TITLE = "so_long"

_PLAYER_FILES = {
    Direction.UP: "player_top.xpm",
    Direction.LEFT: "player_left.xpm",
    Direction.RIGHT: "player_right.xpm",
    Direction.DOWN: "player_down.xpm",
}


def _pygame_keys() -> dict[int, int]:
    return {
        pygame.K_w: 13,
        pygame.K_s: 1,
        pygame.K_a: 0,
        pygame.K_d: 2,
        pygame.K_ESCAPE: 53,
    }


def xpm_to_surface(image: XpmImage) -> pygame.Surface:
    """Build a surface from an XPM image; the top byte means transparency."""
    surface = pygame.Surface((image.width, image.height), pygame.SRCALPHA)
    for index, value in enumerate(image.pixels):
        y, x = divmod(index, image.width)
        alpha = 255 - ((value >> 24) & 0xFF)
        surface.set_at((x, y), ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, alpha))
    return surface


@dataclass
class TileSet:
    """The images used to draw each kind of tile."""

    item: pygame.Surface
    exit: pygame.Surface
    floor: pygame.Surface
    wall: pygame.Surface
    player: dict[Direction, pygame.Surface]
    tile_size: int = TILE_SIZE

    @classmethod
    def load(cls, image_dir: str | Path) -> TileSet:
        """Load every tile image from ``image_dir``."""
        folder = Path(image_dir)

        def surface(name: str) -> tuple[pygame.Surface, XpmImage]:
            image = load_xpm(folder / name)
            return xpm_to_surface(image), image

        item, _ = surface("item.xpm")
        exit_, _ = surface("exit.xpm")
        player = {direction: surface(name)[0] for direction, name in _PLAYER_FILES.items()}
        floor, _ = surface("floor.xpm")
        wall, wall_image = surface("wall.xpm")
        return cls(item=item, exit=exit_, floor=floor, wall=wall,
                   player=player, tile_size=wall_image.height)

    def image_for(self, tile: str) -> pygame.Surface | None:
        """Return the image for a tile character, or None if it has none."""
        return {
            ITEM: self.item,
            EXIT: self.exit,
            PLAYER: self.player[Direction.UP],
            FLOOR: self.floor,
            WALL: self.wall,
        }.get(tile)


def draw_map(surface: pygame.Surface, game_map, tiles: TileSet, tile_size: int) -> None:
    """Draw every tile of ``game_map`` (anything with ``rows``) on ``surface``."""
    for y, row in enumerate(game_map.rows):
        for x, tile in enumerate(row):
            image = tiles.image_for(tile)
            if image is not None:
                surface.blit(image, (x * tile_size, y * tile_size))


def run(game_map, image_dir: str | Path = DEFAULT_IMAGE_DIR) -> int:
    """Open the window and play ``game_map`` until the game ends."""
    pygame.init()
    try:
        screen = pygame.display.set_mode((game_map.width * TILE_SIZE, game_map.height * TILE_SIZE))
        pygame.display.set_caption(TITLE)
        tiles = TileSet.load(image_dir)
        size = tiles.tile_size
        game = Game(game_map)
        draw_map(screen, game, tiles, size)
        pygame.display.flip()
        keys = _pygame_keys()
        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                break
            if event.type != pygame.KEYDOWN or event.key not in keys:
                continue
            old_x, old_y = game.position
            outcome = game.handle_key(keys[event.key])
            if outcome in (MoveOutcome.WON, MoveOutcome.QUIT):
                break
            if outcome is MoveOutcome.MOVED:
                screen.blit(tiles.floor, (old_x * size, old_y * size))
                x, y = game.position
                screen.blit(tiles.player[game.facing], (x * size, y * size))
                pygame.display.flip()
        print(game.exit_message())
        return 0
    finally:
        pygame.quit()


def _error(message: str) -> int:
    print("Error", file=sys.stderr)
    print(message, file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    """Command entry point: ``solong MAP.ber``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        return _error("no map")
    try:
        game_map = load_map(args[0])
    except MapError as exc:
        return _error(str(exc))
    print("floodfill ok")
    try:
        return run(game_map, DEFAULT_IMAGE_DIR)
    except XpmError as exc:
        return _error(str(exc))


if __name__ == "__main__":
    sys.exit(main())