import pygame
import pytest

from solong.game import Direction, Game
from solong.gamemap import parse_map
from solong.render import TileSet, draw_map, main, xpm_to_surface
from solong.xpm import parse_xpm

COLORS = {
    "item.xpm": "#FFFF00",
    "exit.xpm": "#00FFFF",
    "player_top.xpm": "#FF0000",
    "player_left.xpm": "#FF00FF",
    "player_right.xpm": "#808080",
    "player_down.xpm": "#800000",
    "floor.xpm": "#FFFFFF",
    "wall.xpm": "#0000FF",
}


def solid(rgb, size=4):
    surface = pygame.Surface((size, size), pygame.SRCALPHA)
    surface.fill(rgb + (255,))
    return surface


def make_tiles(size=4):
    return TileSet(
        item=solid((255, 255, 0), size),
        exit=solid((0, 255, 255), size),
        floor=solid((255, 255, 255), size),
        wall=solid((0, 0, 255), size),
        player={d: solid((255, 0, 0), size) for d in Direction},
        tile_size=size,
    )


def test_xpm_to_surface_colours_and_transparency():
    image = parse_xpm(['2 1 2 1', 'a c #102030', 'b c None', 'ab'])
    surface = xpm_to_surface(image)
    assert surface.get_size() == (2, 1)
    assert tuple(surface.get_at((0, 0))) == (0x10, 0x20, 0x30, 255)
    assert surface.get_at((1, 0)).a == 0


def test_image_for_maps_tiles():
    tiles = make_tiles()
    assert tiles.image_for("C") is tiles.item
    assert tiles.image_for("E") is tiles.exit
    assert tiles.image_for("P") is tiles.player[Direction.UP]
    assert tiles.image_for("0") is tiles.floor
    assert tiles.image_for("1") is tiles.wall
    assert tiles.image_for("X") is None


def test_draw_map_places_each_tile():
    game_map = parse_map(["11111\n", "1PCE1\n", "11111"])
    tiles = make_tiles()
    surface = pygame.Surface((20, 12), pygame.SRCALPHA)
    draw_map(surface, game_map, tiles, 4)
    for y, row in enumerate(game_map.rows):
        for x, tile in enumerate(row):
            expected = tiles.image_for(tile).get_at((0, 0))
            assert tuple(surface.get_at((x * 4 + 1, y * 4 + 1)))[:3] == tuple(expected)[:3]


def test_draw_map_accepts_game_state():
    game_map = parse_map(["11111\n", "1PCE1\n", "11111"])
    game = Game(game_map, out=lambda _: None)
    game.move(Direction.RIGHT)
    tiles = make_tiles()
    surface = pygame.Surface((20, 12), pygame.SRCALPHA)
    draw_map(surface, game, tiles, 4)
    floor = tuple(tiles.floor.get_at((0, 0)))[:3]
    assert tuple(surface.get_at((8, 4)))[:3] == floor


def test_tileset_load(tmp_path):
    for name, color in COLORS.items():
        (tmp_path / name).write_text(
            '/* XPM */\nstatic char *img[] = {\n"2 3 1 1",\n'
            f'"a c {color}",\n"aa",\n"aa",\n"aa"}};\n'
        )
    tiles = TileSet.load(tmp_path)
    assert tiles.tile_size == 3
    assert tiles.wall.get_size() == (2, 3)
    assert tuple(tiles.item.get_at((1, 2))) == (255, 255, 0, 255)
    assert tuple(tiles.player[Direction.LEFT].get_at((0, 0))) == (255, 0, 255, 255)


def test_main_without_map(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert "Error" in err
    assert "no map" in err


def test_main_bad_extension(capsys):
    assert main(["map.txt"]) == 1
    assert "filename error" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.ber")]) == 1
    assert "open file error" in capsys.readouterr().err


def test_main_unreachable_item(tmp_path, capsys):
    path = tmp_path / "level.ber"
    path.write_text("111111\n1PE1C1\n111111")
    assert main([str(path)]) == 1
    assert "Flood fill failed" in capsys.readouterr().err


@pytest.mark.parametrize("args", [["a.ber", "b.ber"]])
def test_main_too_many_args(args, capsys):
    assert main(args) == 1
    assert "no map" in capsys.readouterr().err