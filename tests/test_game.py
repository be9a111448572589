import pytest

from solong.game import KEY_ESCAPE, Direction, Game, MoveOutcome
from solong.gamemap import parse_map


def make_game(*rows):
    lines = [row + "\n" for row in rows[:-1]] + [rows[-1]]
    messages = []
    return Game(parse_map(lines), out=messages.append), messages


def test_move_into_wall_is_blocked():
    game, messages = make_game("11111", "1PCE1", "11111")
    assert game.move(Direction.LEFT) is MoveOutcome.BLOCKED
    assert game.position == (1, 1)
    assert game.moves == 0
    assert messages == []


def test_collecting_item_moves_and_counts():
    game, messages = make_game("11111", "1PCE1", "11111")
    assert game.move(Direction.RIGHT) is MoveOutcome.MOVED
    assert game.position == (2, 1)
    assert game.items == 0
    assert game.moves == 1
    assert game.tile(2, 1) == "0"
    assert game.facing is Direction.RIGHT
    assert messages == ["Moves : 1"]


def test_exit_wins_when_all_items_eaten():
    game, _ = make_game("11111", "1PCE1", "11111")
    game.move(Direction.RIGHT)
    assert game.move(Direction.RIGHT) is MoveOutcome.WON
    assert game.exit_message() == "Exit game :  win  ><>"


def test_exit_locked_while_items_remain():
    game, messages = make_game("111111", "1PE0C1", "111111")
    assert game.move(Direction.RIGHT) is MoveOutcome.EXIT_LOCKED
    assert game.position == (1, 1)
    assert game.moves == 0
    assert messages == ["1 shoal(s) of fish to eat!"]
    assert game.exit_message() == "Exit game :  GAME OVER  /!\\"


def test_handle_key_bindings():
    game, _ = make_game("11111", "10C01", "1P0E1", "11111")
    assert game.handle_key(13) is MoveOutcome.MOVED
    assert game.position == (1, 1)
    assert game.handle_key(1) is MoveOutcome.MOVED
    assert game.position == (1, 2)
    assert game.handle_key(2) is MoveOutcome.MOVED
    assert game.position == (2, 2)
    assert game.handle_key(0) is MoveOutcome.MOVED
    assert game.position == (1, 2)
    assert game.moves == 4


def test_handle_key_escape_and_unknown():
    game, _ = make_game("11111", "1PCE1", "11111")
    assert game.handle_key(KEY_ESCAPE) is MoveOutcome.QUIT
    assert game.handle_key(99) is None
    assert game.position == (1, 1)


def test_game_does_not_change_source_map():
    lines = ["11111\n", "1PCE1\n", "11111"]
    game_map = parse_map(lines)
    game = Game(game_map, out=lambda _: None)
    game.move(Direction.RIGHT)
    assert game_map.rows[1] == "1PCE1"
    assert game_map.items == 1


def test_tile_out_of_range():
    game, _ = make_game("11111", "1PCE1", "11111")
    with pytest.raises(IndexError):
        game.tile(5, 0)