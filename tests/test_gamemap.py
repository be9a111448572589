import pytest

from solong.gamemap import (
    GameMap,
    MapError,
    check_extension,
    check_reachable,
    load_map,
    parse_map,
    read_map_lines,
)

VALID = "1111111\n1P0C0E1\n1111111"


def _lines(text):
    return text.splitlines(keepends=True)


def test_parse_valid_map():
    game_map = parse_map(_lines(VALID))
    assert game_map.rows == VALID.split("\n")
    assert (game_map.width, game_map.height) == (7, 3)
    assert game_map.player == (1, 1)
    assert (game_map.items, game_map.exits) == (1, 1)
    assert game_map.tile(3, 1) == "C"


def test_tile_out_of_range():
    game_map = parse_map(_lines(VALID))
    with pytest.raises(IndexError):
        game_map.tile(7, 0)


def test_trailing_newline_is_rejected():
    with pytest.raises(MapError, match="lenght lines"):
        parse_map(_lines(VALID + "\n"))


def test_uneven_rows():
    with pytest.raises(MapError, match="lenght lines"):
        parse_map(_lines("1111111\n1P0C0E11\n1111111"))


def test_widest_map_accepted_and_wider_rejected():
    wall = "1" * 31
    middle = "1P" + "0" * 26 + "CE1"
    game_map = parse_map(_lines("\n".join([wall, middle, wall])))
    assert game_map.width == len(wall)
    with pytest.raises(MapError, match="width"):
        parse_map(_lines("\n".join([wall + "1", middle + "1", wall + "1"])))


def test_too_many_rows():
    wall = "11111"
    rows = [wall] + ["1PCE1"] + ["10001"] * 16 + [wall]
    with pytest.raises(MapError, match="height"):
        parse_map(_lines("\n".join(rows)))


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("1111111\n1PXC0E1\n1111111", "bad character"),
        ("1111111\n1PPC0E1\n1111111", "Must contains"),
        ("1111111\n1P000E1\n1111111", "Must contains"),
        ("1111111\n1P0CEE1\n1111111", "Must contains"),
        ("1111111\n0P0C0E1\n1111111", "walls"),
        ("1111011\n1P0C0E1\n1111111", "walls"),
        ("1111111\n1P0C0E0\n1111111", "walls"),
    ],
)
def test_invalid_maps(text, message):
    with pytest.raises(MapError, match=message):
        parse_map(_lines(text))


def test_reachable_cells():
    reached = check_reachable(parse_map(_lines(VALID)))
    assert reached == {(x, 1) for x in range(1, 6)}


def test_unreachable_item():
    text = "111111\n1P1C01\n101111\n1E0001\n111111"
    with pytest.raises(MapError, match="Flood fill"):
        check_reachable(parse_map(_lines(text)))


def test_exit_is_not_crossed():
    text = "1111111\n1PE0C01\n1111111"
    with pytest.raises(MapError, match="Flood fill"):
        check_reachable(parse_map(_lines(text)))


def test_check_extension():
    assert check_extension("maps/level.ber") == "maps/level.ber"
    for bad in (".ber", "level.txt", "level.bers"):
        with pytest.raises(MapError, match="filename"):
            check_extension(bad)


def test_read_map_lines(tmp_path):
    path = tmp_path / "m.ber"
    path.write_bytes(b"11\n22")
    assert read_map_lines(path, 18) == ["11\n", "22"]


def test_read_map_lines_errors(tmp_path):
    empty = tmp_path / "empty.ber"
    empty.write_bytes(b"")
    with pytest.raises(MapError, match="empty"):
        read_map_lines(empty, 18)
    big = tmp_path / "big.ber"
    big.write_bytes(b"1\n" * 18)
    with pytest.raises(MapError, match="too big"):
        read_map_lines(big, 18)
    with pytest.raises(MapError, match="open"):
        read_map_lines(tmp_path / "absent.ber", 18)


def test_load_map(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text(VALID)
    game_map = load_map(path)
    assert isinstance(game_map, GameMap)
    assert game_map.rows == VALID.split("\n")


def test_load_map_wrong_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text(VALID)
    with pytest.raises(MapError, match="filename"):
        load_map(path)