# solong

A small tile-based puzzle game. You steer a player around a walled map,
eat every item on it, and then walk out through the exit.

## Installing

```
pip install .
```

This pulls in `pygame`, which draws the window.

## Playing

```
solong path/to/level.ber
```

The same entry point can be started with `python -m solong.render
path/to/level.ber`.

The map is checked first. If it is playable, `floodfill ok` is printed and
a window titled `so_long` opens. The keyboard controls:

| Key    | Action      |
|--------|-------------|
| W      | move up     |
| S      | move down   |
| A      | move left   |
| D      | move right  |
| Escape | quit        |

Every step is counted and printed as `Moves : N`. Walking onto an item eats
it and leaves floor behind. Walking onto the exit while items are still
left prints `N shoal(s) of fish to eat!` and the player stays put; once
they are all gone, the exit ends the game. When the game ends, by the exit,
Escape or closing the window, the command prints
`Exit game :  win  ><>` if no items are left and
`Exit game :  GAME OVER  /!\` otherwise.

When anything goes wrong (wrong number of arguments, a bad map, an
unreadable image), the command writes `Error` and a message to standard
error and exits with status 1.

## Map files

A map is a plain text file whose name ends in `.ber` (and is more than just
`.ber`). Each line is one row of tiles:

| Char | Tile              |
|------|-------------------|
| `1`  | wall              |
| `0`  | floor             |
| `P`  | player start      |
| `C`  | item to collect   |
| `E`  | exit              |

A map is accepted only if:

- the file has between 1 and 17 lines;
- every row has the same width as the first, at most 31 tiles;
- the last row is not followed by a line feed;
- it holds exactly one `P`, exactly one `E` and at least one `C`, and no
  other characters;
- the outer border is made of walls only;
- every item and the exit can be reached from the player's start, moving
  up, down, left and right (the exit itself cannot be walked through).

For example:

```
1111111
1P0C0E1
1111111
```

A map that breaks a rule is rejected with a message saying which rule, and
the game does not start.

## Tile images

Tiles are drawn from XPM images read from `bin/img`, relative to the
directory the command is started in:

`item.xpm`, `exit.xpm`, `floor.xpm`, `wall.xpm`, `player_top.xpm`,
`player_down.xpm`, `player_left.xpm`, `player_right.xpm`.

The window is 64 pixels per tile; the images are placed on a grid as large
as the height of `wall.xpm`, so 64-pixel square images are expected. The
player is drawn facing the way it last moved. XPM colours given as
`#rrggbb` or as X11 colour names are understood, and `None` is transparent.

## Using it as a library

- `solong.gamemap.load_map(path)` reads and checks a map file and returns a
  `GameMap` (`rows`, `player`, `items`, `exits`, `width`, `height`,
  `tile(x, y)`); it raises `MapError` on a bad map. The steps are also
  available on their own: `check_extension`, `read_map_lines`, `parse_map`
  and `check_reachable`, the last returning the set of cells reached.
- `solong.game.Game(game_map)` holds the state of a game in progress.
  `Game.move(direction)` takes a `Direction` and returns a `MoveOutcome`
  (`BLOCKED`, `MOVED`, `EXIT_LOCKED`, `WON`); `Game.handle_key(key)` takes a
  key code from `KEY_BINDINGS` or `KEY_ESCAPE` (which gives `QUIT`) and
  returns `None` for other keys; `Game.exit_message()` gives the closing
  line. Messages go to `print` unless another callable is passed as `out`.
- `solong.xpm.load_xpm(path)`, `parse_xpm_text(text)` and `parse_xpm(lines)`
  decode XPM images into an `XpmImage` (`width`, `height`, `pixels`,
  `pixel(x, y)`), raising `XpmError` on a bad file.
- `solong.colors.text_to_rgb(name, end)` resolves an X11 colour name or a
  `#rrggbb` value to an integer: `-1` for `none`, `0` for an unknown name.
- `solong.render` has `xpm_to_surface`, `TileSet.load(image_dir)`,
  `draw_map` and `run(game_map, image_dir)` for drawing with pygame.

## What it does not do

The package ships no tile images: the eight XPM files above must be
provided in `bin/img`. The `solong` command has no option to choose another
image directory; `solong.render.run` takes one when called from Python.

## Running the tests

```
pip install ".[test]"
pytest
```