"""A tile-based puzzle game: map checking, game state, XPM images and a pygame window."""

__version__ = "0.1.0"

__all__ = ["colors", "xpm", "gamemap", "game", "render"]