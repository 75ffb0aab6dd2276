"""Labyrinth: Daedalus builds mazes, Icarus solves them."""

__version__ = "1.0.0"
