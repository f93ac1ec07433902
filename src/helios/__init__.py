"""Inverted word index over a directory tree with terminal and HTTP lookup."""

__version__ = "0.1.0"
