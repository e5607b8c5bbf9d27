"""Fuzzing benchmark targets: byte puzzles that signal when they are solved."""

__version__ = "0.1.0"