"""Test doubles shared by the orders tests."""
import itertools


class ScriptedGenerator:
    """Id generator returning ``ID1``, ``ID2``... and recording lengths."""

    def __init__(self, prefix="ID"):
        self.lengths = []
        self._n = itertools.count(1)
        self.prefix = prefix

    def __call__(self, length):
        self.lengths.append(length)
        return f"{self.prefix}{next(self._n)}"
