# -*- coding: utf-8 -*-
"""Mutable module grid used while a symbol is being built."""

from typing import List, Tuple


class ModuleGrid:
    """
    Two parallel size x size boolean grids, indexed ``[y][x]``.

    ``modules`` holds the module colors (True = dark) and ``is_function`` marks
    the modules that belong to function patterns and are never masked.
    """

    def __init__(self, version: int):
        self.version = version
        self.size = version * 4 + 17
        self.modules: List[List[bool]] = [[False] * self.size for _ in range(self.size)]
        self.is_function: List[List[bool]] = [[False] * self.size for _ in range(self.size)]

    def set_function_module(self, x: int, y: int, dark: bool) -> None:
        self.modules[y][x] = dark
        self.is_function[y][x] = True

    def copy(self) -> "ModuleGrid":
        clone = ModuleGrid.__new__(ModuleGrid)
        clone.version = self.version
        clone.size = self.size
        clone.modules = [list(row) for row in self.modules]
        clone.is_function = [list(row) for row in self.is_function]
        return clone

    def freeze(self) -> Tuple[Tuple[Tuple[bool, ...], ...], Tuple[Tuple[bool, ...], ...]]:
        """Read-only snapshot: (modules, is_function) as nested tuples."""
        return (tuple(tuple(row) for row in self.modules),
                tuple(tuple(row) for row in self.is_function))

    @classmethod
    def thaw(cls, version: int, snapshot) -> "ModuleGrid":
        """Mutable grid rebuilt from a :meth:`freeze` snapshot."""
        grid = cls.__new__(cls)
        grid.version = version
        grid.size = version * 4 + 17
        modules, is_function = snapshot
        grid.modules = [list(row) for row in modules]
        grid.is_function = [list(row) for row in is_function]
        return grid
