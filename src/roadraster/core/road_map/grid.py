from __future__ import annotations

import numpy as np

from .models import PixelCell


class PixelGrid:
    """
    Плоский растр ячеек (row-major): индекс ячейки (x, y) = y * width + x.

    Хранение: три непрерывных массива на width * height ячеек, заполняемых только
    дописыванием в конец (append). Случайной записи и удаления нет.
    """

    def __init__(self, width: int, height: int) -> None:
        width, height = int(width), int(height)
        if width < 1 or height < 1:
            raise ValueError(f"Размер растра должен быть >= 1x1, получено {width}x{height}")
        self._width = width
        self._height = height
        n = width * height
        self._off_road = np.ones(n, dtype=bool)
        self._has_direction = np.zeros(n, dtype=bool)
        self._direction = np.zeros((n, 3), dtype=np.float64)
        self._count = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def capacity(self) -> int:
        return self._width * self._height

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count == self.capacity

    # Read-only views for vectorized readers (intersection, encoder).
    @property
    def off_road(self) -> np.ndarray:
        return _readonly(self._off_road[: self._count])

    @property
    def has_direction(self) -> np.ndarray:
        return _readonly(self._has_direction[: self._count])

    @property
    def direction(self) -> np.ndarray:
        return _readonly(self._direction[: self._count])

    def index(self, x: int, y: int) -> int:
        x, y = int(x), int(y)
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Ячейка ({x}, {y}) вне растра {self._width}x{self._height}")
        return y * self._width + x

    def cell_at(self, x: int, y: int) -> PixelCell:
        i = self.index(x, y)
        if i >= self._count:
            raise IndexError(f"Ячейка ({x}, {y}) ещё не записана")
        return PixelCell(
            is_off_road=bool(self._off_road[i]),
            has_direction=bool(self._has_direction[i]),
            direction=self._direction[i].copy(),
        )

    def append_empty_cell(self) -> int:
        return self.append(is_off_road=True, direction=None)

    def append(self, *, is_off_road: bool, direction: np.ndarray | None) -> int:
        """Дописывает ячейку и возвращает её индекс. Off-road ячейка не хранит направление."""
        if self._count >= self.capacity:
            raise RuntimeError(f"Растр {self._width}x{self._height} уже заполнен ({self._count} ячеек)")
        i = self._count
        self._off_road[i] = bool(is_off_road)
        if direction is not None and not is_off_road:
            self._has_direction[i] = True
            self._direction[i] = direction
        else:
            self._has_direction[i] = False
            self._direction[i] = 0.0
        self._count += 1
        return i


def _readonly(a: np.ndarray) -> np.ndarray:
    v = a.view()
    v.flags.writeable = False
    return v


__all__ = [
    "PixelGrid",
]
