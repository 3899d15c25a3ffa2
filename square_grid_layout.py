#!/usr/bin/env python3
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Sequence, Tuple


class ConfigurationError(ValueError):
    pass


class MeasureMode(Enum):
    EXACTLY = "exactly"
    AT_MOST = "at_most"
    UNSPECIFIED = "unspecified"


@dataclass(frozen=True)
class MeasureSpec:
    mode: MeasureMode
    size: int = 0

    @classmethod
    def exactly(cls, size: int) -> "MeasureSpec":
        return cls(MeasureMode.EXACTLY, size)

    @classmethod
    def at_most(cls, size: int) -> "MeasureSpec":
        return cls(MeasureMode.AT_MOST, size)

    @classmethod
    def unspecified(cls) -> "MeasureSpec":
        return cls(MeasureMode.UNSPECIFIED, 0)


@dataclass(frozen=True)
class Insets:
    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    @classmethod
    def uniform(cls, value: int) -> "Insets":
        return cls(value, value, value, value)

    @property
    def horizontal(self) -> int:
        return self.left + self.right

    @property
    def vertical(self) -> int:
        return self.top + self.bottom


@dataclass(frozen=True)
class Rect:
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top


@dataclass(frozen=True)
class LayoutResult:
    # outcome of a measurement pass, read back by the matching placement pass
    width: int
    height: int
    square_side: int
    grid_size: int
    padding: Insets = Insets()


@dataclass(frozen=True)
class ChildPlacement:
    index: int
    row: int
    column: int
    rect: Rect


class GridChild(Protocol):
    margins: Insets

    def measure(self, width: int, height: int) -> None:
        ...

    def layout(self, rect: Rect) -> None:
        ...


def _check_grid_size(grid_size: int) -> None:
    if grid_size < 1:
        raise ConfigurationError(f"Grid size must be positive, got {grid_size}")


def cell_span(square_side: int, grid_size: int, index: int) -> int:
    # (s + i) // n hands the s % n spare pixels to the highest indices
    return (square_side + index) // grid_size


def cell_edge(square_side: int, grid_size: int, index: int) -> int:
    return square_side * index // grid_size


def cell_sizes(square_side: int, grid_size: int) -> List[Tuple[int, int, int]]:
    # exact (index, width, height) of every cell in fill order
    spp = max(square_side, 0)
    sizes = []
    for y in range(grid_size):
        for x in range(grid_size):
            sizes.append(
                (
                    y * grid_size + x,
                    cell_span(spp, grid_size, x),
                    cell_span(spp, grid_size, y),
                )
            )
    return sizes


def compute_layout(
    width_spec: MeasureSpec,
    height_spec: MeasureSpec,
    grid_size: int,
    padding: Insets = Insets(),
) -> LayoutResult:
    _check_grid_size(grid_size)
    mw, sw = width_spec.mode, width_spec.size
    mh, sh = height_spec.mode, height_spec.size
    pw = padding.horizontal
    ph = padding.vertical

    if mw is MeasureMode.UNSPECIFIED and mh is MeasureMode.UNSPECIFIED:
        raise ConfigurationError("Layout must be constrained on at least one axis")

    # largest square span that fits the more constrained axis
    if mw is MeasureMode.UNSPECIFIED:
        sp = sh - ph
    elif mh is MeasureMode.UNSPECIFIED:
        sp = sw - pw
    elif sw - pw <= sh - ph:
        sp = sw - pw
    else:
        sp = sh - ph

    # padding larger than the available space must not produce a negative grid
    spp = max(sp, 0)

    width = sw if mw is MeasureMode.EXACTLY else max(sp + pw, 0)
    height = sh if mh is MeasureMode.EXACTLY else max(sp + ph, 0)
    return LayoutResult(
        width=width,
        height=height,
        square_side=spp,
        grid_size=grid_size,
        padding=padding,
    )


def measure_children(result: LayoutResult, children: Sequence[Optional[GridChild]]) -> None:
    for index, width, height in cell_sizes(result.square_side, result.grid_size):
        child = children[index] if index < len(children) else None
        if child is None:
            continue
        child.measure(width, height)


def _half(slack: int) -> int:
    # rounds toward zero, negative slack included
    return slack // 2 if slack >= 0 else -(-slack // 2)


def grid_origin(bounds: Rect, result: LayoutResult) -> Tuple[int, int]:
    s = result.square_side
    p = result.padding
    # spare space is split evenly, an odd pixel goes to the trailing side
    x = p.left + _half(bounds.right - p.right - bounds.left - p.left - s)
    y = p.top + _half(bounds.bottom - p.bottom - bounds.top - p.top - s)
    return x, y


def place(
    bounds: Rect,
    result: LayoutResult,
    margins: Sequence[Optional[Insets]],
) -> List[ChildPlacement]:
    # margins holds one entry per child index, None marks an empty cell.
    # Rects are local to the container and every cell is visited, so a hole
    # does not hide the children after it.
    s = result.square_side
    n = result.grid_size
    ox, oy = grid_origin(bounds, result)

    placements: List[ChildPlacement] = []
    for y in range(n):
        for x in range(n):
            index = y * n + x
            m = margins[index] if index < len(margins) else None
            if m is None:
                continue
            # we don't support gravity, so the cell is simply inset by the margins
            rect = Rect(
                ox + cell_edge(s, n, x) + m.left,
                oy + cell_edge(s, n, y) + m.top,
                ox + cell_edge(s, n, x + 1) - m.right,
                oy + cell_edge(s, n, y + 1) - m.bottom,
            )
            placements.append(ChildPlacement(index=index, row=y, column=x, rect=rect))
    return placements


class SquareGridLayout:
    # measure() caches the square side that the following layout() reuses
    def __init__(self, grid_size: int = 1, padding: Insets = Insets()) -> None:
        _check_grid_size(grid_size)
        self._grid_size = grid_size
        self.padding = padding
        self.children: List[Optional[GridChild]] = []
        self.layout_requested = True
        self._result: Optional[LayoutResult] = None

    @property
    def grid_size(self) -> int:
        return self._grid_size

    @grid_size.setter
    def grid_size(self, size: int) -> None:
        _check_grid_size(size)
        if self._grid_size != size:
            self._grid_size = size
            self.request_layout()

    @property
    def square_side(self) -> int:
        return self._result.square_side if self._result is not None else 0

    @property
    def last_result(self) -> Optional[LayoutResult]:
        return self._result

    def request_layout(self) -> None:
        self._result = None
        self.layout_requested = True

    def add_child(self, child: GridChild) -> None:
        self.children.append(child)
        self.request_layout()

    def remove_child_at(self, index: int) -> None:
        # leaves a hole so the remaining children keep their cells
        self.children[index] = None
        self.request_layout()

    def measure(self, width_spec: MeasureSpec, height_spec: MeasureSpec) -> Tuple[int, int]:
        result = compute_layout(width_spec, height_spec, self._grid_size, self.padding)
        measure_children(result, self.children)
        self._result = result
        return result.width, result.height

    def layout(self, left: int, top: int, right: int, bottom: int) -> List[ChildPlacement]:
        result = self._result
        if result is None:
            # nothing measured yet, behave like a freshly created container
            result = LayoutResult(
                width=right - left,
                height=bottom - top,
                square_side=0,
                grid_size=self._grid_size,
                padding=self.padding,
            )
        margins = [c.margins if c is not None else None for c in self.children]
        placements = place(Rect(left, top, right, bottom), result, margins)
        for placement in placements:
            self.children[placement.index].layout(placement.rect)
        self.layout_requested = False
        return placements
