#!/usr/bin/env python3
import os
from typing import List, Optional, Tuple

import cv2
import numpy as np

from grid_split import flatten_tiles, split_into_grid
from square_grid_layout import ChildPlacement, Insets, MeasureSpec, Rect, SquareGridLayout


class ImageTile:
    # grid child that stretches one image tile over its cell
    def __init__(self, image: np.ndarray, margins: Insets = Insets()) -> None:
        self.image = image
        self.margins = margins
        self.measured_size: Optional[Tuple[int, int]] = None
        self.frame: Optional[Rect] = None

    def measure(self, width: int, height: int) -> None:
        self.measured_size = (width, height)

    def layout(self, rect: Rect) -> None:
        self.frame = rect


def run_layout_cycle(
    container: SquareGridLayout,
    width_spec: MeasureSpec,
    height_spec: MeasureSpec,
    left: int = 0,
    top: int = 0,
) -> List[ChildPlacement]:
    w, h = container.measure(width_spec, height_spec)
    return container.layout(left, top, left + w, top + h)


def _paste(canvas: np.ndarray, tile: np.ndarray, frame: Rect) -> None:
    if frame.width <= 0 or frame.height <= 0:
        return
    ch, cw = canvas.shape[:2]
    x0, y0 = max(frame.left, 0), max(frame.top, 0)
    x1, y1 = min(frame.right, cw), min(frame.bottom, ch)
    if x1 <= x0 or y1 <= y0:
        return

    resized = cv2.resize(tile, (frame.width, frame.height), interpolation=cv2.INTER_AREA)
    if resized.ndim == 2:
        resized = cv2.cvtColor(resized, cv2.COLOR_GRAY2BGR)
    sx, sy = x0 - frame.left, y0 - frame.top
    canvas[y0:y1, x0:x1] = resized[sy : sy + (y1 - y0), sx : sx + (x1 - x0)]


def render_grid(
    container: SquareGridLayout,
    width: int,
    height: int,
    background: Tuple[int, int, int] = (32, 32, 32),
) -> np.ndarray:
    placements = run_layout_cycle(container, MeasureSpec.exactly(width), MeasureSpec.exactly(height))

    canvas = np.zeros((height, width, 3), dtype=np.uint8)
    canvas[:] = background
    # only this cycle's placements, children outside the grid keep stale frames
    for placement in placements:
        child = container.children[placement.index]
        if isinstance(child, ImageTile):
            _paste(canvas, child.image, placement.rect)
    return canvas


def make_test_pattern(size: int = 300) -> np.ndarray:
    # BGR gradient so every tile is visibly distinct
    ramp = np.linspace(0, 255, size, dtype=np.float32)
    xx, yy = np.meshgrid(ramp, ramp)
    pattern = np.stack([xx, yy, 255 - (xx + yy) / 2], axis=-1)
    return pattern.astype(np.uint8)


def build_demo_layout(image: np.ndarray, grid_size: int = 3, margin: int = 4) -> SquareGridLayout:
    container = SquareGridLayout(grid_size=grid_size, padding=Insets.uniform(10))
    for tile in flatten_tiles(split_into_grid(image, grid_size=grid_size)):
        container.add_child(ImageTile(tile, margins=Insets.uniform(margin)))
    return container


def main() -> None:
    output_dir = "outputs"
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, "square_grid.png")

    image = make_test_pattern(300)
    container = build_demo_layout(image, grid_size=3, margin=4)
    canvas = render_grid(container, 600, 400)

    if not cv2.imwrite(output_path, canvas):
        raise RuntimeError(f"Could not write {output_path}")
    print(f"Square side: {container.square_side}")
    tiles: List[ImageTile] = [c for c in container.children if isinstance(c, ImageTile)]
    for index, tile in enumerate(tiles):
        print(f"tile {index} {tile.measured_size} -> {tile.frame}")
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
