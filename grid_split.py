#!/usr/bin/env python3
from typing import List

import numpy as np


def split_into_grid(image: np.ndarray, grid_size: int = 3) -> List[List[np.ndarray]]:
    if grid_size < 1:
        raise ValueError(f"Grid size must be positive, got {grid_size}")
    h, w = image.shape[:2]

    # square tiles cut from the top-left corner, any excess on the longer axis is dropped
    tile_size = min(h, w) // grid_size
    if tile_size == 0:
        raise ValueError(f"Image {w}x{h} is too small for a {grid_size}x{grid_size} grid")

    tiles: List[List[np.ndarray]] = []
    for r in range(grid_size):
        row = []
        for c in range(grid_size):
            y0 = r * tile_size
            x0 = c * tile_size
            tile = image[y0 : y0 + tile_size, x0 : x0 + tile_size].copy()
            row.append(tile)
        tiles.append(row)
    return tiles


def flatten_tiles(tiles: List[List[np.ndarray]]) -> List[np.ndarray]:
    # row-major, matching the grid layout's fill order
    return [tile for row in tiles for tile in row]
