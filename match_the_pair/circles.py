"""
Circle detection for the Match the Pair images.

Every image holds one filled circle drawn over a noisy background of other
shapes. The circle is found by splitting the image into one mask per exact
color, pulling the 4-connected regions out of each mask and testing whether a
region's bounding box is filled the way a disk would fill it.
"""

import io
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np
from PIL import Image

# smaller regions are usually artifacts of the background noise
MIN_DIAMETER = 11

# fraction of cells of the bounding box allowed to disagree with an ideal disk
ERROR_PERCENTAGE = 0.05

# up, right, down, left
TOWER = ((0, -1), (1, 0), (0, 1), (-1, 0))


def load_image(data: bytes) -> np.ndarray:
    """Decode image bytes into a (height, width) array of 0xRRGGBB ints."""
    with Image.open(io.BytesIO(data)) as img:
        rgb = np.asarray(img.convert("RGB"), dtype=np.uint32)
    return (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]


def iter_color_masks(image: np.ndarray) -> Iterator[tuple[int, np.ndarray]]:
    # masks are boolean rather than zero-filled copies of the image so that
    # pure black stays distinguishable from "not this color"
    for color in np.unique(image):
        yield int(color), image == color


def segment_colors(image: np.ndarray) -> dict[int, np.ndarray]:
    return dict(iter_color_masks(image))


@dataclass(frozen=True)
class Region:
    points: tuple[tuple[int, int], ...]

    @property
    def size(self) -> int:
        return len(self.points)

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        """(min_x, min_y, max_x, max_y), inclusive."""
        xs, ys = zip(*self.points)
        return min(xs), min(ys), max(xs), max(ys)

    def crop(self) -> np.ndarray:
        min_x, min_y, max_x, max_y = self.bbox
        patch = np.zeros((max_y - min_y + 1, max_x - min_x + 1), dtype=bool)
        xs, ys = np.array(self.points).T
        patch[ys - min_y, xs - min_x] = True
        return patch


def flood_fill(mask: np.ndarray, x: int, y: int) -> Region:
    """Extract the 4-connected region of ``mask`` containing (x, y).

    Every cell of the region is cleared in ``mask`` so that scanning the same
    mask again never finds it twice.
    """
    if not mask[y, x]:
        raise ValueError(f"no pixel at ({x}, {y}) to start a region from")

    height, width = mask.shape
    mask[y, x] = False
    stack = [(x, y)]
    points = []
    while stack:
        cx, cy = stack.pop()
        points.append((cx, cy))
        for dx, dy in TOWER:
            nx, ny = cx + dx, cy + dy
            if 0 <= nx < width and 0 <= ny < height and mask[ny, nx]:
                mask[ny, nx] = False
                stack.append((nx, ny))

    return Region(tuple(points))


def iter_regions(mask: np.ndarray) -> Iterator[Region]:
    ys, xs = np.nonzero(mask)
    for y, x in zip(ys.tolist(), xs.tolist()):
        # already swallowed by an earlier region
        if not mask[y, x]:
            continue
        yield flood_fill(mask, x, y)


def is_circle(patch: np.ndarray) -> bool:
    height, width = patch.shape
    diameter = min(width, height)
    if diameter < MIN_DIAMETER:
        return False

    radius_sq = diameter * diameter / 4.0
    center_x = width / 2
    center_y = height / 2
    ys, xs = np.mgrid[0:height, 0:width]
    in_circle = (center_x - (xs + 0.5)) ** 2 + (center_y - (ys + 0.5)) ** 2 <= radius_sq

    errors = np.count_nonzero(in_circle != patch.astype(bool))
    return errors / patch.size <= ERROR_PERCENTAGE


def has_circle(mask: np.ndarray) -> bool:
    # NOTE: consumes the mask
    return any(is_circle(region.crop()) for region in iter_regions(mask))


def find_circle_color(image: np.ndarray) -> Optional[int]:
    for color, mask in iter_color_masks(image):
        if has_circle(mask):
            return color
    return None
