"""Shared test fixtures."""

from collections import deque

import numpy as np
import pytest

BACKGROUND = 0xFFFFFF


class FakeTube:
    """Just enough of a pwntools tube to replay a recorded conversation."""

    def __init__(self, lines):
        self.incoming = deque(lines)
        self.sent = []
        self.closed = False

    def recvline(self, keepends=True):
        if not self.incoming:
            raise EOFError
        line = self.incoming.popleft()
        return line + b"\n" if keepends else line

    def sendline(self, line=b""):
        self.sent.append(line)

    def close(self):
        self.closed = True


def make_disk(diameter: int) -> np.ndarray:
    ys, xs = np.mgrid[0:diameter, 0:diameter]
    center = diameter / 2
    return (center - (xs + 0.5)) ** 2 + (center - (ys + 0.5)) ** 2 <= diameter * diameter / 4.0


def draw_disk(image: np.ndarray, x: int, y: int, diameter: int, color: int):
    view = image[y : y + diameter, x : x + diameter]
    view[make_disk(diameter)] = color


def blank_image(width: int = 40, height: int = 40, color: int = BACKGROUND) -> np.ndarray:
    return np.full((height, width), color, dtype=np.uint32)


@pytest.fixture
def circle_image():
    image = blank_image(100, 80)
    # noise: a rectangle, a tiny blob of the circle color and a thin ring
    image[5:25, 50:90] = 0xCC0000
    draw_disk(image, 2, 2, 6, 0x3366CC)
    draw_disk(image, 30, 35, 30, 0x3366CC)
    image[60:75, 5:9] = 0x000000
    return image
