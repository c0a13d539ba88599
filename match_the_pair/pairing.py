from typing import MutableSequence, Optional, Sequence

# per channel difference under which two colors are the same pair
COLOR_THRESHOLD = 50

RED, GREEN, BLUE = 16, 8, 0


def channel(color: int, shift: int) -> int:
    return (color >> shift) & 0xFF


def close_enough(c1: int, c2: int, shift: int) -> bool:
    return abs(channel(c1, shift) - channel(c2, shift)) < COLOR_THRESHOLD


def colors_match(c1: int, c2: int) -> bool:
    return all(close_enough(c1, c2, shift) for shift in (RED, GREEN, BLUE))


def find_pairs(colors: MutableSequence[Optional[int]]) -> list[tuple[int, int]]:
    """Greedily pair up the available colors, lowest indices first.

    ``None`` marks a slot that is not available, either because its color is
    not known yet or because it was already paired. Paired slots are set to
    ``None`` in place.
    """
    pairs = []
    for i in range(len(colors)):
        if colors[i] is None:
            continue
        # look later in the list for possible matches
        for j in range(i + 1, len(colors)):
            if colors[j] is None:
                continue
            if colors_match(colors[i], colors[j]):
                colors[i] = None
                colors[j] = None
                pairs.append((i, j))
                break
    return pairs


def unmatched(colors: Sequence[Optional[int]]) -> list[int]:
    return [i for i, color in enumerate(colors) if color is not None]
