from typing import Sequence

import numpy as np

# 21 is the size of a version 1 QR code, the smallest there is
MIN_QR_SIZE = 21

# the three finder patterns are always 7x7 modules regardless of the version
POSITION_BOX_SIZE = 7

# the bottom row of the two upper finder patterns is fixed by the QR spec and
# crosses the horizontal timing pattern, so its unmasked content is known
MAGIC_ROW_INDEX = POSITION_BOX_SIZE - 1

DARK = "+"


class MatrixFormatError(ValueError):
    pass


def parse_matrix(lines: Sequence[str]) -> np.ndarray:
    n = len(lines[0]) if lines else 0
    if n < MIN_QR_SIZE:
        raise MatrixFormatError(f"matrix is too small: {n} < {MIN_QR_SIZE}")
    if len(lines) != n:
        raise MatrixFormatError(f"expected {n} lines, got {len(lines)}")

    for lineno, line in enumerate(lines):
        if len(line) != n:
            raise MatrixFormatError(
                f"line {lineno} has length {len(line)}, expected {n}"
            )

    return np.array([[c == DARK for c in line] for line in lines], dtype=bool)


def get_magic_row(n: int) -> np.ndarray:
    result = np.zeros(n, dtype=bool)
    # position box outlines are dark
    result[:POSITION_BOX_SIZE] = True
    result[n - POSITION_BOX_SIZE :] = True
    # the timing pattern alternates, dark on even columns. this also leaves
    # the separators on both sides (column 7 and n - 8) light
    middle = np.arange(POSITION_BOX_SIZE, n - POSITION_BOX_SIZE)
    result[middle] = middle % 2 == 0
    return result


def xor_rows(row: Sequence[bool], other: Sequence[bool]) -> np.ndarray:
    return np.logical_xor(np.asarray(row, dtype=bool), np.asarray(other, dtype=bool))


def get_mask_row(matrix: np.ndarray) -> np.ndarray:
    row = matrix[MAGIC_ROW_INDEX]
    return xor_rows(row, get_magic_row(len(row)))


def unmask(matrix: np.ndarray) -> np.ndarray:
    # every row of the code is XOR'd with the same mask row, so the mask we
    # recover from the magic row applies column-wise to the whole matrix
    mask = get_mask_row(matrix)
    return np.logical_xor(matrix, mask[np.newaxis, :])


def format_matrix(matrix: np.ndarray) -> str:
    return "\n".join("".join("██" if v else "  " for v in row) for row in matrix)
