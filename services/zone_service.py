"""
Zone calculation service.

Pure functions mapping a target seat and grid dimensions to the set of seats
allowed to buzz. Seats are numbered 1..rows*cols in row-major order, so seat
n sits at row (n - 1) // cols and column (n - 1) % cols.

No state, no I/O: the same functions back both the live broadcast and the
test assertions.
"""
from typing import Optional, Set, Tuple

from models import ZoneMode


def seat_position(seat: int, cols: int) -> Tuple[int, int]:
    """Return the zero-based (row, col) of a seat."""
    return (seat - 1) // cols, (seat - 1) % cols


def seat_number(row: int, col: int, cols: int) -> int:
    return row * cols + col + 1


def all_seats(rows: int, cols: int) -> Set[int]:
    return set(range(1, rows * cols + 1))


def cross(target: int, rows: int, cols: int) -> Set[int]:
    """
    Every seat sharing the target's row or column.

    Example (5x5, target 13):
        row {11, 12, 13, 14, 15} + column {3, 8, 13, 18, 23} -> 9 seats
    """
    target_row, target_col = seat_position(target, cols)
    active = {seat_number(target_row, c, cols) for c in range(cols)}
    active |= {seat_number(r, target_col, cols) for r in range(rows)}
    return active


def square(target: int, rows: int, cols: int) -> Set[int]:
    """
    Every in-bounds seat of the 3x3 block centred on the target.

    Edges and corners are truncated, there is no wraparound:
        square(13, 5, 5) -> {7, 8, 9, 12, 13, 14, 17, 18, 19}
        square(1, 5, 5)  -> {1, 2, 6, 7}
    """
    target_row, target_col = seat_position(target, cols)
    active = set()
    for r in range(target_row - 1, target_row + 2):
        for c in range(target_col - 1, target_col + 2):
            if 0 <= r < rows and 0 <= c < cols:
                active.add(seat_number(r, c, cols))
    return active


def locked_zone(active: Set[int], rows: int, cols: int) -> Set[int]:
    return all_seats(rows, cols) - active


def compute_zones(
    mode: ZoneMode,
    target: Optional[int],
    rows: int,
    cols: int
) -> Tuple[Set[int], Set[int]]:
    """
    Return (active, locked) for a targeting mode.

    ALL, or any mode without a target, activates every seat. The caller is
    responsible for passing a target within 1..rows*cols.
    """
    if mode == ZoneMode.ALL or target is None:
        active = all_seats(rows, cols)
    elif mode == ZoneMode.CROSS:
        active = cross(target, rows, cols)
    elif mode == ZoneMode.SQUARE:
        active = square(target, rows, cols)
    else:
        raise ValueError(f"Unknown zone mode: {mode}")

    return active, locked_zone(active, rows, cols)
