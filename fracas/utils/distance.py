"""Distance calculations for the game grid."""

# 8-neighbourhood offsets, orthogonal first
NEIGHBOR_OFFSETS = (
    (-1, 0),
    (1, 0),
    (0, -1),
    (0, 1),
    (-1, -1),
    (-1, 1),
    (1, -1),
    (1, 1),
)


def chebyshev_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    """Calculate Chebyshev distance between two points.

    Chebyshev distance is the maximum absolute difference of coordinates.
    Also known as chessboard or L∞ distance. Diagonal neighbours are at
    distance 1, the same as orthogonal ones.

    Examples:
        >>> chebyshev_distance(0, 0, 1, 1)
        1
        >>> chebyshev_distance(0, 0, 5, 0)
        5
    """
    return max(abs(x2 - x1), abs(y2 - y1))


def manhattan_distance(x1: int, y1: int, x2: int, y2: int) -> int:
    """Calculate Manhattan (taxicab, L1) distance between two points.

    Examples:
        >>> manhattan_distance(0, 0, 1, 1)
        2
    """
    return abs(x2 - x1) + abs(y2 - y1)


def is_adjacent(x1: int, y1: int, x2: int, y2: int) -> bool:
    """True if two positions are within attack range of each other.

    Both constraints must hold: Chebyshev distance at most 1 and Manhattan
    distance at most 2. Diagonal neighbours qualify. A position is at
    distance 0 from itself and is also reported as adjacent; callers rule
    out self-attacks through ownership.
    """
    return (
        chebyshev_distance(x1, y1, x2, y2) <= 1
        and manhattan_distance(x1, y1, x2, y2) <= 2
    )


def neighbor_positions(x: int, y: int, width: int, height: int) -> list[tuple[int, int]]:
    """Return the in-bounds 8-directional neighbours of (x, y)."""
    positions = []
    for dx, dy in NEIGHBOR_OFFSETS:
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height:
            positions.append((nx, ny))
    return positions
