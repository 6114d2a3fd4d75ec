"""Point-to-level formula."""

DEFAULT_POINTS_PER_LEVEL = 500


def level_for_points(points: int, points_per_level: int = DEFAULT_POINTS_PER_LEVEL) -> int:
    """Level reached with the given points: floor(points / points_per_level) + 1."""
    return max(points, 0) // points_per_level + 1
