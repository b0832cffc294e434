"""Column color palette."""

import hashlib

COLUMN_COLORS: list[str] = [
    "#3b82f6",  # blue
    "#ef4444",  # red
    "#10b981",  # emerald
    "#f59e0b",  # amber
    "#8b5cf6",  # violet
    "#ec4899",  # pink
]


def color_for_title(title: str) -> str:
    """Deterministic hex color from a column title.

    Sums the md5 bytes of the normalized title mod palette size, so
    the same title always lands on the same color.
    """
    h = hashlib.md5(title.strip().lower().encode()).hexdigest()
    index = sum(int(h[i : i + 2], 16) for i in range(0, 32, 2))
    return COLUMN_COLORS[index % len(COLUMN_COLORS)]
