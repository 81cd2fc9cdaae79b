"""Layout Calculator - contributor count to grid geometry. Pure, no IO.

Invariants:
    - columns_per_row = min(count, MAX_COLUMNS); row_count = ceil(count / columns_per_row)
    - count == 0 yields a header-only geometry (no division)
    - Same count and diameter always yield an equal LayoutGeometry
    - Raster and vector renderers both call compute_layout: positional parity

Design Decisions:
    - Frozen dataclass: geometry is a value, safe to share between renderers
    - Constants at module level, diameter is the only tunable input
"""

import math
from dataclasses import dataclass

MAX_COLUMNS = 12
DEFAULT_AVATAR_DIAMETER = 60
CELL_MARGIN = 15
OUTER_PADDING = 30
HEADER_HEIGHT = 60


@dataclass(frozen=True)
class LayoutGeometry:
    """Grid and pixel dimensions for a given contributor count."""
    contributor_count: int
    columns_per_row: int
    row_count: int
    canvas_width: int
    canvas_height: int
    avatar_diameter: int = DEFAULT_AVATAR_DIAMETER
    cell_margin: int = CELL_MARGIN
    outer_padding: int = OUTER_PADDING
    header_height: int = HEADER_HEIGHT

    @property
    def pitch(self) -> int:
        """Distance between the origins of two neighbouring cells."""
        return self.avatar_diameter + self.cell_margin

    @property
    def radius(self) -> float:
        return self.avatar_diameter / 2

    def cell_position(self, index: int) -> tuple[int, int]:
        """(row, column) of the contributor at index."""
        if not 0 <= index < self.contributor_count:
            raise IndexError(
                f"cell {index} outside layout of {self.contributor_count}",
            )
        return divmod(index, self.columns_per_row)

    def cell_origin(self, index: int) -> tuple[int, int]:
        """Top-left pixel (x, y) of the avatar square at index."""
        row, column = self.cell_position(index)
        x = self.outer_padding + column * self.pitch
        y = self.outer_padding + self.header_height + row * self.pitch
        return x, y

    def cell_center(self, index: int) -> tuple[float, float]:
        x, y = self.cell_origin(index)
        return x + self.radius, y + self.radius


def compute_layout(
    count: int, avatar_diameter: int = DEFAULT_AVATAR_DIAMETER,
) -> LayoutGeometry:
    """Compute grid geometry for count contributors."""
    if count < 0:
        raise ValueError(f"contributor count cannot be negative: {count}")
    if avatar_diameter <= 0:
        raise ValueError(f"avatar diameter must be positive: {avatar_diameter}")

    if count == 0:
        # Header-only: one empty column wide, no grid rows
        return LayoutGeometry(
            contributor_count=0,
            columns_per_row=0,
            row_count=0,
            canvas_width=avatar_diameter + 2 * OUTER_PADDING,
            canvas_height=HEADER_HEIGHT + 2 * OUTER_PADDING,
            avatar_diameter=avatar_diameter,
        )

    pitch = avatar_diameter + CELL_MARGIN
    columns = min(count, MAX_COLUMNS)
    rows = math.ceil(count / columns)
    return LayoutGeometry(
        contributor_count=count,
        columns_per_row=columns,
        row_count=rows,
        canvas_width=columns * pitch - CELL_MARGIN + 2 * OUTER_PADDING,
        canvas_height=(
            HEADER_HEIGHT + rows * pitch - CELL_MARGIN + 2 * OUTER_PADDING
        ),
        avatar_diameter=avatar_diameter,
    )
