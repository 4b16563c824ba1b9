from dataclasses import dataclass

# A4 portrait, in mm
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0

FONT_SIZES = (12.0, 18.0)


@dataclass(frozen=True)
class GridSpec:
    """Sheet geometry and text placement, all lengths in mm."""

    cols: int = 4
    rows: int = 4
    page_width: float = A4_WIDTH_MM
    page_height: float = A4_HEIGHT_MM
    margin: float = 5.0
    text_inset: float = 10.0
    font_size: float = 12.0
    line_spacing: float = 7.0
    text_rotation: float = -90.0
    # unit step from one text line to the next, matching the rotation above
    line_direction: tuple[float, float] = (-1.0, 0.0)

    def __post_init__(self):
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError(f"grid must have at least one cell, got {self.cols}x{self.rows}")
        if self.page_width <= 2 * self.margin or self.page_height <= 2 * self.margin:
            raise ValueError(
                f"margin {self.margin} leaves no room on a "
                f"{self.page_width}x{self.page_height} page"
            )
        if self.font_size <= 0:
            raise ValueError(f"font size must be positive, got {self.font_size}")

    @property
    def cards_per_sheet(self) -> int:
        return self.cols * self.rows

    @property
    def cell_width(self) -> float:
        return (self.page_width - 2 * self.margin) / self.cols

    @property
    def cell_height(self) -> float:
        return (self.page_height - 2 * self.margin) / self.rows


DEFAULT_GRID = GridSpec()


def mirror_col(col: int, spec: GridSpec = DEFAULT_GRID) -> int:
    return spec.cols - 1 - col


def cell_for(index: int, is_front: bool, spec: GridSpec = DEFAULT_GRID) -> tuple[int, int]:
    """Grid cell (col, row) of the card at `index` within its sheet.

    Fronts fill left to right, top to bottom. Backs reverse the columns so a
    sheet flipped on its long edge lines each back up with its front.
    """
    col = index % spec.cols
    row = index // spec.cols
    if not is_front:
        col = mirror_col(col, spec)
    return col, row


def cell_origin(col: int, row: int, spec: GridSpec = DEFAULT_GRID) -> tuple[float, float]:
    """Bottom-left corner of a cell in page coordinates (origin bottom-left)."""
    x = spec.margin + col * spec.cell_width
    y = spec.page_height - spec.margin - (row + 1) * spec.cell_height
    return x, y
