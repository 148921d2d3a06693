"""
Sprite atlas mapping.

A creature's sprite sheet is a 2x2 atlas holding four portraits, from healthy
(top-left) to near death (bottom-right). This module picks the portrait for a
HP percentage, computes the transform that isolates it in the viewport, and
tracks the short cross-fade played when the portrait changes.
"""

import math
from dataclasses import dataclass

from vitality.core.constants import CROSSFADE_MS, GRID_COLS, GRID_ROWS, SPRITE_ZOOM
from vitality.core.logging import log_debug
from vitality.effects.scheduler import Scheduler, TimerHandle

# Lower bounds (exclusive) of the HP bands, healthiest first.
QUADRANT_THRESHOLDS = (75, 50, 25)


def select_quadrant(hp_percent: float) -> int:
    """
    Picks the atlas quadrant for a HP percentage.

    Bands are >75 -> 0, >50 -> 1, >25 -> 2, anything else -> 3. Each lower
    bound is exclusive, so exactly 75% still shows quadrant 1.
    """
    if not math.isfinite(hp_percent):
        return len(QUADRANT_THRESHOLDS)
    for index, threshold in enumerate(QUADRANT_THRESHOLDS):
        if hp_percent > threshold:
            return index
    return len(QUADRANT_THRESHOLDS)


def quadrant_cell(index: int, cols: int = GRID_COLS) -> tuple[int, int]:
    """Returns the (column, row) of a quadrant index in the atlas."""
    return index % cols, index // cols


@dataclass(frozen=True)
class CropTransform:
    """
    Placement of the atlas image inside the viewport.

    width_pct/height_pct: size of the image relative to the viewport.
    x_pct/y_pct:          translation relative to the image's own size.
    """

    index: int
    width_pct: float
    height_pct: float
    x_pct: float
    y_pct: float

    def as_css(self) -> dict[str, str]:
        """Renders the transform as CSS style properties."""
        return {
            "width": f"{self.width_pct}%",
            "height": f"{self.height_pct}%",
            "maxWidth": "none",
            "transform": f"translate({self.x_pct}%, {self.y_pct}%)",
        }


def compute_crop_transform(
    index: int,
    zoom: float = SPRITE_ZOOM,
    cols: int = GRID_COLS,
    rows: int = GRID_ROWS,
) -> CropTransform:
    """
    Computes the translation that centers a quadrant in the viewport.

    The atlas is scaled to cols*zoom by rows*zoom viewports, then shifted so
    the center of the chosen cell lands on the center of the viewport.

    Args:
        index (int):
            Quadrant index, 0 to cols*rows - 1.
        zoom (float):
            Extra magnification. Must be above 1.0 so the seams between
            neighbouring cells stay outside the viewport.
        cols (int):
            Number of atlas columns.
        rows (int):
            Number of atlas rows.

    Returns:
        CropTransform:
            Size and translation of the atlas image.

    """
    if zoom <= 1.0:
        raise ValueError(f"zoom must be greater than 1.0, got {zoom}")
    if not 0 <= index < cols * rows:
        raise ValueError(f"index must be between 0 and {cols * rows - 1}, got {index}")
    col, row = quadrant_cell(index, cols)
    x_pct = -100 * ((col + 0.5) / cols - 0.5 / (cols * zoom))
    y_pct = -100 * ((row + 0.5) / rows - 0.5 / (rows * zoom))
    return CropTransform(
        index=index,
        width_pct=100 * cols * zoom,
        height_pct=100 * rows * zoom,
        x_pct=x_pct,
        y_pct=y_pct,
    )


def video_seek_ratio(hp_percent: float) -> float:
    """
    Position in a damage-progression video matching a HP percentage.

    The video runs from healthy to defeated, so full HP maps to its start.
    The ratio is kept strictly inside the clip so seeking never hits the end.
    """
    if not math.isfinite(hp_percent):
        hp_percent = 0.0
    return max(0.001, min(0.999, 1 - hp_percent / 100))


class QuadrantCrossfade:
    """
    Fades between the previous and the new quadrant crop.

    While a fade is running, `previous` is still drawn underneath `active`.
    A new quadrant arriving mid-fade restarts the fade from whatever was
    active.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        hp_percent: float = 100.0,
        duration_ms: float = CROSSFADE_MS,
        zoom: float = SPRITE_ZOOM,
    ) -> None:
        self.scheduler = scheduler
        self.duration_ms = duration_ms
        self.zoom = zoom
        self.active: CropTransform = compute_crop_transform(select_quadrant(hp_percent), zoom)
        self.previous: CropTransform = self.active
        self._timer: TimerHandle | None = None

    @property
    def is_transitioning(self) -> bool:
        return self._timer is not None and self._timer.pending

    @property
    def quadrant(self) -> int:
        return self.active.index

    def visible_layers(self) -> list[CropTransform]:
        """Layers to draw, bottom first."""
        if self.is_transitioning:
            return [self.previous, self.active]
        return [self.active]

    def update(self, hp_percent: float) -> bool:
        """
        Points the atlas at the quadrant for a new HP percentage.

        Returns:
            bool:
                True if the quadrant changed and a fade started.

        """
        index = select_quadrant(hp_percent)
        if index == self.active.index:
            return False
        self.scheduler.cancel(self._timer)
        self.previous = self.active
        self.active = compute_crop_transform(index, self.zoom)
        self._timer = self.scheduler.schedule(
            self.duration_ms, self._finish, label="quadrant-crossfade"
        )
        log_debug(
            f"Sprite quadrant {self.previous.index} -> {self.active.index}",
            {"hp_percent": round(hp_percent, 1)},
        )
        return True

    def _finish(self) -> None:
        self.previous = self.active
        self._timer = None
