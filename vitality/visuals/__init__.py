"""
Visual mapping module for the vitality tracker.

This module maps HP percentages onto the sprite atlas and video timeline.
"""

from .sprite import (
    CropTransform,
    QuadrantCrossfade,
    compute_crop_transform,
    quadrant_cell,
    select_quadrant,
    video_seek_ratio,
)

__all__ = [
    "CropTransform",
    "QuadrantCrossfade",
    "compute_crop_transform",
    "quadrant_cell",
    "select_quadrant",
    "video_seek_ratio",
]
