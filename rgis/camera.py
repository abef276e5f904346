"""Camera state: scale and offset, and placing the camera over a world rectangle."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Tuple

from .features import Rect
from .projected import Projected

_log = logging.getLogger(__name__)

# Depth of the 2D camera; it must lie in front of everything drawn.
CAMERA_Z = 999.9

Vec3 = Tuple[float, float, float]


@dataclass
class Transform:
    """Camera transform: translation in world units and per-axis scale."""

    translation: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)


@dataclass(frozen=True)
class Viewport:
    """Window size in pixels and the pixels covered by panels on each side."""

    width: float
    height: float
    left_offset_px: float = 0.0
    right_offset_px: float = 0.0
    top_offset_px: float = 0.0
    bottom_offset_px: float = 0.0

    @property
    def size(self) -> Tuple[float, float]:
        """Width and height of the part of the window the map is drawn in."""
        return (
            self.width - self.left_offset_px - self.right_offset_px,
            self.height - self.top_offset_px - self.bottom_offset_px,
        )


@dataclass
class CameraScale:
    """World units per screen pixel."""

    value: float

    @classmethod
    def from_transform(cls, transform: Transform) -> "CameraScale":
        return cls(transform.scale[0])

    def zoom(self, amount: float) -> None:
        self.value /= amount

    def to_transform_scale(self) -> Vec3:
        return (self.value, self.value, 1.0)


@dataclass
class CameraOffset:
    """Camera position in world coordinates."""

    x: float = field(default=0.0)
    y: float = field(default=0.0)

    @classmethod
    def from_coord(cls, coord: Any) -> "CameraOffset":
        x, y = coord
        return cls(float(x), float(y))

    @classmethod
    def from_transform(cls, transform: Transform) -> "CameraOffset":
        return cls(transform.translation[0], transform.translation[1])

    def pan_x(self, amount: float, camera_scale: CameraScale) -> None:
        self.x += amount * camera_scale.value

    def pan_y(self, amount: float, camera_scale: CameraScale) -> None:
        self.y += amount * camera_scale.value

    def to_transform_translation(self) -> Vec3:
        return (self.x, self.y, CAMERA_Z)


def set_camera_transform(
    transform: Transform, camera_offset: CameraOffset, camera_scale: CameraScale
) -> None:
    """Write offset and scale into the transform."""
    transform.translation = camera_offset.to_transform_translation()
    transform.scale = camera_scale.to_transform_scale()
    _log.debug("New transform scale: %r", transform.scale)


def _max_ignoring_nan(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


def determine_scale(bounding_rect: Rect, width: float, height: float) -> float:
    """Scale at which the rectangle just fits a canvas of the given size."""
    return _max_ignoring_nan(bounding_rect.width() / width, bounding_rect.height() / height)


def center_camera_on_projected_world_rect(
    bounding_rect: Projected[Rect], transform: Transform, viewport: Viewport
) -> None:
    """Fit and center the camera on a rectangle within the uncovered map area."""
    rect = bounding_rect.as_raw()
    width, height = viewport.size
    camera_scale = CameraScale(determine_scale(rect, width, height))
    camera_offset = CameraOffset.from_coord(rect.center())
    camera_offset.pan_x(
        (viewport.right_offset_px - viewport.left_offset_px) / 2.0, camera_scale
    )
    camera_offset.pan_y(
        (viewport.top_offset_px - viewport.bottom_offset_px) / 2.0, camera_scale
    )
    set_camera_transform(transform, camera_offset, camera_scale)