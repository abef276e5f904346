"""Systems that move the camera in response to events."""

from __future__ import annotations

import logging
import math
from typing import Optional

from .camera import (
    CameraOffset,
    CameraScale,
    Transform,
    Viewport,
    center_camera_on_projected_world_rect,
    set_camera_transform,
)
from .events import (
    CenterCameraEvent,
    EventQueue,
    MeshesSpawnedEvent,
    PanCameraEvent,
    ZoomCameraEvent,
)
from .features import BoundingRectError
from .layers import Layers

_log = logging.getLogger(__name__)

# Smallest positive normal single-precision value.
_MIN_NORMAL = 1.1754943508222875e-38


def _is_normal(value: float) -> bool:
    return math.isfinite(value) and abs(value) >= _MIN_NORMAL


class CameraController:
    """Owns the camera transform and applies camera events to it."""

    def __init__(self, transform: Optional[Transform] = None) -> None:
        self.transform = transform if transform is not None else Transform()
        self.has_moved = False

    def handle_pan_events(self, events: EventQueue) -> None:
        pans = events.drain(PanCameraEvent)
        if not pans:
            return
        offset = CameraOffset.from_transform(self.transform)
        scale = CameraScale.from_transform(self.transform)
        for event in pans:
            offset.pan_x(event.x, scale)
            offset.pan_y(event.y, scale)
        set_camera_transform(self.transform, offset, scale)

    def handle_zoom_events(self, events: EventQueue) -> None:
        """Zoom around the first event's coordinate, keeping it fixed on screen."""
        zooms = events.drain(ZoomCameraEvent)
        if not zooms:
            return
        offset = CameraOffset.from_transform(self.transform)
        before = CameraScale.from_transform(self.transform)
        scale = CameraScale(before.value)
        mouse = CameraOffset.from_coord(zooms[0].coord.as_raw())
        for event in zooms:
            scale.zoom(event.amount)
        if not _is_normal(scale.value):
            return
        factor = 1.0 - before.value / scale.value
        offset.x -= (mouse.x - offset.x) * factor
        offset.y -= (mouse.y - offset.y) * factor
        if math.isfinite(offset.x) and math.isfinite(offset.y):
            set_camera_transform(self.transform, offset, scale)

    def handle_meshes_spawned_events(self, events: EventQueue) -> None:
        """Center on the first layer whose meshes appear; later layers are left alone."""
        for event in events.drain(MeshesSpawnedEvent):
            if not self.has_moved:
                events.send(CenterCameraEvent(event.layer_id))
                self.has_moved = True

    def handle_center_camera_events(
        self, events: EventQueue, layers: Layers, viewport: Optional[Viewport]
    ) -> None:
        if viewport is None:
            return
        for event in events.drain(CenterCameraEvent):
            layer = layers.get(event.layer_id)
            if layer is None:
                continue
            projected = layer.projected_or_log()
            if projected is None:
                continue
            try:
                bounding_rect = projected.bounding_rect()
            except BoundingRectError:
                continue
            _log.debug("Moving camera to look at new layer")
            center_camera_on_projected_world_rect(bounding_rect, self.transform, viewport)