import math

import pytest
from shapely.geometry import box

from rgis.camera import Transform, Viewport, determine_scale
from rgis.camera_systems import CameraController
from rgis.events import (
    CenterCameraEvent,
    EventQueue,
    MeshesSpawnedEvent,
    PanCameraEvent,
    ZoomCameraEvent,
)
from rgis.features import FeatureCollection, Rect
from rgis.layer_id import LayerId
from rgis.layers import Layers
from rgis.projected import Projected, Unprojected


def test_pan_moves_translation_with_unit_scale():
    controller = CameraController()
    events = EventQueue()
    events.send(PanCameraEvent.up(15.0))
    events.send(PanCameraEvent.right(4.0))
    controller.handle_pan_events(events)
    assert controller.transform.translation[:2] == (4.0, 15.0)
    assert events.pending(PanCameraEvent) == []


def test_pan_is_scaled():
    controller = CameraController(Transform(scale=(2.0, 2.0, 1.0)))
    events = EventQueue()
    events.send(PanCameraEvent.right(5.0))
    controller.handle_pan_events(events)
    assert controller.transform.translation[0] == 10.0


def test_no_pan_events_leave_transform_alone():
    transform = Transform(translation=(1.0, 2.0, 0.0))
    controller = CameraController(transform)
    controller.handle_pan_events(EventQueue())
    assert controller.transform == Transform(translation=(1.0, 2.0, 0.0))


def test_zoom_at_camera_center_halves_scale():
    controller = CameraController()
    events = EventQueue()
    events.send(ZoomCameraEvent(2.0, Projected((0.0, 0.0))))
    controller.handle_zoom_events(events)
    assert controller.transform.scale[0] == 0.5
    assert controller.transform.translation[:2] == (0.0, 0.0)


def test_zoom_keeps_mouse_point_fixed_on_screen():
    controller = CameraController(Transform(translation=(10.0, -4.0, 0.0), scale=(3.0, 3.0, 1.0)))
    mouse = (25.0, 8.0)
    before_screen = ((mouse[0] - 10.0) / 3.0, (mouse[1] + 4.0) / 3.0)
    events = EventQueue()
    events.send(ZoomCameraEvent(1.7, Projected(mouse)))
    controller.handle_zoom_events(events)
    tx, ty, _ = controller.transform.translation
    scale = controller.transform.scale[0]
    assert math.isclose((mouse[0] - tx) / scale, before_screen[0])
    assert math.isclose((mouse[1] - ty) / scale, before_screen[1])


def test_zoom_to_infinite_scale_is_ignored():
    controller = CameraController()
    events = EventQueue()
    events.send(ZoomCameraEvent(0.0, Projected((1.0, 1.0))))
    controller.handle_zoom_events(events)
    assert controller.transform == Transform()
    assert events.pending(ZoomCameraEvent) == []


def test_meshes_spawned_centers_only_once():
    controller = CameraController()
    events = EventQueue()
    first, second = LayerId.new(), LayerId.new()
    events.send(MeshesSpawnedEvent(first))
    events.send(MeshesSpawnedEvent(second))
    controller.handle_meshes_spawned_events(events)
    assert events.pending(CenterCameraEvent) == [CenterCameraEvent(first)]
    events.drain(CenterCameraEvent)
    events.send(MeshesSpawnedEvent(second))
    controller.handle_meshes_spawned_events(events)
    assert events.pending(CenterCameraEvent) == []


def _layers_with_projected(geometry):
    layers = Layers()
    layer_id = layers.add(Unprojected(FeatureCollection.from_geometry(geometry)), "layer", 4326)
    layers.get(layer_id).projected_feature_collection = Projected(
        FeatureCollection.from_geometry(geometry)
    )
    return layers, layer_id


def test_center_camera_on_layer():
    geometry = box(0, 0, 10, 20)
    layers, layer_id = _layers_with_projected(geometry)
    controller = CameraController()
    events = EventQueue()
    events.send(CenterCameraEvent(layer_id))
    controller.handle_center_camera_events(events, layers, Viewport(100.0, 100.0))
    rect = Rect.from_geometry(geometry)
    cx, cy = rect.center()
    assert controller.transform.translation[0] == pytest.approx(cx)
    assert controller.transform.translation[1] == pytest.approx(cy)
    assert controller.transform.scale[0] == pytest.approx(determine_scale(rect, 100.0, 100.0))


def test_center_camera_skips_layer_without_projection():
    layers = Layers()
    layer_id = layers.add(Unprojected(FeatureCollection.from_geometry(box(0, 0, 1, 1))), "l", 4326)
    controller = CameraController()
    events = EventQueue()
    events.send(CenterCameraEvent(layer_id))
    events.send(CenterCameraEvent(LayerId.new()))
    controller.handle_center_camera_events(events, layers, Viewport(50.0, 50.0))
    assert controller.transform == Transform()
    assert events.pending(CenterCameraEvent) == []


def test_center_camera_without_viewport_keeps_events():
    layers, layer_id = _layers_with_projected(box(0, 0, 1, 1))
    controller = CameraController()
    events = EventQueue()
    events.send(CenterCameraEvent(layer_id))
    controller.handle_center_camera_events(events, layers, None)
    assert events.pending(CenterCameraEvent) == [CenterCameraEvent(layer_id)]
    assert controller.transform == Transform()