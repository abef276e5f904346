"""Systems that apply layer events to the layer stack."""

from __future__ import annotations

import logging

from .events import (
    ColorKind,
    CreateLayerEvent,
    DeleteLayerEvent,
    DespawnMeshesEvent,
    EventQueue,
    FeatureSelectedEvent,
    LayerBecameHiddenEvent,
    LayerBecameVisibleEvent,
    LayerColorUpdatedEvent,
    LayerCreatedEvent,
    LayerZIndexUpdatedEvent,
    MapClickedEvent,
    MoveDirection,
    MoveLayerEvent,
    RenderFeaturePropertiesEvent,
    ToggleLayerVisibilityEvent,
    UpdateLayerColorEvent,
)
from .layers import Layers

_log = logging.getLogger(__name__)


def handle_toggle_layer_visibility_events(layers: Layers, events: EventQueue) -> None:
    for event in events.drain(ToggleLayerVisibilityEvent):
        layer = layers.get(event.layer_id)
        if layer is None:
            _log.warning("Could not find layer")
            continue
        layer.visible = not layer.visible
        if layer.visible:
            events.send(LayerBecameVisibleEvent(event.layer_id))
        else:
            events.send(LayerBecameHiddenEvent(event.layer_id))


def handle_update_color_events(layers: Layers, events: EventQueue) -> None:
    for event in events.drain(UpdateLayerColorEvent):
        layer = layers.get(event.layer_id)
        if layer is None:
            _log.warning("Could not find layer")
            continue
        if event.kind is ColorKind.STROKE:
            layer.color.stroke = event.color
        else:
            layer.color.fill = event.color
        events.send(LayerColorUpdatedEvent(event.kind, event.layer_id))


def handle_delete_layer_events(layers: Layers, events: EventQueue) -> None:
    for event in events.drain(DeleteLayerEvent):
        layers.remove(event.layer_id)
        events.send(DespawnMeshesEvent(event.layer_id))


def handle_move_layer_events(layers: Layers, events: EventQueue) -> None:
    for event in events.drain(MoveLayerEvent):
        found = layers.get_with_index(event.layer_id)
        if found is None:
            _log.warning("Could not find layer")
            continue
        old_index = found[1]
        if event.direction is MoveDirection.UP:
            new_index = min(old_index + 1, len(layers) - 1)
        else:
            new_index = max(old_index - 1, 0)
        if new_index == old_index:
            continue
        other_layer_id = list(layers)[new_index].id
        layers.swap(old_index, new_index)
        events.send(LayerZIndexUpdatedEvent(event.layer_id))
        events.send(LayerZIndexUpdatedEvent(other_layer_id))


def handle_map_clicked_events(layers: Layers, events: EventQueue) -> None:
    for event in events.drain(MapClickedEvent):
        found = layers.feature_from_click(event.coord)
        if found is None:
            continue
        layer_id, feature = found
        events.send(RenderFeaturePropertiesEvent(dict(feature.properties())))
        events.send(FeatureSelectedEvent(layer_id, feature.feature_id()))


def handle_create_layer_events(layers: Layers, events: EventQueue) -> None:
    for event in events.drain(CreateLayerEvent):
        layer_id = layers.add(event.feature_collection, event.name, event.source_crs_epsg_code)
        events.send(LayerCreatedEvent(layer_id))


def run_systems(layers: Layers, events: EventQueue) -> None:
    """Run every layer system once, in order."""
    handle_toggle_layer_visibility_events(layers, events)
    handle_update_color_events(layers, events)
    handle_move_layer_events(layers, events)
    handle_delete_layer_events(layers, events)
    handle_map_clicked_events(layers, events)
    handle_create_layer_events(layers, events)