"""The ordered stack of map layers."""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .features import Coord, Feature, FeatureCollection, FeatureId
from .geomtype import GeomType, determine
from .layer_id import LayerId
from .projected import Projected, Unprojected

_log = logging.getLogger(__name__)

Color = Tuple[float, float, float, float]


def _rgb_u8(red: int, green: int, blue: int) -> Color:
    return (red / 255, green / 255, blue / 255, 1.0)


BLACK: Color = (0.0, 0.0, 0.0, 1.0)

CATEGORY10: Tuple[Color, ...] = tuple(
    _rgb_u8(*rgb)
    for rgb in (
        (31, 119, 180),
        (255, 127, 14),
        (44, 160, 44),
        (214, 39, 40),
        (148, 103, 189),
        (140, 86, 75),
        (227, 119, 194),
        (127, 127, 127),
        (188, 189, 34),
        (23, 190, 207),
    )
)

_color_counter = itertools.count()
_color_lock = threading.Lock()


def _next_color() -> Color:
    with _color_lock:
        index = next(_color_counter)
    return CATEGORY10[index % len(CATEGORY10)]


@dataclass
class LayerColor:
    """Fill (absent for unfilled geometry) and stroke colours of a layer."""

    fill: Optional[Color]
    stroke: Color


@dataclass
class Layer:
    """A named feature collection shown on the map."""

    unprojected_feature_collection: Unprojected[FeatureCollection]
    projected_feature_collection: Optional[Projected[FeatureCollection]]
    color: LayerColor
    id: LayerId
    name: str
    visible: bool
    crs_epsg_code: int
    geom_type: GeomType

    def is_active(self) -> bool:
        return self.projected_feature_collection is not None

    def projected_or_log(self) -> Optional[Projected[FeatureCollection]]:
        """The projected collection, logging an error when it is missing."""
        if self.projected_feature_collection is None:
            _log.error(
                "Expected layer (id: %r) to have a projected feature collection", self.id
            )
        return self.projected_feature_collection

    def get_projected_feature(self, feature_id: FeatureId) -> Optional[Projected[Feature]]:
        collection = self.projected_or_log()
        if collection is None:
            return None
        return next(
            (f for f in collection.features() if f.feature_id() == feature_id), None
        )


class Layers:
    """Layers ordered from bottom to top, plus the selected layer's id."""

    def __init__(self) -> None:
        self._data: List[Layer] = []
        self.selected_layer_id: Optional[LayerId] = None

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self._data)

    def iter_bottom_to_top(self) -> Iterator[Layer]:
        return iter(self._data)

    def iter_top_to_bottom(self) -> Iterator[Layer]:
        return reversed(self._data)

    def containing_coord(self, coord: Projected[Coord]) -> Iterator[Layer]:
        """Layers, top first, whose projected geometry contains the coordinate."""
        for layer in self.iter_top_to_bottom():
            projected = layer.projected_feature_collection
            if projected is not None and projected.contains(coord):
                yield layer

    def feature_from_click(
        self, coord: Projected[Coord]
    ) -> Optional[Tuple[LayerId, Unprojected[Feature]]]:
        """The topmost feature under the coordinate and the layer holding it."""
        for layer in self.iter_top_to_bottom():
            projected = layer.projected_feature_collection
            if projected is None:
                continue
            pairs = zip(layer.unprojected_feature_collection.features(), projected.features())
            for unprojected, projected_feature in pairs:
                if projected_feature.contains(coord):
                    return layer.id, unprojected
        return None

    def _index(self, layer_id: LayerId) -> Optional[int]:
        return next((i for i, layer in enumerate(self._data) if layer.id == layer_id), None)

    def get(self, layer_id: LayerId) -> Optional[Layer]:
        index = self._index(layer_id)
        return None if index is None else self._data[index]

    def get_with_index(self, layer_id: LayerId) -> Optional[Tuple[Layer, int]]:
        index = self._index(layer_id)
        return None if index is None else (self._data[index], index)

    def remove(self, layer_id: LayerId) -> None:
        index = self._index(layer_id)
        if index is not None:
            del self._data[index]

    def swap(self, index_a: int, index_b: int) -> None:
        self._data[index_a], self._data[index_b] = self._data[index_b], self._data[index_a]

    def selected_layer(self) -> Optional[Layer]:
        if self.selected_layer_id is None:
            return None
        return self.get(self.selected_layer_id)

    def add(
        self,
        unprojected: Unprojected[FeatureCollection],
        name: str,
        source_crs_epsg_code: int,
    ) -> LayerId:
        """Append a new layer on top and return its id."""
        layer_id = LayerId.new()
        geom_type = determine(unprojected.as_raw().geometries())
        if geom_type.has_fill():
            color = LayerColor(fill=_next_color(), stroke=BLACK)
        else:
            color = LayerColor(fill=None, stroke=_next_color())
        self._data.append(
            Layer(
                unprojected_feature_collection=unprojected,
                projected_feature_collection=None,
                color=color,
                id=layer_id,
                name=name,
                visible=True,
                crs_epsg_code=source_crs_epsg_code,
                geom_type=geom_type,
            )
        )
        return layer_id

    def clear_projected(self) -> None:
        for layer in self._data:
            layer.projected_feature_collection = None