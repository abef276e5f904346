"""Application events and a simple queue to pass them between systems."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, List, Tuple, Type, Union

from .features import Coord, FeatureCollection, FeatureId, Properties
from .fileloader import FileFormat
from .layer_id import LayerId
from .projected import Projected, Unprojected

# Normalises the host's scroll value.
ZOOM_FACTOR = 500.0

Color = Tuple[float, ...]
EventType = Union[Type[Any], Tuple[Type[Any], ...]]


class EventQueue:
    """An ordered queue of events that systems send to and drain from."""

    def __init__(self) -> None:
        self._events: List[Any] = []

    def __len__(self) -> int:
        return len(self._events)

    def send(self, event: Any) -> None:
        self._events.append(event)

    def drain(self, event_type: EventType) -> List[Any]:
        """Remove and return queued events of the given type(s), in order."""
        taken = [e for e in self._events if isinstance(e, event_type)]
        self._events = [e for e in self._events if not isinstance(e, event_type)]
        return taken

    def pending(self, event_type: EventType) -> List[Any]:
        """Queued events of the given type(s), left in place."""
        return [e for e in self._events if isinstance(e, event_type)]


@dataclass(frozen=True)
class LayerCreatedEvent:
    layer_id: LayerId


@dataclass(frozen=True)
class ShowManageLayerWindowEvent:
    layer_id: LayerId


@dataclass(frozen=True)
class ToggleLayerVisibilityEvent:
    layer_id: LayerId


@dataclass(frozen=True)
class CenterCameraEvent:
    layer_id: LayerId


@dataclass(frozen=True)
class FeatureSelectedEvent:
    layer_id: LayerId
    feature_id: FeatureId


@dataclass(frozen=True)
class LayerBecameHiddenEvent:
    layer_id: LayerId


@dataclass(frozen=True)
class LayerBecameVisibleEvent:
    layer_id: LayerId


class ColorKind(enum.Enum):
    """Which of a layer's colours an event concerns."""

    FILL = "fill"
    STROKE = "stroke"


@dataclass(frozen=True)
class UpdateLayerColorEvent:
    """Request to change a layer's colour."""

    kind: ColorKind
    layer_id: LayerId
    color: Color


@dataclass(frozen=True)
class LayerColorUpdatedEvent:
    """Sent after a layer's colour changed."""

    kind: ColorKind
    layer_id: LayerId


@dataclass(frozen=True)
class DeleteLayerEvent:
    layer_id: LayerId


@dataclass(frozen=True)
class DespawnMeshesEvent:
    layer_id: LayerId


@dataclass(frozen=True)
class MeshesSpawnedEvent:
    layer_id: LayerId


class MoveDirection(enum.Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class MoveLayerEvent:
    layer_id: LayerId
    direction: MoveDirection


@dataclass(frozen=True)
class LayerZIndexUpdatedEvent:
    layer_id: LayerId


@dataclass(frozen=True)
class MapClickedEvent:
    coord: Projected[Coord]


@dataclass(frozen=True)
class FeaturesDeselectedEvent:
    pass


@dataclass(frozen=True)
class OpenChangeCrsWindow:
    pass


@dataclass(frozen=True)
class LoadFileFromNetwork:
    name: str
    url: str
    crs_epsg_code: int


@dataclass(frozen=True)
class LoadFileFromBytes:
    file_name: str
    file_format: FileFormat
    data: bytes
    crs_epsg_code: int


LOAD_FILE_EVENTS = (LoadFileFromNetwork, LoadFileFromBytes)


@dataclass(frozen=True)
class PanCameraEvent:
    """Camera offset; positive x is right, positive y is up."""

    x: float
    y: float

    @classmethod
    def up(cls, amount: float) -> "PanCameraEvent":
        return cls(0.0, amount)

    @classmethod
    def right(cls, amount: float) -> "PanCameraEvent":
        return cls(amount, 0.0)

    @classmethod
    def down(cls, amount: float) -> "PanCameraEvent":
        return cls(0.0, -amount)

    @classmethod
    def left(cls, amount: float) -> "PanCameraEvent":
        return cls(-amount, 0.0)


@dataclass(frozen=True)
class ZoomCameraEvent:
    """Zoom around a point: amount above 1 zooms in, below 1 zooms out."""

    amount: float
    coord: Projected[Coord]

    @classmethod
    def from_scroll(cls, amount: float, coord: Projected[Coord]) -> "ZoomCameraEvent":
        return cls(max(1.0 + amount / ZOOM_FACTOR, 0.0), coord)


@dataclass(frozen=True)
class ChangeCrsEvent:
    old_crs_epsg_code: int
    new_crs_epsg_code: int


@dataclass(frozen=True)
class CrsChangedEvent:
    old_crs_epsg_code: int
    new_crs_epsg_code: int


@dataclass(frozen=True)
class RenderMessageEvent:
    message: str


@dataclass(frozen=True)
class RenderFeaturePropertiesEvent:
    properties: Properties


@dataclass
class CreateLayerEvent:
    feature_collection: Unprojected[FeatureCollection]
    name: str
    source_crs_epsg_code: int


@dataclass(frozen=True)
class LayerReprojectedEvent:
    layer_id: LayerId


@dataclass(frozen=True)
class ShowAddLayerWindow:
    pass


@dataclass(frozen=True)
class HideAddLayerWindow:
    pass