# rgis

The core of a geospatial data viewer, without the window. It loads vector
data, keeps it in a stack of layers, runs geometry operations on it and works
out where the map camera should point. Geometries are shapely objects.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `rgis.features`: `Feature` and `FeatureCollection`. A `Feature` holds an
  optional geometry, a property dictionary, a `FeatureId` and a bounding
  `Rect`. The bounding `Rect` is computed from the geometry unless you pass one
  in. `FeatureCollection.from_geometry`, `from_feature` and `from_features`
  build collections. `recalculate_bounding_rect()` merges the features' cached
  rectangles. `compute_bounding_rect()` measures the geometries themselves and
  raises `BoundingRectError` when there are none. `contains(...)` accepts a
  shapely geometry, a `Rect` or an `(x, y)` pair. `merge_rects(rects)` merges
  any number of rectangles.
- `rgis.geomtype`: `GeomType` is an `enum.Flag` of geometry kinds.
  `has_fill()` tells whether those kinds are drawn filled: polygons,
  rectangles, triangles and points. `determine(geometries)` returns the union
  of the kinds it finds and looks inside geometry collections.
- `rgis.layer_id`: `LayerId.new()` gives process-wide unique, increasing
  identifiers, starting at 1.
- `rgis.projected`: `Projected` and `Unprojected` wrap a value to mark the
  coordinate space it belongs to. `Frame.contains` refuses to compare values
  that are in different spaces. The wrappers also pass through to the feature
  and collection helpers: `features()`, `bounding_rect()`,
  `to_geometry_collection()`, `feature_id()`, `properties()` and `geometry()`.
- `rgis.fileloader`: `load_file(file_format, data)` reads bytes into a
  `FeatureCollection`. `file_format` is a `FileFormat` (`GEOJSON`, `GPX`, `WKT`,
  `SHAPEFILE`). You can also call `load_geojson`, `load_gpx`, `load_wkt` or
  `load_shapefile` directly.
  - All the geometries in a file are combined into one feature. Several
    geometries become a geometry collection.
  - Properties are not kept.
  - Failures raise `LoadError`.
  - A file with no geometry raises `NoGeometryError`, except WKT. Blank WKT
    input gives an empty collection.
  - GPX input yields waypoints as points, routes as line strings and tracks as
    multi line strings.
- `rgis.shapefile`: `read_shapefile(data)` parses the main `.shp` file. It
  handles point, multipoint, polyline and polygon shapes, including their Z
  and M variants, reading only x and y. Null records are skipped. Malformed
  data raises `ShapefileError`.
- `rgis.network`: `fetch(url, crs_epsg_code, name, progress=None)` downloads a
  file with `requests` and returns a `FetchedFile`. When the size is known it
  passes whole-percent progress to `progress`. Failures raise `NetworkError`.
  `NetworkFetchJob` wraps the same call.
- `rgis.operations`: `ConvexHull`, `Outliers`, `Rotate`, `Simplify`,
  `Smoothing`, `Triangulate` and `UnsignedArea`. Each is an `Operation`.
  `perform(feature_collection)` takes an `Unprojected` collection, visits every
  feature and geometry, and returns a `TextOutcome` or a
  `FeatureCollectionOutcome`.
  - `Rotate` turns everything by 45 degrees around the centroid.
  - `Smoothing` applies two Chaikin passes.
  - `Outliers` keeps the points whose local outlier factor, over 15
    neighbours, is below 2.
  - `Simplify` needs an epsilon. Set it in the constructor or with
    `parse_epsilon(text)`. `preview(collection)` returns node counts before and
    after simplifying. `next_action()` stays `Action.RENDER_UI` until
    `confirm()` is called.
- `rgis.algorithms`: the algorithms behind the operations,
  `chaikin_smoothing`, `earcut_triangles` and `outlier_scores`.
- `rgis.layers`: `Layers` keeps layers ordered from bottom to top.
  - `add(...)` appends a layer and gives it the next colour from a ten-colour
    palette. Filled kinds get that colour as fill and a black stroke. Others
    get it as stroke.
  - `feature_from_click(coord)` finds the topmost feature under a projected
    coordinate.
  - `containing_coord(coord)` yields the layers that contain it.
- `rgis.events`: the event types and `EventQueue`, which offers `send`,
  `drain(event_type)` and `pending(event_type)`.
- `rgis.layer_systems`: applies layer events to a `Layers`. It handles toggling
  visibility, recolouring, moving up or down, deleting, map clicks and layer
  creation. `run_systems(layers, events)` runs them all once.
- `rgis.loading`: turns load requests into jobs. `LoadFileJob` loads bytes.
  `handle_load_file_events(events)` returns the jobs to run.
  `handle_fetched_file` and `handle_loaded_file` queue the follow-up events.
  Failures are logged and not re-raised.
- `rgis.camera` and `rgis.camera_systems`: camera arithmetic.
  - `CameraScale` and `CameraOffset` describe the view. `Transform` holds the
    resulting translation and scale. `Viewport` holds the window size and the
    pixels covered by panels.
  - `determine_scale` fits a rectangle into a canvas.
    `center_camera_on_projected_world_rect` frames a rectangle.
  - `CameraController` applies pan, zoom, meshes-spawned and center-camera
    events to its transform.
- `rgis.controls`: `pan_events_for_keys`, `scroll_zoom_event` and
  `drag_pan_event` turn arrow keys, scrolling and mouse drags into camera
  events.
- `rgis.cli`: `run(argv=None)` parses `--msaa-sample-count`, an unsigned
  32-bit integer that defaults to 4, and returns `Values`.

## Example

```python
from rgis.fileloader import load_geojson
from rgis.operations import UnsignedArea
from rgis.projected import Unprojected

with open("parks.geojson", "rb") as fh:
    collection = load_geojson(fh.read())

print(collection.coords_count())
outcome = UnsignedArea().perform(Unprojected(collection))
print(outcome.text)
```

## What the package does not do

- It opens no window and draws nothing. It has no user interface and no
  command to start a viewer. `rgis.cli.run` only parses options.
- It does not reproject between coordinate reference systems. A layer's
  projected collection must be set by the caller. `ChangeCrsEvent` and
  `CrsChangedEvent` are defined, but nothing in the package acts on them.
- It reads no shapefile attributes (`.dbf`) and no projection (`.prj`) files.
- Jobs are plain objects run by the caller. There is no background scheduler.