import pytest
from shapely.geometry import GeometryCollection, Point, box

from rgis.features import BoundingRectError, Feature, FeatureCollection, Rect
from rgis.projected import Projected, Unprojected


def test_into_unprojected_keeps_value():
    coord = (1.0, 2.0)
    unprojected = Projected(coord).into_unprojected()
    assert isinstance(unprojected, Unprojected)
    assert unprojected.as_raw() == coord


def test_into_projected_roundtrip():
    value = Unprojected((3.0, 4.0))
    assert value.into_projected().into_unprojected() == value


def test_equality_depends_on_frame():
    assert Projected((1, 2)) == Projected((1, 2))
    assert not (Projected((1, 2)) == Unprojected((1, 2)))


def test_contains_same_frame():
    collection = Projected(FeatureCollection.from_geometry(box(0, 0, 10, 10)))
    assert collection.contains(Projected((5, 5)))
    assert not collection.contains(Projected((50, 5)))


def test_contains_raw_geometry_with_coord():
    assert Projected(box(0, 0, 2, 2)).contains(Projected((1, 1)))


def test_contains_mixed_frames_raises():
    collection = Projected(FeatureCollection.from_geometry(box(0, 0, 10, 10)))
    with pytest.raises(TypeError):
        collection.contains(Unprojected((5, 5)))


def test_from_geometry_frame():
    wrapped = Unprojected.from_geometry(Point(1, 1))
    assert isinstance(wrapped, Unprojected)
    assert len(wrapped.as_raw().features) == 1


def test_features_keep_frame():
    raw = FeatureCollection.from_features([Feature(geometry=Point(1, 1)), Feature()])
    features = list(Projected(raw).features())
    assert all(isinstance(f, Projected) for f in features)
    assert [f.as_raw() for f in features] == raw.features


def test_bounding_rect():
    wrapped = Projected(FeatureCollection.from_geometry(box(1, 2, 3, 4)))
    rect = wrapped.bounding_rect()
    assert rect == Projected(Rect(1, 2, 3, 4))


def test_bounding_rect_empty_raises():
    with pytest.raises(BoundingRectError):
        Unprojected(FeatureCollection()).bounding_rect()


def test_to_geometry_collection():
    wrapped = Unprojected(FeatureCollection.from_geometry(Point(1, 1)))
    gc = wrapped.to_geometry_collection()
    assert isinstance(gc, Unprojected)
    assert gc.as_raw() == GeometryCollection([Point(1, 1)])
    assert wrapped.to_geometry_collection_geometry() == gc


def test_feature_accessors():
    feature = Feature(geometry=Point(2, 3), properties={"name": "x"})
    wrapped = Unprojected(feature)
    assert wrapped.feature_id() == feature.id
    assert wrapped.properties() == {"name": "x"}
    assert wrapped.geometry() == Unprojected(Point(2, 3))


def test_feature_geometry_missing():
    assert Projected(Feature()).geometry() is None