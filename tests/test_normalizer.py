from facemeshkit.face.frame import Bounds, LandmarkName, Point, RawLandmarkFrame, Size
from facemeshkit.face.normalizer import normalize

def face(bounds=None, **pts):
    return RawLandmarkFrame(bounds=bounds, landmarks={LandmarkName(k): (None if v is None else Point(x=v[0], y=v[1]))
                                                       for k, v in pts.items()})

def test_zero_faces_is_none():
    assert normalize(None) is None

def test_eyes_and_nose_are_required():
    assert normalize(face(LEFT_EYE=(1, 1), RIGHT_EYE=(2, 1))) is None
    assert normalize(face(LEFT_EYE=(1, 1), RIGHT_EYE=(2, 1), NOSE_BASE=None)) is None
    b = Bounds(origin=Point(x=0, y=0), size=Size(width=10, height=10))
    assert normalize(face(bounds=b)) is None

def test_missing_optional_points_are_skipped():
    c = normalize(face(LEFT_EYE=(1, 1), RIGHT_EYE=(3, 1), NOSE_BASE=(2, 2), LEFT_MOUTH=None))
    assert c is not None
    assert "LEFT_MOUTH" not in c
    assert len(c) == 3

def test_non_finite_points_are_filtered():
    c = normalize(face(LEFT_EYE=(1, 1), RIGHT_EYE=(3, 1), NOSE_BASE=(2, 2), BOTTOM_MOUTH=(float("inf"), 4)))
    assert LandmarkName.BOTTOM_MOUTH not in c
    assert normalize(face(LEFT_EYE=(float("nan"), 1), RIGHT_EYE=(3, 1), NOSE_BASE=(2, 2))) is None

def test_invalid_bounds_are_dropped():
    b = Bounds(origin=Point(x=0, y=0), size=Size(width=-5, height=10))
    c = normalize(face(bounds=b, LEFT_EYE=(1, 1), RIGHT_EYE=(3, 1), NOSE_BASE=(2, 2)))
    assert c.bounds is None
