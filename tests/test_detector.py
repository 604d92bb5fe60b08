import math
import numpy as np
import pytest
from facemeshkit.face.detector import MESH_INDEX, ear, frame_from_mesh
from facemeshkit.face.frame import LandmarkName
from facemeshkit.face.headpose import eye_line_roll

W, H = 640, 480

def mesh(tilt=0.0, right_eye_closed=False):
    """478 refined FaceMesh points: a frontal face centred in a 640x480 frame."""
    pts = np.tile([320.0, 240.0], (478, 1))
    # pose template corners projected at depth 600 with f = 0.9 * W
    pts[1] = (320.0, 240.0)
    pts[33], pts[133] = (289.7, 204.6), (309.9, 204.6)
    pts[362], pts[263] = (330.1, 204.6 + tilt), (350.3, 204.6 + tilt)
    pts[152] = (320.0, 294.2)
    # eye lids: top x2, bottom x2
    pts[[160, 158]] = (300.0, 200.0)
    pts[[153, 144]] = (300.0, 209.0)
    lid = 1.0 if right_eye_closed else 4.5
    pts[[385, 387]] = (340.0, 204.6 + tilt - lid)
    pts[[373, 380]] = (340.0, 204.6 + tilt + lid)
    pts[468], pts[473] = (300.0, 204.6), (340.0, 204.6 + tilt)
    pts[2], pts[17] = (320.0, 250.0), (320.0, 270.0)
    pts[61], pts[291] = (300.0, 260.0), (340.0, 260.0)
    pts[205], pts[425] = (295.0, 240.0), (345.0, 240.0)
    pts[234], pts[454] = (260.0, 230.0), (380.0, 230.0)
    return pts

def test_named_points_come_from_mesh_indices():
    pts = mesh()
    frame = frame_from_mesh(pts, W, H, face_id=0)
    assert set(frame.landmarks) == set(MESH_INDEX)
    for name, i in MESH_INDEX.items():
        p = frame.point(name)
        assert (p.x, p.y) == (pts[i, 0], pts[i, 1])
    assert frame.point(LandmarkName.NOSE_BASE).y == 250.0
    assert frame.face_id == 0

def test_bounds_span_all_points():
    b = frame_from_mesh(mesh(), W, H).bounds
    assert (b.origin.x, b.origin.y) == pytest.approx((260.0, 200.0))
    assert (b.size.width, b.size.height) == pytest.approx((120.0, 94.2))

def test_probabilities_are_ramped_into_unit_range():
    frame = frame_from_mesh(mesh(right_eye_closed=True), W, H)
    assert frame.left_eye_open_probability == 1.0
    assert frame.right_eye_open_probability == 0.0
    # mouth width / eye distance = 1.0, part way up the smile ramp
    assert 0.0 < frame.smiling_probability < 1.0
    assert math.isfinite(frame.yaw_angle)

def test_roll_follows_eye_line():
    assert frame_from_mesh(mesh(), W, H).roll_angle == pytest.approx(0.0)
    assert frame_from_mesh(mesh(tilt=20.0), W, H).roll_angle > 0
    assert frame_from_mesh(mesh(tilt=-20.0), W, H).roll_angle < 0

def test_roll_ignores_eye_order():
    a, b = np.array([100.0, 100.0]), np.array([200.0, 200.0])
    assert eye_line_roll(a, b) == eye_line_roll(b, a) == pytest.approx(45.0)

def test_ear_open_and_closed():
    open_eye = np.array([[0, 0], [3, -3], [7, -3], [10, 0], [7, 3], [3, 3]], dtype=float)
    closed = open_eye * [1, 0.1]
    assert ear(open_eye) == pytest.approx(0.6)
    assert ear(closed) < 0.1
