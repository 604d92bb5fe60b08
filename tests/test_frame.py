import math
from facemeshkit.face.frame import LandmarkName, RawLandmarkFrame, first_face

PAYLOAD = {
    "faceID": 3,
    "bounds": {"origin": {"x": 10, "y": 20}, "size": {"width": 100, "height": 120}},
    "leftEyePosition": {"x": 40, "y": 60},
    "rightEyePosition": {"x": 80, "y": 60},
    "noseBasePosition": {"x": 60, "y": 90},
    "leftMouthPosition": {"x": "oops", "y": 110},
    "rollAngle": 2.5, "yawAngle": -4.0,
    "smilingProbability": 0.7, "leftEyeOpenProbability": 1.4,
}

def test_from_detector_keeps_good_points_and_drops_bad_ones():
    f = RawLandmarkFrame.from_detector(PAYLOAD)
    assert f.point(LandmarkName.LEFT_EYE).x == 40.0
    assert f.point("NOSE_BASE").y == 90.0
    assert f.point(LandmarkName.LEFT_MOUTH) is None
    assert f.bounds.size.width == 100.0
    assert f.face_id == 3 and f.roll_angle == 2.5
    assert f.smiling_probability == 0.7
    assert f.left_eye_open_probability is None  # out of [0, 1]

def test_first_face_handles_empty_and_bare_payloads():
    assert first_face(None) is None
    assert first_face({"faces": []}) is None
    assert first_face({"faces": [PAYLOAD]}).face_id == 3
    assert first_face(PAYLOAD).face_id == 3

def test_bounds_corners():
    f = RawLandmarkFrame.from_detector(PAYLOAD)
    xs = [(c.x, c.y) for c in f.bounds.corners()]
    assert xs == [(10, 20), (110, 20), (110, 140), (10, 140)]

def test_non_finite_point_is_not_finite():
    f = RawLandmarkFrame.from_detector({"leftEyePosition": {"x": float("nan"), "y": 1}})
    assert math.isnan(f.point("LEFT_EYE").x) and not f.point("LEFT_EYE").finite()
