from facemeshkit.face.analysis import FaceSummary, analyze_detection, log_detection

def test_no_data_and_no_faces():
    assert analyze_detection(None).message == "No face data received!"
    r = analyze_detection({"faces": []})
    assert not r.detected and r.message == "No faces detected in frame!"

def test_complete_and_partial():
    face = {"bounds": {"origin": {"x": 0, "y": 0}, "size": {"width": 10, "height": 10}},
            "leftEyePosition": {"x": 1, "y": 1}, "rightEyePosition": {"x": 3, "y": 1},
            "noseBasePosition": {"x": 2, "y": 2}, "faceID": 7, "rollAngle": 1.5}
    r = analyze_detection({"faces": [face]})
    assert r.detected and r.complete and r.message == "Face with complete landmarks detected"
    assert r.details.face_id == 7 and r.details.roll_angle == 1.5
    del face["bounds"]
    r = log_detection({"faces": [face]})
    assert r.detected and not r.complete
    assert r.message == "Face detected but missing some landmarks"
    assert not r.details.has_bounds and r.details.has_nose

def test_summary_lines():
    s = FaceSummary(roll=1.234, yaw=None, smile_pct=80)
    assert s.lines()[:3] == ["Roll: 1.23°", "Yaw: --", "Smile: 80%"]
