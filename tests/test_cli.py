import json
from typer.testing import CliRunner
from facemeshkit.cli import app

runner = CliRunner()

FACE = {"bounds": {"origin": {"x": 10, "y": 20}, "size": {"width": 100, "height": 120}},
        "leftEyePosition": {"x": 40, "y": 60}, "rightEyePosition": {"x": 80, "y": 60},
        "noseBasePosition": {"x": 60, "y": 90}}

def write_frames(tmp_path):
    p = tmp_path / "frames.jsonl"
    p.write_text("\n".join([json.dumps({"faces": [FACE]}), json.dumps({"faces": []}), "{not json"]) + "\n")
    return p

def json_lines(output):
    out = []
    for line in output.splitlines():
        if not line.startswith("{"): continue
        try:
            out.append(json.loads(line))
        except json.JSONDecodeError:
            continue
    return out

def test_replay(tmp_path):
    frames = write_frames(tmp_path)
    svg_dir = tmp_path / "svg"
    res = runner.invoke(app, ["replay", str(frames), "--width", "200", "--height", "200",
                              "--detector-width", "200", "--detector-height", "200", "--svg-dir", str(svg_dir)])
    assert res.exit_code == 0, res.output
    out = json_lines(res.output)
    assert [r["state"] for r in out] == ["face_detected", "no_face", "no_face"]
    assert out[0]["primitives"][0]["type"] == "rect"
    assert out[1]["primitives"] == []
    assert [e["type"] for e in out[2]["events"]] == ["detector_fault"]
    assert len(list(svg_dir.glob("*.svg"))) == 3

def test_replay_bad_config(tmp_path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("session: {acquire_frames: 0}\n")
    res = runner.invoke(app, ["replay", str(write_frames(tmp_path)), "--width", "1", "--height", "1",
                              "--config", str(cfg)])
    assert res.exit_code == 2

def test_analyze(tmp_path):
    res = runner.invoke(app, ["analyze", str(write_frames(tmp_path))])
    assert res.exit_code == 0, res.output
    out = json_lines(res.output)
    assert [r["detected"] for r in out] == [True, False]
    assert out[0]["complete"] is True

def test_replay_rejects_lone_detector_dimension(tmp_path):
    res = runner.invoke(app, ["replay", str(write_frames(tmp_path)), "--width", "200", "--height", "200",
                              "--detector-width", "200"])
    assert res.exit_code == 2
