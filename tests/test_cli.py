import json
import numpy as np
from typer.testing import CliRunner
from gesturemouse.cli import app

def obs_line(px, conf=0.99, label=0):
    pts = np.zeros((21,3), dtype=float)
    pts[4,:2] = [0.30, 0.5]; pts[8,:2] = [0.30 + px/1000, 0.5]; pts[12,:2] = [0.30, 0.6]
    return json.dumps({"pts": pts.tolist(), "label": label, "confidence": conf, "width": 1000, "height": 1000})

def test_replay_prints_intents(tmp_path):
    rec = tmp_path / "rec.jsonl"
    rec.write_text("\n".join([obs_line(120), obs_line(70), obs_line(70, conf=0.5), obs_line(140)]) + "\n")
    res = CliRunner().invoke(app, ["replay", str(rec), "--screen-width", "800", "--screen-height", "600"])
    assert res.exit_code == 0, res.output
    events = [json.loads(l) for l in res.output.splitlines() if l.startswith("{")]
    assert [e["frame"] for e in events] == [2, 4]
    assert [i["kind"] for i in events[0]["intents"]] == ["button_down", "modifier_down", "move_to"]
    assert events[0]["intents"][2] == {"kind": "move_to", "x": 400, "y": 300}
    assert [i["kind"] for i in events[1]["intents"]] == ["modifier_up", "button_up"]

def test_replay_bad_line_exits_nonzero(tmp_path):
    rec = tmp_path / "rec.jsonl"
    rec.write_text('{"label": 0}\n')
    res = CliRunner().invoke(app, ["replay", str(rec)])
    assert res.exit_code == 1

def test_run_reports_screen_query_failure(monkeypatch):
    import pytest
    pytest.importorskip("cv2"); pytest.importorskip("mediapipe")
    import gesturemouse.cli as cli
    import gesturemouse.hand.landmarks as landmarks
    import gesturemouse.hand.classifier as classifier
    from gesturemouse.errors import ActuatorError
    from gesturemouse.io.actuator import RecordingActuator

    class NoScreen(RecordingActuator):
        def screen_size(self):
            raise ActuatorError("size", OSError("no display"))

    monkeypatch.setattr(cli, "PyAutoGuiActuator", NoScreen)
    monkeypatch.setattr(landmarks, "HandLandmarks", lambda: object())
    monkeypatch.setattr(classifier, "GestureClassifier", lambda path: object())
    res = CliRunner().invoke(app, ["run", "--no-preview"])
    assert res.exit_code == 1
    assert "Initialization failed" in res.output
