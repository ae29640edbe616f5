import json
import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from cli import convert_weight, load_history, main

HISTORY = {
    "workouts": [
        {
            "id": "w1",
            "startTime": 1704128400000,
            "endTime": 1704132000000,
            "exercises": [
                {
                    "name": "Bench Press",
                    "type": "weighted",
                    "primaryMuscle": "chest",
                    "sets": [{"reps": 8, "weight": 100}, {"reps": 5, "weight": 100}],
                }
            ],
        },
        {
            "id": "w2",
            "startTime": 1704301200000,
            "endTime": 1704304800000,
            "exercises": [
                {
                    "name": "Bench Press",
                    "type": "weighted",
                    "sets": [
                        {"reps": 6, "weight": 90},
                        {"reps": 3, "weight": 95, "setType": "failure"},
                    ],
                }
            ],
        },
    ]
}


@pytest.fixture
def history_file(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps(HISTORY))
    return path


def _run(args, tmp_path):
    return main(args + ["--settings", str(tmp_path / "settings.yaml")])


def test_convert(capsys):
    assert convert_weight(100.0, "kg") == "100.0 kg = 220.46 lb"
    main(["convert", "--weight", "220.46", "--unit", "lb"])
    assert capsys.readouterr().out.strip() == "220.46 lb = 100.0 kg"


def test_load_history_formats(tmp_path, history_file):
    assert len(load_history(str(history_file))) == 2
    bare = tmp_path / "bare.json"
    bare.write_text(json.dumps(HISTORY["workouts"]))
    assert len(load_history(str(bare))) == 2
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"workouts": "none"}))
    with pytest.raises(ValueError):
        load_history(str(bad))


def test_volume_command(capsys, tmp_path, history_file):
    _run(["volume", "--file", str(history_file), "--exercise", "Bench Press", "--mode", "total_volume"], tmp_path)
    points = json.loads(capsys.readouterr().out)
    assert [p["value"] for p in points] == [1300, 825]


def test_repmax_command(capsys, tmp_path, history_file):
    _run(["repmax", "--file", str(history_file), "--exercise", "Bench Press"], tmp_path)
    report = json.loads(capsys.readouterr().out)
    assert len(report["estimates"]) == 12
    assert report["failure_sets"][0]["reps"] == 3
    assert report["failure_sets"][0]["is_actual_data"] is True


def test_trend_command(capsys, tmp_path, history_file):
    _run(["trend", "--file", str(history_file), "--exercise", "Bench Press"], tmp_path)
    out = capsys.readouterr().out.strip()
    assert out.startswith("Bench Press (best_set): decreasing, -260.00 kg/session")


def test_trend_without_history(capsys, tmp_path, history_file):
    _run(["trend", "--file", str(history_file), "--exercise", "Squat"], tmp_path)
    assert capsys.readouterr().out.strip() == "Not enough sessions for a trend"


def test_muscles_command(capsys, tmp_path, history_file):
    main(["muscles", "--file", str(history_file), "--to", "2024-01-02", "--settings", str(tmp_path / "s.yaml")])
    report = json.loads(capsys.readouterr().out)
    assert report["volume_per_muscle"] == {"chest": 1300}
    assert report["sets_per_muscle"] == {"chest": 2}
    assert report["total_volume"] == 1300
