import json

import pytest

from drift_sar import cli

WEATHER_ARGS = [
    "--wind-speed", "20", "--wind-dir", "180",
    "--current-speed", "0.5", "--current-dir", "200",
]


def _main(monkeypatch, *args):
    monkeypatch.setattr("sys.argv", ["drift-sar", "--lat", "13.0827", "--lng", "80.2707", *args])
    cli.main()


def test_explicit_weather_run_saves_json(monkeypatch, tmp_path):
    out = tmp_path / "runs" / "run.json"
    _main(monkeypatch, *WEATHER_ARGS, "--hours", "4", "--paths", "25", "--seed", "3",
          "--subject", "f1", "--out", str(out))

    run = json.loads(out.read_text(encoding="utf-8"))
    assert run["subjectId"] == "f1"
    assert run["simulationHours"] == 4
    assert len(run["result"]["driftPaths"]) == 25
    assert all(len(p) == 5 for p in run["result"]["driftPaths"])
    assert len(run["result"]["predictedPoints"]) == 4
    assert run["weather"]["windSpeed"] == 20.0
    assert 2.0 <= run["searchRadiusKm"] <= 50.0


def test_same_seed_same_paths(monkeypatch, tmp_path):
    a, b = tmp_path / "a.json", tmp_path / "b.json"
    _main(monkeypatch, *WEATHER_ARGS, "--paths", "10", "--seed", "9", "--out", str(a))
    _main(monkeypatch, *WEATHER_ARGS, "--paths", "10", "--seed", "9", "--out", str(b))
    paths_a = json.loads(a.read_text(encoding="utf-8"))["result"]["driftPaths"]
    paths_b = json.loads(b.read_text(encoding="utf-8"))["result"]["driftPaths"]
    assert paths_a == paths_b


@pytest.mark.parametrize(
    "extra",
    [
        ["--hours", "13"],
        ["--hours", "0"],
        ["--paths", "9"],
        ["--paths", "201"],
    ],
)
def test_out_of_range_exits(monkeypatch, tmp_path, extra):
    out = tmp_path / "run.json"
    with pytest.raises(SystemExit):
        _main(monkeypatch, *WEATHER_ARGS, *extra, "--out", str(out))
    assert not out.exists()


def test_partial_weather_flags_exit(monkeypatch, tmp_path):
    out = tmp_path / "run.json"
    with pytest.raises(SystemExit, match="go together"):
        _main(monkeypatch, "--wind-speed", "20", "--wind-dir", "180", "--out", str(out))
    assert not out.exists()
