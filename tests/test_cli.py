import json

from TraceTSP.cli import main
from TraceTSP.export import load_records


def _write_problem(tmp_path):
    path = tmp_path / "problem.json"
    path.write_text(
        json.dumps(
            {
                "distance_matrix": [[0, 10, 15, 20], [10, 0, 35, 25], [15, 35, 0, 30], [20, 25, 30, 0]],
                "ids": ["A", "B", "C", "D"],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_solve_writes_trace_and_summary(tmp_path, capsys):
    events = tmp_path / "events.jsonl"
    summary = tmp_path / "summary.csv"
    code = main(
        [
            "solve",
            "--problem",
            str(_write_problem(tmp_path)),
            "--source",
            "A",
            "--events",
            str(events),
            "--summary",
            str(summary),
        ]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert "cost=80.0" in out
    assert load_records(events)
    assert summary.read_text(encoding="utf-8").startswith("level,explore,prune,complete")


def test_missing_source_exit_code(tmp_path):
    assert main(["solve", "--problem", str(_write_problem(tmp_path)), "--source", "Z"]) == 2


def test_random_instance_with_playback(tmp_path, capsys):
    config = tmp_path / "config.yaml"
    config.write_text("solver:\n  playback_speed: 1000\n  log_level: WARNING\n", encoding="utf-8")
    code = main(["solve", "--random", "5", "--seed", "1", "--source", "A", "--config", str(config), "--play"])
    assert code == 0
    assert "tour=A->" in capsys.readouterr().out


def test_bad_config_exit_code(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("solver:\n  metric: chebyshev\n", encoding="utf-8")
    assert main(["solve", "--random", "3", "--config", str(config)]) == 2


def test_non_square_problem_exit_code(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"distance_matrix": [[0, 1, 2], [1, 0, 3]], "ids": ["0", "1"]}), encoding="utf-8")
    assert main(["solve", "--problem", str(path), "--source", "0"]) == 2
    assert "must be square" in capsys.readouterr().err


def test_empty_random_instance_exit_code():
    assert main(["solve", "--random", "0"]) == 2
