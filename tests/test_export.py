import pandas as pd

from TraceTSP.export import build_dataframe, load_records, summarise, write_events_jsonl
from TraceTSP.solvers import solve_tsp


def _events(four_city):
    matrix, index_of = four_city
    return solve_tsp(matrix, index_of, "A").events


def test_jsonl_round_trip(tmp_path, four_city):
    events = _events(four_city)
    path = tmp_path / "out" / "events.jsonl"
    assert write_events_jsonl(events, path) == len(events)

    records = load_records(path)
    assert [r["step"] for r in records] == list(range(len(events)))
    assert records[0]["message"] == "Starting from A"
    assert records[0]["solution"]["parent_id"] is None
    assert records[-1]["action"] in {"explore", "prune", "complete"}


def test_build_dataframe(four_city):
    events = _events(four_city)
    df = build_dataframe(events)
    assert len(df) == len(events)
    assert df.loc[0, "path"] == "A"
    assert set(df["action"]) <= {"explore", "prune", "complete"}


def test_summarise_counts_per_level(four_city):
    events = _events(four_city)
    summary = summarise(events)
    assert list(summary.columns) == ["level", "explore", "prune", "complete"]
    assert int(summary[["explore", "prune", "complete"]].to_numpy().sum()) == len(events)
    assert int(summary["complete"].sum()) == 1
    assert summary.loc[summary["level"] == 1, "explore"].item() == 1


def test_summarise_empty():
    summary = summarise([])
    assert isinstance(summary, pd.DataFrame)
    assert summary.empty
