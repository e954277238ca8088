from __future__ import annotations

import json
import pathlib
from typing import Iterable, List

import pandas as pd

from TraceTSP.trace import BranchingEvent


def write_events_jsonl(events: Iterable[BranchingEvent], path: pathlib.Path) -> int:
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with path.open("w", encoding="utf-8") as fh:
        for step, event in enumerate(events):
            record = {"step": step, **event.to_dict()}
            fh.write(json.dumps(record, ensure_ascii=False))
            fh.write("\n")
            written += 1
    return written


def load_records(path: pathlib.Path) -> List[dict]:
    records: List[dict] = []
    with pathlib.Path(path).open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            records.append(json.loads(line))
    return records


def build_dataframe(events: Iterable[BranchingEvent]) -> pd.DataFrame:
    rows = []
    for step, event in enumerate(events):
        solution = event.solution
        rows.append(
            {
                "step": step,
                "action": event.action.value,
                "id": solution.id,
                "parent_id": solution.parent_id,
                "level": solution.level,
                "cost": solution.cost,
                "lower_bound": solution.lower_bound,
                "path": "→".join(solution.path),
                "timestamp": event.timestamp,
            }
        )
    columns = ["step", "action", "id", "parent_id", "level", "cost", "lower_bound", "path", "timestamp"]
    df = pd.DataFrame(rows, columns=columns)
    for col in ("cost", "lower_bound", "timestamp"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def summarise(events: Iterable[BranchingEvent]) -> pd.DataFrame:
    """Event counts per tree level and action, one row per level."""
    df = build_dataframe(events)
    if df.empty:
        return pd.DataFrame(columns=["level", "explore", "prune", "complete"])
    counts = df.groupby(["level", "action"]).size().unstack(fill_value=0)
    for action in ("explore", "prune", "complete"):
        if action not in counts.columns:
            counts[action] = 0
    counts = counts[["explore", "prune", "complete"]].reset_index()
    counts.columns.name = None
    return counts


__all__ = ["build_dataframe", "load_records", "summarise", "write_events_jsonl"]
