import os
from typing import Iterable, Optional, Tuple

import pandas as pd

# Side of the periodic simulation square
EXTENT = 1.0

COUNT_COLUMNS = ["tick", "susceptible", "infected", "recovered", "dead"]

# -------------------
# Geometry helpers
# -------------------

def wrap(value: float, extent: float = EXTENT) -> float:
    """Wrap a coordinate into [0, extent)."""
    v = float(value) % extent
    # float modulo can round a tiny negative up to extent itself
    if v >= extent:
        v = 0.0
    return v


def wrap_position(pos, extent: float = EXTENT) -> Tuple[float, float]:
    return (wrap(pos[0], extent), wrap(pos[1], extent))


def min_image_delta(p_self, p_other, extent: float = EXTENT) -> Tuple[float, float]:
    """Return (dx, dy) from p_self to p_other under the torus minimum-image convention."""
    dx = float(p_other[0]) - float(p_self[0])
    dy = float(p_other[1]) - float(p_self[1])
    dx = (dx + extent / 2.0) % extent - extent / 2.0
    dy = (dy + extent / 2.0) % extent - extent / 2.0
    return dx, dy


# -------------------
# Export helpers
# -------------------

def timeseries_to_frame(rows: Iterable) -> pd.DataFrame:
    """Tidy per-tick table from TickCounts rows (or dicts with the same keys)."""
    records = [r._asdict() if hasattr(r, "_asdict") else dict(r) for r in rows]
    df = pd.DataFrame(records, columns=COUNT_COLUMNS)
    return df.astype({c: int for c in COUNT_COLUMNS})


def snapshot_frame(model) -> pd.DataFrame:
    """
    Per-agent table of the current state.
    Columns: agent_id, x, y, status, days_infected, times_infected, isolated
    """
    rows = []
    for a in model.agents:
        if a.pos is None:
            continue
        rows.append(
            {
                "agent_id": int(a.unique_id),
                "x": float(a.pos[0]),
                "y": float(a.pos[1]),
                "status": a.status.name,
                "days_infected": int(a.days_infected),
                "times_infected": int(a.times_infected),
                "isolated": bool(a.isolated),
            }
        )
    return pd.DataFrame(rows, columns=["agent_id", "x", "y", "status", "days_infected",
                                      "times_infected", "isolated"])


def export_timeseries(
    model,
    out_csv: str = "results/sir_timeseries.csv",
    out_parquet: Optional[str] = None,
) -> pd.DataFrame:
    """Write the model's count log (tick 0 included) to CSV and optionally parquet."""
    os.makedirs(os.path.dirname(out_csv) or ".", exist_ok=True)
    df = timeseries_to_frame(model.count_log)
    df.to_csv(out_csv, index=False)
    if out_parquet:
        os.makedirs(os.path.dirname(out_parquet) or ".", exist_ok=True)
        df.to_parquet(out_parquet, index=False)
    return df
