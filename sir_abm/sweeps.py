from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from .config import as_config
from .sir_model import SIRModel
from .utils import timeseries_to_frame


# ------------------------------
# REPEATED RUNS
# ------------------------------

def run_ensemble(config, n_ticks: int, seeds: Iterable[int],
                 show_progress: bool = False) -> pd.DataFrame:
    """
    Run one simulation per seed and stack the count logs (tick 0 included).
    Columns: seed, tick, susceptible, infected, recovered, dead, cumulative_infected
    """
    cfg = as_config(config)
    frames = []
    seeds = list(seeds)
    for seed in tqdm(seeds, desc="seeds", disable=not show_progress):
        model = SIRModel(cfg, seed=int(seed))
        cumulative = [model.cumulative_infected]
        for _ in range(int(n_ticks)):
            model.step()
            cumulative.append(model.cumulative_infected)
        df = timeseries_to_frame(model.count_log)
        df.insert(0, "seed", int(seed))
        df["cumulative_infected"] = cumulative
        frames.append(df)
    if not frames:
        return pd.DataFrame(columns=["seed", "tick", "susceptible", "infected", "recovered",
                                     "dead", "cumulative_infected"])
    return pd.concat(frames, ignore_index=True)


def summarize_ensemble(df: pd.DataFrame,
                       columns: Sequence[str] = ("susceptible", "infected", "recovered", "dead"),
                       quantiles: Sequence[float] = (0.05, 0.5, 0.95)) -> pd.DataFrame:
    """Per-tick mean, std and quantiles across seeds."""
    g = df.groupby("tick")
    out = {}
    for c in columns:
        out[f"{c}_mean"] = g[c].mean()
        out[f"{c}_std"] = g[c].std(ddof=0)
        for q in quantiles:
            out[f"{c}_q{int(round(q * 100)):02d}"] = g[c].quantile(q)
    return pd.DataFrame(out).reset_index()


def epidemic_summary(df: pd.DataFrame) -> pd.DataFrame:
    """One row per seed: peak infected, tick of the peak, final dead, cumulative infected."""
    rows: List[Dict[str, Any]] = []
    for seed, g in df.groupby("seed", sort=True):
        g = g.sort_values("tick")
        infected = g["infected"].to_numpy()
        k = int(np.argmax(infected))
        rows.append(
            {
                "seed": int(seed),
                "peak_infected": int(infected[k]),
                "peak_tick": int(g["tick"].iloc[k]),
                "final_infected": int(infected[-1]),
                "final_dead": int(g["dead"].iloc[-1]),
                "cumulative_infected": int(g["cumulative_infected"].iloc[-1]),
            }
        )
    return pd.DataFrame(rows)


# ------------------------------
# ONE-PARAMETER SWEEP
# ------------------------------

def sweep_parameter(config, name: str, values: Iterable[Any], n_ticks: int,
                    seeds: Iterable[int], show_progress: bool = False) -> pd.DataFrame:
    """Per-seed epidemic summaries for each value of one config field."""
    cfg = as_config(config)
    seeds = list(seeds)
    frames = []
    for v in tqdm(list(values), desc=name, disable=not show_progress):
        df = run_ensemble(cfg.replace(**{name: v}), n_ticks, seeds)
        summ = epidemic_summary(df)
        summ.insert(0, name, v)
        frames.append(summ)
    return pd.concat(frames, ignore_index=True)
