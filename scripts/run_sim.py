"""
Run the spatial SIR ABM and save CSV logs.
Usage:
  python scripts/run_sim.py --out results/run1 --ticks 2000 \
     --n_agents 250 --initial_infected 5 --beta_min 0.4 --beta_max 0.8
  python scripts/run_sim.py --out results/ens --ticks 2000 --seeds 20
  python scripts/run_sim.py --out results/run2 --config params.yaml
"""
import argparse
import logging
from pathlib import Path

from sir_abm import SIRModel, load_config, save_config
from sir_abm import utils as U
from sir_abm.sweeps import epidemic_summary, run_ensemble, summarize_ensemble

# CLI flag -> config field; None means "keep the config value"
OVERRIDES = [
    "n_agents", "initial_infected", "beta_min", "beta_max", "infection_period",
    "detection_time", "death_rate", "reinfection_probability", "interaction_radius",
    "isolated", "dt", "speed", "seed", "interaction_method",
]


def build_config(args):
    overrides = {k: getattr(args, k) for k in OVERRIDES if getattr(args, k) is not None}
    if args.no_epidemic:
        overrides["epidemic"] = False
    return load_config(args.config, **overrides)


def main():
    ap = argparse.ArgumentParser(description="Spatial SIR ABM")
    ap.add_argument('--out', type=str, required=True)
    ap.add_argument('--config', type=str, default=None, help="YAML file merged over defaults")
    ap.add_argument('--ticks', type=int, default=2000)
    ap.add_argument('--seeds', type=int, default=0, help="run an ensemble over this many seeds")
    ap.add_argument('--n_agents', type=int)
    ap.add_argument('--initial_infected', type=int)
    ap.add_argument('--beta_min', type=float)
    ap.add_argument('--beta_max', type=float)
    ap.add_argument('--infection_period', type=int)
    ap.add_argument('--detection_time', type=int)
    ap.add_argument('--death_rate', type=float)
    ap.add_argument('--reinfection_probability', type=float)
    ap.add_argument('--interaction_radius', type=float)
    ap.add_argument('--interaction_method', choices=['nearest', 'all'])
    ap.add_argument('--isolated', type=float)
    ap.add_argument('--dt', type=float)
    ap.add_argument('--speed', type=float)
    ap.add_argument('--seed', type=int)
    ap.add_argument('--no_epidemic', action='store_true', help="movement and collisions only")
    ap.add_argument('--verbose', action='store_true')
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    cfg = build_config(args)
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    save_config(cfg, str(out_dir / 'params.yaml'))

    if args.seeds > 0:
        seeds = [cfg.seed + k for k in range(args.seeds)]
        df = run_ensemble(cfg, args.ticks, seeds, show_progress=True)
        df.to_csv(out_dir / 'ensemble_timeseries.csv', index=False)
        summarize_ensemble(df).to_csv(out_dir / 'ensemble_summary.csv', index=False)
        summ = epidemic_summary(df)
        summ.to_csv(out_dir / 'epidemic_summary.csv', index=False)
        print(f"[ensemble] {len(seeds)} seeds, mean peak infected "
              f"{summ['peak_infected'].mean():.1f} at tick {summ['peak_tick'].mean():.0f}")
    else:
        model = SIRModel(cfg)
        model.run(args.ticks)
        U.export_timeseries(model, out_csv=str(out_dir / 'sir_timeseries.csv'))
        U.snapshot_frame(model).to_csv(out_dir / 'final_agents.csv', index=False)
        last = model.count_log[-1]
        print(f"[run] tick {last.tick}: S={last.susceptible} I={last.infected} "
              f"R={last.recovered} dead={last.dead} ever infected={model.cumulative_infected}")
    print(f"Saved results to {out_dir}")


if __name__ == '__main__':
    main()
