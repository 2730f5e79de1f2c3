# (c) 2026 (KriaetvAspie / AspieTheBard)
# Licensed under the Polyform Noncommercial License 1.0.0
"""Entry point for: python -m evolvera [--turns N] [--seed S] [--out DIR]"""

import argparse
import pathlib
import sys
from datetime import datetime

from . import config, display, snapshot
from .metrics import TurnLogger
from .sim import Simulation


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='evolvera',
        description='Run the Evolvera single-civilization simulation')
    parser.add_argument('--turns', type=int, default=config.TURNS,
                        help=f'Turns to simulate (default: {config.TURNS}; clamped to >= 1)')
    parser.add_argument('--seed', type=int, default=config.SEED,
                        help=f'Random seed (default: {config.SEED})')
    parser.add_argument('--out', type=str, default=config.SAVES_DIR,
                        help=f'Directory for run.csv and demo.json (default: {config.SAVES_DIR})')
    parser.add_argument('--log-dir', type=str, default=config.LOGS_DIR,
                        help=f'Directory for tee\'d run logs (default: {config.LOGS_DIR})')
    parser.add_argument('--biome', type=str, default=config.BIOME_HINT,
                        help=f'Biome hint used in Age names (default: {config.BIOME_HINT})')
    parser.add_argument('--single-age', action='store_true',
                        help='One Age per 15-point crossing (drop the legacy duplicate trigger)')
    parser.add_argument('--quiet', action='store_true',
                        help='Only show Ages, breakthroughs and events on the terminal')
    return parser


def parse_config(argv=None) -> tuple:
    args = build_parser().parse_args(argv)
    cfg = config.SimConfig(
        turns          = max(1, args.turns),
        seed           = args.seed,
        biome_hint     = args.biome,
        duplicate_ages = not args.single_age,
    )
    return cfg, args


def run(argv=None) -> Simulation:
    cfg, args = parse_config(argv)
    out_dir   = pathlib.Path(args.out)

    # ── Set up file logging ────────────────────────────────────────────────
    log_dir = pathlib.Path(args.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    _ts       = datetime.now().strftime('%Y%m%d_%H%M%S')
    _log_path = log_dir / f'run_{_ts}_seed{cfg.seed}.txt'
    _log_fh   = open(_log_path, 'w', encoding='utf-8')
    _real     = sys.stdout
    _tee      = display.LogTee(_log_fh, _real, quiet=args.quiet)
    sys.stdout = _tee

    sim = Simulation(cfg, on_event=display.print_event)
    try:
        print(display.banner(cfg.turns, cfg.seed))
        with TurnLogger(out_dir / config.CSV_NAME) as telemetry:
            def _on_turn(rec):
                telemetry.record_turn(rec)
                display.print_turn(rec)
            sim.run(on_turn=_on_turn)
        saved = snapshot.write_snapshot(sim.civ, out_dir / config.SNAPSHOT_NAME)
        _tee.passthrough = True
        display.final_report(sim.civ, cfg.turns)
        print(f"Saved -> {saved}")
    finally:
        sys.stdout = _real
        _log_fh.close()
    print(f"Full log saved → {_log_path}")
    return sim


def main() -> None:
    run()


if __name__ == '__main__':
    main()
