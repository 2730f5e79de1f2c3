#!/usr/bin/env python3
# (c) 2026 (KriaetvAspie / AspieTheBard)
# Licensed under the Polyform Noncommercial License 1.0.0
"""
run_experiments.py — Batch runner for Evolvera simulation experiments.

Usage examples
──────────────
    # Five seeds, default (duplicate-ages) condition
    python run_experiments.py --seeds 1-5 --turns 50

    # Named condition with overrides
    python run_experiments.py --seeds 1-20 --condition single_age --extra-args "--single-age"

    # From an experiment plan file
    python run_experiments.py --plan experiments.json

    # Verify outputs exist after a batch
    python run_experiments.py --verify --plan experiments.json
"""

import argparse
import json
import os
import subprocess
import sys
import time


# ── Helpers ────────────────────────────────────────────────────────────────

def parse_seed_range(text: str) -> list:
    """Parse a seed range like '1-20' or '1,3,5' or '42' into a list."""
    seeds = []
    for part in text.split(','):
        part = part.strip()
        if '-' in part:
            lo, hi = part.split('-', 1)
            seeds.extend(range(int(lo), int(hi) + 1))
        else:
            seeds.append(int(part))
    return seeds


def run_dir(output_dir: str, condition: str, seed: int) -> str:
    return os.path.join(output_dir, condition, f'seed_{seed}')


def build_command(seed: int, turns: int, out: str, extra_args: list) -> list:
    return [
        sys.executable, '-m', 'evolvera',
        '--seed', str(seed),
        '--turns', str(turns),
        '--out', out,
        '--log-dir', os.path.join(out, 'logs'),
        '--quiet',
    ] + extra_args


def run_single(seed: int, condition: str, turns: int,
               extra_args: list, output_dir: str = 'data') -> dict:
    """Run one simulation as a subprocess.  Returns a result dict."""
    out = run_dir(output_dir, condition, seed)
    cmd = build_command(seed, turns, out, extra_args)

    print(f'  [{condition}] seed={seed}  ...', end='', flush=True)
    t0 = time.time()

    result = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        encoding='utf-8',
        errors='replace',
        timeout=max(60, turns),
    )

    elapsed = round(time.time() - t0, 1)
    ok = result.returncode == 0
    status = 'OK' if ok else f'FAIL(rc={result.returncode})'
    print(f'  {status}  ({elapsed}s)')

    if not ok:
        stderr = result.stderr.strip()
        if stderr:
            for line in stderr.splitlines()[-10:]:
                print(f'    | {line}')

    return {
        'seed': seed,
        'condition': condition,
        'ok': ok,
        'elapsed': elapsed,
        'returncode': result.returncode,
        'out': out,
    }


def run_batch(seeds: list, condition: str, turns: int,
              extra_args: list, output_dir: str = 'data') -> list:
    """Run a batch of seeds for one condition, sequentially."""
    results = []
    for seed in seeds:
        try:
            results.append(run_single(seed, condition, turns, extra_args, output_dir))
        except subprocess.TimeoutExpired:
            print(f'  [{condition}] seed={seed}  TIMEOUT')
            results.append({
                'seed': seed, 'condition': condition, 'ok': False,
                'elapsed': 0, 'returncode': -1,
                'out': run_dir(output_dir, condition, seed),
            })
    return results


def summarise(results: list) -> dict:
    """Read each finished run's snapshot and tally Ages and final NI."""
    rows = []
    for r in results:
        if not r['ok']:
            continue
        snap_path = os.path.join(r['out'], 'demo.json')
        with open(snap_path, 'r', encoding='utf-8') as f:
            snap = json.load(f)
        rows.append({
            'seed':  r['seed'],
            'ages':  len(snap['age_history']),
            'ni':    snap['ni'],
            'names': [a['name'] for a in snap['age_history']],
        })
    return {'runs': rows,
            'mean_ages': (sum(x['ages'] for x in rows) / len(rows)) if rows else 0.0}


def run_from_plan(plan_path: str, output_dir: str = 'data') -> list:
    """Load an experiment plan JSON and execute every condition × seed."""
    with open(plan_path, 'r', encoding='utf-8') as f:
        plan = json.load(f)

    all_results = []
    conditions = plan.get('conditions', [])
    default_turns = plan.get('default_turns', 20)

    print(f'\n{"=" * 60}')
    print(f'  Experiment plan: {plan_path}')
    print(f'  Conditions: {len(conditions)}')
    print(f'  Default turns: {default_turns}')
    print(f'{"=" * 60}\n')

    for cond in conditions:
        name = cond['name']
        seeds = parse_seed_range(cond.get('seeds', '1-5'))
        turns = cond.get('turns', default_turns)
        extra = cond.get('extra_args', [])
        if isinstance(extra, str):
            extra = extra.split()

        print(f'\n── Condition: {name}  ({len(seeds)} seeds, {turns} turns) ──')
        results = run_batch(seeds, name, turns, extra, output_dir)
        all_results.extend(results)

        ok_n = sum(1 for r in results if r['ok'])
        print(f'   Done: {ok_n} OK, {len(results) - ok_n} FAIL  '
              f'(mean ages {summarise(results)["mean_ages"]:.2f})')

    ok_total = sum(1 for r in all_results if r['ok'])
    print(f'\n{"=" * 60}')
    print(f'  Overall: {ok_total}/{len(all_results)} OK')
    print(f'{"=" * 60}\n')
    return all_results


def verify_outputs(plan_path: str, output_dir: str = 'data') -> bool:
    """Check that run.csv and demo.json exist for every condition × seed."""
    with open(plan_path, 'r', encoding='utf-8') as f:
        plan = json.load(f)

    missing = []
    for cond in plan.get('conditions', []):
        for seed in parse_seed_range(cond.get('seeds', '1-5')):
            out = run_dir(output_dir, cond['name'], seed)
            for fname in ('run.csv', 'demo.json'):
                path = os.path.join(out, fname)
                if not os.path.isfile(path):
                    missing.append((cond['name'], seed, path))

    if missing:
        print(f'\n  ✗ {len(missing)} missing output(s):')
        for cond, seed, path in missing[:20]:
            print(f'    [{cond}] seed={seed}: {path}')
        if len(missing) > 20:
            print(f'    ... and {len(missing) - 20} more')
        return False
    print('  ✓ All expected outputs found.')
    return True


# ── Main ───────────────────────────────────────────────────────────────────

def main():
    parser = argparse.ArgumentParser(
        description='Batch runner for Evolvera simulation experiments')

    parser.add_argument('--seeds', type=str, default=None,
                        help='Seed range, e.g. "1-100" or "1,5,10"')
    parser.add_argument('--condition', type=str, default='baseline',
                        help='Condition label')
    parser.add_argument('--turns', type=int, default=20,
                        help='Turns per run (default: 20)')
    parser.add_argument('--extra-args', type=str, default='',
                        help='Extra CLI arguments passed to the sim (quoted string)')
    parser.add_argument('--output-dir', type=str, default='data',
                        help='Root directory for per-run outputs (default: data)')
    parser.add_argument('--plan', type=str, default=None,
                        help='Path to experiment plan JSON')
    parser.add_argument('--verify', action='store_true',
                        help='Verify output files exist (use with --plan)')

    args = parser.parse_args()

    if args.verify and args.plan:
        ok = verify_outputs(args.plan, args.output_dir)
        sys.exit(0 if ok else 1)

    if args.plan:
        run_from_plan(args.plan, args.output_dir)
    elif args.seeds:
        seeds = parse_seed_range(args.seeds)
        extra = args.extra_args.split() if args.extra_args else []
        print(f'\n-- Batch: {args.condition}  ({len(seeds)} seeds, {args.turns} turns) --')
        results = run_batch(seeds, args.condition, args.turns, extra, args.output_dir)
        ok_n = sum(1 for r in results if r['ok'])
        print(f'\n  Done: {ok_n}/{len(results)} OK  '
              f'(mean ages {summarise(results)["mean_ages"]:.2f})')
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == '__main__':
    main()
