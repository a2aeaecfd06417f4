"""DELTALINE time machine demo.

Records randomized changes to a numpy array state at out-of-order
timestamps, scrubs back and forth through the timeline, inserts a change
into the past, and finally forgets old history.

Run:
    python scripts/demo_timeline.py
    python scripts/demo_timeline.py --changes 500 --size 8 --forget-at 40
    python scripts/demo_timeline.py --config config/default.yaml --log-level DEBUG
"""

from __future__ import annotations

import argparse
import time

import numpy as np

from deltaline.core.config import DeltalineConfig, MachineConfig
from deltaline.core.errors import TimeEvicted
from deltaline.core.machine import TimeMachine
from deltaline.states.array import ArrayPatch, ArrayState
from deltaline.utils.logging import setup_logging, setup_logging_from_config

DIVIDER = "=" * 60


def stage_record(
    m: TimeMachine, rng: np.random.Generator, n_changes: int, horizon: int
) -> None:
    """Stage 1: Record changes at random (unordered) timestamps."""
    print(f"\n{DIVIDER}")
    print(f"STAGE 1: RECORDING  ({n_changes} changes over t=0..{horizon})")
    print(DIVIDER)

    size = m.current.shape[0]
    t0 = time.monotonic()
    for _ in range(n_changes):
        at = int(rng.integers(0, horizon))
        index = int(rng.integers(0, size))
        m.change(ArrayPatch(index, float(rng.integers(-9, 10))), at)
    wall = time.monotonic() - t0

    print(f"  Changes recorded: {len(m)}")
    print(f"  Time range:       {m.time_range}")
    print(f"  Pending/applied:  {m.pending_count}/{m.applied_count}")
    print(f"  Wall-clock time:  {wall:.3f}s")


def stage_scrub(m: TimeMachine, horizon: int, n_steps: int) -> None:
    """Stage 2: Jump around the timeline."""
    print(f"\n{DIVIDER}")
    print(f"STAGE 2: SCRUB  ({n_steps} seeks)")
    print(DIVIDER)

    targets = np.linspace(horizon, 0, n_steps).astype(int)
    for i, at in enumerate(targets):
        before = m.stats.entries_crossed
        state = m.value_at(int(at))
        crossed = m.stats.entries_crossed - before
        print(f"  Step {i+1:3d}: t={int(at):5d}  crossed={crossed:4d}  "
              f"values={np.array2string(state.array, precision=0)}")


def stage_insert_past(m: TimeMachine, horizon: int) -> None:
    """Stage 3: Change the past and watch it flow forward."""
    print(f"\n{DIVIDER}")
    print("STAGE 3: INSERT INTO THE PAST")
    print(DIVIDER)

    at = horizon // 2
    final_before = m.value_at(horizon).array.copy()
    m.change(ArrayPatch(slice(None), 100.0), at)
    final_after = m.value_at(horizon).array

    print(f"  Overwrote every cell at t={at}")
    print(f"  Final before: {np.array2string(final_before, precision=0)}")
    print(f"  Final after:  {np.array2string(final_after, precision=0)}")


def stage_forget(m: TimeMachine, until: int) -> None:
    """Stage 4: Evict old history."""
    print(f"\n{DIVIDER}")
    print(f"STAGE 4: FORGET BEFORE t={until}")
    print(DIVIDER)

    m.forget_ancient_history(until)
    print(f"  Retained changes: {len(m)}")
    print(f"  Boundary:         {m.oldest}")
    try:
        m.value_at(until - 1)
    except TimeEvicted as exc:
        print(f"  Query at t={until - 1}: {exc}")
    print(f"  Stats: {m.stats.to_dict()}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main():
    parser = argparse.ArgumentParser(description="DELTALINE Time Machine Demo")
    parser.add_argument("--changes", type=int, default=200, help="Number of changes to record")
    parser.add_argument("--horizon", type=int, default=100, help="Timestamps are drawn from [0, horizon)")
    parser.add_argument("--size", type=int, default=6, help="Length of the array state")
    parser.add_argument("--steps", type=int, default=10, help="Scrub step count")
    parser.add_argument("--forget-at", type=int, default=None, help="Eviction boundary (default: horizon // 4)")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override logging level",
    )
    args = parser.parse_args()

    machine_cfg = MachineConfig(validate_invariants=True)
    if args.config:
        config = DeltalineConfig(args.config)
        cfg = config.load(validate=True)
        if args.log_level:
            config.override("deltaline.system.log_level", args.log_level)
        setup_logging_from_config(cfg)
        machine_cfg = config.machine
    else:
        setup_logging(args.log_level or "WARNING")

    print(DIVIDER)
    print("DELTALINE - Time Machine Demo")
    print(DIVIDER)
    print(f"  Changes:   {args.changes}")
    print(f"  Horizon:   {args.horizon}")
    print(f"  Size:      {args.size}")
    print(f"  Seed:      {args.seed}")

    rng = np.random.default_rng(args.seed)
    m = TimeMachine(ArrayState(np.zeros(args.size)), machine_cfg)

    stage_record(m, rng, args.changes, args.horizon)
    stage_scrub(m, args.horizon, args.steps)
    stage_insert_past(m, args.horizon)
    stage_forget(m, args.forget_at if args.forget_at is not None else args.horizon // 4)

    print(f"\n{DIVIDER}")
    print("DEMO COMPLETE")
    print(DIVIDER)


if __name__ == "__main__":
    main()
