#!/usr/bin/env python3
"""
Replay a YAML pool scenario against two in-memory ledgers.

Prints reserves and share supply after each step, then the final snapshot
commitment. See `pairswap/integration/scenario.py` for the scenario format.

Example:
  python3 tools/pool_scenario.py scenarios/basic.yaml --log-level DEBUG
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pairswap.core.engine import PoolEngineConfig
from pairswap.integration.scenario import ScenarioError, load_scenario, run_scenario


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Replay a constant-product pool scenario.")
    p.add_argument("scenario", type=Path, help="Path to scenario YAML")
    p.add_argument("--asset-a", default="TKA", help="Asset id for ledger A (default: TKA)")
    p.add_argument("--asset-b", default="TKB", help="Asset id for ledger B (default: TKB)")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = p.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        scenario = load_scenario(args.scenario.read_text(encoding="utf-8"))
        run = run_scenario(
            scenario,
            config=PoolEngineConfig.from_env(),
            asset_a=args.asset_a,
            asset_b=args.asset_b,
        )
    except (OSError, ScenarioError) as exc:
        print(f"[pool-scenario] FAIL: {exc}", file=sys.stderr)
        return 1

    for outcome in run.outcomes:
        status = "ok" if outcome.ok else f"rejected ({outcome.error})"
        value = "" if outcome.value is None else f" -> {outcome.value}"
        print(
            f"[pool-scenario] step {outcome.index} {outcome.op}: {status}{value} "
            f"reserves=({outcome.reserves[0]}, {outcome.reserves[1]}) total_shares={outcome.total_shares}"
        )
    print(f"[pool-scenario] snapshot={run.snapshot().commitment_hex()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
