"""Generate a reproducible feasible initial population from a JSON config.

Usage:
    PYTHONPATH=src python scripts/sampling/generate_feasible.py \
        --config configs/feasible_init.json --set seed=3 --set rejection.max_attempts=10000
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from constraints import constrained_genomes, constraint_from_mapping
from core.config import apply_overrides, load_json, rejection_config
from core.logging import PACKAGE_LOGGERS, configure_logging, get_logger
from core.rng import new_state, run_random

logger = get_logger("generate_feasible")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--config", type=Path, required=True, help="JSON config file")
    parser.add_argument("--set", dest="overrides", action="append", default=[], help="key=value override")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--out", type=Path, default=None, help="write genomes as JSON here instead of stdout")
    return parser.parse_args(argv)


def run(config: dict[str, Any]) -> list[list[Any]]:
    constraints = [constraint_from_mapping(entry) for entry in config.get("constraints", [])]
    bounds = [tuple(bound) for bound in config["bounds"]]
    rejection = rejection_config(config)
    state = new_state(config.get("seed"))
    genomes, _state = run_random(
        constrained_genomes(constraints, int(config["n"]), bounds, rejection),
        state,
    )
    logger.info("Generated %d genomes with %d constraints", len(genomes), len(constraints))
    return genomes


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level, names=(*PACKAGE_LOGGERS, "generate_feasible"))
    config = apply_overrides(load_json(args.config), args.overrides)
    genomes = run(config)
    payload = json.dumps(genomes)
    if args.out is None:
        sys.stdout.write(payload + "\n")
    else:
        args.out.write_text(payload, encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
