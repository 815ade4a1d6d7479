#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Submodule presentations from the command line.
#
# Usage examples:
#
#   # Example 1: Z/4 + Z/6 and the submodule generated by (2, 0), (0, 3):
#   python module_cli.py \
#       --ring ZZ --ngens 2 \
#       --relations "4, 0" "0, 6" \
#       --gens "2, 0" "0, 3"
#
#   # Example 2: polynomial coefficients over GF(5):
#   python module_cli.py \
#       --ring "GF(5)[x]" --ngens 2 \
#       --relations "x**2 + 1, 0" \
#       --gens "x, 1" "1, 0"
#
#   # Example 3: a JSON job file (single job, list of jobs, or {"jobs": [...]})
#   python module_cli.py --config jobs.json
#
# Notes:
#   * Rings: ZZ, QQ, GF(p) and <field>[var], e.g. "QQ[t]".
#   * Output lists the normalized ambient generators, the surviving generator
#     columns, the relations among them and the image of every generator.

import argparse
import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from fp_modules import PresentedModule
from integer_ring import Integers
from ring_interface import FiniteField, PolynomialRing, RationalField, Ring
from shared_utilities import (
    DEFAULT_RING,
    LOG_FORMAT,
    expand_jobs,
    load_config_from_json,
    parse_vector,
)
from submodule import submodule

logger = logging.getLogger(__name__)

_POLY_RE = re.compile(r"^(.*)\[\s*([A-Za-z_]\w*)\s*\]$")
_GF_RE = re.compile(r"^GF\(\s*(\d+)\s*\)$")


def parse_ring_spec(spec: str) -> Ring:
    """Build a ring from ``ZZ``, ``QQ``, ``GF(p)`` or ``<field>[var]``."""
    spec = spec.strip()
    m = _POLY_RE.match(spec)
    if m:
        base = parse_ring_spec(m.group(1))
        if not base.is_field:
            raise ValueError(f"Polynomial coefficients must be a field, got '{m.group(1).strip()}'")
        return PolynomialRing(base, m.group(2))
    if spec == "ZZ":
        return Integers()
    if spec == "QQ":
        return RationalField()
    m = _GF_RE.match(spec)
    if m:
        return FiniteField(int(m.group(1)))
    raise ValueError(f"Unknown ring '{spec}', expected ZZ, QQ, GF(p) or <field>[var]")


def _as_vector(entry: Any) -> List[Any]:
    if isinstance(entry, str):
        return parse_vector(entry)
    return list(entry)


def run_job(job: Dict[str, Any]) -> Dict[str, Any]:
    """Build the ambient module of ``job`` and the submodule it asks for.

    Job keys:
      - "ring"        : ring spec string (default ZZ)
      - "ngens"       : number of generators of the ambient module
      - "relations"   : list of relation vectors (optional)
      - "generators"  : list of generator vectors

    Returns a dict with:
      - "Ambient", "Submodule", "Map"
      - "Generators" : normalized ambient generators
      - "GenCols", "Pivots", "Relations"
      - "Images"     : image in the ambient module of each submodule generator
    """
    R = parse_ring_spec(str(job.get("ring", DEFAULT_RING)))
    if "ngens" not in job:
        raise ValueError("Job is missing 'ngens'")
    ngens = int(job["ngens"])
    rels = [_as_vector(r) for r in job.get("relations", [])]
    gens = [_as_vector(g) for g in job.get("generators", [])]

    M = PresentedModule(R, ngens, rels)
    N, f = submodule(M, [M(g) for g in gens])
    logger.info(
        "[CLI] %s: %d generators, %d relations -> %d generators, %d relations",
        R, len(gens), len(M.relations()), N.ngens(), len(N.relations()),
    )
    return {
        "Ambient": M,
        "Submodule": N,
        "Map": f,
        "Generators": N.ambient_gens,
        "GenCols": N.gen_cols,
        "Pivots": N.pivots,
        "Relations": [list(r) for r in N.relations()],
        "Images": [f(g) for g in N.gens()],
    }


def print_result(res: Dict[str, Any]) -> None:
    print("=== Ambient module ===")
    print(" ", repr(res["Ambient"]))

    print("\n=== Normalized generators ===")
    for g in res["Generators"]:
        print(" ", g)

    print("\n=== Surviving generator columns ===")
    print(" ", res["GenCols"], "(culled unit pivots:", res["Pivots"], ")")

    print("\n=== Relations ===")
    if not res["Relations"]:
        print("  (none)")
    for r in res["Relations"]:
        print(" ", "(" + ", ".join(str(c) for c in r) + ")")

    print("\n=== Images of submodule generators ===")
    for i, img in enumerate(res["Images"]):
        print(f"  gen {i} -> {img}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Submodule presentation over a Euclidean ring.")
    ap.add_argument("--config", default=None, help="JSON job file (overrides the other options)")
    ap.add_argument("--ring", default=DEFAULT_RING, help="ZZ, QQ, GF(p) or <field>[var] (default: ZZ)")
    ap.add_argument("--ngens", type=int, default=None, help="Number of generators of the ambient module")
    ap.add_argument("--relations", nargs="*", default=[], help='Relation vectors, e.g. "4, 0"')
    ap.add_argument("--gens", nargs="*", default=[], help='Generator vectors, e.g. "2, 0" "0, 3"')
    ap.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = ap.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper()), format=LOG_FORMAT)

    if args.config is not None:
        jobs = expand_jobs(load_config_from_json(args.config))
    else:
        if args.ngens is None:
            ap.error("--ngens is required without --config")
        jobs = [{
            "ring": args.ring,
            "ngens": args.ngens,
            "relations": args.relations,
            "generators": args.gens,
        }]

    for idx, job in enumerate(jobs, start=1):
        res = run_job(job)
        if len(jobs) > 1:
            print(f"\n##### Job {idx}/{len(jobs)} #####")
        print_result(res)


if __name__ == "__main__":
    main()
