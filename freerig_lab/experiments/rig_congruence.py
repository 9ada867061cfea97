from __future__ import annotations

"""Squares congruence on the free idempotent rig.

Identifies every element with its square, closes under add / multiply, and
reports the resulting class sizes (largest first) and class count.

The default runs the full seven-slot universe (16384 elements). For a quick
check, restrict to a closed sub-basis, e.g. ``--words 1,a``.
"""

import argparse
import json

from ..algebra import build_algebra, parse_words
from ..congruence import CongruenceConfig, compute_congruence
from ..report import format_classes, summarize


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Coarsest congruence generated by x ~ x*x.")
    p.add_argument("--words", type=str, default="all",
                   help="Comma-separated basis words ('1' = identity), closed under multiplication. Default: all seven.")
    p.add_argument("--progress_every", type=int, default=4096, help="Rows between progress lines (0 = silent).")
    p.add_argument("--max_passes", type=int, default=None, help="Abort if not converged after this many passes.")
    p.add_argument("--verbose", action="store_true", help="Print seed / per-pass summaries.")
    p.add_argument("--show_classes", action="store_true", help="Print every class with rendered members.")
    p.add_argument("--max_members", type=int, default=None, help="Truncate rendered classes to this many members.")
    p.add_argument("--out_json", type=str, default=None, help="Write the summary JSON here.")
    return p


def main(argv=None) -> None:
    args = build_argparser().parse_args(argv)
    if args.progress_every < 0:
        raise ValueError("--progress_every must be >= 0")

    algebra = build_algebra(parse_words(args.words))
    print(f"--- SQUARES CONGRUENCE ({algebra.size} elements, slots={list(algebra.slot_names)}) ---")

    cfg = CongruenceConfig(
        max_passes=args.max_passes,
        progress_every=int(args.progress_every),
        verbose=bool(args.verbose),
    )
    result = compute_congruence(algebra, cfg)
    summary = summarize(algebra, result)

    if args.show_classes:
        for line in format_classes(algebra, result.partition, max_members=args.max_members):
            print(line)
        print()

    print(summary)

    if args.out_json is not None:
        with open(args.out_json, "w", encoding="utf-8") as f:
            json.dump(summary, f, indent=2)
        print(f"Wrote {args.out_json}")

    print(f"Classes: {summary['n_classes']}  (passes={summary['passes']}, loss={summary['quotient_loss']:.4f})")


if __name__ == "__main__":
    main()
