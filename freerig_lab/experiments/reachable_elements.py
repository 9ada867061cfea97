from __future__ import annotations

"""Elements generated from the basis monomials under add and multiply."""

import argparse

from ..algebra import build_algebra, parse_words


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Enumerate elements reachable from the basis.")
    p.add_argument("--words", type=str, default="all", help="Comma-separated basis words ('1' = identity).")
    p.add_argument("--max_rounds", type=int, default=None, help="Stop after this many combination rounds.")
    p.add_argument("--list", action="store_true", help="Print every reachable element.")
    return p


def main(argv=None) -> None:
    args = build_argparser().parse_args(argv)
    algebra = build_algebra(parse_words(args.words))

    reached = algebra.reachable(max_rounds=args.max_rounds)
    if args.list:
        for x in sorted(reached):
            print(algebra.render(x))

    print({
        "slots": list(algebra.slot_names),
        "n_elements": int(algebra.size),
        "n_reachable": len(reached),
        "zero_reachable": 0 in reached,
    })


if __name__ == "__main__":
    main()
