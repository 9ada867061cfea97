#!/usr/bin/env python3
"""
Aggregate summary JSONs written by freerig_lab/experiments/rig_congruence.py (--out_json).

It only reads fields already in the summary JSON; nothing is recomputed.

It outputs:
- results/run_level_classes.csv
- results/class_size_spectrum.csv
- results/fig_class_size_spectrum.png
"""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


def run_row(name: str, d: Dict[str, Any]) -> Dict[str, Any]:
    sizes = [int(s) for s in d.get("class_sizes", [])]
    return {
        "file": name,
        "slots": ",".join(d.get("slots", [])),
        "n_elements": d.get("n_elements", None),
        "n_classes": d.get("n_classes", len(sizes)),
        "quotient_loss": d.get("quotient_loss", None),
        "passes": d.get("passes", None),
        "largest_class": max(sizes) if sizes else None,
        "singletons": sum(1 for s in sizes if s == 1),
        "median_class": float(np.median(sizes)) if sizes else None,
    }


def spectrum_rows(name: str, d: Dict[str, Any]) -> List[Dict[str, Any]]:
    # JSON turns the histogram's int keys into strings
    hist = d.get("size_histogram", {}) or {}
    return [
        {"file": name, "size": int(size), "count": int(count)}
        for size, count in hist.items()
    ]


def load_summaries(paths: List[Path]) -> Tuple[pd.DataFrame, pd.DataFrame]:
    rows: List[Dict[str, Any]] = []
    spec_rows: List[Dict[str, Any]] = []
    for p in paths:
        d = json.loads(p.read_text())
        rows.append(run_row(p.name, d))
        spec_rows.extend(spectrum_rows(p.name, d))
    run_df = pd.DataFrame(rows).sort_values(["file"])
    spec_df = pd.DataFrame(spec_rows, columns=["file", "size", "count"]).sort_values(["file", "size"])
    return run_df, spec_df


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--runs_dir", type=str, default="runs", help="Directory containing *_summary.json files.")
    ap.add_argument("--pattern", type=str, default="*_summary.json", help="Glob pattern within runs_dir.")
    ap.add_argument("--out_dir", type=str, default="results", help="Where to write CSVs/figures.")
    args = ap.parse_args()

    runs_dir = Path(args.runs_dir)
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = sorted(runs_dir.glob(args.pattern))
    if not paths:
        raise SystemExit(f"No files matched {runs_dir}/{args.pattern}")

    run_df, spec_df = load_summaries(paths)

    run_csv = out_dir / "run_level_classes.csv"
    spec_csv = out_dir / "class_size_spectrum.csv"
    run_df.to_csv(run_csv, index=False)
    spec_df.to_csv(spec_csv, index=False)

    # Figure: number of classes of each size, one series per run
    fig = plt.figure()
    for name, grp in spec_df.groupby("file"):
        plt.plot(grp["size"].values, grp["count"].values, marker="o", label=str(name))
    plt.xscale("log")
    plt.yscale("log")
    plt.xlabel("class size")
    plt.ylabel("number of classes")
    plt.title("Squares congruence: class size spectrum")
    plt.legend()
    fig.tight_layout()
    fig_path = out_dir / "fig_class_size_spectrum.png"
    fig.savefig(fig_path, dpi=200)
    plt.close(fig)

    print(f"Wrote:\n  {run_csv}\n  {spec_csv}\n  {fig_path}")


if __name__ == "__main__":
    main()
