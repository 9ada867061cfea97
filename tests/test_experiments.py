from __future__ import annotations

import importlib.util
import json
from pathlib import Path
import sys

import pytest

from freerig_lab.experiments import reachable_elements, rig_congruence

_SPECTRUM_PATH = Path(__file__).resolve().parents[1] / "analysis" / "class_size_spectrum.py"
_SPECTRUM_SPEC = importlib.util.spec_from_file_location("_class_size_spectrum", _SPECTRUM_PATH)
if _SPECTRUM_SPEC is None or _SPECTRUM_SPEC.loader is None:  # pragma: no cover
    raise RuntimeError("Unable to load class_size_spectrum for tests")
class_size_spectrum = importlib.util.module_from_spec(_SPECTRUM_SPEC)
sys.modules[_SPECTRUM_SPEC.name] = class_size_spectrum
_SPECTRUM_SPEC.loader.exec_module(class_size_spectrum)


def test_rig_congruence_cli(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_json = tmp_path / "one_a_summary.json"
    rig_congruence.main([
        "--words", "1,a",
        "--progress_every", "0",
        "--show_classes",
        "--out_json", str(out_json),
    ])
    out = capsys.readouterr().out
    assert "5: 1 + a, 1 + 3a" in out
    assert "'n_classes': 13" in out
    assert "Classes: 13" in out

    summary = json.loads(out_json.read_text())
    assert summary["class_sizes"] == [2, 2, 2] + [1] * 10
    assert summary["n_classes"] == 13


def test_rig_congruence_rejects_open_basis() -> None:
    with pytest.raises(ValueError):
        rig_congruence.main(["--words", "a,b", "--progress_every", "0"])


def test_reachable_cli(capsys: pytest.CaptureFixture[str]) -> None:
    reachable_elements.main(["--words", "1,a", "--list"])
    out = capsys.readouterr().out
    assert "'n_reachable': 15" in out
    assert "'zero_reachable': False" in out
    assert "1 + 3a" in out


def test_class_size_spectrum_loads_summaries(tmp_path: Path) -> None:
    for name, sizes in (("x_summary.json", [2, 2, 1]), ("y_summary.json", [3, 1])):
        hist = {}
        for s in sizes:
            hist[str(s)] = hist.get(str(s), 0) + 1
        (tmp_path / name).write_text(json.dumps({
            "slots": ["i", "a"],
            "n_elements": sum(sizes),
            "n_classes": len(sizes),
            "class_sizes": sizes,
            "size_histogram": hist,
            "quotient_loss": 1 - len(sizes) / sum(sizes),
            "passes": 1,
        }))

    run_df, spec_df = class_size_spectrum.load_summaries(sorted(tmp_path.glob("*_summary.json")))
    assert run_df["n_classes"].tolist() == [3, 2]
    assert run_df["largest_class"].tolist() == [2, 3]
    assert run_df["singletons"].tolist() == [1, 1]
    x_rows = spec_df[spec_df["file"] == "x_summary.json"]
    assert dict(zip(x_rows["size"], x_rows["count"])) == {1: 1, 2: 2}
