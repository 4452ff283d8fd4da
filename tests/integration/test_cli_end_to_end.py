import csv
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
DIAGRAM = REPO_ROOT / "tests" / "fixtures" / "diagrams" / "vdi_to_web.tldr"


@pytest.mark.integration
def test_cli_module_exports_fixture(tmp_path):
    """
    Runs the exporter as a separate process, the way an operator would:

      python -m tldr_firewall.cli diagram.tldr --out rules.csv -v
    """
    out = tmp_path / "rules.csv"
    proc = subprocess.run(
        [sys.executable, "-m", "tldr_firewall.cli", str(DIAGRAM), "--out", str(out), "-v"],
        cwd=REPO_ROOT,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )
    assert proc.returncode == 0, proc.stderr
    assert "tldr_firewall.connectivity: incomplete binding: shape:fw2" in proc.stderr

    with out.open(encoding="utf-8-sig", newline="") as fh:
        rows = list(csv.DictReader(fh))

    assert len(rows) == 5
    assert {r["Source System"] for r in rows[:4]} == {"VDI"}
    assert [r["Port"] for r in rows] == ["22", "22", "443", "443", "8080"]
    assert rows[4]["Status"] == "미처리"


@pytest.mark.integration
def test_cli_module_broken_document(tmp_path):
    proc = subprocess.run(
        [
            sys.executable,
            "-m",
            "tldr_firewall.cli",
            str(DIAGRAM.with_name("broken.tldr")),
            "--out",
            str(tmp_path / "rules.csv"),
        ],
        cwd=REPO_ROOT,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )
    assert proc.returncode == 2
    assert proc.stderr.startswith("error: ")
    assert not (tmp_path / "rules.csv").exists()
