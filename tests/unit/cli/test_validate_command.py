"""Unit tests for the validate CLI command."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from cli.main import main
from cli.validate_command import print_quality_report
from quality.check_types import CheckResult, QualityReport


def _report(status: str) -> QualityReport:
    result = CheckResult("fact_sales_orphans", "fact_sales", status, (), "", 0.0)
    return QualityReport(run_id="run-1", processing_date=date(2025, 10, 17), results=(result,))


def test_print_quality_report_exit_codes(capsys) -> None:
    """Only failing reports with the flag set should exit non-zero."""
    codes = [
        print_quality_report(_report("passed"), Path("r.json"), True),
        print_quality_report(_report("failed"), Path("r.json"), False),
        print_quality_report(_report("failed"), Path("r.json"), True),
    ]

    assert codes == [0, 0, 1] and "report_path=r.json" in capsys.readouterr().out


def test_cli_validate_after_stages(tmp_path: Path, fixtures_root: Path, capsys) -> None:
    """CLI validate should check the stored layers and save a report."""
    data_root = str(tmp_path / "data")
    for command in (["load-raw", str(fixtures_root)], ["cleanse"], ["assemble"]):
        main(["--data-root", data_root, *command])
    capsys.readouterr()

    exit_code = main(["--data-root", data_root, "validate"])
    output = capsys.readouterr().out.strip().splitlines()
    report_path = Path(output[-1].removeprefix("report_path="))

    assert exit_code == 0 and report_path.is_file()
    assert "[PASSED] fact_sales_orphans (fact_sales) violations=0" in output
