"""Command line runner tests (seeded mock data source)."""

import json
import logging
import os
import subprocess
import sys
from pathlib import Path

from stockpulse.cli import build_parser, main
from stockpulse.utils.logger import get_logger, set_log_level

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


def run_json(capsys, argv):
    assert main(argv) == 0
    return json.loads(capsys.readouterr().out)


def test_summary(capsys):
    summary = run_json(capsys, ["--seed", "7", "--products", "8", "summary"])
    assert summary["totalProducts"] == 8
    assert summary["alertsCount"] >= summary["lowStockCount"]


def test_reorder(capsys):
    payload = run_json(capsys, ["--seed", "7", "--products", "8", "reorder", "prod-0002"])
    assert payload["productId"] == "prod-0002"
    assert isinstance(payload["recommendedQuantity"], int)
    assert "externalFactorAdjustment" in payload


def test_reorder_unknown_product(capsys):
    assert main(["--seed", "7", "--products", "8", "reorder", "prod-missing"]) == 1
    assert capsys.readouterr().out == ""


def test_plan_and_trending(capsys):
    plan = run_json(capsys, ["--seed", "7", "--products", "8", "plan"])
    assert set(plan) == {"urgent", "recommended", "optimal"}

    trending = run_json(capsys, ["--seed", "7", "--products", "8", "trending", "--limit", "3"])
    assert len(trending) <= 3

    unread = run_json(capsys, ["--seed", "7", "--products", "8", "alerts", "--unread"])
    assert all(not a["read"] for a in unread)


def test_report_export(tmp_path, capsys):
    argv = [
        "--seed", "7", "--products", "8",
        "report", "category", "--range", "last3months",
        "--format", "json", "--output-dir", str(tmp_path),
    ]
    result = run_json(capsys, argv)
    assert result["report"] == "sales_category_last3months"

    path = tmp_path / "reports" / "sales_category_last3months.json"
    with open(path, encoding="utf-8") as f:
        records = json.load(f)
    assert records
    assert {"category", "quantity", "revenue"} <= set(records[0])


def test_supplier_report(tmp_path, capsys):
    argv = ["report", "supplier", "--output-dir", str(tmp_path)]
    run_json(capsys, argv)
    assert (tmp_path / "reports" / "supplier_summary.csv").exists()


def test_parser_defaults():
    args = build_parser().parse_args(["report", "monthly"])
    assert args.date_range == "last30days"
    assert args.fmt == "csv"
    assert args.seed is None


def test_log_level_option():
    try:
        assert main(["--log-level", "WARNING", "--seed", "7", "--products", "4", "summary"]) == 0
        assert get_logger("stockpulse.cli").level == logging.WARNING
    finally:
        set_log_level("INFO")


def test_console_script_stdout_is_json():
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    env.pop("STOCKPULSE_LOG_LEVEL", None)

    completed = subprocess.run(
        [sys.executable, "-m", "stockpulse.cli", "--seed", "7", "--products", "4", "summary"],
        capture_output=True,
        text=True,
        env=env,
        check=True,
    )

    assert json.loads(completed.stdout)["totalProducts"] == 4
    assert "MockDataSource initialized" in completed.stderr
