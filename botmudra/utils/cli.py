from __future__ import annotations

import argparse
import json
from typing import List, Optional

from botmudra.core.config import SETTINGS
from botmudra.tools.projection_tools import tool_compute_projection_model
from botmudra.utils.logging import setup_logging
from botmudra.utils.projection_models import ProjectionInput
from botmudra.utils.reference_data import get_reference_data
from botmudra.utils.report_export import build_csv_report
from botmudra.utils.validators import InvalidProjectionInput, validate_reference_data


def cmd_validate(args: argparse.Namespace) -> int:
    rep = validate_reference_data(args.path or SETTINGS.reference_data_path)

    if args.json:
        print(rep.model_dump_json(indent=2))
    else:
        if rep.errors:
            print("❌ Reference data validation FAILED")
            for e in rep.errors:
                print(f"ERROR: {e.message} ({e.location or ''})")
        else:
            print("✅ Reference data OK (no errors)")

        for w in rep.warnings:
            print(f"WARN: {w.message}")
        for i in rep.infos:
            print(f"INFO: {i.message}")

    return 0 if rep.ok else 2


def cmd_project(args: argparse.Namespace) -> int:
    payload = {
        "totalInvestment": args.investment,
        "duration": args.duration,
        "falconAllocation": args.falcon,
        "bsBuyAllocation": args.bs_buy,
        "maxDistanceAllocation": args.max_distance,
        "ubsAllocation": args.ubs,
    }
    reference = get_reference_data(args.path) if args.path else get_reference_data()
    try:
        result = tool_compute_projection_model(payload, reference=reference)
    except InvalidProjectionInput as e:
        print(f"ERROR: {e.message}")
        return 2

    for w in result.warnings:
        print(f"WARN: {w.message}")

    if args.csv:
        print(build_csv_report(result, ProjectionInput(**payload), reference), end="")
    else:
        print(json.dumps(result.to_wire(), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser(prog="botmudra", description="Profit calculator utilities")
    p.add_argument("--log-level", default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    v = sub.add_parser("validate", help="Validate the historical reference table")
    v.add_argument("--path", default=None)
    v.add_argument("--json", action="store_true")
    v.set_defaults(func=cmd_validate)

    pr = sub.add_parser("project", help="Compute a projection")
    pr.add_argument("--investment", type=float, required=True)
    pr.add_argument("--duration", type=int, required=True)
    pr.add_argument("--falcon", type=float, default=25)
    pr.add_argument("--bs-buy", type=float, default=25)
    pr.add_argument("--max-distance", type=float, default=25)
    pr.add_argument("--ubs", type=float, default=25)
    pr.add_argument("--path", default=None, help="Reference data file (defaults to config)")
    pr.add_argument("--csv", action="store_true", help="Print the CSV report instead of JSON")
    pr.set_defaults(func=cmd_project)

    args = p.parse_args(argv)
    # stdout carries the JSON/CSV output, keep the log quiet unless asked
    setup_logging(args.log_level or "WARNING")
    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
