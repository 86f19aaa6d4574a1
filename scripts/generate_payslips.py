"""
Generate a bulk payslip HTML file straight from the configured sheet.

Usage:
    python scripts/generate_payslips.py --month March --year 2025 [--ids RAV001 MEE002] [--out payslips.html]
"""
import argparse
import sys

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import AppException
from app.core.logging import setup_logging
from app.dependencies import get_directory
from app.schemas.payslip import PeriodConfig
from app.services import payslip_service
from app.services.payslip_renderer import render_bulk_payslips_html


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate payslips for a pay period")
    parser.add_argument("--month", required=True)
    parser.add_argument("--year", required=True, type=int)
    parser.add_argument("--working-days", type=int, default=30)
    parser.add_argument("--actual-working-days", type=int, default=30)
    parser.add_argument("--ids", nargs="*", default=[], help="Employee IDs (default: everyone)")
    parser.add_argument("--out", default=None, help="Output file (default: payslips-<month>-<year>.html)")
    args = parser.parse_args(argv)

    setup_logging()

    try:
        period = PeriodConfig(
            month=args.month,
            year=args.year,
            working_days=args.working_days,
            actual_working_days=args.actual_working_days,
        )
        employees = payslip_service.select_employees(get_directory(), args.ids)
        result = payslip_service.generate_batch(employees, period)
    except AppException as e:
        print(f"Error: {e.message}")
        return 1
    except PydanticValidationError as e:
        problems = "; ".join(f"{err['loc'][-1]}: {err['msg']}" for err in e.errors())
        print(f"Error: invalid pay period ({problems})")
        return 1

    out_path = args.out or f"payslips-{args.month}-{args.year}.html"
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(render_bulk_payslips_html(result.payslips))

    print(f"Requested: {result.requested}  Generated: {result.succeeded}  Failed: {result.failed}")
    for failure in result.failures:
        print(f" - {failure.display}")
    print(f"Wrote {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
