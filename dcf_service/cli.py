"""
Command Line Interface
======================

Runs a single valuation through a connector and prints the summary and the
sensitivity table. Negative amounts in exponent form must be attached with
``=`` (``--net-debt=-1e9``); argparse reads a separate ``-1e9`` as a flag.
"""

import argparse
import sys
from typing import List, Optional

from dcf_service.config import get_settings
from dcf_service.connectors import ConnectorFactory
from dcf_service.services.valuation import ValuationService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a quick DCF valuation for a ticker.")
    parser.add_argument("ticker", type=str, help="The ticker symbol to value (e.g., 'AAPL')")
    parser.add_argument("--source", "-s", type=str, default=None, help="Data source connector")
    parser.add_argument("--wacc", type=float, default=None, help="Discount rate override in percent")
    parser.add_argument(
        "--net-debt",
        type=float,
        default=None,
        help="Net debt override in currency units; pass negatives as --net-debt=-1e9",
    )
    parser.add_argument("--mid-year", action="store_true", help="Use the mid-year discounting convention")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    overrides = {}
    if args.wacc is not None:
        overrides["wacc"] = args.wacc
    if args.net_debt is not None:
        overrides["net_debt"] = args.net_debt
    if args.mid_year:
        overrides["use_mid_year"] = True

    print(f"Running valuation for {args.ticker}...")
    try:
        connector = ConnectorFactory.get_connector(args.source or settings.default_source)
        service = ValuationService(connector, defaults=settings.engine_defaults())
        report = service.calculate_valuation(args.ticker, option_overrides=overrides)
    except ValueError as e:
        print(f"Error calculating valuation for {args.ticker}: {e}", file=sys.stderr)
        return 1

    results = report.results
    print("\nValuation Summary:")
    print(f"Enterprise Value: {results.enterprise_value:,.2f} {report.currency}")
    print(f"Equity Value: {results.implied_market_cap:,.2f} {report.currency}")
    print(f"Intrinsic Value per Share: {results.intrinsic_value:.2f}")
    print(f"Margin of Safety: {results.margin_of_safety:.1f}%")
    if report.status is not None:
        print(f"Status: {report.status.value}")

    grid = report.sensitivity
    print("\nSensitivity (discount rate vs terminal growth):")
    print("DR \\ TG " + "".join(f"{g:>8}%" for g in grid.terminal_growth_rates))
    for rate, row in zip(grid.discount_rates, grid.values):
        print(f"{rate:>6}% " + "".join(f"{v:>9}" for v in row))
    return 0


if __name__ == "__main__":
    sys.exit(main())
