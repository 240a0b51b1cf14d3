"""Command line entry point for the RSI screener."""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from .config.loader import ConfigLoader
from .delivery.stdout_report import StdoutReportDelivery
from .errors import CandidateListError, ConfigurationError
from .logging.config import configure_logging
from .screener import RSIScreener

EXIT_OK = 0
EXIT_CANDIDATE_LIST_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rsi-screener",
        description="Screen Bybit perpetual futures for oversold/overbought RSI."
    )
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--limit", type=int, help="Maximum number of candidate symbols")
    parser.add_argument("--interval", help="Kline interval code, e.g. 60, 240, D")
    parser.add_argument("--period", type=int, help="RSI period")
    parser.add_argument("--low", type=float, help="Oversold threshold")
    parser.add_argument("--high", type=float, help="Overbought threshold")
    parser.add_argument("--category", help="Exchange product category, e.g. linear")
    parser.add_argument("--suffix", help="Only screen symbols ending with this, e.g. USDT")
    parser.add_argument("--rank-by", choices=["turnover24h"],
                        help="Rank candidates before applying the limit")
    parser.add_argument("--format", choices=["pretty", "json"], help="Report format")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--log-json", action="store_true", default=None,
                        help="Emit logs as JSON")
    return parser


def collect_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Translate parsed arguments into a configuration override tree."""
    mapping = {
        "limit": ("screener", "candidate_limit"),
        "interval": ("exchange", "interval"),
        "period": ("rsi", "period"),
        "low": ("screener", "low_threshold"),
        "high": ("screener", "high_threshold"),
        "category": ("exchange", "category"),
        "suffix": ("screener", "symbol_suffix"),
        "rank_by": ("screener", "rank_by"),
        "format": ("output", "format"),
        "log_level": ("logging", "level"),
        "log_json": ("logging", "format_json"),
    }

    overrides: dict[str, Any] = {}
    for arg_name, (section, key) in mapping.items():
        value = getattr(args, arg_name)
        if value is not None:
            overrides.setdefault(section, {})[key] = value
    return overrides


def main(argv: Optional[list[str]] = None) -> int:
    """Run one screening pass and print the report."""
    args = build_parser().parse_args(argv)

    try:
        if args.config is not None and not args.config.exists():
            raise ConfigurationError(f"Config file not found: {args.config}",
                                     source=str(args.config))
        config = ConfigLoader.create(args.config).load(collect_overrides(args))
    except ConfigurationError as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    # Logs go to stderr so the report on stdout stays parseable
    configure_logging(
        level=config.logging.level,
        format_json=config.logging.format_json,
        stream=sys.stderr
    )

    screener = RSIScreener(config)
    delivery = StdoutReportDelivery(config.output)

    try:
        symbols = screener.list_candidates()
    except CandidateListError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_CANDIDATE_LIST_FAILED

    delivery.announce(
        len(symbols),
        config.screener.low_threshold,
        config.screener.high_threshold
    )
    report = screener.scan(symbols)
    delivery.deliver(report)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
