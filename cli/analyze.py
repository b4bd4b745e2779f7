#!/usr/bin/env python3
"""
Analyze a local price file and print the report as JSON.

Usage:
    python cli/analyze.py --data prices.csv [--config params.yaml] [--chart out.png]

    # Caller-supplied sub-scores
    python cli/analyze.py --data prices.json --fundamental 0.7 --sentiment 0.3

    # Sub-scores derived from raw market data
    python cli/analyze.py --data prices.json --market-cap 2e10 --total-volume 3e9 \\
        --change-24h 4.2 --news-sentiment 0.4
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ta_engine import SubScores, analyze
from ta_engine.data.loader import load_series
from ta_engine.reporting.chart import AnalysisChart
from ta_engine.scoring.config import DEFAULT_PARAMS
from ta_engine.scoring.config_loader import load_params_from_yaml
from ta_engine.scoring.market_structure import analyze_market_structure, sub_scores_from_market


def setup_logging(verbose: bool = False):
    """
    Setup logging to stderr (stdout carries the JSON report).

    Args:
        verbose: If True, use DEBUG level, otherwise WARNING
    """
    level = logging.DEBUG if verbose else logging.WARNING

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def build_sub_scores(args: argparse.Namespace) -> SubScores:
    """
    Resolve sub-scores: derive from market data when given, then apply
    explicit --fundamental/--sentiment/--structure overrides.
    """
    if args.market_cap is not None or args.total_volume is not None:
        structure = analyze_market_structure(
            market_cap=args.market_cap,
            total_volume=args.total_volume,
            price_change_pct_24h=args.change_24h,
            sentiment_up_pct=args.sentiment_up_pct,
        )
        base = sub_scores_from_market(structure, news_sentiment=args.news_sentiment)
    else:
        base = SubScores()

    return SubScores(
        fundamental=base.fundamental if args.fundamental is None else args.fundamental,
        sentiment=base.sentiment if args.sentiment is None else args.sentiment,
        structure=base.structure if args.structure is None else args.structure,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Technical analysis and composite prediction for a price series",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze a CSV (first column timestamp, Close required, High/Low/Volume optional)
  python cli/analyze.py --data data/btc.csv

  # Custom parameters and a chart
  python cli/analyze.py --data data/btc.json --config params.yaml --chart btc.png
        """
    )
    parser.add_argument("--data", type=str, required=True,
                        help="Price file (.csv or .json pair list / market-chart object)")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML parameter file (default: built-in defaults)")
    parser.add_argument("--chart", type=str, default=None,
                        help="Write a PNG chart to this path")

    scores = parser.add_argument_group("sub-scores (0-1, default 0.5)")
    scores.add_argument("--fundamental", type=float, default=None)
    scores.add_argument("--sentiment", type=float, default=None)
    scores.add_argument("--structure", type=float, default=None)

    market = parser.add_argument_group("market data (derives sub-scores)")
    market.add_argument("--market-cap", type=float, default=None)
    market.add_argument("--total-volume", type=float, default=None, help="24h traded volume")
    market.add_argument("--change-24h", type=float, default=None, help="24h price change in percent")
    market.add_argument("--sentiment-up-pct", type=float, default=50.0,
                        help="Community up-vote share 0-100 (default: 50)")
    market.add_argument("--news-sentiment", type=float, default=None,
                        help="News sentiment score in [-1, 1]")

    parser.add_argument("--verbose", action="store_true",
                        help="Enable verbose logging (DEBUG level)")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        params = load_params_from_yaml(args.config) if args.config else DEFAULT_PARAMS
        series = load_series(args.data)
        sub_scores = build_sub_scores(args)
        report = analyze(series, params=params, sub_scores=sub_scores)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # InvalidInputError, malformed JSON and empty config files
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.chart:
        chart_path = AnalysisChart().plot(
            series, report, params=params,
            title=Path(args.data).stem, output_filename=args.chart,
        )
        logger.info(f"Chart written to {chart_path}")

    print(json.dumps(report.to_dict(), indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
