"""CLI entry point for the price trend aggregator.

Usage:
    # From a JSON file holding the trend service's data array:
    python -m src.price_trend.main --input trend.json --current-price 7.5

    # Straight from the backend:
    python -m src.price_trend.main --activity-id abc123 --current-price 7.5 \
        --today 2026-02-07 --output data/trend_abc123.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from ..backend import ApiClient, ProductService
from ..common.config import settings
from ..common.logging import setup_logging
from .aggregator import build_trend_view, format_today_discount
from .loader import TrendLoader

logger = logging.getLogger(__name__)


def _load_input(path: str) -> list:
    """Read raw samples: either a bare array or a ``{code, data}`` envelope."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("data") or []
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of trend samples in {path}")
    return payload


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Price trend aggregator")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", type=str, help="Path to raw trend JSON")
    source.add_argument("--activity-id", type=str, help="Fetch trend from backend")
    parser.add_argument(
        "--current-price",
        type=str,
        required=True,
        help="Live price, substituted into today's point",
    )
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Override today's date (YYYY-MM-DD)",
    )
    parser.add_argument("--output", type=str, help="Output JSON file path")

    args = parser.parse_args(argv)
    setup_logging(settings.log_level, stream=sys.stderr)
    today = args.today or date.today()

    if args.input:
        view = build_trend_view(_load_input(args.input), args.current_price, today)
    else:
        with ApiClient() as client:
            view = TrendLoader(ProductService(client)).load(
                args.activity_id, args.current_price, today
            )

    output = view.to_dict()
    output["today_discount_text"] = format_today_discount(view.statistics)
    text = json.dumps(output, ensure_ascii=False, indent=2)

    if args.output:
        Path(args.output).parent.mkdir(parents=True, exist_ok=True)
        Path(args.output).write_text(text, encoding="utf-8")
        logger.info("Output written to %s", args.output)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
