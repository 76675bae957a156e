"""CLI entry point for the target-price reconciliation engine.

Usage:
    # Validate a typed target price:
    python -m src.price_alert.main --current-price 100 --target 50

    # Slider / preset inputs:
    python -m src.price_alert.main --current-price 39.9 --slider 80
    python -m src.price_alert.main --current-price 39.9 --preset 0.2

    # Validate and create the alert on the backend:
    python -m src.price_alert.main --current-price 100 --target 50 \
        --activity-id abc123 --submit
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from ..backend import ApiClient, NotificationService
from ..common.config import settings
from ..common.logging import setup_logging
from .models import PresetEdit, SliderEdit, TextEdit
from .reconciler import (
    active_preset,
    apply_edit,
    derived_savings,
    is_submittable,
    new_state,
)
from .submitter import AlertSubmitter

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Price alert target checker")
    parser.add_argument(
        "--current-price",
        type=str,
        required=True,
        help="Live price of the product",
    )
    parser.add_argument(
        "--stored-target",
        type=str,
        help="Existing alert target (edit mode)",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--target", type=str, help="Typed target price")
    group.add_argument("--slider", type=int, help="Target as %% of current price")
    group.add_argument("--preset", type=str, help="Discount fraction, e.g. 0.2")
    parser.add_argument("--activity-id", type=str, help="Product activity ID")
    parser.add_argument(
        "--submit",
        action="store_true",
        help="Create (or with --stored-target, update) the alert",
    )

    args = parser.parse_args(argv)
    setup_logging(settings.log_level, stream=sys.stderr)

    state = new_state(args.current_price, args.stored_target)
    if args.target is not None:
        state = apply_edit(state, TextEdit(args.target))
    elif args.slider is not None:
        state = apply_edit(state, SliderEdit(args.slider))
    elif args.preset is not None:
        try:
            state = apply_edit(state, PresetEdit(args.preset))
        except ValueError as exc:
            parser.error(str(exc))

    preset = active_preset(state)
    output = {
        **state.to_dict(),
        "submittable": is_submittable(state),
        "savings": derived_savings(state).to_dict(),
        "active_preset": preset.label if preset else None,
    }

    if args.submit:
        if not args.activity_id:
            parser.error("--submit requires --activity-id")
        with ApiClient() as client:
            submitter = AlertSubmitter(NotificationService(client))
            result = submitter.submit(
                state, args.activity_id, is_edit=args.stored_target is not None
            )
        output["submitted"] = result.ok
        output["submit_message"] = result.message
        logger.info(result.message)

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0 if output["submittable"] else 1


if __name__ == "__main__":
    sys.exit(main())
