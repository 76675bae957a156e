"""Target-price reconciliation engine.

Keeps the alert dialog's three inputs (typed price, percentage slider,
discount preset) in agreement and validates the resulting target against
the current price.

Every function is pure: it takes a ``TargetPriceState`` and returns a new
one. Rounding to cents happens only where a price is produced for display
(slider and preset results); validation compares the value as entered.

Usage:
    state = new_state(Decimal("100"))
    state = set_from_text(state, "50")
    assert is_submittable(state)
    derived_savings(state)  # Savings(amount=50, percent=50)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal

from ..common.config import settings
from ..common.money import HUNDRED, format_price, round2, round_int, to_decimal
from .models import (
    DiscountPreset,
    PresetEdit,
    Savings,
    SliderEdit,
    TargetPriceError,
    TargetPriceState,
    TextEdit,
)

logger = logging.getLogger(__name__)

SLIDER_MIN: int = settings.alert.slider_min
SLIDER_MAX: int = settings.alert.slider_max

# Targets under this fraction of the current price are rejected as typos.
MIN_TARGET_RATIO: Decimal = settings.alert.min_target_ratio

# A preset is highlighted when the target is within this distance of its price.
PRESET_TOLERANCE: Decimal = settings.alert.preset_tolerance

DISCOUNT_PRESETS: tuple[DiscountPreset, ...] = tuple(
    DiscountPreset(label=p.label, discount=p.discount) for p in settings.alert.presets
)

Edit = TextEdit | SliderEdit | PresetEdit

_ZERO = Decimal("0")


def clamp_percent(percent: int) -> int:
    """Pin a percentage to the slider's range."""
    return max(SLIDER_MIN, min(SLIDER_MAX, percent))


def validate(value: object, reference_price: Decimal) -> TargetPriceError:
    """Check a target price against the current price.

    Rules, first match wins:
        no value                        -> NONE (nothing to flag yet)
        not a number, or <= 0           -> INVALID_NUMBER
        >= reference price              -> NOT_BELOW_REFERENCE
        < 10% of the reference price    -> TOO_LOW
        otherwise                       -> NONE

    A non-positive reference price can never be beaten: every positive
    target lands on NOT_BELOW_REFERENCE.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return TargetPriceError.NONE
    number = to_decimal(value)
    if number is None or number <= 0:
        return TargetPriceError.INVALID_NUMBER
    if number >= reference_price:
        return TargetPriceError.NOT_BELOW_REFERENCE
    if number < reference_price * MIN_TARGET_RATIO:
        return TargetPriceError.TOO_LOW
    return TargetPriceError.NONE


def _percent_of(value: Decimal, reference_price: Decimal) -> int:
    return clamp_percent(round_int(HUNDRED * value / reference_price))


def new_state(
    reference_price: object,
    stored_target: object = None,
) -> TargetPriceState:
    """Fresh state for a product, or seeded from an existing alert.

    When editing an alert, ``stored_target`` pre-fills the input and moves the
    slider to match; it is validated against today's price, which may have
    dropped below it since the alert was created.
    """
    reference = to_decimal(reference_price)
    if reference is None:
        logger.warning("Unusable reference price %r, treating as 0", reference_price)
        reference = _ZERO

    target = to_decimal(stored_target)
    if target is None or target <= 0:
        return TargetPriceState(reference_price=reference, slider_percent=SLIDER_MAX)

    # A target at or above the price (the price fell since the alert was set)
    # pins the slider to its top without dividing.
    if reference <= 0 or target >= reference:
        slider = SLIDER_MAX
    else:
        slider = _percent_of(target, reference)
    return TargetPriceState(
        reference_price=reference,
        raw_input=str(target),
        numeric_value=target,
        slider_percent=slider,
        error=validate(target, reference),
    )


def set_from_text(state: TargetPriceState, text: str) -> TargetPriceState:
    """Apply a keystroke in the price field.

    The slider follows only when the typed value is valid; the stored number
    itself is never clamped.
    """
    if not text.strip():
        return replace(
            state,
            raw_input=text,
            numeric_value=None,
            error=TargetPriceError.NONE,
        )

    number = to_decimal(text)
    error = validate(text, state.reference_price)
    slider = state.slider_percent
    if error is TargetPriceError.NONE and number is not None:
        slider = _percent_of(number, state.reference_price)

    return replace(
        state,
        raw_input=text,
        numeric_value=number,
        slider_percent=slider,
        error=error,
    )


def set_from_slider(state: TargetPriceState, percent: int) -> TargetPriceState:
    """Apply a slider drag: the target becomes ``percent`` of the current price."""
    percent = clamp_percent(int(percent))
    reference = max(state.reference_price, _ZERO)
    number = round2(reference * percent / HUNDRED)
    return replace(
        state,
        raw_input=format_price(number),
        numeric_value=number,
        slider_percent=percent,
        error=validate(number, state.reference_price),
    )


def preset_price(reference_price: Decimal, discount: Decimal) -> Decimal:
    """Price after taking ``discount`` (a fraction) off the reference price."""
    return round2(reference_price * (1 - discount))


def set_from_preset(state: TargetPriceState, discount: object) -> TargetPriceState:
    """Apply a discount shortcut such as 0.2 (20% off)."""
    fraction = to_decimal(discount)
    if fraction is None:
        raise ValueError(f"Invalid discount fraction: {discount!r}")
    reference = max(state.reference_price, _ZERO)
    number = preset_price(reference, fraction)
    return replace(
        state,
        raw_input=format_price(number),
        numeric_value=number,
        slider_percent=clamp_percent(round_int(HUNDRED * (1 - fraction))),
        error=validate(number, state.reference_price),
    )


def apply_edit(state: TargetPriceState, edit: Edit) -> TargetPriceState:
    """Dispatch one user edit to the matching update."""
    if isinstance(edit, TextEdit):
        return set_from_text(state, edit.text)
    if isinstance(edit, SliderEdit):
        return set_from_slider(state, edit.percent)
    if isinstance(edit, PresetEdit):
        return set_from_preset(state, edit.discount)
    raise TypeError(f"Unknown edit: {edit!r}")


def is_submittable(state: TargetPriceState) -> bool:
    """True when the target can be sent to the backend."""
    number = state.numeric_value
    return (
        number is not None
        and state.error is TargetPriceError.NONE
        and 0 < number < state.reference_price
    )


def derived_savings(state: TargetPriceState) -> Savings:
    """Savings amount and percent-off for a submittable target, else zeros."""
    number = state.numeric_value
    if number is None or not is_submittable(state):
        return Savings()
    amount = state.reference_price - number
    return Savings(amount=amount, percent=HUNDRED * amount / state.reference_price)


def active_preset(state: TargetPriceState) -> DiscountPreset | None:
    """The highlighted preset, if the target matches one.

    At sub-cent prices several presets can round to the same price; the
    closest one wins, and the first in display order breaks ties, so at most
    one preset is ever highlighted.
    """
    number = state.numeric_value
    if number is None:
        return None
    best: DiscountPreset | None = None
    best_distance = PRESET_TOLERANCE
    for preset in DISCOUNT_PRESETS:
        distance = abs(number - preset_price(state.reference_price, preset.discount))
        if distance < best_distance:
            best, best_distance = preset, distance
    return best


def is_preset_active(state: TargetPriceState, preset: DiscountPreset) -> bool:
    return active_preset(state) == preset


def submission_error(state: TargetPriceState) -> TargetPriceError:
    """The error a submit attempt reports, including EMPTY for no input."""
    number = state.numeric_value
    if number is None:
        if state.error is not TargetPriceError.NONE:
            return state.error
        return TargetPriceError.EMPTY
    if number <= 0:
        return TargetPriceError.EMPTY
    return state.error
