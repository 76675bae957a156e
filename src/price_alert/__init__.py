"""Price Alert Module - target price reconciliation and alert submission."""

from .models import (
    DiscountPreset,
    PresetEdit,
    Savings,
    SliderEdit,
    SubmitResult,
    TargetPriceError,
    TargetPriceState,
    TextEdit,
)
from .reconciler import (
    DISCOUNT_PRESETS,
    PRESET_TOLERANCE,
    active_preset,
    apply_edit,
    derived_savings,
    is_submittable,
    new_state,
    set_from_preset,
    set_from_slider,
    set_from_text,
    submission_error,
    validate,
)
from .submitter import AlertSubmitter

__all__ = [
    "AlertSubmitter",
    "DISCOUNT_PRESETS",
    "DiscountPreset",
    "PRESET_TOLERANCE",
    "PresetEdit",
    "Savings",
    "SliderEdit",
    "SubmitResult",
    "TargetPriceError",
    "TargetPriceState",
    "TextEdit",
    "active_preset",
    "apply_edit",
    "derived_savings",
    "is_submittable",
    "new_state",
    "set_from_preset",
    "set_from_slider",
    "set_from_text",
    "submission_error",
    "validate",
]
