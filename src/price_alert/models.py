"""Data models for target-price reconciliation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class TargetPriceError(str, Enum):
    """Why a target price cannot be submitted.

    ``NONE`` covers both a valid target and an empty input; the empty case is
    only reported as ``EMPTY`` at submit time.
    """
    NONE = "none"
    EMPTY = "empty"
    INVALID_NUMBER = "invalid_number"
    NOT_BELOW_REFERENCE = "not_below_reference"
    TOO_LOW = "too_low"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    TargetPriceError.NONE: "",
    TargetPriceError.EMPTY: "请输入有效的目标价格",
    TargetPriceError.INVALID_NUMBER: "请输入有效价格",
    TargetPriceError.NOT_BELOW_REFERENCE: "目标价格需低于当前价格",
    TargetPriceError.TOO_LOW: "目标价格过低",
}


@dataclass(frozen=True)
class DiscountPreset:
    """A quick-pick discount, e.g. 8折 = 20% off."""

    label: str
    discount: Decimal


@dataclass(frozen=True)
class Savings:
    """What the user saves if the alert fires at the target price."""

    amount: Decimal = Decimal("0")
    percent: Decimal = Decimal("0")

    def to_dict(self) -> dict:
        return {"amount": float(self.amount), "percent": float(self.percent)}


@dataclass(frozen=True)
class TargetPriceState:
    """The target price as text, number and slider position at once.

    Instances are immutable; every edit returns a new state with all three
    representations recomputed.
    """

    reference_price: Decimal
    raw_input: str = ""
    numeric_value: Decimal | None = None
    slider_percent: int = 95
    error: TargetPriceError = TargetPriceError.NONE

    def to_dict(self) -> dict:
        return {
            "reference_price": float(self.reference_price),
            "raw_input": self.raw_input,
            "numeric_value": (
                float(self.numeric_value) if self.numeric_value is not None else None
            ),
            "slider_percent": self.slider_percent,
            "error": self.error.value,
            "message": self.error.message,
        }


# === Edit variants ===

@dataclass(frozen=True)
class TextEdit:
    """The user typed into the price field."""

    text: str


@dataclass(frozen=True)
class SliderEdit:
    """The user dragged the percentage slider."""

    percent: int


@dataclass(frozen=True)
class PresetEdit:
    """The user clicked a discount shortcut."""

    discount: Decimal


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of sending an alert to the backend."""

    ok: bool
    message: str
    target_price: Decimal | None = None
