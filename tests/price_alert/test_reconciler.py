"""Tests for the target-price reconciliation engine."""

from __future__ import annotations

from decimal import Decimal

import pytest

from src.price_alert.models import (
    PresetEdit,
    Savings,
    SliderEdit,
    TargetPriceError,
    TargetPriceState,
    TextEdit,
)
from src.price_alert.reconciler import (
    DISCOUNT_PRESETS,
    PRESET_TOLERANCE,
    SLIDER_MAX,
    SLIDER_MIN,
    active_preset,
    apply_edit,
    derived_savings,
    is_preset_active,
    is_submittable,
    new_state,
    preset_price,
    set_from_preset,
    set_from_slider,
    set_from_text,
    submission_error,
    validate,
)


@pytest.fixture
def state() -> TargetPriceState:
    return new_state(Decimal("100"))


class TestValidate:
    """Rule order and boundaries of target price validation."""

    def test_no_value_is_not_flagged(self):
        assert validate(None, Decimal("100")) is TargetPriceError.NONE
        assert validate("", Decimal("100")) is TargetPriceError.NONE
        assert validate("   ", Decimal("100")) is TargetPriceError.NONE

    @pytest.mark.parametrize("value", ["abc", "0", "-5", "nan", "inf", Decimal("0")])
    def test_invalid_number(self, value):
        assert validate(value, Decimal("100")) is TargetPriceError.INVALID_NUMBER

    def test_equal_to_reference_is_rejected(self):
        assert validate(Decimal("100"), Decimal("100")) is TargetPriceError.NOT_BELOW_REFERENCE

    def test_above_reference_is_rejected(self):
        assert validate("120", Decimal("100")) is TargetPriceError.NOT_BELOW_REFERENCE

    def test_ten_percent_boundary_is_inclusive(self):
        assert validate(Decimal("10"), Decimal("100")) is TargetPriceError.NONE

    def test_below_ten_percent_is_too_low(self):
        assert validate(Decimal("9.99"), Decimal("100")) is TargetPriceError.TOO_LOW
        assert validate("5", Decimal("100")) is TargetPriceError.TOO_LOW

    def test_valid_range(self):
        for value in ("10", "10.01", "50", "99.99"):
            assert validate(value, Decimal("100")) is TargetPriceError.NONE

    def test_monotonic_below_floor(self):
        reference = Decimal("37.8")
        floor = reference * Decimal("0.1")
        value = floor - Decimal("0.001")
        while value > 0:
            assert validate(value, reference) is TargetPriceError.TOO_LOW
            value -= Decimal("0.5")

    def test_uses_unrounded_value(self):
        # 9.999 would display as 10.00 but is still below the floor
        assert validate("9.999", Decimal("100")) is TargetPriceError.TOO_LOW

    @pytest.mark.parametrize("reference", [Decimal("0"), Decimal("-3")])
    def test_degenerate_reference_never_passes(self, reference):
        assert validate("1", reference) is TargetPriceError.NOT_BELOW_REFERENCE
        assert validate("0.01", reference) is TargetPriceError.NOT_BELOW_REFERENCE
        assert validate("0", reference) is TargetPriceError.INVALID_NUMBER

    def test_messages(self):
        assert TargetPriceError.INVALID_NUMBER.message == "请输入有效价格"
        assert TargetPriceError.NOT_BELOW_REFERENCE.message == "目标价格需低于当前价格"
        assert TargetPriceError.TOO_LOW.message == "目标价格过低"
        assert TargetPriceError.NONE.message == ""


class TestNewState:
    def test_fresh_state(self, state):
        assert state.reference_price == Decimal("100")
        assert state.raw_input == ""
        assert state.numeric_value is None
        assert state.slider_percent == SLIDER_MAX
        assert state.error is TargetPriceError.NONE
        assert not is_submittable(state)

    def test_edit_mode_seeds_from_stored_target(self):
        state = new_state(9.9, stored_target=7.5)
        assert state.numeric_value == Decimal("7.5")
        assert state.raw_input == "7.5"
        assert state.slider_percent == 76  # 7.5 / 9.9 = 75.76%
        assert is_submittable(state)

    def test_edit_mode_target_above_new_price(self):
        state = new_state(Decimal("6"), stored_target=Decimal("7.5"))
        assert state.error is TargetPriceError.NOT_BELOW_REFERENCE
        assert state.slider_percent == SLIDER_MAX
        assert not is_submittable(state)

    def test_edit_mode_huge_stored_target(self):
        state = new_state("1", stored_target="1e30")
        assert state.slider_percent == SLIDER_MAX
        assert state.error is TargetPriceError.NOT_BELOW_REFERENCE
        assert not is_submittable(state)

    def test_unusable_reference_becomes_zero(self):
        state = new_state("not a price")
        assert state.reference_price == Decimal("0")


class TestSetFromText:
    def test_scenario_reference_100(self, state):
        state = set_from_text(state, "100")
        assert state.error is TargetPriceError.NOT_BELOW_REFERENCE
        assert not is_submittable(state)

        state = set_from_text(state, "9")
        assert state.error is TargetPriceError.TOO_LOW
        assert not is_submittable(state)

        state = set_from_text(state, "50")
        assert state.error is TargetPriceError.NONE
        assert is_submittable(state)
        assert derived_savings(state) == Savings(amount=Decimal("50"), percent=Decimal("50"))

    def test_valid_text_moves_slider(self, state):
        state = set_from_text(state, "42.4")
        assert state.numeric_value == Decimal("42.4")
        assert state.slider_percent == 42

    def test_slider_rounds_half_up(self, state):
        assert set_from_text(state, "42.5").slider_percent == 43

    def test_invalid_text_keeps_slider(self, state):
        state = set_from_slider(state, 60)
        state = set_from_text(state, "120")
        assert state.slider_percent == 60
        assert state.numeric_value == Decimal("120")

    def test_empty_text_clears_value_without_error(self, state):
        state = set_from_text(state, "120")
        state = set_from_text(state, "")
        assert state.numeric_value is None
        assert state.error is TargetPriceError.NONE
        assert not is_submittable(state)

    def test_non_numeric_text(self, state):
        state = set_from_text(state, "abc")
        assert state.numeric_value is None
        assert state.error is TargetPriceError.INVALID_NUMBER
        assert state.raw_input == "abc"

    def test_text_below_slider_range_is_still_validated(self):
        state = new_state(Decimal("100"))
        state = set_from_text(state, "5")
        assert state.error is TargetPriceError.TOO_LOW

    def test_clamps_slider_but_not_value(self):
        state = new_state(Decimal("100"))
        state = set_from_text(state, "10")
        assert state.slider_percent == SLIDER_MIN
        state = set_from_text(state, "99")
        assert state.slider_percent == SLIDER_MAX
        assert state.numeric_value == Decimal("99")

    def test_state_is_not_mutated(self, state):
        set_from_text(state, "50")
        assert state.raw_input == ""
        assert state.numeric_value is None


class TestSetFromSlider:
    @pytest.mark.parametrize("reference", ["100", "9.9", "37.45", "1288"])
    def test_round_trip(self, reference):
        reference = Decimal(reference)
        for percent in range(SLIDER_MIN, SLIDER_MAX + 1):
            state = set_from_slider(new_state(reference), percent)
            expected = (reference * percent / 100).quantize(Decimal("0.01"))
            assert abs(state.numeric_value - expected) <= Decimal("0.01")
            back = set_from_text(new_state(reference), state.raw_input)
            assert abs(back.slider_percent - percent) <= 1

    def test_text_follows_slider(self, state):
        state = set_from_slider(state, 37)
        assert state.numeric_value == Decimal("37.00")
        assert state.raw_input == "37.00"
        assert state.slider_percent == 37
        assert state.error is TargetPriceError.NONE

    def test_rounds_half_up_to_cents(self):
        state = set_from_slider(new_state(Decimal("9.9")), 15)
        # 9.9 * 0.15 = 1.485
        assert state.numeric_value == Decimal("1.49")

    def test_out_of_range_percent_is_clamped(self, state):
        assert set_from_slider(state, 5).slider_percent == SLIDER_MIN
        assert set_from_slider(state, 100).slider_percent == SLIDER_MAX

    def test_zero_reference(self):
        state = set_from_slider(new_state(Decimal("0")), 50)
        assert state.numeric_value == Decimal("0.00")
        assert state.error is TargetPriceError.INVALID_NUMBER
        assert not is_submittable(state)


class TestPresets:
    def test_four_presets(self):
        assert [p.label for p in DISCOUNT_PRESETS] == ["9折", "8折", "7折", "半价"]
        assert PRESET_TOLERANCE == Decimal("0.01")

    @pytest.mark.parametrize("preset", DISCOUNT_PRESETS, ids=lambda p: p.label)
    def test_preset_sets_all_representations(self, preset):
        reference = Decimal("37.99")
        state = set_from_preset(new_state(reference), preset.discount)
        assert state.numeric_value == preset_price(reference, preset.discount)
        assert state.raw_input == f"{state.numeric_value:.2f}"
        assert state.slider_percent == int((1 - preset.discount) * 100)
        assert state.error is TargetPriceError.NONE

        active = [p for p in DISCOUNT_PRESETS if is_preset_active(state, p)]
        assert active == [preset]
        assert active_preset(state) == preset

    def test_sub_cent_price_highlights_one_preset(self):
        # 8折 and 7折 both round to 0.04 at this price
        state = set_from_preset(new_state(Decimal("0.05")), Decimal("0.2"))
        assert state.numeric_value == Decimal("0.04")
        active = [p.label for p in DISCOUNT_PRESETS if is_preset_active(state, p)]
        assert active == ["8折"]
        assert active_preset(state).label == "8折"

    def test_preset_price_rounding(self):
        assert preset_price(Decimal("9.9"), Decimal("0.3")) == Decimal("6.93")
        assert preset_price(Decimal("19.99"), Decimal("0.5")) == Decimal("10.00")

    def test_typed_price_highlights_preset(self, state):
        state = set_from_text(state, "80.005")
        assert active_preset(state).label == "8折"

    def test_no_preset_active(self, state):
        assert active_preset(state) is None
        assert active_preset(set_from_text(state, "81")) is None

    def test_string_discount(self, state):
        assert set_from_preset(state, "0.2").numeric_value == Decimal("80.00")

    def test_invalid_discount_raises(self, state):
        with pytest.raises(ValueError):
            set_from_preset(state, "half")


class TestApplyEdit:
    def test_dispatch(self, state):
        assert apply_edit(state, TextEdit("50")).numeric_value == Decimal("50")
        assert apply_edit(state, SliderEdit(30)).numeric_value == Decimal("30.00")
        assert apply_edit(state, PresetEdit(Decimal("0.5"))).numeric_value == Decimal("50.00")

    def test_sequence_keeps_representations_consistent(self, state):
        for edit in (TextEdit("70"), SliderEdit(55), PresetEdit(Decimal("0.1")), TextEdit("33.3")):
            state = apply_edit(state, edit)
        assert state.numeric_value == Decimal("33.3")
        assert state.slider_percent == 33
        assert state.raw_input == "33.3"

    def test_unknown_edit(self, state):
        with pytest.raises(TypeError):
            apply_edit(state, "50")


class TestSavingsAndSubmission:
    def test_savings_zero_when_not_submittable(self, state):
        assert derived_savings(state) == Savings()
        assert derived_savings(set_from_text(state, "100")) == Savings()

    def test_savings_percent(self):
        state = set_from_text(new_state(Decimal("9.9")), "7.5")
        savings = derived_savings(state)
        assert savings.amount == Decimal("2.4")
        assert float(savings.percent) == pytest.approx(24.2424, abs=1e-3)

    def test_submission_error_empty(self, state):
        assert submission_error(state) is TargetPriceError.EMPTY
        assert submission_error(set_from_text(state, " ")) is TargetPriceError.EMPTY

    def test_submission_error_non_positive(self, state):
        assert submission_error(set_from_text(state, "0")) is TargetPriceError.EMPTY

    def test_submission_error_passes_validation_error(self, state):
        assert submission_error(set_from_text(state, "abc")) is TargetPriceError.INVALID_NUMBER
        assert submission_error(set_from_text(state, "9")) is TargetPriceError.TOO_LOW

    def test_submission_error_none_when_valid(self, state):
        assert submission_error(set_from_text(state, "50")) is TargetPriceError.NONE

    def test_to_dict(self, state):
        d = set_from_text(state, "50").to_dict()
        assert d["numeric_value"] == 50.0
        assert d["error"] == "none"
        assert d["slider_percent"] == 50


def test_zero_stored_target_starts_fresh():
    state = new_state(Decimal("100"), stored_target=0)
    assert state.numeric_value is None
    assert state.raw_input == ""
