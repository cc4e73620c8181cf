"""
Hardcoded form configuration: slider ranges, starting values, display currency.
Update these values when the product limits change.
"""

from typing import TypedDict

CURRENCY_CODE = "UGX"

# ── Slider ranges ────────────────────────────────────────────────────────────
# Inclusive bounds; step is the slider increment in display units


class SliderRange(TypedDict):
    minimum: float
    maximum: float
    step: float


LOAN_AMOUNT_RANGE: SliderRange = {
    "minimum": 1_000_000,
    "maximum": 100_000_000,
    "step": 100_000,
}

DOWN_PAYMENT_RANGE: SliderRange = {
    "minimum": 0,
    "maximum": 100_000_000,
    "step": 100_000,
}

TERM_YEARS_RANGE: SliderRange = {
    "minimum": 1,
    "maximum": 30,
    "step": 1,
}

INTEREST_RATE_RANGE: SliderRange = {
    "minimum": 1,
    "maximum": 25,
    "step": 0.1,
}

# ── Starting values ──────────────────────────────────────────────────────────

DEFAULT_PRINCIPAL = 50_000_000.0
DEFAULT_DOWN_PAYMENT = 5_000_000.0
DEFAULT_TERM_YEARS = 20.0
DEFAULT_INTEREST_RATE_PERCENT = 8.0

# ── User-facing messages ─────────────────────────────────────────────────────

INVALID_INPUT_MESSAGE = "Please enter positive values for all fields."
CALCULATION_ERROR_MESSAGE = "Invalid calculation. Please check your inputs."
