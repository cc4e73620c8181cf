"""
Core loan math: input parsing, validation, fixed-rate annuity payment.

Key conventions:
- Financed amount = principal - down payment. It is NOT validated and may be
  zero (payment 0) or negative (negative payment).
- Arithmetic runs at full float precision; the three results are rounded to
  2 decimal places only when LoanResults is built.
- validate() and calculate() are pure; session.py owns the mutable state.
"""

import math

from loan_calculator.data.limits import (
    CALCULATION_ERROR_MESSAGE,
    CURRENCY_CODE,
    INVALID_INPUT_MESSAGE,
)
from loan_calculator.models import LoanInputs, LoanResults


class LoanCalculatorError(Exception):
    """Base class for errors surfaced to the user as a single message."""

    message = "Loan calculation failed."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail


class InvalidInput(LoanCalculatorError, ValueError):
    """Principal, term or rate is not positive, or a raw value is not a number."""

    message = INVALID_INPUT_MESSAGE


class CalculationError(LoanCalculatorError, ArithmeticError):
    """The annuity formula produced a non-finite payment."""

    message = CALCULATION_ERROR_MESSAGE


def parse_amount(raw: object, field: str) -> float:
    """
    Convert a raw control value (number or text) to a float.

    Whitespace and ',' / '_' group separators are stripped from text.
    Fractional values are kept as-is. Empty, non-numeric, NaN and infinite
    input raise InvalidInput naming the field.
    """
    if isinstance(raw, bool):
        raise InvalidInput(f"{field}: expected a number, got {raw!r}")
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip().replace(",", "").replace("_", "")
        try:
            value = float(text)
        except ValueError:
            raise InvalidInput(f"{field}: {raw!r} is not a number") from None
    if not math.isfinite(value):
        raise InvalidInput(f"{field}: {raw!r} is not a finite number")
    return value


def validate(inputs: LoanInputs) -> None:
    """
    Raise InvalidInput unless principal, term and rate are all positive.
    Down payment is not range-checked.
    """
    if (
        inputs.principal <= 0
        or inputs.annual_interest_rate_percent <= 0
        or inputs.term_years <= 0
    ):
        raise InvalidInput()


def _monthly_annuity_payment(
    financed_amount: float,
    annual_rate_percent: float,
    total_periods: float,
) -> float:
    """
    Standard annuity payment: P * r(1+r)^n / ((1+r)^n - 1).
    Raises CalculationError when the result is not a finite number.
    """
    r = annual_rate_percent / 100 / 12
    try:
        growth = (1 + r) ** total_periods
        payment = financed_amount * (r * growth) / (growth - 1)
    except (ZeroDivisionError, OverflowError) as exc:
        raise CalculationError(f"annuity formula failed: {exc}") from exc
    if not math.isfinite(payment):
        raise CalculationError(f"annuity formula returned {payment!r}")
    return payment


def calculate(inputs: LoanInputs) -> LoanResults:
    """
    Validate inputs and derive the fixed monthly installment and lifetime totals.
    """
    validate(inputs)

    total_periods = inputs.term_years * 12
    monthly_payment = _monthly_annuity_payment(
        inputs.financed_amount,
        inputs.annual_interest_rate_percent,
        total_periods,
    )
    total_payment = monthly_payment * total_periods
    total_interest = total_payment - inputs.financed_amount

    return LoanResults(
        monthly_payment=round(monthly_payment, 2),
        total_interest=round(total_interest, 2),
        total_payment=round(total_payment, 2),
    )


def chart_slices(inputs: LoanInputs, results: LoanResults) -> list[tuple[str, float]]:
    """Principal vs. interest slices for the proportion chart."""
    return [
        ("Principal", inputs.financed_amount),
        ("Interest", results.total_interest),
    ]


def format_currency(value: float, code: str = CURRENCY_CODE) -> str:
    """Format as 'UGX 1,234,567' — currency code, grouped, no minor units."""
    amount = f"{abs(value):,.0f}"
    if round(value) < 0:
        return f"-{code} {amount}"
    return f"{code} {amount}"
