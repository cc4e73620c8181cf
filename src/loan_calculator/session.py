"""
View-owned calculator state: four inputs, the derived results, the last error.

State flow:
  NoResult  --submit ok-->  HasResult
  HasResult --submit ok-->  HasResult   (results replaced as a whole)
  any       --reset-->      NoResult
A failed submit only records the error; inputs and earlier results stay.
"""

import logging

from loan_calculator.calculator import LoanCalculatorError, calculate, parse_amount
from loan_calculator.models import LoanInputs, LoanResults

logger = logging.getLogger(__name__)

INPUT_FIELDS = (
    "principal",
    "down_payment",
    "term_years",
    "annual_interest_rate_percent",
)


class CalculatorSession:
    """
    Mutable state for one view session.

    results is None until a submit succeeds; error is None unless the most
    recent submit failed.
    """

    def __init__(self, inputs: LoanInputs | None = None) -> None:
        self.inputs = inputs if inputs is not None else LoanInputs()
        self.results: LoanResults | None = None
        # Inputs that produced results; stays with them after a failed submit
        self.result_inputs: LoanInputs | None = None
        self.error: str | None = None

    # ── Input updates ─────────────────────────────────────────────────────────

    def update(self, field: str, raw: object) -> float:
        """
        Parse a raw control value and store it on the named input.
        Raises InvalidInput (state untouched) when the value is not a number.
        """
        if field not in INPUT_FIELDS:
            raise KeyError(f"unknown input field {field!r}")
        value = parse_amount(raw, field)
        self.inputs = self.inputs.model_copy(update={field: value})
        return value

    # ── Actions ───────────────────────────────────────────────────────────────

    def submit(self) -> LoanResults | None:
        """
        Validate and calculate from the current inputs.

        On success the results are replaced and the error cleared. On failure
        the user-facing message is recorded and None is returned.
        """
        try:
            results = calculate(self.inputs)
        except LoanCalculatorError as exc:
            self.error = exc.message
            logger.warning("Calculation rejected (%s): %s", type(exc).__name__, exc)
            return None

        self.results = results
        self.result_inputs = self.inputs
        self.error = None
        logger.info(
            "Calculated monthly payment %.2f over %g years at %g%% on %.2f financed",
            results.monthly_payment,
            self.inputs.term_years,
            self.inputs.annual_interest_rate_percent,
            self.inputs.financed_amount,
        )
        return results

    def reset(self) -> None:
        """Zero every input and clear results and error."""
        self.inputs = LoanInputs.zero()
        self.results = None
        self.result_inputs = None
        self.error = None
        logger.debug("Calculator reset")

    # ── Queries ───────────────────────────────────────────────────────────────

    @property
    def has_result(self) -> bool:
        return self.results is not None

    @property
    def has_stale_results(self) -> bool:
        """True when earlier results are still held next to a newer error."""
        return self.results is not None and self.error is not None
