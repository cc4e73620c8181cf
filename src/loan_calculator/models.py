"""Pydantic v2 models for the loan calculator."""

from pydantic import BaseModel

from loan_calculator.data.limits import (
    DEFAULT_DOWN_PAYMENT,
    DEFAULT_INTEREST_RATE_PERCENT,
    DEFAULT_PRINCIPAL,
    DEFAULT_TERM_YEARS,
)


class LoanInputs(BaseModel):
    principal: float = DEFAULT_PRINCIPAL                        # Loan amount before down payment
    down_payment: float = DEFAULT_DOWN_PAYMENT                  # Paid up front, not range-checked
    term_years: float = DEFAULT_TERM_YEARS                      # Repayment duration in years
    annual_interest_rate_percent: float = DEFAULT_INTEREST_RATE_PERCENT  # e.g. 8.0 for 8%

    @classmethod
    def zero(cls) -> "LoanInputs":
        """Baseline used by reset: every input at 0."""
        return cls(
            principal=0.0,
            down_payment=0.0,
            term_years=0.0,
            annual_interest_rate_percent=0.0,
        )

    @property
    def financed_amount(self) -> float:
        # May be zero or negative when the down payment covers the principal
        return self.principal - self.down_payment


class LoanResults(BaseModel):
    monthly_payment: float    # Fixed installment, rounded to 2 dp
    total_interest: float     # total_payment - financed amount
    total_payment: float      # monthly_payment * number of months
