"""
Smoke and behaviour tests for the PyQt6 window, using offscreen Qt rendering.
"""

import pytest

from loan_calculator.calculator import calculate
from loan_calculator.data.limits import INVALID_INPUT_MESSAGE
from loan_calculator.models import LoanInputs


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def qt_app():
    """Single QApplication instance for all GUI tests in this module."""
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def window(qt_app):
    from loan_calculator.gui import LoanWindow
    return LoanWindow()


# ── Slider scaling ────────────────────────────────────────────────────────────

class TestSliderScale:
    def test_money_slider_positions(self):
        from loan_calculator.data.limits import LOAN_AMOUNT_RANGE
        from loan_calculator.gui import _SliderScale
        scale = _SliderScale(LOAN_AMOUNT_RANGE)
        assert scale.to_position(50_000_000) == 500
        assert scale.to_value(500) == 50_000_000

    def test_rate_slider_keeps_tenths(self):
        from loan_calculator.data.limits import INTEREST_RATE_RANGE
        from loan_calculator.gui import _SliderScale
        scale = _SliderScale(INTEREST_RATE_RANGE)
        assert scale.to_position(8.3) == 83
        assert scale.to_value(83) == 8.3
        assert scale.to_position(25) == 250


# ── InputPanel ────────────────────────────────────────────────────────────────

class TestInputPanel:
    def test_slider_ranges(self, window):
        sliders = window.input_panel.sliders
        assert (sliders["principal"].minimum(), sliders["principal"].maximum()) == (10, 1000)
        assert (sliders["down_payment"].minimum(), sliders["down_payment"].maximum()) == (0, 1000)
        assert (sliders["term_years"].minimum(), sliders["term_years"].maximum()) == (1, 30)
        assert (
            sliders["annual_interest_rate_percent"].minimum(),
            sliders["annual_interest_rate_percent"].maximum(),
        ) == (10, 250)

    def test_initial_labels(self, window):
        labels = window.input_panel.value_labels
        assert labels["principal"].text() == "UGX 50,000,000"
        assert labels["down_payment"].text() == "UGX 5,000,000"
        assert labels["term_years"].text() == "20 years"
        assert labels["annual_interest_rate_percent"].text() == "8%"

    def test_slider_updates_session(self, window):
        window.input_panel.sliders["annual_interest_rate_percent"].setValue(83)
        assert window.session.inputs.annual_interest_rate_percent == 8.3
        assert window.input_panel.value_labels["annual_interest_rate_percent"].text() == "8.3%"

        window.input_panel.sliders["principal"].setValue(123)
        assert window.session.inputs.principal == 12_300_000


# ── Calculate / reset ─────────────────────────────────────────────────────────

class TestLoanWindow:
    def test_no_results_before_calculate(self, window):
        panel = window.results_panel
        assert panel.monthly_label.text() == "Monthly Payment: -"
        assert panel.total_payment_label.text() == "Total Amount Payable: -"
        assert panel.total_interest_label.text() == "Total Interest: -"

    def test_calculate_button(self, window):
        window.input_panel.calc_btn.click()
        expected = calculate(window.session.inputs)
        assert window.session.results == expected
        assert window.results_panel.monthly_label.text().startswith("Monthly Payment: UGX ")
        assert window.input_panel.error_label.text() == ""

    def test_reset_button(self, window):
        window.input_panel.calc_btn.click()
        window.input_panel.reset_btn.click()
        assert window.session.inputs == LoanInputs.zero()
        assert window.session.results is None
        assert window.results_panel.monthly_label.text() == "Monthly Payment: -"
        assert window.input_panel.value_labels["principal"].text() == "UGX 0"
        assert window.input_panel.value_labels["term_years"].text() == "0 years"

    def test_calculate_after_reset_shows_error(self, window):
        window.input_panel.reset_btn.click()
        window.input_panel.calc_btn.click()
        assert window.input_panel.error_label.text() == INVALID_INPUT_MESSAGE
        assert window.session.results is None

    def test_invalid_submit_marks_stale_results(self, window):
        window.input_panel.calc_btn.click()
        shown = window.results_panel.monthly_label.text()
        window.session.update("principal", 0)
        window.input_panel.calc_btn.click()
        assert window.results_panel.monthly_label.text() == shown
        assert window.results_panel.stale_label.text() != ""
        assert window.input_panel.error_label.text() == INVALID_INPUT_MESSAGE


# ── ProportionChartWidget ─────────────────────────────────────────────────────

class TestProportionChartWidget:
    def test_two_wedges(self, qt_app):
        from loan_calculator.gui import ProportionChartWidget
        widget = ProportionChartWidget()
        inputs = LoanInputs()
        widget.refresh(inputs, calculate(inputs))
        assert len(widget._fig.axes) == 1
        assert len(widget._fig.axes[0].patches) == 2

    def test_refresh_clears_previous(self, qt_app):
        from loan_calculator.gui import ProportionChartWidget
        widget = ProportionChartWidget()
        inputs = LoanInputs()
        results = calculate(inputs)
        widget.refresh(inputs, results)
        widget.refresh(inputs, results)
        assert len(widget._fig.axes) == 1

    def test_placeholder_without_results(self, qt_app):
        from loan_calculator.gui import ProportionChartWidget
        widget = ProportionChartWidget()
        widget.refresh(LoanInputs(), None)
        assert len(widget._fig.axes[0].patches) == 0

    @pytest.mark.parametrize("down_payment", [50_000_000, 70_000_000])
    def test_placeholder_when_nothing_financed(self, qt_app, down_payment):
        from loan_calculator.gui import ProportionChartWidget
        widget = ProportionChartWidget()
        inputs = LoanInputs(down_payment=down_payment)
        widget.refresh(inputs, calculate(inputs))
        assert len(widget._fig.axes[0].patches) == 0
