"""
PyQt6 GUI for the loan calculator.

Layout:
  QMainWindow
  └── QSplitter (horizontal)
      ├── InputPanel    ← four sliders, Calculate / Reset, error label
      └── ResultsPanel  ← payment labels + principal/interest pie

Signal flow:
  InputPanel.input_changed(field, value) → CalculatorSession.update()
  InputPanel.submitted                   → CalculatorSession.submit() → ResultsPanel.refresh()
  InputPanel.reset_requested             → CalculatorSession.reset()  → both panels repainted
"""

import logging
import sys
from dataclasses import dataclass

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QApplication,
    QFormLayout,
    QFrame,
    QLabel,
    QMainWindow,
    QPushButton,
    QSlider,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from loan_calculator.calculator import chart_slices, format_currency
from loan_calculator.data.limits import (
    DOWN_PAYMENT_RANGE,
    INTEREST_RATE_RANGE,
    LOAN_AMOUNT_RANGE,
    TERM_YEARS_RANGE,
    SliderRange,
)
from loan_calculator.models import LoanInputs, LoanResults
from loan_calculator.session import CalculatorSession

logger = logging.getLogger(__name__)

_PRINCIPAL_COLOR = "#163020"
_INTEREST_COLOR = "#304D30"


# ── Slider scaling ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class _SliderScale:
    """
    Maps a float range onto QSlider's integer positions.

    Position i stands for i steps (value = i * step). Sub-unit steps (0.1) are handled
    by dividing instead of multiplying so 8.3 stays 8.3, not 8.300000000000001.
    """

    bounds: SliderRange

    @property
    def _divisor(self) -> int:
        return round(1 / self.bounds["step"]) if self.bounds["step"] < 1 else 0

    def to_value(self, position: int) -> float:
        if self._divisor:
            return position / self._divisor
        return float(position * self.bounds["step"])

    def to_position(self, value: float) -> int:
        if self._divisor:
            return round(value * self._divisor)
        return round(value / self.bounds["step"])

    def configure(self, slider: QSlider) -> None:
        slider.setRange(
            self.to_position(self.bounds["minimum"]),
            self.to_position(self.bounds["maximum"]),
        )
        slider.setSingleStep(1)
        slider.setPageStep(10)


# ── Input panel ───────────────────────────────────────────────────────────────

class InputPanel(QWidget):
    """
    Left-panel loan form.

    Emits input_changed(field, value) as sliders move, submitted when
    Calculate is pressed and reset_requested when Reset is pressed.
    LoanWindow listens to all three.
    """

    input_changed = pyqtSignal(str, float)
    submitted = pyqtSignal()
    reset_requested = pyqtSignal()

    # field name -> (label, range)
    _FIELDS: dict[str, tuple[str, SliderRange]] = {
        "principal": ("Loan Amount", LOAN_AMOUNT_RANGE),
        "down_payment": ("Down Payment", DOWN_PAYMENT_RANGE),
        "term_years": ("Tenure (Years)", TERM_YEARS_RANGE),
        "annual_interest_rate_percent": ("Interest Rate (%)", INTEREST_RATE_RANGE),
    }

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.sliders: dict[str, QSlider] = {}
        self.value_labels: dict[str, QLabel] = {}
        self._scales = {field: _SliderScale(bounds) for field, (_, bounds) in self._FIELDS.items()}
        self._setup_ui()
        self._connect_signals()

    # ── UI construction ───────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        outer = QVBoxLayout(self)
        outer.setContentsMargins(14, 14, 14, 14)
        outer.setSpacing(10)

        title = QLabel("Loan Calculator")
        title.setStyleSheet("font-size: 15px; font-weight: bold;")
        outer.addWidget(title)

        outer.addWidget(self._hline())

        form = QFormLayout()
        form.setRowWrapPolicy(QFormLayout.RowWrapPolicy.WrapAllRows)
        form.setSpacing(8)

        for field, (label, _) in self._FIELDS.items():
            slider = QSlider(Qt.Orientation.Horizontal)
            self._scales[field].configure(slider)
            value_label = QLabel()
            value_label.setAlignment(Qt.AlignmentFlag.AlignRight)

            self.sliders[field] = slider
            self.value_labels[field] = value_label
            form.addRow(f"{label}:", slider)
            form.addRow("", value_label)

        outer.addLayout(form)
        outer.addWidget(self._hline())

        self.calc_btn = QPushButton("Calculate Monthly Payment")
        self.calc_btn.setStyleSheet(
            "QPushButton { font-weight: bold; padding: 7px; }"
            f"QPushButton:hover {{ background: {_INTEREST_COLOR}; color: white; }}"
        )
        outer.addWidget(self.calc_btn)

        self.reset_btn = QPushButton("Reset")
        self.reset_btn.setStyleSheet("QPushButton { padding: 7px; }")
        outer.addWidget(self.reset_btn)

        # Validation error label
        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #cc0000; font-size: 11px;")
        self.error_label.setWordWrap(True)
        outer.addWidget(self.error_label)

        outer.addStretch()

    def _hline(self) -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFrameShadow(QFrame.Shadow.Sunken)
        return line

    # ── Signal wiring ─────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        for field, slider in self.sliders.items():
            slider.valueChanged.connect(
                lambda position, f=field: self._on_slider_moved(f, position)
            )
        self.calc_btn.clicked.connect(lambda: self.submitted.emit())
        self.reset_btn.clicked.connect(lambda: self.reset_requested.emit())

    def _on_slider_moved(self, field: str, position: int) -> None:
        value = self._scales[field].to_value(position)
        self._show_value(field, value)
        self.input_changed.emit(field, value)

    # ── Display ───────────────────────────────────────────────────────────────

    def _show_value(self, field: str, value: float) -> None:
        if field == "term_years":
            text = f"{value:g} years"
        elif field == "annual_interest_rate_percent":
            text = f"{value:g}%"
        else:
            text = format_currency(value)
        self.value_labels[field].setText(text)

    def set_inputs(self, inputs: LoanInputs) -> None:
        """
        Move sliders to match inputs without emitting input_changed.
        Values below a slider's minimum leave the handle at the minimum while
        the label shows the model value.
        """
        for field, slider in self.sliders.items():
            value = getattr(inputs, field)
            slider.blockSignals(True)
            slider.setValue(self._scales[field].to_position(value))
            slider.blockSignals(False)
            self._show_value(field, value)

    def set_error(self, message: str | None) -> None:
        self.error_label.setText(message or "")


# ── Results panel ─────────────────────────────────────────────────────────────

class ProportionChartWidget(QWidget):
    """Two-slice pie: financed principal vs. total interest."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._fig = Figure(constrained_layout=True)
        self._canvas = FigureCanvasQTAgg(self._fig)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.addWidget(self._canvas)

    def refresh(self, inputs: LoanInputs, results: LoanResults | None) -> None:
        """Redraw, or show a placeholder when there is nothing to plot."""
        self._fig.clear()
        ax = self._fig.add_subplot(111)

        if results is None:
            self._placeholder(ax, "Press Calculate to see the breakdown")
            return

        slices = chart_slices(inputs, results)
        values = [v for _, v in slices]
        # pie() cannot draw negative wedges or an all-zero total
        if any(v < 0 for v in values) or sum(values) <= 0:
            self._placeholder(ax, "Nothing financed to chart")
            return

        ax.pie(
            values,
            labels=[label for label, _ in slices],
            colors=[_PRINCIPAL_COLOR, _INTEREST_COLOR],
            autopct="%1.1f%%",
            startangle=90,
            textprops={"fontsize": 9},
        )
        ax.set_title("Principal vs. Interest", fontsize=10)
        self._canvas.draw()

    def _placeholder(self, ax, text: str) -> None:
        ax.axis("off")
        ax.text(0.5, 0.5, text, ha="center", va="center", color="grey")
        self._canvas.draw()


class ResultsPanel(QWidget):
    """
    Right panel: monthly payment, total payable, total interest and the pie.
    Absent results show '-'.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 14, 14, 14)

        self.chart = ProportionChartWidget()
        layout.addWidget(self.chart, stretch=1)

        self.monthly_label = QLabel()
        self.total_payment_label = QLabel()
        self.total_interest_label = QLabel()
        for label in (self.monthly_label, self.total_payment_label, self.total_interest_label):
            label.setStyleSheet(f"font-size: 14px; color: {_PRINCIPAL_COLOR};")
            layout.addWidget(label)

        self.stale_label = QLabel("")
        self.stale_label.setStyleSheet("color: grey; font-size: 11px;")
        layout.addWidget(self.stale_label)

        self.refresh(LoanInputs.zero(), None)

    def refresh(self, inputs: LoanInputs, results: LoanResults | None) -> None:
        def fmt(value: float | None) -> str:
            return format_currency(value) if value is not None else "-"

        self.monthly_label.setText(
            f"Monthly Payment: {fmt(results and results.monthly_payment)}"
        )
        self.total_payment_label.setText(
            f"Total Amount Payable: {fmt(results and results.total_payment)}"
        )
        self.total_interest_label.setText(
            f"Total Interest: {fmt(results and results.total_interest)}"
        )
        self.chart.refresh(inputs, results)
        self.mark_stale(False)

    def mark_stale(self, stale: bool) -> None:
        self.stale_label.setText(
            "Showing the previous calculation; current inputs were not accepted."
            if stale
            else ""
        )


# ── Main window ───────────────────────────────────────────────────────────────

class LoanWindow(QMainWindow):
    def __init__(self, session: CalculatorSession | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Loan Calculator")
        self.setMinimumSize(900, 560)

        self.session = session if session is not None else CalculatorSession()

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.setChildrenCollapsible(False)

        self.input_panel = InputPanel()
        self.input_panel.setMinimumWidth(320)
        splitter.addWidget(self.input_panel)

        self.results_panel = ResultsPanel()
        splitter.addWidget(self.results_panel)

        splitter.setSizes([380, 520])
        self.setCentralWidget(splitter)

        self.input_panel.set_inputs(self.session.inputs)
        self.statusBar().showMessage(
            "Adjust the sliders and press Calculate Monthly Payment."
        )

        self.input_panel.input_changed.connect(self._on_input_changed)
        self.input_panel.submitted.connect(self._on_submit)
        self.input_panel.reset_requested.connect(self._on_reset)

    def _on_input_changed(self, field: str, value: float) -> None:
        self.session.update(field, value)
        logger.debug("Slider %s -> %g", field, value)

    def _on_submit(self) -> None:
        """Run the calculation and repaint results or the error."""
        results = self.session.submit()
        self.input_panel.set_error(self.session.error)

        if results is None:
            self.results_panel.mark_stale(self.session.has_stale_results)
            self.statusBar().showMessage(f"Invalid input: {self.session.error}")
            return

        self.results_panel.refresh(self.session.result_inputs, results)
        self.statusBar().showMessage(
            f"Monthly {format_currency(results.monthly_payment)}  |  "
            f"Total {format_currency(results.total_payment)}"
        )

    def _on_reset(self) -> None:
        self.session.reset()
        self.input_panel.set_inputs(self.session.inputs)
        self.input_panel.set_error(None)
        self.results_panel.refresh(self.session.inputs, None)
        self.statusBar().showMessage("Inputs cleared.")


# ── Entry point ───────────────────────────────────────────────────────────────

def main() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    app.setApplicationName("Loan Calculator")
    window = LoanWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
