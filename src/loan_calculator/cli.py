"""
Interactive Rich CLI for the loan calculator.

Flow:
  1. Banner
  2. Prompt for loan amount, down payment, tenure, rate
  3. Results table + principal/interest proportion bar
  4. Recalculate / reset / quit
"""

import logging
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from loan_calculator.calculator import InvalidInput, chart_slices, format_currency
from loan_calculator.data.limits import (
    CURRENCY_CODE,
    DOWN_PAYMENT_RANGE,
    INTEREST_RATE_RANGE,
    LOAN_AMOUNT_RANGE,
    TERM_YEARS_RANGE,
)
from loan_calculator.models import LoanInputs, LoanResults
from loan_calculator.session import CalculatorSession

console = Console()
err_console = Console(stderr=True, style="bold red")

_PROMPTS = [
    ("principal", "Loan amount", LOAN_AMOUNT_RANGE),
    ("down_payment", "Down payment", DOWN_PAYMENT_RANGE),
    ("term_years", "Tenure (years)", TERM_YEARS_RANGE),
    ("annual_interest_rate_percent", "Interest rate (%)", INTEREST_RATE_RANGE),
]

_BAR_WIDTH = 40


# ── Step 1: Banner ────────────────────────────────────────────────────────────

def show_banner() -> None:
    title = Text("Loan Calculator", style="bold green")
    subtitle = Text(
        f"Fixed-rate monthly installment  |  amounts in {CURRENCY_CODE}", style="dim"
    )
    console.print(Panel(f"{title}\n{subtitle}", expand=False, border_style="green"))
    console.print()


# ── Step 2: Inputs ────────────────────────────────────────────────────────────

def _default_text(field: str, value: float) -> str:
    if field in ("principal", "down_payment"):
        return f"{value:,.0f}"
    return f"{value:g}"


def prompt_inputs(session: CalculatorSession) -> None:
    """Ask for each input, re-prompting until the value parses as a number."""
    console.print("[bold]Loan Parameters[/bold]\n")
    for field, label, bounds in _PROMPTS:
        hint = f"[dim]({_default_text(field, bounds['minimum'])}–{_default_text(field, bounds['maximum'])})[/dim]"
        while True:
            raw = Prompt.ask(
                f"  {label} {hint}",
                default=_default_text(field, getattr(session.inputs, field)),
                console=console,
            )
            try:
                session.update(field, raw)
                break
            except InvalidInput as exc:
                console.print(f"  [red]{exc}[/red]")
    console.print()


# ── Step 3: Results ───────────────────────────────────────────────────────────

def proportion_bar(inputs: LoanInputs, results: LoanResults, width: int = _BAR_WIDTH) -> Text | None:
    """
    Text rendition of the principal/interest pie.
    Returns None when a slice is negative or both are zero.
    """
    (p_label, principal), (i_label, interest) = chart_slices(inputs, results)
    total = principal + interest
    if principal < 0 or interest < 0 or total <= 0:
        return None

    principal_cells = round(width * principal / total)
    bar = Text()
    bar.append("█" * principal_cells, style="green")
    bar.append("█" * (width - principal_cells), style="yellow")
    bar.append(
        f"  {p_label} {principal / total:.1%}  ·  {i_label} {interest / total:.1%}"
    )
    return bar


def show_results(session: CalculatorSession) -> None:
    results = session.results
    if session.error:
        console.print(f"[bold red]{session.error}[/bold red]")
        if session.has_stale_results:
            console.print("[dim]Results below are from the previous calculation.[/dim]")
    if results is None:
        console.print()
        return

    table = Table(title="Loan Summary", border_style="green", show_header=False)
    table.add_column("Item", style="bold")
    table.add_column("Amount", justify="right")
    table.add_row("Monthly Payment", format_currency(results.monthly_payment))
    table.add_row("Total Amount Payable", format_currency(results.total_payment))
    table.add_row("Total Interest", format_currency(results.total_interest))
    console.print(table)

    bar = proportion_bar(session.result_inputs, results)
    if bar is not None:
        console.print(bar)
    else:
        console.print("[dim]Nothing financed to chart.[/dim]")
    console.print()


# ── Main entry point ──────────────────────────────────────────────────────────

@click.command()
@click.option("--amount", type=str, default=None, help="Loan amount (prompt default)")
@click.option("--down-payment", type=str, default=None, help="Down payment (prompt default)")
@click.option("--term", type=str, default=None, help="Tenure in years (prompt default)")
@click.option("--rate", type=str, default=None, help="Annual interest rate in % (prompt default)")
@click.option("-v", "--verbose", is_flag=True, help="Log calculations to stderr.")
def main(
    amount: str | None,
    down_payment: str | None,
    term: str | None,
    rate: str | None,
    verbose: bool,
) -> None:
    """Interactive fixed-rate loan calculator."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    session = CalculatorSession()
    seeds = {
        "principal": amount,
        "down_payment": down_payment,
        "term_years": term,
        "annual_interest_rate_percent": rate,
    }
    for field, raw in seeds.items():
        if raw is None:
            continue
        try:
            session.update(field, raw)
        except InvalidInput as exc:
            err_console.print(f"Invalid option value: {exc}")
            sys.exit(1)

    try:
        show_banner()
        while True:
            prompt_inputs(session)
            session.submit()
            show_results(session)

            action = Prompt.ask(
                "  Next", choices=["again", "reset", "quit"], default="again",
                console=console,
            )
            if action == "quit":
                break
            if action == "reset":
                session.reset()
                console.print("[dim]Inputs cleared.[/dim]\n")

        console.print("\n[bold green]Done.[/bold green]")

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
