import typer
from pathlib import Path
from typing import NoReturn, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from finance_tracker.config.settings import ConfigLoader
from finance_tracker.domain.enums import TimeWindow, TransactionType
from finance_tracker.exporters.factory import ExporterFactory
from finance_tracker.logging_config import configure_logging
from finance_tracker.repositories.key_value_transaction_repository import KeyValueTransactionRepository
from finance_tracker.services.transaction_service import TransactionService
from finance_tracker.services.transaction_store import TransactionStore
from finance_tracker.storage.key_value import JsonFileKeyValueStore, StorageConfig
from finance_tracker.utils.format import format_date, format_rupiah

app = typer.Typer(
    name="finance-tracker",
    help="Record income and expenses and see where the money went",
    add_completion=False,
)

console = Console()

WINDOW_HELP = "Time window: " + ", ".join(w.value for w in TimeWindow)

class State:
    verbose: bool = False
    service: Optional[TransactionService] = None


state = State()

def build_service(storage_path: Optional[Path] = None) -> TransactionService:
    """Wire storage, repository, store and service from settings"""
    settings = ConfigLoader.load_settings()
    storage_settings = settings.get("storage", {})

    config = StorageConfig(storage_path or storage_settings.get("path", "data/storage.json"))
    repository = KeyValueTransactionRepository(
        JsonFileKeyValueStore(config),
        key=storage_settings.get("key", "keuangan-data"),
    )
    store = TransactionStore(repository)
    store.load()

    return TransactionService(store, window=settings.get("default_filter", TimeWindow.ALL.value))

def _fail(e: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {e}")
    if state.verbose:
        console.print_exception()
    raise typer.Exit(code=1)

@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    ),
    storage: Optional[Path] = typer.Option(
        None,
        "--storage", "-s",
        help="Storage file (defaults to the configured path)",
        dir_okay=False,
    ),
):
    """
    Finance Tracker - Record, filter and export your income and expenses.
    """
    configure_logging(verbose)
    state.verbose = verbose

    if not ExporterFactory.is_locked():
        ExporterFactory.load_exporters_from_config()

    state.service = build_service(storage)

@app.command(name="add")
def add_transaction(
    description: str = typer.Argument(..., help="What the money was for"),
    amount: str = typer.Argument(..., help="Amount in Rupiah, always positive"),
    transaction_type: TransactionType = typer.Option(
        TransactionType.EXPENSE,
        "--type", "-t",
        help="income or expense",
        case_sensitive=False,
    ),
):
    """
    Record a new transaction.

    Examples:
        finance-tracker add "Salary" 5000000 --type income
        finance-tracker add "Lunch" 50000
    """
    try:
        txn = state.service.add(description, amount, transaction_type)
    except Exception as e:
        _fail(e)

    if txn is None:
        console.print("[yellow]Description and a valid amount are required. Nothing saved.[/yellow]")
        raise typer.Exit(code=1)

    color = "green" if txn.type == TransactionType.INCOME else "red"
    console.print(
        f"[bold green]✓[/bold green] Saved #{txn.id}: {txn.description} "
        f"[{color}]{format_rupiah(txn.signed_amount)}[/{color}]"
    )

@app.command(name="remove")
def remove_transaction(
    transaction_id: int = typer.Argument(..., help="Id of the transaction to delete"),
):
    """
    Delete a transaction by id.

    Examples:
        finance-tracker remove 1760862600000
    """
    try:
        removed = state.service.remove(transaction_id)
    except Exception as e:
        _fail(e)

    if removed:
        console.print(f"[bold green]✓[/bold green] Removed #{transaction_id}")
    else:
        console.print(f"[yellow]No transaction with id {transaction_id}[/yellow]")

@app.command(name="summary")
def summary(
    window: Optional[str] = typer.Option(
        None,
        "--filter", "-f",
        help=WINDOW_HELP,
    ),
):
    """
    Show totals and the transaction history for a time window.

    Examples:
        finance-tracker summary
        finance-tracker summary --filter monthly
    """
    try:
        if window is not None:
            state.service.set_filter(window)
        result = state.service.get_summary()
    except Exception as e:
        _fail(e)

    balance_color = "green" if result.balance >= 0 else "red"
    console.print(Panel(
        f"[green]💰 Income:[/green]   {format_rupiah(result.total_income):>22}\n"
        f"[red]💸 Expense:[/red]  {format_rupiah(result.total_expense):>22}\n"
        f"{'─' * 36}\n"
        f"[bold {balance_color}]Balance:[/bold {balance_color}]     {format_rupiah(result.balance):>22}",
        title=f"[bold]Summary ({result.window.value})[/bold]",
        border_style="cyan",
        padding=(1, 2),
    ))

    if result.is_empty:
        console.print("[dim]No transactions.[/dim]")
        return

    txn_table = Table(show_header=True, padding=(0, 1))
    txn_table.add_column("Id", style="dim")
    txn_table.add_column("Date", style="cyan")
    txn_table.add_column("Description", style="white", max_width=40)
    txn_table.add_column("Amount", justify="right")

    for txn in result.transactions:
        if txn.type == TransactionType.EXPENSE:
            amount_str = f"[red]- {format_rupiah(txn.amount)}[/red]"
        else:
            amount_str = f"[green]+ {format_rupiah(txn.amount)}[/green]"

        txn_table.add_row(str(txn.id), format_date(txn.date), txn.description, amount_str)

    console.print(txn_table)

@app.command(name="export")
def export(
    path: Path = typer.Argument(..., help="Destination file", dir_okay=False),
    fmt: str = typer.Option(
        "xlsx",
        "--format", "-F",
        help="Output format (xlsx, pdf, png)",
    ),
    window: Optional[str] = typer.Option(
        None,
        "--filter", "-f",
        help=WINDOW_HELP,
    ),
):
    """
    Export the filtered transactions to a spreadsheet, PDF report or chart.

    Examples:
        finance-tracker export report.xlsx
        finance-tracker export report.pdf --format pdf --filter monthly
        finance-tracker export cashflow.png --format png
    """
    try:
        if window is not None:
            state.service.set_filter(window)
        written = state.service.export(fmt, path)
    except Exception as e:
        _fail(e)

    console.print(f"[bold green]✓[/bold green] Exported to {written}")


def cli_main():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    cli_main()
