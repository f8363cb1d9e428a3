import typer
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from sling_activity.domain.models import ActivityRecord
from sling_activity.services.activity_service import ActivityService
from sling_activity.utils.logging_config import setup_logging

app = typer.Typer(
    name="sling-activity",
    help="Classify and describe activity feed records",
    add_completion=False,
)

console = Console()

class State:
    verbose: bool = False
    service: Optional[ActivityService] = None


state = State()

@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    )
):
    """
    Sling Activity - Classify feed records and explain them in plain words.
    """
    setup_logging(level="DEBUG" if verbose else "WARNING")

    if state.service is None:
        state.service = ActivityService()

    state.verbose = verbose


@app.command(name="describe")
def describe(
    title_right: str = typer.Argument(
        ...,
        help="Signed amount, e.g. -£100.00",
    ),
    avatar: str = typer.Option("", "--avatar", "-a", help="Avatar identifier"),
    title_left: str = typer.Option("", "--title", "-t", help="Counterparty or merchant name"),
    subtitle_left: str = typer.Option("", "--subtitle", "-s", help="Subtitle text"),
    subtitle_right: str = typer.Option("", "--detail", "-d", help="Secondary annotation, e.g. '+0.50 AMZN'"),
):
    """
    Describe a single activity record.

    Examples:
        sling-activity describe -a boots.com -t Boots -s "Card payment" -- -£100.00
        sling-activity describe +£50.00 -a StockApple -t Apple -d "+0.50 AAPL"
    """
    try:
        record = ActivityRecord(
            avatar=avatar,
            title_left=title_left,
            subtitle_left=subtitle_left,
            title_right=title_right,
            subtitle_right=subtitle_right,
        )
        description = state.service.describe(record)

        details = (
            f"[bold]{description.headline}[/bold]\n\n"
            f"Type:     {description.type.value}\n"
            f"Category: {description.category.name} ({description.category.icon})"
        )
        if description.is_subscription:
            details += "\nSubscription: yes"
        if description.actions:
            details += f"\nActions:  {', '.join(description.actions)}"
        if state.verbose:
            details += f"\n\n[dim]Matched {state.service.classifier.explain(record)}[/dim]"

        console.print(Panel.fit(details, border_style="cyan"))

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if state.verbose:
            console.print_exception()
        raise typer.Exit(code=1)


@app.command(name="classify")
def classify_feed(
    filepath: Path = typer.Argument(
        ...,
        help="Path to an activity feed CSV",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    limit: int = typer.Option(
        25,
        "--limit", "-n",
        help="Maximum number of rows to show",
        min=1,
    ),
):
    """
    Classify every record in an activity feed CSV.

    Examples:
        sling-activity classify feed.csv
        sling-activity classify feed.csv --limit 50
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Classifying activity...", total=None)

            result = state.service.import_feed(filepath)

            progress.update(task, completed=True)

        console.print(f"\n[bold]Found {result.total_records} records[/bold]")

        if not result.descriptions:
            console.print(Panel(
                "[yellow]No records found in this feed[/yellow]",
                title="Empty Feed",
                border_style="yellow"
            ))
            return

        table = Table(title=f"Activity (first {min(limit, result.total_records)})")
        table.add_column("Date", style="cyan")
        table.add_column("Counterparty", style="white", max_width=30)
        table.add_column("Type", style="magenta")
        table.add_column("Category", style="dim")
        table.add_column("Headline", style="white")

        for description in result.descriptions[:limit]:
            record = description.record
            amount_color = "red" if record.is_outgoing else "green"
            table.add_row(
                record.formatted_date_short or "—",
                record.title_left,
                description.type.value,
                description.category.name,
                f"[{amount_color}]{description.headline}[/{amount_color}]",
            )

        console.print(table)

        if result.total_records > limit:
            console.print(f"\n[dim]Showing {limit} of {result.total_records} records[/dim]")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if state.verbose:
            console.print_exception()
        raise typer.Exit(code=1)


@app.command(name="summary")
def summary(
    filepath: Path = typer.Argument(
        ...,
        help="Path to an activity feed CSV",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
):
    """
    Summarize money in, money out and spending by category.

    Examples:
        sling-activity summary feed.csv
    """
    try:
        result = state.service.import_feed(filepath)
        feed_summary = state.service.summarize(result.descriptions)

        if feed_summary.total_records == 0:
            console.print(Panel(
                "[yellow]No records found in this feed[/yellow]",
                title="Empty Summary",
                border_style="yellow"
            ))
            return

        summary_text = (
            f"[bold]Records:[/bold] {feed_summary.total_records}\n\n"
            f"[red]💸 Out:[/red]  {feed_summary.total_out:>10,.2f}\n"
            f"[green]💰 In:[/green]   {feed_summary.total_in:>10,.2f}\n"
            f"{'─' * 26}\n"
        )

        if feed_summary.net_flow >= 0:
            summary_text += f"[bold green]📈 Net:[/bold green]  {feed_summary.net_flow:>10,.2f}"
        else:
            summary_text += f"[bold red]📉 Net:[/bold red]  {feed_summary.net_flow:>10,.2f}"

        console.print(Panel(
            summary_text,
            title="[bold]Activity Summary[/bold]",
            border_style="cyan",
            padding=(1, 2)
        ))

        if feed_summary.spending_by_category:
            console.print(f"\n[bold]Spending by Category[/bold]")

            category_table = Table(show_header=True, box=None, padding=(0, 2))
            category_table.add_column("Category", style="cyan", no_wrap=True)
            category_table.add_column("Amount", justify="right", style="red")
            category_table.add_column("% of Total", justify="right", style="dim")

            for category, amount in feed_summary.top_spending_categories[:10]:
                percentage = (amount / feed_summary.total_out * 100) if feed_summary.total_out > 0 else 0
                category_table.add_row(
                    category,
                    f"{amount:,.2f}",
                    f"{percentage:.1f}%"
                )

            console.print(category_table)

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if state.verbose:
            console.print_exception()
        raise typer.Exit(code=1)


@app.command(name="rules")
def rules():
    """
    Show the active classification and category rule chains.
    """
    console.print("[bold]Classification rules[/bold]")
    console.print(state.service.classifier.get_rule_chain_info())
    console.print("\n[bold]Category rules[/bold]")
    console.print(state.service.category_resolver.get_rule_chain_info())


def cli_main():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    cli_main()
