"""Dashboard commands for Invers Wealth CLI.

Shows live simulated prices, contribution totals, and goal progress.
"""

import click
from rich.console import Group
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from invers.app import InversApp
from invers.cli.session import console, format_currency, get_app
from invers.stats import DAILY_BTC_AMOUNT, DAILY_GOLD_AMOUNT, YEARLY_GOAL_DAYS


def render_dashboard(app: InversApp) -> Group:
    """Build the dashboard renderable for the current state."""
    quote = app.quote
    stats = app.stats()

    prices = Table(title="Live Prices (simulated)", show_header=True, header_style="bold cyan")
    prices.add_column("Asset", style="bold")
    prices.add_column("Price", justify="right")
    prices.add_column("Invested", justify="right")
    prices.add_column("Holdings", justify="right")
    prices.add_row(
        "Bitcoin",
        f"₹{quote.btc:,.2f}",
        format_currency(stats.invested_btc),
        f"{stats.units_btc:.8f} BTC",
    )
    prices.add_row(
        "Gold",
        f"₹{quote.gold:,.2f}/g",
        format_currency(stats.invested_gold),
        f"{stats.units_gold:.4f} g",
    )

    goals = Table.grid(padding=(0, 2))
    goals.add_column()
    goals.add_column()
    goals.add_column(justify="right")
    for label, daily in (("Bitcoin Goal", DAILY_BTC_AMOUNT), ("Gold Goal", DAILY_GOLD_AMOUNT)):
        goals.add_row(
            f"{label} (Daily ₹{daily})",
            ProgressBar(total=YEARLY_GOAL_DAYS, completed=min(stats.total_days, YEARLY_GOAL_DAYS), width=30),
            f"{stats.total_days}/{YEARLY_GOAL_DAYS} days",
        )

    header = (
        f"[bold]{app.profile.name}[/bold]  [dim]Portfolio Owner[/dim]\n"
        f"Days invested: [green]{stats.total_days}[/green]   "
        f"Goal: [cyan]{stats.goal_progress:.0%}[/cyan]"
    )
    return Group(
        Panel(header, border_style="green" if app.theme.color_key == "green" else "magenta"),
        prices,
        Panel(goals, title="[bold]Yearly Goals[/bold]", border_style="dim"),
    )


@click.command()
def status() -> None:
    """Show the portfolio dashboard.

    \b
    Examples:
      invers status
    """
    try:
        app = get_app()
        console.print(render_dashboard(app))
    except Exception as e:
        console.print(Panel(
            f"[red]Failed to load dashboard:[/red]\n\n{str(e)}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)


@click.command()
def live() -> None:
    """Watch live prices and run the daily reminder.

    Prices update every few seconds. If reminders are enabled, the
    reminder fires here at its set time. Press Ctrl+C to stop.

    \b
    Examples:
      invers live
    """
    from rich.live import Live

    app = get_app()
    try:
        app.start()
        console.print(f"[dim]Reminder: {app.scheduler.state.value.replace('_', ' ')} "
                      f"at {app.scheduler.settings.time}[/dim]\n")
        with Live(render_dashboard(app), refresh_per_second=1, console=console) as live_display:
            app.loop.run_forever(on_cycle=lambda: live_display.update(render_dashboard(app)))
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped watching.[/dim]")
    except Exception as e:
        console.print(Panel(
            f"[red]Live view failed:[/red]\n\n{str(e)}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)
    finally:
        app.stop()
