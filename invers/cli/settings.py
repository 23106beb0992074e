"""Settings commands for Invers Wealth CLI.

Profile, appearance, and daily reminder configuration.
"""

import mimetypes
from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from invers.cli.session import console, get_app
from invers.models.profile import MAX_IMAGE_BYTES, THEME_COLORS


def _fail(action: str, error: Exception) -> None:
    console.print(Panel(
        f"[red]Failed to {action}:[/red]\n\n{str(error)}",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


@click.command()
@click.option("--name", default=None, help="Display name.")
@click.option(
    "--image",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=f"Profile picture (max {MAX_IMAGE_BYTES // 1000}KB).",
)
@click.option("--clear-image", is_flag=True, help="Remove the profile picture.")
def profile(name: Optional[str], image: Optional[Path], clear_image: bool) -> None:
    """Show or edit your profile.

    \b
    Examples:
      invers profile
      invers profile --name "Asha"
      invers profile --image avatar.png
    """
    try:
        app = get_app()
        if name is not None:
            app.set_profile_name(name)
            console.print(f"[green]✓ Name set to {name}[/green]")
        if image is not None:
            mime_type = mimetypes.guess_type(image.name)[0] or "application/octet-stream"
            if app.set_profile_image(image.read_bytes(), mime_type):
                console.print(f"[green]✓ Profile picture updated from {image.name}[/green]")
            else:
                console.print(
                    f"[yellow]Image is too large. Please select an image under "
                    f"{MAX_IMAGE_BYTES // 1000}KB.[/yellow]"
                )
        if clear_image:
            app.clear_profile_image()
            console.print("[green]✓ Profile picture removed[/green]")
    except Exception as e:
        _fail("update profile", e)

    current = app.profile
    picture = "[green]set[/green]" if current.image else "[dim]none[/dim]"
    console.print(Panel(
        f"Name:    [bold]{current.name}[/bold]\nPicture: {picture}",
        title="[bold]Profile[/bold]",
        border_style="cyan",
    ))


@click.command()
@click.option("--dark/--light", "dark", default=None, help="Dark or light mode.")
@click.option("--color", type=click.Choice(THEME_COLORS), default=None, help="Accent color.")
def theme(dark: Optional[bool], color: Optional[str]) -> None:
    """Show or change appearance.

    \b
    Examples:
      invers theme --dark
      invers theme --color pink
    """
    try:
        app = get_app()
        if dark is not None:
            app.set_dark_mode(dark)
        if color is not None:
            app.set_color_theme(color)
    except Exception as e:
        _fail("update theme", e)

    mode = "dark" if app.theme.dark else "light"
    console.print(f"Theme: [bold]{mode}[/bold] mode, [bold]{app.theme.color_key}[/bold] accent")


@click.group()
def remind() -> None:
    """Daily reminder settings.

    The reminder fires once a day at the set time while
    'invers live' is running.

    \b
    Commands:
      on      - Enable the daily reminder
      off     - Disable the daily reminder
      time    - Set the reminder time (HH:MM)
      test    - Send a test notification now
      status  - Show reminder settings
    """
    pass


@remind.command("on")
def remind_on() -> None:
    """Enable the daily reminder."""
    try:
        app = get_app()
        app.enable_notifications()
    except Exception as e:
        _fail("enable reminders", e)
    console.print(f"[green]✓ Daily reminder enabled at {app.scheduler.settings.time}[/green]")


@remind.command("off")
def remind_off() -> None:
    """Disable the daily reminder."""
    try:
        app = get_app()
        app.disable_notifications()
    except Exception as e:
        _fail("disable reminders", e)
    console.print("[yellow]Daily reminder disabled[/yellow]")


@remind.command("time")
@click.argument("when")
def remind_time(when: str) -> None:
    """Set the reminder time as 24-hour HH:MM.

    \b
    Examples:
      invers remind time 09:00
      invers remind time 21:30
    """
    try:
        app = get_app()
        app.set_notification_time(when)
    except ValueError:
        console.print(f"[red]Invalid time {when!r}. Use 24-hour HH:MM, e.g. 09:00.[/red]")
        raise SystemExit(1)
    except Exception as e:
        _fail("set reminder time", e)
    console.print(f"[green]✓ Reminder time saved: {when}[/green]")
    if not app.scheduler.settings.enabled:
        console.print("[dim]Reminders are off. Run 'invers remind on' to enable them.[/dim]")


@remind.command("test")
def remind_test() -> None:
    """Send a test notification now."""
    try:
        app = get_app()
        delivered = app.test_notification()
    except Exception as e:
        _fail("send test notification", e)
    if delivered:
        return
    if app.scheduler.notifier.permission() == "granted":
        console.print(
            "[yellow]Could not show the notification: it was blocked by the system. "
            "Run with -v for details.[/yellow]"
        )
    else:
        console.print(
            "[yellow]Notifications are not allowed. Set [reminder] permission = \"granted\" "
            "in your config to use this feature.[/yellow]"
        )


@remind.command("status")
def remind_status() -> None:
    """Show reminder settings."""
    try:
        app = get_app()
    except Exception as e:
        _fail("load reminder settings", e)

    table = Table(show_header=False, box=None)
    table.add_column(style="dim")
    table.add_column()
    settings = app.scheduler.settings
    table.add_row("Enabled", "[green]yes[/green]" if settings.enabled else "[red]no[/red]")
    table.add_row("Time", settings.time)
    table.add_row("Permission", app.scheduler.notifier.permission())
    console.print(Panel(table, title="[bold]Daily Reminder[/bold]", border_style="yellow"))
