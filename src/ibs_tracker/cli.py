"""Command-line interface for the IBS tracker."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .models.log import LOG_TYPES, BristolType, LogEntry
from .services import (
    KeyValueStore,
    Logbook,
    LogRepository,
    ReminderService,
    build_chart_data,
    has_enough_data,
    write_export,
)
from .services.charting import sparkline
from .utils.config import get_settings
from .utils.dates import format_display, format_short_date
from .utils.exceptions import IbsTrackerError, StressAlreadyLoggedError
from .utils.logging_config import setup_logging

app = typer.Typer(
    name="ibs-tracker",
    help="IBS Tracker - Log symptoms, food and drink, and daily stress",
    no_args_is_help=True,
)
console = Console()

TYPE_STYLES = {"symptom": "red", "intake": "blue", "stress": "magenta"}


def open_store() -> KeyValueStore:
    """Open the configured store."""
    return KeyValueStore(get_settings().store_path)


def resolve_entry_id(repository: LogRepository, entry_id: str) -> str:
    """Accept a full id or a unique prefix of one."""
    if repository.get(entry_id) is not None:
        return entry_id

    matches = [e.id for e in repository.all() if e.id.startswith(entry_id)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        console.print(f"[red]No entry found with id {entry_id}[/red]")
    else:
        console.print(f"[red]Id prefix {entry_id} matches {len(matches)} entries[/red]")
    raise typer.Exit(1)


def print_entry(entry: LogEntry) -> None:
    """Show one entry in a panel."""
    style = TYPE_STYLES.get(entry.type, "white")
    lines = [entry.summary() or "[dim]No details[/dim]"]
    if entry.notes:
        lines.append(f"[dim]{entry.notes}[/dim]")
    lines.append(f"[dim]id: {entry.id}[/dim]")

    console.print(Panel(
        "\n".join(lines),
        title=f"[{style}]{entry.type.title()}[/{style}] · {format_display(entry.timestamp)}",
    ))


def _save(action, **kwargs) -> None:
    """Run a save handler and report the outcome."""
    editing = bool(kwargs.get("entry_id"))
    with open_store() as store:
        repository = LogRepository.from_store(store)
        if editing:
            kwargs["entry_id"] = resolve_entry_id(repository, kwargs["entry_id"])

        try:
            entry = action(Logbook(repository), **kwargs)
        except StressAlreadyLoggedError as exc:
            console.print(f"[yellow]{exc}[/yellow]")
            console.print("[dim]Come back tomorrow, or edit today's entry with --id.[/dim]")
            raise typer.Exit(1)
        except IbsTrackerError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)

    console.print(f"[green]✓ {'Updated' if editing else 'Saved'} {entry.type} entry[/green]")
    print_entry(entry)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging before any command runs."""
    setup_logging("DEBUG" if verbose else get_settings().log_level)


@app.command()
def symptom(
    bowel_movement: Optional[BristolType] = typer.Option(
        None, "--bm", "-b",
        help="Bowel movement on the Bristol scale (type1-type7)",
    ),
    cramps: int = typer.Option(0, "--cramps", "-c", min=0, max=5, help="Cramps severity (0-5, 0 = none)"),
    bloating: int = typer.Option(0, "--bloating", "-l", min=0, max=5, help="Bloating severity (0-5, 0 = none)"),
    urgency: bool = typer.Option(False, "--urgency", "-u", help="Urgency present"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Additional details"),
    entry_id: Optional[str] = typer.Option(None, "--id", help="Edit the entry with this id"),
    when: Optional[str] = typer.Option(None, "--when", "-w", help="New date/time when editing (YYYY-MM-DDTHH:MM)"),
):
    """Log a symptom, or edit one with --id."""
    _save(
        Logbook.save_symptom,
        entry_id=entry_id,
        when=when,
        bowel_movement=bowel_movement,
        cramps_severity=cramps,
        bloating_severity=bloating,
        urgency=urgency,
        notes=notes,
    )


@app.command()
def intake(
    item: str = typer.Argument(..., help="Food or drink item"),
    quantity: Optional[str] = typer.Option(None, "--quantity", "-q", help="How much, e.g. '1 cup'"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Additional details"),
    entry_id: Optional[str] = typer.Option(None, "--id", help="Edit the entry with this id"),
    when: Optional[str] = typer.Option(None, "--when", "-w", help="New date/time when editing (YYYY-MM-DDTHH:MM)"),
):
    """Log food or drink intake, or edit an entry with --id."""
    _save(
        Logbook.save_intake,
        entry_id=entry_id,
        when=when,
        item=item,
        quantity=quantity,
        notes=notes,
    )


@app.command()
def stress(
    level: int = typer.Argument(..., min=0, max=5, help="Stress level (0 = low, 5 = high)"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Contributing factors or feelings"),
    entry_id: Optional[str] = typer.Option(None, "--id", help="Edit the entry with this id"),
    when: Optional[str] = typer.Option(None, "--when", "-w", help="New date/time when editing (YYYY-MM-DDTHH:MM)"),
):
    """Log today's stress level (once per day), or edit an entry with --id."""
    _save(
        Logbook.save_stress,
        entry_id=entry_id,
        when=when,
        level=level,
        notes=notes,
    )


@app.command(name="list")
def list_entries(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of entries to show"),
    entry_type: Optional[str] = typer.Option(
        None, "--type", "-t",
        help="Only show one type (symptom, intake, stress)",
    ),
):
    """List entries, newest first."""
    if entry_type and entry_type not in LOG_TYPES:
        console.print(f"[red]Unknown type {entry_type}. Choose from: {', '.join(LOG_TYPES)}[/red]")
        raise typer.Exit(1)

    with open_store() as store:
        repository = LogRepository.from_store(store)
        if entry_type:
            entries = repository.query(lambda e: e.type == entry_type)
        else:
            entries = repository.sorted_desc()
        stress_today = repository.stress_logged_today()

    if not entries:
        console.print("[yellow]No entries yet. Start logging![/yellow]")
        raise typer.Exit(0)

    table = Table(title="Activity Log")
    table.add_column("When", style="cyan")
    table.add_column("Type")
    table.add_column("Details")
    table.add_column("Notes", style="dim")
    table.add_column("Id", style="dim")

    for entry in entries[:limit]:
        style = TYPE_STYLES.get(entry.type, "white")
        table.add_row(
            format_display(entry.timestamp),
            f"[{style}]{entry.type}[/{style}]",
            entry.summary(),
            entry.notes or "",
            entry.id[:8],
        )

    console.print(table)
    if not stress_today:
        console.print("[dim]Stress not logged yet today.[/dim]")


@app.command()
def show(
    entry_id: str = typer.Argument(..., help="Entry id or unique prefix"),
):
    """Show a single entry."""
    with open_store() as store:
        repository = LogRepository.from_store(store)
        entry = repository.get(resolve_entry_id(repository, entry_id))

    print_entry(entry)


@app.command()
def delete(
    entry_id: str = typer.Argument(..., help="Entry id or unique prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Delete an entry permanently."""
    with open_store() as store:
        repository = LogRepository.from_store(store)
        entry = repository.get(resolve_entry_id(repository, entry_id))
        print_entry(entry)

        if not yes and not typer.confirm(f"Are you sure you want to delete this {entry.type} log entry?"):
            console.print("[dim]Cancelled[/dim]")
            raise typer.Exit(0)

        Logbook(repository).delete(entry.id)

    console.print("[green]✓ Deleted[/green]")


@app.command()
def chart():
    """Show daily symptom and stress trends."""
    with open_store() as store:
        points = build_chart_data(LogRepository.from_store(store).all())

    if not has_enough_data(points):
        console.print(Panel(
            "Not enough data to display a chart yet.\n"
            "[dim]Log symptoms or stress for at least two different days![/dim]",
            title="Symptom & Stress Trends",
        ))
        raise typer.Exit(0)

    table = Table(title="Symptom & Stress Trends")
    table.add_column("Date", style="cyan")
    table.add_column("Cramps", justify="center", style="red")
    table.add_column("Bloating", justify="center", style="blue")
    table.add_column("Stress", justify="center", style="magenta")

    for point in points:
        table.add_row(
            format_short_date(point.date),
            "-" if point.cramps is None else str(point.cramps),
            "-" if point.bloating is None else str(point.bloating),
            "-" if point.stress is None else str(point.stress),
        )

    console.print(table)
    console.print(f"[red]Cramps  [/red] {sparkline([p.cramps for p in points])}")
    console.print(f"[blue]Bloating[/blue] {sparkline([p.bloating for p in points])}")
    console.print(f"[magenta]Stress  [/magenta] {sparkline([p.stress for p in points])}")


@app.command()
def export(
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o",
        help="Directory for the export file. Defaults to the configured export dir.",
    ),
):
    """Export all entries as a JSON file, oldest first."""
    settings = get_settings()

    with open_store() as store:
        entries = LogRepository.from_store(store).all()

    try:
        path = write_export(entries, output_dir or settings.export_dir, settings.export_prefix)
    except IbsTrackerError as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        raise typer.Exit(0)

    console.print(f"[green]✓ Exported {len(entries)} entries to {path}[/green]")


@app.command()
def remind(
    watch: bool = typer.Option(False, "--watch", help="Keep checking on the configured interval"),
):
    """Check whether the evening stress reminder is due."""
    settings = get_settings()

    def notify(title: str, body: str) -> None:
        console.print(Panel(body, title=f"🔔 {title}", style="magenta"))

    with open_store() as store:
        repository = LogRepository.from_store(store)
        service = ReminderService.from_store(store, repository, settings=settings, notifier=notify)

        if watch:
            console.print(
                f"[dim]Checking every {settings.reminder_interval_minutes} minutes. "
                "Press Ctrl+C to stop.[/dim]"
            )
            try:
                service.watch()
            except KeyboardInterrupt:
                raise typer.Exit(0)
        elif not service.tick():
            console.print("[dim]No reminder due[/dim]")


@app.command()
def status():
    """Show configuration and today's status."""
    settings = get_settings()

    with open_store() as store:
        repository = LogRepository.from_store(store)
        total = len(repository.all())
        stress_today = repository.stress_logged_today()

    table = Table(title="Configuration Status")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Store file", str(settings.store_path.absolute()))
    table.add_row("Entries", str(total))
    table.add_row(
        "Stress logged today",
        "[green]✓ Yes[/green]" if stress_today else "[yellow]Not yet[/yellow]",
    )
    table.add_row(
        "Reminders",
        f"[green]✓ After {settings.reminder_hour}:00[/green]"
        if settings.notifications_enabled else "[yellow]Disabled[/yellow]",
    )
    table.add_row("Export directory", str(settings.export_dir.absolute()))

    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
):
    """Start the web interface."""
    from .web import run

    console.print(f"[green]Starting web interface at http://{host}:{port}[/green]")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    run(host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
