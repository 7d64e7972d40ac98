"""Tunas dashboard CLI application.

Usage:
    tunas club SCSC --search smith --sex F --sort age
    tunas swimmer best 1234567890ABCD
    tunas swimmer history 1234567890ABCD --event "100 FR SCY"
    tunas relay generate SCSC --event 4x100_MEDLEY --exclude 1234567890ABCD
    tunas stats
    tunas config show
"""

from datetime import date
from typing import NoReturn

import typer
from dotenv import load_dotenv

# Load .env file for TUNAS settings
load_dotenv()
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from tunas import bind_context, clear_context, configure_logging
from tunas.client import ApiClientError, TunasClient
from tunas.config import get_settings
from tunas.models import Course, RelayEventType, Sex
from tunas.services.pipeline import Page, SortDirection, SortState, TableQuery
from tunas.services.relay_form import RelayForm
from tunas.services.sessions import ClubSearchSession, SwimmerSearchSession, SwimmerTab
from tunas.services.tables import RESULTS_TABLE, ROSTER_TABLE
from tunas.services.time_codec import format_seconds
from tunas.services.time_series import RenderState
from tunas.storage import clear_last_club_code, load_last_club_code

console = Console()
app = typer.Typer(
    name="tunas",
    help="Swim club rosters, results and relays from the Tunas API",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show info-level logs"),
):
    """Configure logging before any command runs."""
    configure_logging(level=None if verbose else "WARNING")
    clear_context()


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _page_caption(page: Page) -> str:
    if not page.total:
        return "No rows"
    return (
        f"Rows {page.first_row}-{page.last_row} of {page.total} "
        f"(page {page.page_index} of {page.page_count})"
    )


def _direction(desc: bool) -> SortDirection:
    return SortDirection.DESC if desc else SortDirection.ASC


# =============================================================================
# CLUB COMMAND
# =============================================================================


@app.command("club")
def club(
    club_code: str = typer.Argument(None, help="Club code (defaults to the last one used)"),
    search: str = typer.Option("", "--search", "-s", help="Filter by name or ID"),
    sex: Sex = typer.Option(None, "--sex", help="Filter by sex (F/M/X)"),
    sort: str = typer.Option("name", "--sort", help="name, id, sex, age or birthday"),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
):
    """Show a club's swimmer roster."""
    try:
        ROSTER_TABLE.get_field(sort)
    except ValueError as e:
        _fail(str(e))

    session = ClubSearchSession()
    with TunasClient() as client, console.status("Fetching club swimmers..."):
        if club_code:
            session.search(client, club_code)
        elif not session.restore(client):
            session.begin_search()

    if session.error or session.data is None:
        _fail(session.error or "Failed to fetch club data")

    session.query = TableQuery(
        sort=SortState(sort, _direction(desc)),
        search=search,
        category=sex.value if sex else None,
        page=page,
    )
    result = session.page()
    data = session.data

    console.print(f"[bold]{data.club.full_name}[/bold] ({session.club_code})")
    if data.club.location:
        console.print(f"[dim]{data.club.location}[/dim]")

    table = Table(title=f"Swimmers ({len(data.swimmers)})", caption=_page_caption(result))
    table.add_column("Name", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Sex")
    table.add_column("Age")
    table.add_column("Birthday")

    for swimmer in result.items:
        table.add_row(
            swimmer.full_name,
            swimmer.display_id or "-",
            swimmer.sex.value,
            str(swimmer.age_range),
            swimmer.birthday.isoformat() if swimmer.birthday else "-",
        )

    console.print(table)


# =============================================================================
# SWIMMER COMMANDS
# =============================================================================

swimmer_app = typer.Typer(help="Swimmer results", no_args_is_help=True)
app.add_typer(swimmer_app, name="swimmer")


def _load_swimmer(swimmer_id: str, tab: SwimmerTab) -> SwimmerSearchSession:
    bind_context(swimmer_id=swimmer_id)
    session = SwimmerSearchSession()
    session.swimmer_id = swimmer_id
    with TunasClient() as client, console.status("Fetching swimmer data..."):
        session.search(client, tab)
    return session


@swimmer_app.command("best")
def swimmer_best(
    swimmer_id: str = typer.Argument(..., help="USA Swimming ID"),
):
    """Show a swimmer's best time per event."""
    session = _load_swimmer(swimmer_id, SwimmerTab.BEST)
    if session.error or session.best_times is None:
        _fail(session.error or "Failed to fetch swimmer data")

    data = session.best_times
    console.print(f"[bold]{data.swimmer.full_name}[/bold] ({data.swimmer.display_id})")

    table = Table(title=f"Best Times ({len(data.best_times)} events)")
    table.add_column("Event", style="cyan")
    table.add_column("Time", style="green")
    table.add_column("Date")
    table.add_column("Meet")
    table.add_column("Standards", style="yellow")

    for result in data.best_times:
        table.add_row(
            result.event,
            result.time,
            result.date,
            result.meet.name,
            ", ".join(result.time_standards or []) or "-",
        )

    console.print(table)


@swimmer_app.command("history")
def swimmer_history(
    swimmer_id: str = typer.Argument(..., help="USA Swimming ID"),
    search: str = typer.Option("", "--search", "-s", help="Filter by event or meet name"),
    course: Course = typer.Option(None, "--course", "-c", help="Filter by course"),
    sort: str = typer.Option("date", "--sort", help="event, time, course, rank, date or meet"),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
    events: list[str] = typer.Option(None, "--event", "-e", help="Event to chart (repeatable)"),
    all_events: bool = typer.Option(False, "--all", help="Chart every event"),
):
    """Show a swimmer's time history and progression chart."""
    try:
        RESULTS_TABLE.get_field(sort)
    except ValueError as e:
        _fail(str(e))

    session = _load_swimmer(swimmer_id, SwimmerTab.HISTORY)
    if session.history is None:
        _fail(session.error or "Failed to fetch swimmer data")

    session.results_query = TableQuery(
        sort=SortState(sort, _direction(desc)),
        search=search,
        category=course.value if course else None,
        page=page,
    )
    result = session.results_page()
    swimmer = session.history.swimmer
    console.print(f"[bold]{swimmer.full_name}[/bold] ({swimmer.display_id})")

    table = Table(title="Time History", caption=_page_caption(result))
    table.add_column("Date")
    table.add_column("Event", style="cyan")
    table.add_column("Time", style="green")
    table.add_column("Rank")
    table.add_column("Meet")

    for row in result.items:
        table.add_row(
            row.date,
            row.event,
            row.time,
            str(row.rank) if row.rank is not None else "-",
            row.meet.name,
        )

    console.print(table)

    if session.error:
        console.print(f"[yellow]{session.error}[/yellow]")
        return

    selection = session.selection
    try:
        if events:
            selection.deselect_all()
            for event in events:
                selection.toggle(event)
        elif all_events:
            selection.select_all()
    except ValueError as e:
        _fail(str(e))

    _print_chart(session)


def _print_chart(session: SwimmerSearchSession) -> None:
    view = session.chart_view()
    if view is None or view.state == RenderState.NO_DATA:
        console.print("[yellow]No time history to chart[/yellow]")
        return

    console.print()
    console.print(f"[bold]Events[/bold] ({view.selected_count} of {view.total_count} shown)")
    visible = {series.label for series in view.series}
    for label in view.labels:
        color = session.chart.color_of(label)
        marker = "■" if label in visible else "□"
        console.print(f"  [{color}]{marker}[/] {label}")

    if view.state == RenderState.NO_SERIES_SELECTED:
        console.print("[yellow]No events selected[/yellow]")
        return

    chart = Table(title="Time Progression")
    chart.add_column("Date")
    for series in view.series:
        chart.add_column(series.label, style=series.color, justify="right")

    for point in view.points:
        cells = [point.value(series.label) for series in view.series]
        if all(cell is None for cell in cells):
            continue
        chart.add_row(
            point.display_date,
            *(format_seconds(cell) if cell is not None else "" for cell in cells),
        )

    console.print(chart)


# =============================================================================
# RELAY COMMANDS
# =============================================================================

relay_app = typer.Typer(help="Relay generation", no_args_is_help=True)
app.add_typer(relay_app, name="relay")


@relay_app.command("generate")
def relay_generate(
    club_code: str = typer.Argument(..., help="Club code"),
    event_type: RelayEventType = typer.Option(
        RelayEventType.FREE_400, "--event", "-e", help="Relay event"
    ),
    sex: Sex = typer.Option(Sex.FEMALE, "--sex", help="Sex (F/M/X)"),
    course: Course = typer.Option(Course.SCY, "--course", "-c", help="Course"),
    min_age: int = typer.Option(10, "--min-age", help="Minimum age"),
    max_age: int = typer.Option(18, "--max-age", help="Maximum age"),
    relay_date: str = typer.Option(None, "--date", help="Relay date (YYYY-MM-DD, default today)"),
    num_relays: int = typer.Option(1, "--num", "-n", help="Number of relays"),
    exclude: list[str] = typer.Option(None, "--exclude", "-x", help="Swimmer ID to leave out"),
):
    """Generate optimal relay teams for a club."""
    try:
        when = date.fromisoformat(relay_date) if relay_date else None
    except ValueError:
        _fail(f"Invalid date: {relay_date}")

    form = RelayForm(
        event_type=event_type,
        sex=sex,
        course=course,
        relay_date=when,
        num_relays=num_relays,
    )
    form.set_age_bound(0, min_age)
    form.set_age_bound(1, max_age)

    with TunasClient() as client:
        if exclude:
            with console.status("Fetching club swimmers..."):
                try:
                    roster = client.clubs.get_club_swimmers(club_code)
                except ApiClientError as e:
                    _fail(e.message)
            form.set_club(club_code, roster)
            for swimmer_id in exclude:
                error = form.add_excluded(swimmer_id)
                if error:
                    _fail(error)
        else:
            form.set_club(club_code, None)

        try:
            request = form.build_request()
        except ValidationError as e:
            _fail("; ".join(err["msg"] for err in e.errors()))

        with console.status("Generating relays..."):
            try:
                response = client.relays.generate(request)
            except ApiClientError as e:
                _fail(e.message)

    if not response.relays:
        console.print("[yellow]No relays could be generated[/yellow]")
        return

    for index, relay in enumerate(response.relays, start=1):
        table = Table(title=f"Relay {index}: {relay.event} ({relay.total_time or '-'})")
        table.add_column("Leg")
        table.add_column("Swimmer", style="cyan")
        table.add_column("ID", style="dim")
        table.add_column("Time", style="green")

        for leg, (leg_event, swimmer) in enumerate(relay.legs(), start=1):
            table.add_row(
                f"{leg}. {leg_event}",
                swimmer.full_name,
                swimmer.display_id or "-",
                swimmer.best_time or "-",
            )

        console.print(table)
        if relay.time_standards:
            console.print(f"[yellow]Standards: {', '.join(relay.time_standards)}[/yellow]")


# =============================================================================
# STATS COMMAND
# =============================================================================


@app.command("stats")
def stats():
    """Show database row counts."""
    with TunasClient() as client, console.status("Fetching stats..."):
        try:
            data = client.stats.get_stats()
        except ApiClientError as e:
            _fail(e.message)

    table = Table(title="Database Stats")
    table.add_column("Table", style="cyan")
    table.add_column("Rows", justify="right", style="green")
    table.add_row("Clubs", f"{data.num_clubs:,}")
    table.add_row("Swimmers", f"{data.num_swimmers:,}")
    table.add_row("Meets", f"{data.num_meets:,}")
    table.add_row("Meet results", f"{data.num_meet_results:,}")
    console.print(table)


# =============================================================================
# CONFIG COMMANDS
# =============================================================================

config_app = typer.Typer(help="Local configuration", no_args_is_help=True)
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show():
    """Show current settings and the remembered club."""
    settings = get_settings()
    console.print(f"API URL: {settings.api_url}")
    console.print(f"Environment: {settings.environment.value}")
    console.print(f"Page size: {settings.page_size}")
    console.print(f"State file: {settings.state_file}")
    console.print(f"Last club: {load_last_club_code() or '[dim]none[/dim]'}")


@config_app.command("forget-club")
def config_forget_club():
    """Forget the remembered club code."""
    clear_last_club_code()
    console.print("[green]Last club code cleared[/green]")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
