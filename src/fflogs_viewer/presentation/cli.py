from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from fflogs_viewer.application.mappers.character_view_mapper import (
    character_url,
    error_message,
    to_encounter_row_view,
)
from fflogs_viewer.domain.models.character import CharacterIdentity


_CONSOLE = Console()
_BORDER_CHARACTER = "yellow"


def _rgb_style(colour: tuple[int, int, int, int]) -> str:
    red, green, blue, _alpha = colour
    return f"rgb({red},{green},{blue})"


def _character_header(character: CharacterIdentity) -> Panel:
    metric = character.loaded_metric.abbreviation if character.loaded_metric else "?"
    loaded = CharacterIdentity(
        first_name=character.loaded_first_name,
        last_name=character.loaded_last_name,
        world_name=character.loaded_world_name,
        region_name=character.region_name,
    )
    header = Table.grid(padding=(0, 1))
    header.add_column(style="bold yellow", justify="right")
    header.add_column(style="white")
    header.add_row("Character", Text(f"{loaded.full_name}@{loaded.world_name}"))
    header.add_row("Metric", Text(metric))
    header.add_row("Profile", Text(character_url(loaded)))
    return Panel.fit(header, title="FF Logs", border_style=_BORDER_CHARACTER)


def render_character(
    character: CharacterIdentity,
    *,
    decimal_digits: int = 0,
    console: Console | None = None,
) -> None:
    console = console or _CONSOLE
    message = error_message(character)
    if message is not None:
        console.print(Text(f"Error: {message}", style="bold red"))
        return
    if not character.is_ready:
        console.print(Text("No logs loaded."))
        return

    console.print(_character_header(character))
    table = Table(show_header=True, header_style="bold yellow")
    table.add_column("Zone", justify="right")
    table.add_column("Fight", justify="right")
    table.add_column("Best", justify="right")
    table.add_column("Median", justify="right")
    table.add_column("Kills", justify="right")
    table.add_column("Job")
    table.add_column("All Stars", justify="right")
    for encounter in character.encounters:
        row = to_encounter_row_view(encounter, decimal_digits=decimal_digits)
        table.add_row(
            str(row.zone_id),
            str(row.encounter_id) if row.encounter_id is not None else "-",
            Text(row.best, style=_rgb_style(row.best_colour)),
            Text(row.median, style=_rgb_style(row.median_colour)),
            row.kills,
            row.job,
            row.all_stars_points,
        )
    console.print(table)
