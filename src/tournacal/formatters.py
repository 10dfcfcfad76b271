from __future__ import annotations

from datetime import datetime

from .calendar_grid import WEEKDAY_LABELS, DayCell, grid_rows, is_selectable
from .models import Tournament
from .timeutil import format_date, format_date_range, format_time, match_instant


def format_calendar(
    title: str,
    cells: list[DayCell],
    highlighted: set[int],
    selected: int | None = None,
) -> str:
    lines = [f"< {title} >", " ".join(f"{label:>4}" for label in WEEKDAY_LABELS)]
    for row in grid_rows(cells):
        parts = []
        for cell in row:
            if not cell.current:
                parts.append(f"({cell.day:>2})")
            elif cell.day == selected and is_selectable(cell, highlighted):
                parts.append(f"[{cell.day:>2}]")
            elif is_selectable(cell, highlighted):
                parts.append(f"*{cell.day:>2} ")
            else:
                parts.append(f" {cell.day:>2} ")
        lines.append(" ".join(parts))
    return "\n".join(lines)


def format_tournaments(
    tournaments: list[Tournament],
    liked: set[int],
    expanded: dict[int, bool],
    now: datetime | None = None,
) -> str:
    if not tournaments:
        return "No sports event"

    lines: list[str] = []
    for tournament in tournaments:
        heart = "♥" if tournament.id in liked else "♡"
        lines.append(
            f"{heart} {tournament.name}\n"
            f"   Sport: {tournament.sport_name or 'Unknown'}\n"
            f"   Date: {format_date_range(tournament, now)}\n"
            f"   Level: {tournament.level or 'N/A'}"
        )
        if tournament.matches and expanded.get(tournament.id):
            lines.extend(build_match_lines(tournament))
    return "\n".join(lines)


def build_match_lines(tournament: Tournament) -> list[str]:
    out: list[str] = []
    for match in tournament.matches:
        instant = match_instant(match, tournament)
        date = format_date(instant) if instant else "TBD"
        time = format_time(instant) if instant else "TBD"
        out.append(
            f"   - {match.team_a} vs {match.team_b} | "
            f"{match.stage or 'N/A'} | {date} {time} | {match.venue or 'N/A'}"
        )
    return out
