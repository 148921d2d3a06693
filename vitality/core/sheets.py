"""
Module for printing creature sheets and combat logs in a formatted way.
"""

from datetime import datetime

from rich.padding import Padding
from rich.table import Table

from vitality.combat.ledger import LedgerEntry
from vitality.core.constants import AffinityKind, AffinityModifier, EntryKind

from .utils import cprint, crule, make_bar


def format_calculation(entry: LedgerEntry) -> str:
    """
    Describes how the affinities turned the requested magnitude into the
    applied one.

    Args:
        entry (LedgerEntry): The entry to describe.

    Returns:
        str: The calculation, with rich markup.

    """
    if entry.modifier == AffinityModifier.IMMUNE:
        return f"{entry.modifier.emoji} {entry.modifier.colorize('IMMUNE')} (0 dmg)"
    if entry.modifier in (AffinityModifier.RESISTANT, AffinityModifier.VULNERABLE):
        label = "RESISTED" if entry.modifier == AffinityModifier.RESISTANT else "VULNERABLE"
        return (
            f"{entry.modifier.emoji} {entry.modifier.colorize(label)} "
            f"({entry.original_magnitude} → {entry.magnitude})"
        )
    if entry.kind == EntryKind.DAMAGE:
        return f"[dim]{entry.original_magnitude} applied[/]"
    return ""


def format_log_entry(
    entry: LedgerEntry,
    show_time: bool = True,
    show_tag: bool = True,
    show_delta: bool = True,
    show_calculation: bool = True,
    show_remaining: bool = True,
) -> str:
    """
    Formats a single combat log entry as one line of rich markup.

    Args:
        entry (LedgerEntry): The entry to format.
        show_time (bool): Include the time of the entry.
        show_tag (bool): Include the damage tag.
        show_delta (bool): Include the signed magnitude.
        show_calculation (bool): Include the affinity calculation.
        show_remaining (bool): Include the HP before and after.

    Returns:
        str: The formatted line.

    """
    parts: list[str] = []
    if show_time:
        stamp = datetime.fromtimestamp(entry.timestamp / 1000).strftime("%H:%M:%S")
        parts.append(f"[dim]{stamp}[/]")
    if show_tag:
        parts.append(entry.kind.colorize(entry.tag.upper()))
    if show_delta:
        sign = "-" if entry.kind == EntryKind.DAMAGE else "+"
        parts.append(entry.kind.colorize(f"{sign}{entry.magnitude}"))
    if show_calculation:
        calculation = format_calculation(entry)
        if calculation:
            parts.append(calculation)
    if show_remaining:
        parts.append(f"[dim]{entry.prev_hp} → {entry.new_hp}[/]")
    return " ".join(parts)


def print_combat_log(entries: list[LedgerEntry] | tuple[LedgerEntry, ...], padding: int = 2) -> None:
    """
    Prints a combat log, oldest entry first.

    Args:
        entries: The entries to print.
        padding (int): Left padding for the output. Defaults to 2.

    """
    crule("Chronicle", style="bold yellow")
    if not entries:
        cprint(Padding("[italic dim]The chronicle is empty.[/]", (0, padding)))
        return
    for entry in entries:
        cprint(Padding(format_log_entry(entry), (0, padding)))


def print_vitality_sheet(creature) -> None:
    """
    Prints the HP bar, the delayed sprite state, the condition and the
    affinities of a creature.

    Args:
        creature (Creature): The creature to display.

    """
    projection = creature.projection()
    crule(f"[bold]{creature.name}[/]", style="bold green")

    table = Table(show_header=False, pad_edge=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row(
        "HP",
        f"{make_bar(projection.bar_hp, projection.total_hp, 20, 'bold red')} "
        f"{projection.bar_hp}/{projection.total_hp}",
    )
    table.add_row(
        "Sprite",
        f"{make_bar(projection.sprite_hp, projection.total_hp, 20, 'bold magenta')} "
        f"{projection.sprite_hp}/{projection.total_hp} "
        f"[dim]({projection.state.display_name})[/]",
    )
    if projection.active_effect_category:
        table.add_row(
            "Effect",
            f"[{projection.flash_color}]{projection.active_effect_category}[/]",
        )
    table.add_row("Condition", f"[italic]{creature.condition()}[/]")
    affinities = creature.ledger.affinities
    for kind in AffinityKind:
        tags = sorted(affinities.get(kind))
        table.add_row(kind.display_name, ", ".join(tags) if tags else "[dim]-[/]")
    cprint(Padding(table, (0, 2)))

    for token in creature.feedback_tokens():
        cprint(Padding(f"[bold]{token.text}[/]", (0, 4)))
