"""
User interface module for the vitality tracker.

Provides a console front-end to drive a single creature: apply damage or
healing with a damage tag, undo, restore, and inspect the sheet and log.
"""

from prompt_toolkit import ANSI, PromptSession
from prompt_toolkit.completion import WordCompleter
from rich.table import Table

from vitality.character.creature import Creature
from vitality.core.constants import GENERIC_TAG, HEALING_TAG
from vitality.core.sheets import format_log_entry, print_combat_log, print_vitality_sheet
from vitality.core.utils import ccapture, cprint

COMMANDS = ["dmg", "heal", "undo", "restore", "log", "sheet", "tags", "help", "quit"]


class CommandInterpreter:
    """
    Turns command lines into creature actions.

    Kept separate from the prompt loop so the commands can be exercised
    without a terminal.
    """

    def __init__(self, creature: Creature) -> None:
        self.creature = creature

    def tags(self) -> list[str]:
        return self.creature.classifier.catalog.all_tags()

    def resolve_tag(self, raw: str | None) -> str | None:
        """Matches a tag case-insensitively against the catalog."""
        if raw is None:
            return None
        for tag in self.tags():
            if tag.lower() == raw.lower():
                return tag
        return None

    def execute(self, line: str) -> str | None:
        """
        Runs one command.

        Args:
            line (str): The command line typed by the user.

        Returns:
            str | None:
                A message to print, or None when the user asked to quit.

        """
        words = line.split()
        if not words:
            return ""
        command, args = words[0].lower(), words[1:]

        if command in ("q", "quit", "exit"):
            return None
        if command == "dmg":
            if not args:
                return "[red]Usage: dmg <amount> [tag][/]"
            tag = GENERIC_TAG
            if len(args) > 1:
                tag = self.resolve_tag(args[1])
                if tag is None:
                    return f"[red]Unknown damage type '{args[1]}'[/]"
            entry = self.creature.damage(args[0], tag)
            if entry is None:
                return f"[yellow]Ignored amount '{args[0]}'[/]"
            return format_log_entry(entry, show_time=False)
        if command == "heal":
            if not args:
                return "[red]Usage: heal <amount>[/]"
            entry = self.creature.heal(args[0], HEALING_TAG)
            if entry is None:
                return f"[yellow]Ignored amount '{args[0]}'[/]"
            return format_log_entry(entry, show_time=False)
        if command == "undo":
            if self.creature.undo():
                return "[green]Last action reverted.[/]"
            return "[yellow]Nothing to undo.[/]"
        if command == "restore":
            entry = self.creature.restore_to_full()
            return format_log_entry(entry, show_time=False)
        if command == "log":
            print_combat_log(self.creature.ledger.log)
            return ""
        if command == "sheet":
            print_vitality_sheet(self.creature)
            return ""
        if command == "tags":
            return self.tag_table()
        if command == "help":
            return self.help_text()
        return f"[red]Unknown command '{command}'. Type 'help'.[/]"

    def tag_table(self) -> str:
        """Renders the damage catalog as a table."""
        catalog = self.creature.classifier.catalog
        table = Table(title="Damage Types", pad_edge=False)
        table.add_column("Category", style="bold")
        table.add_column("Tags")
        for category in catalog.categories():
            tags = ", ".join(
                f"[{damage_type.color}]{damage_type.name}[/]"
                for damage_type in category.damage_types
            )
            table.add_row(category.category_name, tags)
        return ccapture(table)

    @staticmethod
    def help_text() -> str:
        return (
            "[bold]Commands[/]\n"
            "  dmg <amount> [tag]  apply damage\n"
            "  heal <amount>       apply healing\n"
            "  undo                revert the last action\n"
            "  restore             heal back to full\n"
            "  log                 show the combat log\n"
            "  sheet               show HP, sprite state and affinities\n"
            "  tags                list damage types\n"
            "  quit                leave"
        )


def run_session(creature: Creature) -> None:
    """Interactive loop reading commands until the user quits."""
    interpreter = CommandInterpreter(creature)
    session: PromptSession = PromptSession(
        completer=WordCompleter(COMMANDS + interpreter.tags(), ignore_case=True)
    )
    cprint(interpreter.help_text())
    while True:
        creature.tick()
        try:
            line = session.prompt(ANSI(f"\n{creature.name} > "))
        except (EOFError, KeyboardInterrupt):
            break
        creature.tick()
        message = interpreter.execute(line)
        if message is None:
            break
        if message:
            cprint(message)
