from rich.console import Console
from rich.markup import escape

from shell_preamble.config import PreambleConfig
from shell_preamble.models import LaunchRequest, PreambleStatus, Resolution, RuleStatusRow
from shell_preamble.tui.enums import UIStyle
from shell_preamble.tui.sections import UISection
from shell_preamble.tui.tables import ResolutionTable, RulesTable, StatusTable
from shell_preamble.utils import compact_home_path


class PreambleConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_status(
        self, config: PreambleConfig, status: PreambleStatus, config_path: str
    ) -> None:
        self.console.print(
            UISection.wrap(
                "shell preamble",
                StatusTable.summary_block(config, status, config_path),
                style=UIStyle.BLUE.value,
            )
        )
        if not config.rules:
            self.console.print(
                UISection.note(
                    "next",
                    "No rules configured.\n"
                    "- shell-preamble rules add '^/path/to/project' 'source env.sh'",
                    style=UIStyle.DIM.value,
                )
            )

    def render_toggle(self, status: PreambleStatus) -> None:
        style = UIStyle.GREEN.value if status == PreambleStatus.ENABLED else UIStyle.YELLOW.value
        self.console.print(
            UISection.note("shell preamble", f"Command rewriting {status.value}.", style=style)
        )

    def render_rules(self, rows: list[RuleStatusRow]) -> None:
        if not rows:
            self.console.print(
                UISection.note("rules", "No rules configured.", style=UIStyle.YELLOW.value)
            )
            return
        self.console.print(
            UISection.wrap("rules", RulesTable.rules_table(rows), style=UIStyle.BLUE.value)
        )

    def render_rule_saved(self, pattern: str, removed: bool = False) -> None:
        verb = "removed" if removed else "added"
        border_style = UIStyle.YELLOW.value if removed else UIStyle.GREEN.value
        self.console.print(
            UISection.note(
                "rule",
                f"Rule {verb}: [bold]{escape(pattern)}[/bold]",
                style=border_style,
            )
        )

    def render_setting_saved(self, name: str, value: str) -> None:
        self.console.print(
            UISection.note(
                "settings",
                f"{name} set to [bold]{escape(value)}[/bold]",
                style=UIStyle.GREEN.value,
            )
        )

    def render_resolution(self, resolution: Resolution) -> None:
        directory = escape(compact_home_path(resolution.directory))
        if not resolution.matched:
            self.console.print(
                UISection.note(
                    "resolve",
                    f"No rules match {directory}",
                    style=UIStyle.YELLOW.value,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "matched rules",
                ResolutionTable.matched_table(resolution),
                style=UIStyle.CYAN.value,
                subtitle=directory,
            )
        )
        commands = "\n".join(escape(command) for command in resolution.commands)
        self.console.print(
            UISection.note("setup commands", commands, style=UIStyle.GREEN.value)
        )

    def render_rewrite(self, original: LaunchRequest, rewritten: LaunchRequest) -> None:
        if rewritten.argv == original.argv:
            self.console.print(
                UISection.command(
                    "rewrite", original.argv, style=UIStyle.DIM.value, subtitle="Unchanged"
                )
            )
            return
        self.console.print(
            UISection.command("rewrite", rewritten.argv, style=UIStyle.GREEN.value)
        )
