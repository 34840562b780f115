from rich.markup import escape
from rich.table import Column, Table

from shell_preamble.config import PreambleConfig
from shell_preamble.models import PreambleStatus, Resolution, RuleStatusRow
from shell_preamble.tui.enums import PREAMBLE_STATUS_STYLE, RULE_VALIDITY_STYLE, UIStyle
from shell_preamble.utils import compact_home_path


class StatusTable:
    @staticmethod
    def summary_block(config: PreambleConfig, status: PreambleStatus, config_path: str) -> Table:
        style = PREAMBLE_STATUS_STYLE.get(status, UIStyle.WHITE.value)
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Status", f"[{style}]{status.value}[/{style}]")
        table.add_row("Shell", escape(f"{config.shell.path} {config.shell.switch}"))
        table.add_row("Separator", escape(repr(config.separator)))
        table.add_row("Rules", str(len(config.rules)))
        table.add_row("Config", escape(compact_home_path(config_path)))
        return table


class RulesTable:
    @staticmethod
    def rules_table(rows: list[RuleStatusRow]) -> Table:
        table = Table(
            Column(header="#", width=4, justify="right"),
            Column(header="Pattern", overflow="fold", max_width=48),
            Column(header="Commands", overflow="fold"),
            Column(header="Status", width=8),
            expand=True,
            header_style="bold",
        )
        for row in rows:
            style = RULE_VALIDITY_STYLE.get(row.validity, UIStyle.WHITE.value)
            status = f"[{style}]{row.validity.value}[/{style}]"
            commands = "\n".join(escape(command) for command in row.commands)
            if row.detail:
                commands = f"{commands}\n[{UIStyle.RED.value}]{escape(row.detail)}[/{UIStyle.RED.value}]".lstrip("\n")
            table.add_row(str(row.index), escape(row.pattern), commands, status)
        return table


class ResolutionTable:
    @staticmethod
    def matched_table(resolution: Resolution) -> Table:
        table = Table(
            Column(header="#", width=4, justify="right"),
            Column(header="Pattern", overflow="fold", max_width=48),
            Column(header="Commands", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for index, rule in resolution.matched:
            table.add_row(
                str(index),
                escape(rule.pattern),
                "\n".join(escape(command) for command in rule.commands),
            )
        return table
