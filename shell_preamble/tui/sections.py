import shlex
from typing import Optional, Sequence

from rich.panel import Panel
from rich.syntax import Syntax

from shell_preamble.tui.enums import UIStyle


class UISection:
    @staticmethod
    def wrap(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
        return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))

    @staticmethod
    def note(title: str, body: str, style: str) -> Panel:
        return Panel(body, title=title, border_style=style, padding=(0, 1))

    @staticmethod
    def command(title: str, argv: Sequence[str], style: str, subtitle: Optional[str] = None) -> Panel:
        body = Syntax(shlex.join(argv), "bash", word_wrap=True, background_color="default")
        return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))
