from shell_preamble.tui.renderers import PreambleConsoleUI

__all__ = ["PreambleConsoleUI"]
