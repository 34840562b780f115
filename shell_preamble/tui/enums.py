from enum import Enum

from shell_preamble.models import PreambleStatus, RuleValidity


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    DIM = "dim"
    WHITE = "white"


RULE_VALIDITY_STYLE = {
    RuleValidity.VALID: UIStyle.GREEN.value,
    RuleValidity.INVALID: UIStyle.RED.value,
}

PREAMBLE_STATUS_STYLE = {
    PreambleStatus.ENABLED: UIStyle.GREEN.value,
    PreambleStatus.DISABLED: UIStyle.YELLOW.value,
}
