from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional, Union

from shell_preamble.constants import DEFAULT_SHELL_PATH, DEFAULT_SHELL_SWITCH


class RuleValidity(str, Enum):
    VALID = "valid"
    INVALID = "invalid"


class PreambleStatus(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


@dataclass(frozen=True)
class PatternRule:
    pattern: str
    commands: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence of commands but always store a tuple.
        object.__setattr__(self, "commands", tuple(self.commands))

    def as_dict(self) -> dict[str, Any]:
        return {"pattern": self.pattern, "commands": list(self.commands)}


@dataclass(frozen=True)
class ShellIdentity:
    path: str = DEFAULT_SHELL_PATH
    switch: str = DEFAULT_SHELL_SWITCH

    def as_dict(self) -> dict[str, str]:
        return {"path": self.path, "switch": self.switch}


@dataclass(frozen=True)
class LaunchRequest:
    """A program plus the full argument vector handed to process creation."""

    program: str
    argv: tuple[str, ...] = field(default_factory=tuple)
    cwd: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "argv", tuple(self.argv))

    @classmethod
    def from_argv(
        cls, argv: Union[list[str], tuple[str, ...]], cwd: Optional[str] = None
    ) -> "LaunchRequest":
        if not argv:
            raise ValueError("argv must not be empty")
        return cls(program=argv[0], argv=tuple(argv), cwd=cwd)

    def with_argv(self, argv: Union[list[str], tuple[str, ...]]) -> "LaunchRequest":
        return replace(self, argv=tuple(argv))


@dataclass(frozen=True)
class ShellCommand:
    path: str
    switch: str
    command: str


@dataclass(frozen=True)
class OtherLaunch:
    argv: tuple[str, ...]


LaunchKind = Union[ShellCommand, OtherLaunch]


@dataclass(frozen=True)
class RuleStatusRow:
    index: int
    pattern: str
    commands: tuple[str, ...]
    validity: RuleValidity
    detail: str = ""

    def as_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "pattern": self.pattern,
            "commands": list(self.commands),
            "validity": self.validity.value,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class Resolution:
    directory: str
    matched: tuple[tuple[int, PatternRule], ...]
    commands: tuple[str, ...]

    def as_dict(self) -> dict[str, Any]:
        return {
            "directory": self.directory,
            "matched": [
                {"index": index, **rule.as_dict()} for index, rule in self.matched
            ],
            "commands": list(self.commands),
        }
