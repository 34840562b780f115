"""Immutable configuration snapshots and their parsing."""

import functools
import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable, Optional

from jsonschema import Draft202012Validator

from shell_preamble.constants import DEFAULT_SEPARATOR
from shell_preamble.errors import InvalidConfigSchemaError, RuleNotFoundError
from shell_preamble.models import PatternRule, ShellIdentity
from shell_preamble.resolver import validate_rules

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.json"


@dataclass(frozen=True)
class PreambleConfig:
    """One configuration snapshot.

    Snapshots are never mutated. Every ``with_*`` method returns a new
    snapshot whose ``version`` is one higher, so a reader holding an older
    snapshot keeps a consistent view while an update is installed.
    """

    rules: tuple[PatternRule, ...] = ()
    separator: str = DEFAULT_SEPARATOR
    shell: ShellIdentity = field(default_factory=ShellIdentity)
    enabled: bool = True
    version: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))

    def _next(self, **changes: Any) -> "PreambleConfig":
        return replace(self, version=self.version + 1, **changes)

    def with_rules(self, rules: Iterable[PatternRule]) -> "PreambleConfig":
        return self._next(rules=tuple(rules))

    def with_rule_added(
        self, rule: PatternRule, position: Optional[int] = None
    ) -> "PreambleConfig":
        rules = list(self.rules)
        if position is None:
            rules.append(rule)
        else:
            if position < 0 or position > len(rules):
                raise RuleNotFoundError(position)
            rules.insert(position, rule)
        return self.with_rules(rules)

    def with_rule_removed(self, index: int) -> "PreambleConfig":
        if index < 0 or index >= len(self.rules):
            raise RuleNotFoundError(index)
        rules = list(self.rules)
        del rules[index]
        return self.with_rules(rules)

    def with_separator(self, separator: str) -> "PreambleConfig":
        return self._next(separator=separator)

    def with_shell(self, shell: ShellIdentity) -> "PreambleConfig":
        return self._next(shell=shell)

    def with_enabled(self, enabled: bool) -> "PreambleConfig":
        return self._next(enabled=enabled)

    def as_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "separator": self.separator,
            "shell": self.shell.as_dict(),
            "rules": [rule.as_dict() for rule in self.rules],
        }


class ConfigStore:
    """Holds the installed snapshot; installing swaps the reference."""

    def __init__(self, config: Optional[PreambleConfig] = None) -> None:
        self._config = config or PreambleConfig()

    def current(self) -> PreambleConfig:
        return self._config

    def install(self, config: PreambleConfig) -> PreambleConfig:
        previous = self._config
        self._config = config
        logger.debug(
            "Installed config version %d (%d rules)", config.version, len(config.rules)
        )
        return previous

    __call__ = current


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


@functools.lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def validate_payload(payload: Any, source: Path) -> None:
    error = next(iter(_validator().iter_errors(payload)), None)
    if error is not None:
        raise InvalidConfigSchemaError(source, format_schema_error(error))


def _as_commands(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


def parse_rules(raw: Any) -> tuple[PatternRule, ...]:
    if raw is None:
        return ()
    if isinstance(raw, dict):
        return tuple(
            PatternRule(pattern=str(pattern), commands=_as_commands(commands))
            for pattern, commands in raw.items()
        )
    return tuple(
        PatternRule(pattern=str(item["pattern"]), commands=_as_commands(item["commands"]))
        for item in raw
    )


def parse_config(payload: Any, source: Path) -> PreambleConfig:
    if payload is None:
        payload = {}
    validate_payload(payload, source)

    shell_raw = payload.get("shell") or {}
    defaults = ShellIdentity()
    config = PreambleConfig(
        rules=parse_rules(payload.get("rules")),
        separator=payload.get("separator", DEFAULT_SEPARATOR),
        shell=ShellIdentity(
            path=shell_raw.get("path", defaults.path),
            switch=shell_raw.get("switch", defaults.switch),
        ),
        enabled=payload.get("enabled", True),
    )

    for error in validate_rules(config.rules):
        logger.warning("%s in %s", error, source)
    return config
