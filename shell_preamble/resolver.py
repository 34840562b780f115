"""Match a directory against ordered pattern rules."""

import functools
import re
from typing import Sequence

from shell_preamble.errors import PatternError
from shell_preamble.models import PatternRule, Resolution


@functools.lru_cache(maxsize=256)
def _compiled(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    try:
        return _compiled(pattern)
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc


def rule_matches(rule: PatternRule, directory: str) -> bool:
    """Unanchored search; a rule anchors itself with ``^`` or ``$``."""
    return compile_pattern(rule.pattern).search(directory) is not None


class PatternResolver:
    def matching_rules(
        self, rules: Sequence[PatternRule], directory: str
    ) -> list[tuple[int, PatternRule]]:
        return [
            (index, rule)
            for index, rule in enumerate(rules)
            if rule_matches(rule, directory)
        ]

    def resolve(self, rules: Sequence[PatternRule], directory: str) -> list[str]:
        commands: list[str] = []
        for _, rule in self.matching_rules(rules, directory):
            commands.extend(rule.commands)
        return commands

    def explain(self, rules: Sequence[PatternRule], directory: str) -> Resolution:
        matched = self.matching_rules(rules, directory)
        commands: list[str] = []
        for _, rule in matched:
            commands.extend(rule.commands)
        return Resolution(
            directory=directory, matched=tuple(matched), commands=tuple(commands)
        )


def resolve(rules: Sequence[PatternRule], directory: str) -> list[str]:
    return PatternResolver().resolve(rules, directory)


def validate_rules(rules: Sequence[PatternRule]) -> list[PatternError]:
    errors: list[PatternError] = []
    for rule in rules:
        try:
            compile_pattern(rule.pattern)
        except PatternError as exc:
            errors.append(exc)
    return errors
