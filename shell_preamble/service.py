from pathlib import Path
from typing import Optional, Sequence

from shell_preamble.config import PreambleConfig
from shell_preamble.directories import current_directory, normalize_directory
from shell_preamble.errors import PatternError
from shell_preamble.models import (
    LaunchRequest,
    PatternRule,
    PreambleStatus,
    Resolution,
    RuleStatusRow,
    RuleValidity,
    ShellIdentity,
)
from shell_preamble.pipeline import LaunchPipeline, PreambleFilter
from shell_preamble.repository import IConfigRepository, effective_config
from shell_preamble.resolver import PatternResolver, compile_pattern


class PreambleService:
    def __init__(self, repository: IConfigRepository) -> None:
        self.repository = repository

    @property
    def config_path(self) -> Path:
        return self.repository.config_path

    def load(self) -> PreambleConfig:
        return self.repository.load()

    def effective(self) -> PreambleConfig:
        return effective_config(self.load())

    def _update(self, config: PreambleConfig) -> PreambleConfig:
        self.repository.save(config)
        return config

    def is_enabled(self) -> bool:
        return self.effective().enabled

    def status(self) -> PreambleStatus:
        return PreambleStatus.ENABLED if self.is_enabled() else PreambleStatus.DISABLED

    def set_enabled(self, enabled: bool) -> PreambleConfig:
        return self._update(self.load().with_enabled(enabled))

    def enable(self) -> PreambleConfig:
        return self.set_enabled(True)

    def disable(self) -> PreambleConfig:
        return self.set_enabled(False)

    def set_separator(self, separator: str) -> PreambleConfig:
        return self._update(self.load().with_separator(separator))

    def set_shell(self, path: str, switch: str) -> PreambleConfig:
        return self._update(self.load().with_shell(ShellIdentity(path=path, switch=switch)))

    def add_rule(
        self, pattern: str, commands: Sequence[str], position: Optional[int] = None
    ) -> PreambleConfig:
        compile_pattern(pattern)
        rule = PatternRule(pattern=pattern, commands=tuple(commands))
        return self._update(self.load().with_rule_added(rule, position=position))

    def remove_rule(self, index: int) -> PreambleConfig:
        return self._update(self.load().with_rule_removed(index))

    def list_rule_rows(self) -> list[RuleStatusRow]:
        rows: list[RuleStatusRow] = []
        for index, rule in enumerate(self.load().rules):
            try:
                compile_pattern(rule.pattern)
            except PatternError as exc:
                validity, detail = RuleValidity.INVALID, exc.detail
            else:
                validity, detail = RuleValidity.VALID, ""
            rows.append(
                RuleStatusRow(
                    index=index,
                    pattern=rule.pattern,
                    commands=rule.commands,
                    validity=validity,
                    detail=detail,
                )
            )
        return rows

    def resolve(self, directory: Optional[str] = None) -> Resolution:
        target = normalize_directory(directory) if directory else current_directory()
        return PatternResolver().explain(self.load().rules, target)

    def rewrite(
        self, argv: Sequence[str], directory: Optional[str] = None
    ) -> LaunchRequest:
        config = self.effective()
        target = normalize_directory(directory) if directory else current_directory()
        pipeline = LaunchPipeline()
        pipeline.add(PreambleFilter(lambda: config, directory_source=lambda: target))
        return pipeline.run(LaunchRequest.from_argv(list(argv)))
