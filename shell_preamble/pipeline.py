"""Ordered pre-launch filters and the shell preamble stage."""

import logging
from typing import Callable, Optional, Protocol

from shell_preamble.config import PreambleConfig
from shell_preamble.constants import PREAMBLE_FILTER_NAME
from shell_preamble.directories import current_directory, normalize_directory
from shell_preamble.errors import DuplicateFilterError
from shell_preamble.models import LaunchRequest
from shell_preamble.resolver import PatternResolver
from shell_preamble.rewriter import CommandRewriter

logger = logging.getLogger(__name__)

ConfigSource = Callable[[], PreambleConfig]
DirectorySource = Callable[[], str]


class LaunchFilter(Protocol):
    name: str

    def __call__(self, request: LaunchRequest) -> LaunchRequest: ...


class FunctionFilter:
    """Wrap a plain ``(request) -> request`` callable as a named stage."""

    def __init__(
        self, name: str, func: Callable[[LaunchRequest], LaunchRequest]
    ) -> None:
        self.name = name
        self._func = func

    def __call__(self, request: LaunchRequest) -> LaunchRequest:
        return self._func(request)

    def __repr__(self) -> str:
        return f"FunctionFilter({self.name!r})"


class LaunchPipeline:
    """Stages run in order; each receives the previous stage's output.

    ``add`` and ``remove`` install a new stage tuple instead of editing the
    current one, so ``run`` never observes a half-updated pipeline.
    """

    def __init__(self, stages: tuple[LaunchFilter, ...] = ()) -> None:
        self._stages: tuple[LaunchFilter, ...] = ()
        for stage in stages:
            self.add(stage)

    @property
    def stages(self) -> tuple[LaunchFilter, ...]:
        return self._stages

    def names(self) -> list[str]:
        return [stage.name for stage in self._stages]

    def __contains__(self, name: object) -> bool:
        return name in self.names()

    def __len__(self) -> int:
        return len(self._stages)

    def add(self, stage: LaunchFilter, *, before: Optional[str] = None) -> None:
        if stage.name in self:
            raise DuplicateFilterError(stage.name)
        stages = list(self._stages)
        if before is None:
            stages.append(stage)
        else:
            names = self.names()
            if before not in names:
                raise KeyError(f"Unknown launch filter: {before}")
            stages.insert(names.index(before), stage)
        self._stages = tuple(stages)
        logger.debug("Added launch filter %s", stage.name)

    def remove(self, name: str) -> bool:
        stages = tuple(stage for stage in self._stages if stage.name != name)
        if len(stages) == len(self._stages):
            return False
        self._stages = stages
        logger.debug("Removed launch filter %s", name)
        return True

    def run(self, request: LaunchRequest) -> LaunchRequest:
        for stage in self._stages:
            request = stage(request)
        return request


class PreambleFilter:
    def __init__(
        self,
        config_source: ConfigSource,
        directory_source: Optional[DirectorySource] = None,
        name: str = PREAMBLE_FILTER_NAME,
        resolver: Optional[PatternResolver] = None,
    ) -> None:
        self.name = name
        self._config_source = config_source
        self._directory_source = directory_source or current_directory
        self._resolver = resolver or PatternResolver()

    def __call__(self, request: LaunchRequest) -> LaunchRequest:
        config = self._config_source()
        if not config.enabled:
            return request

        directory = normalize_directory(request.cwd or self._directory_source())
        setup_commands = self._resolver.resolve(config.rules, directory)
        if not setup_commands:
            logger.debug("No setup commands for %s", directory)
            return request

        rewritten = CommandRewriter(config.shell).process(
            request, setup_commands, config.separator
        )
        if rewritten is not request:
            logger.debug("Rewrote launch in %s: %r", directory, rewritten.argv)
        return rewritten

    def __repr__(self) -> str:
        return f"PreambleFilter({self.name!r})"
