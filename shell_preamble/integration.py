"""Run ``subprocess`` launches through a :class:`LaunchPipeline`.

``PipelineLauncher`` is called explicitly in place of ``subprocess.Popen`` or
``subprocess.run``. Nothing in ``subprocess`` itself is replaced.
"""

import logging
import os
import subprocess
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

from shell_preamble.config import ConfigStore
from shell_preamble.constants import DEFAULT_SHELL_PATH, DEFAULT_SHELL_SWITCH
from shell_preamble.models import LaunchRequest
from shell_preamble.pipeline import DirectorySource, LaunchPipeline, PreambleFilter
from shell_preamble.repository import effective_config

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if isinstance(value, (bytes, os.PathLike)):
        return os.fsdecode(value)
    return str(value)


@dataclass(frozen=True)
class PopenCall:
    """The launch-shaping arguments of a ``subprocess.Popen`` call."""

    args: Any
    shell: bool = False
    executable: Optional[str] = None
    cwd: Optional[str] = None

    @classmethod
    def from_arguments(cls, args: Any, **kwargs: Any) -> "PopenCall":
        executable = kwargs.get("executable")
        cwd = kwargs.get("cwd")
        return cls(
            args=args,
            shell=bool(kwargs.get("shell", False)),
            executable=_text(executable) if executable is not None else None,
            cwd=_text(cwd) if cwd is not None else None,
        )

    @property
    def is_string(self) -> bool:
        return isinstance(self.args, (str, bytes, os.PathLike))

    def _shell_prefix(self) -> tuple[str, str]:
        # Matches what subprocess builds for shell=True on POSIX.
        return (self.executable or DEFAULT_SHELL_PATH, DEFAULT_SHELL_SWITCH)

    def to_request(self) -> LaunchRequest:
        if self.is_string:
            arguments: tuple[str, ...] = (_text(self.args),)
        else:
            arguments = tuple(_text(item) for item in self.args)

        if self.shell:
            argv = self._shell_prefix() + arguments
        else:
            argv = arguments
        program = self.executable or (argv[0] if argv else "")
        return LaunchRequest(program=program, argv=argv, cwd=self.cwd)

    def with_request(self, request: LaunchRequest) -> "PopenCall":
        if request.argv == self.to_request().argv:
            return self

        prefix = self._shell_prefix()
        if self.shell and request.argv[:2] == prefix:
            remaining = request.argv[2:]
            if self.is_string and len(remaining) == 1:
                return replace(self, args=remaining[0])
            return replace(self, args=list(remaining))

        executable = request.program if request.program != request.argv[0] else None
        return replace(self, args=list(request.argv), shell=False, executable=executable)

    def apply(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        updated = dict(kwargs)
        updated["shell"] = self.shell
        if self.executable is not None or "executable" in updated:
            updated["executable"] = self.executable
        return updated


def filter_popen_call(
    pipeline: LaunchPipeline, args: Any, kwargs: dict[str, Any]
) -> tuple[Any, dict[str, Any]]:
    call = PopenCall.from_arguments(args, **kwargs)
    request = call.to_request()
    if not request.argv:
        return args, kwargs

    filtered = call.with_request(pipeline.run(request))
    if filtered is call:
        return args, kwargs
    logger.debug("Launch arguments rewritten: %r", filtered.args)
    return filtered.args, filtered.apply(kwargs)


class PipelineLauncher:
    def __init__(
        self,
        pipeline: LaunchPipeline,
        popen: Callable[..., Any] = subprocess.Popen,
        runner: Callable[..., Any] = subprocess.run,
    ) -> None:
        self.pipeline = pipeline
        self._popen = popen
        self._runner = runner

    def popen(self, args: Any, **kwargs: Any) -> Any:
        args, kwargs = filter_popen_call(self.pipeline, args, kwargs)
        return self._popen(args, **kwargs)

    def run(self, args: Any, **kwargs: Any) -> Any:
        args, kwargs = filter_popen_call(self.pipeline, args, kwargs)
        return self._runner(args, **kwargs)


def build_default_pipeline(
    store: ConfigStore, directory_source: Optional[DirectorySource] = None
) -> LaunchPipeline:
    pipeline = LaunchPipeline()
    pipeline.add(
        PreambleFilter(
            lambda: effective_config(store.current()),
            directory_source=directory_source,
        )
    )
    return pipeline
