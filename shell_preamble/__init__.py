from shell_preamble.config import ConfigStore, PreambleConfig
from shell_preamble.errors import PatternError, PreambleError
from shell_preamble.integration import PipelineLauncher, build_default_pipeline
from shell_preamble.models import LaunchRequest, PatternRule, ShellIdentity
from shell_preamble.pipeline import LaunchPipeline, PreambleFilter
from shell_preamble.resolver import PatternResolver, resolve
from shell_preamble.rewriter import CommandRewriter, build_command, classify

__all__ = [
    "CommandRewriter",
    "ConfigStore",
    "LaunchPipeline",
    "LaunchRequest",
    "PatternError",
    "PatternResolver",
    "PatternRule",
    "PipelineLauncher",
    "PreambleConfig",
    "PreambleError",
    "PreambleFilter",
    "ShellIdentity",
    "build_command",
    "build_default_pipeline",
    "classify",
    "resolve",
]
