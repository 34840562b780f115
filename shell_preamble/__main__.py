import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click
from rich.console import Console

from shell_preamble.config import ConfigStore
from shell_preamble.directories import current_directory, normalize_directory
from shell_preamble.errors import PreambleError
from shell_preamble.integration import PipelineLauncher, build_default_pipeline
from shell_preamble.models import LaunchRequest
from shell_preamble.repository import ConfigRepository
from shell_preamble.service import PreambleService
from shell_preamble.tui import PreambleConsoleUI


def _service_from_obj(obj: Dict[str, Any]) -> PreambleService:
    return PreambleService(ConfigRepository(config_path=obj.get("config_path")))


def _directory_option() -> Callable:
    return click.option(
        "-C",
        "--directory",
        type=click.Path(path_type=Path),
        default=None,
        help="Directory to resolve rules for (defaults to the working directory).",
    )


def _json_option() -> Callable:
    return click.option("--json", "as_json", is_flag=True, help="Print JSON output.")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file to use instead of the default location.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """Prepend per-directory setup commands to shell command launches."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s"
        )
    ctx.obj = {"config_path": config_path}


@cli.command(help="Show whether rewriting is enabled and how it is configured.")
@click.pass_obj
def status(obj: Dict[str, Any]) -> None:
    ui = PreambleConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        config = service.load()
    except PreambleError as exc:
        raise click.ClickException(str(exc))
    ui.render_status(config, service.status(), str(service.config_path))


@cli.command(help="Enable command rewriting.")
@click.pass_obj
def enable(obj: Dict[str, Any]) -> None:
    ui = PreambleConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        service.enable()
    except PreambleError as exc:
        raise click.ClickException(str(exc))
    ui.render_toggle(service.status())


@cli.command(help="Disable command rewriting.")
@click.pass_obj
def disable(obj: Dict[str, Any]) -> None:
    ui = PreambleConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        service.disable()
    except PreambleError as exc:
        raise click.ClickException(str(exc))
    ui.render_toggle(service.status())


@cli.command(help="Set the separator placed after each setup command.")
@click.argument("value")
@click.pass_obj
def separator(obj: Dict[str, Any], value: str) -> None:
    ui = PreambleConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        service.set_separator(value)
    except PreambleError as exc:
        raise click.ClickException(str(exc))
    ui.render_setting_saved("separator", repr(value))


@cli.command(
    help="Set the shell executable and command switch to recognise.",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("path")
@click.argument("switch")
@click.pass_obj
def shell(obj: Dict[str, Any], path: str, switch: str) -> None:
    ui = PreambleConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        service.set_shell(path, switch)
    except PreambleError as exc:
        raise click.ClickException(str(exc))
    ui.render_setting_saved("shell", f"{path} {switch}")


@cli.group(help="Manage directory pattern rules.")
def rules() -> None:
    pass


@rules.command("list", help="List rules in the order they are applied.")
@_json_option()
@click.pass_obj
def rules_list(obj: Dict[str, Any], as_json: bool) -> None:
    service = _service_from_obj(obj)
    try:
        rows = service.list_rule_rows()
    except PreambleError as exc:
        raise click.ClickException(str(exc))
    if as_json:
        click.echo(json.dumps([row.as_dict() for row in rows], indent=2))
        return
    PreambleConsoleUI(Console()).render_rules(rows)


@rules.command("add", help="Add a rule mapping PATTERN to setup COMMANDS.")
@click.argument("pattern")
@click.argument("commands", nargs=-1, required=True)
@click.option(
    "--position",
    type=int,
    default=None,
    help="Insert at this index instead of appending.",
)
@click.pass_obj
def rules_add(
    obj: Dict[str, Any], pattern: str, commands: tuple[str, ...], position: Optional[int]
) -> None:
    ui = PreambleConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        service.add_rule(pattern, commands, position=position)
    except PreambleError as exc:
        raise click.ClickException(str(exc))
    ui.render_rule_saved(pattern)


@rules.command("remove", help="Remove the rule at INDEX.")
@click.argument("index", type=int)
@click.pass_obj
def rules_remove(obj: Dict[str, Any], index: int) -> None:
    ui = PreambleConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        rules_before = service.load().rules
        service.remove_rule(index)
    except PreambleError as exc:
        raise click.ClickException(str(exc))
    ui.render_rule_saved(rules_before[index].pattern, removed=True)


@cli.command(help="Show which rules match DIRECTORY and the resulting setup commands.")
@click.argument("directory", required=False, type=click.Path(path_type=Path))
@_json_option()
@click.pass_obj
def resolve(obj: Dict[str, Any], directory: Optional[Path], as_json: bool) -> None:
    service = _service_from_obj(obj)
    try:
        resolution = service.resolve(str(directory) if directory else None)
    except PreambleError as exc:
        raise click.ClickException(str(exc))
    if as_json:
        click.echo(json.dumps(resolution.as_dict(), indent=2))
        return
    PreambleConsoleUI(Console()).render_resolution(resolution)


@cli.command(
    help="Print how ARGV would be rewritten, without running it.",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("argv", nargs=-1, required=True, type=click.UNPROCESSED)
@_directory_option()
@_json_option()
@click.pass_obj
def rewrite(
    obj: Dict[str, Any], argv: tuple[str, ...], directory: Optional[Path], as_json: bool
) -> None:
    service = _service_from_obj(obj)
    try:
        rewritten = service.rewrite(argv, str(directory) if directory else None)
    except PreambleError as exc:
        raise click.ClickException(str(exc))
    if as_json:
        click.echo(json.dumps(list(rewritten.argv)))
        return
    PreambleConsoleUI(Console()).render_rewrite(LaunchRequest.from_argv(list(argv)), rewritten)


@cli.command(help="Run COMMAND through the configured shell with its setup commands.")
@click.argument("command")
@_directory_option()
@click.pass_obj
def run(obj: Dict[str, Any], command: str, directory: Optional[Path]) -> None:
    service = _service_from_obj(obj)
    target = normalize_directory(directory) if directory else current_directory()
    try:
        config = service.load()
    except PreambleError as exc:
        raise click.ClickException(str(exc))

    try:
        launcher = PipelineLauncher(build_default_pipeline(ConfigStore(config)))
        completed = launcher.run(
            [config.shell.path, config.shell.switch, command], cwd=target
        )
    except PreambleError as exc:
        raise click.ClickException(str(exc))
    except OSError as exc:
        raise click.ClickException(f"Cannot run {config.shell.path}: {exc}")
    if completed.returncode:
        raise click.exceptions.Exit(completed.returncode)


def main() -> int:
    try:
        rv = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return rv if isinstance(rv, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
