from shell_preamble.models import (
    LaunchRequest,
    OtherLaunch,
    ShellCommand,
    ShellIdentity,
)
from shell_preamble.rewriter import CommandRewriter, build_command, classify

SH = ShellIdentity(path="/bin/sh", switch="-c")


def _shell_request(command: str) -> LaunchRequest:
    return LaunchRequest.from_argv(["/bin/sh", "-c", command])


def test_build_command_suffixes_every_setup_command() -> None:
    assert build_command(["c1", "c2"], "foo", ";") == "c1;c2;foo"


def test_build_command_with_custom_separator() -> None:
    assert build_command(["c1", "c2"], "foo", " && ") == "c1 && c2 && foo"


def test_classify_shell_command() -> None:
    launch = classify(_shell_request("make test"), SH)

    assert launch == ShellCommand(path="/bin/sh", switch="-c", command="make test")


def test_classify_other_three_argument_launch() -> None:
    request = LaunchRequest.from_argv(["/usr/bin/git", "-C", "repo"])

    assert classify(request, SH) == OtherLaunch(argv=("/usr/bin/git", "-C", "repo"))


def test_process_rewrites_plain_shell_command() -> None:
    request = _shell_request("foo")

    result = CommandRewriter(SH).process(request, ["c1", "c2"], ";")

    assert result.argv == ("/bin/sh", "-c", "c1;c2;foo")
    assert result.program == "/bin/sh"


def test_process_does_not_mutate_input_request() -> None:
    request = _shell_request("foo")

    result = CommandRewriter(SH).process(request, ["c1"], ";")

    assert result is not request
    assert request.argv == ("/bin/sh", "-c", "foo")


def test_process_without_setup_commands_returns_request() -> None:
    request = _shell_request("foo")

    assert CommandRewriter(SH).process(request, [], ";") is request


def test_process_ignores_argument_lists_not_of_length_three() -> None:
    rewriter = CommandRewriter(SH)
    short = LaunchRequest.from_argv(["/bin/sh", "-c"])
    long = LaunchRequest.from_argv(["/bin/sh", "-c", "foo", "arg0"])
    single = LaunchRequest.from_argv(["/bin/sh"])

    for request in (short, long, single):
        assert rewriter.process(request, ["c1"], ";") is request


def test_process_requires_exact_shell_path() -> None:
    request = LaunchRequest.from_argv(["/usr/bin/sh", "-c", "foo"])

    assert CommandRewriter(SH).process(request, ["c1"], ";") is request


def test_process_requires_exact_shell_switch() -> None:
    request = LaunchRequest.from_argv(["/bin/sh", "-lc", "foo"])

    assert CommandRewriter(SH).process(request, ["c1"], ";") is request


def test_process_keeps_program_distinct_from_argv0() -> None:
    request = LaunchRequest(program="/usr/local/bin/dash", argv=("/bin/sh", "-c", "foo"))

    result = CommandRewriter(SH).process(request, ["c1"], ";")

    assert result.program == "/usr/local/bin/dash"
    assert result.argv == ("/bin/sh", "-c", "c1;foo")


def test_process_with_custom_shell_identity() -> None:
    zsh = ShellIdentity(path="/usr/bin/zsh", switch="-c")
    request = LaunchRequest.from_argv(["/usr/bin/zsh", "-c", "ls"])

    result = CommandRewriter(zsh).process(request, ["nvm use"], "\n")

    assert result.argv == ("/usr/bin/zsh", "-c", "nvm use\nls")
