import pytest

from shell_preamble.config import ConfigStore, PreambleConfig
from shell_preamble.errors import DuplicateFilterError, PatternError
from shell_preamble.models import LaunchRequest, PatternRule, ShellIdentity
from shell_preamble.pipeline import FunctionFilter, LaunchPipeline, PreambleFilter


def _config(**overrides) -> PreambleConfig:
    values = {
        "rules": (
            PatternRule("^/home/user/project1", ("alias foo=/some/contrived/example.sh",)),
            PatternRule("^/home/user/project1", ("source env.sh",)),
            PatternRule("^/home/user/project1/subdir", ("alias bar=x",)),
        ),
        "shell": ShellIdentity("/bin/sh", "-c"),
    }
    values.update(overrides)
    return PreambleConfig(**values)


def _tag(name: str) -> FunctionFilter:
    def _append(request: LaunchRequest) -> LaunchRequest:
        return request.with_argv(request.argv + (name,))

    return FunctionFilter(name, _append)


def test_preamble_filter_end_to_end() -> None:
    stage = PreambleFilter(
        lambda: _config(), directory_source=lambda: "/home/user/project1/subdir"
    )

    result = stage(LaunchRequest(program="/bin/sh", argv=("/bin/sh", "-c", "foo")))

    assert result.program == "/bin/sh"
    assert result.argv == (
        "/bin/sh",
        "-c",
        "alias foo=/some/contrived/example.sh;source env.sh;alias bar=x;foo",
    )


def test_preamble_filter_disabled_passes_through() -> None:
    stage = PreambleFilter(
        lambda: _config(enabled=False), directory_source=lambda: "/home/user/project1"
    )
    request = LaunchRequest.from_argv(["/bin/sh", "-c", "foo"])

    assert stage(request) is request


def test_preamble_filter_prefers_request_cwd(tmp_path) -> None:
    config = PreambleConfig(rules=(PatternRule(str(tmp_path), ("source env.sh",)),))
    stage = PreambleFilter(lambda: config, directory_source=lambda: "/elsewhere")
    request = LaunchRequest(
        program="/bin/sh", argv=("/bin/sh", "-c", "make"), cwd=str(tmp_path)
    )

    assert stage(request).argv[2] == "source env.sh;make"


def test_preamble_filter_expands_home_in_directory(tmp_path) -> None:
    config = PreambleConfig(rules=(PatternRule(f"^{tmp_path}/proj", ("x",)),))
    stage = PreambleFilter(lambda: config, directory_source=lambda: "~/proj")

    result = stage(LaunchRequest.from_argv(["/bin/sh", "-c", "ls"]))

    assert result.argv[2] == "x;ls"


def test_preamble_filter_propagates_pattern_error() -> None:
    config = PreambleConfig(rules=(PatternRule("(", ("x",)),))
    stage = PreambleFilter(lambda: config, directory_source=lambda: "/tmp")

    with pytest.raises(PatternError):
        stage(LaunchRequest.from_argv(["/usr/bin/git", "status"]))


def test_preamble_filter_reads_latest_installed_config() -> None:
    store = ConfigStore()
    stage = PreambleFilter(store, directory_source=lambda: "/home/user/project1")
    request = LaunchRequest.from_argv(["/bin/sh", "-c", "foo"])

    assert stage(request) is request

    store.install(_config())

    assert stage(request).argv[2] == "alias foo=/some/contrived/example.sh;source env.sh;foo"


def test_pipeline_runs_stages_in_order() -> None:
    pipeline = LaunchPipeline((_tag("first"), _tag("second")))

    result = pipeline.run(LaunchRequest.from_argv(["prog"]))

    assert result.argv == ("prog", "first", "second")


def test_pipeline_add_before_named_stage() -> None:
    pipeline = LaunchPipeline((_tag("last"),))
    pipeline.add(_tag("early"), before="last")

    assert pipeline.names() == ["early", "last"]


def test_pipeline_rejects_duplicate_names() -> None:
    pipeline = LaunchPipeline((_tag("only"),))

    with pytest.raises(DuplicateFilterError):
        pipeline.add(_tag("only"))


def test_pipeline_add_before_unknown_stage() -> None:
    pipeline = LaunchPipeline()

    with pytest.raises(KeyError):
        pipeline.add(_tag("x"), before="missing")


def test_pipeline_remove() -> None:
    pipeline = LaunchPipeline((_tag("a"), _tag("b")))

    assert pipeline.remove("a") is True
    assert pipeline.remove("a") is False
    assert "a" not in pipeline
    assert len(pipeline) == 1


def test_pipeline_remove_does_not_affect_captured_stages() -> None:
    pipeline = LaunchPipeline((_tag("a"), _tag("b")))
    snapshot = pipeline.stages

    pipeline.remove("b")

    assert [stage.name for stage in snapshot] == ["a", "b"]


def test_empty_pipeline_returns_request() -> None:
    request = LaunchRequest.from_argv(["/bin/sh", "-c", "foo"])

    assert LaunchPipeline().run(request) is request
