import sys
import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.delenv("SHELL_PREAMBLE_CONFIG", raising=False)
    monkeypatch.delenv("SHELL_PREAMBLE_DISABLE", raising=False)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def write_json():
    def _write(path: Path, payload: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    return tmp_path / ".config" / "shell-preamble"


@pytest.fixture
def project_rules() -> list[dict[str, Any]]:
    return [
        {
            "pattern": "^/home/user/project1",
            "commands": ["alias foo=/some/contrived/example.sh"],
        },
        {"pattern": "^/home/user/project1", "commands": ["source env.sh"]},
        {"pattern": "^/home/user/project1/subdir", "commands": ["alias bar=x"]},
    ]


@pytest.fixture
def project_config(config_root: Path, write_json, project_rules) -> Path:
    path = config_root / "config.json"
    write_json(path, {"rules": project_rules})
    return path


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / ".config"))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
