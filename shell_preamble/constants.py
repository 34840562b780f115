from typing import Final


APP_NAME: Final[str] = "shell-preamble"

DEFAULT_SEPARATOR: Final[str] = ";"
DEFAULT_SHELL_PATH: Final[str] = "/bin/sh"
DEFAULT_SHELL_SWITCH: Final[str] = "-c"

PREAMBLE_FILTER_NAME: Final[str] = "shell-preamble"

CONFIG_JSON_FILENAME: Final[str] = "config.json"
CONFIG_YAML_FILENAMES: Final[tuple[str, ...]] = (
    "config.yaml",
    "config.yml",
)

CONFIG_PATH_ENV: Final[str] = "SHELL_PREAMBLE_CONFIG"
DISABLE_ENV: Final[str] = "SHELL_PREAMBLE_DISABLE"