from pathlib import Path


class PreambleError(Exception):
    """Base user-facing application error."""


class PatternError(PreambleError):
    def __init__(self, pattern: str, detail: str) -> None:
        self.pattern = pattern
        self.detail = detail
        super().__init__(f"Invalid directory pattern {pattern!r} ({detail})")


class RuleNotFoundError(PreambleError):
    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Rule not found: {index}")


class DuplicateFilterError(PreambleError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Launch filter already installed: {name}")


class PreambleFileError(PreambleError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class InvalidConfigFormatError(PreambleFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config format ({detail})")


class InvalidConfigSchemaError(PreambleFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")
