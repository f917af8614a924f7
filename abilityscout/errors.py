class AbilityScoutError(Exception):
    pass


class TokenizeError(AbilityScoutError):
    """Raised when a single source file cannot be tokenized."""

    def __init__(self, file_path, message="syntax error"):
        self.file_path = file_path
        super().__init__(f"{file_path}: {message}")


class ConfigError(AbilityScoutError):
    pass


class ExportError(AbilityScoutError):
    pass
