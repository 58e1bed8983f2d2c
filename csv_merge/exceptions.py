"""Exceptions raised by the CSV merge pipeline."""


class ValidationError(ValueError):
    """Input files do not share a compatible header."""

    def __init__(self, message: str, file_path=None):
        super().__init__(message)
        self.file_path = file_path


class ConfigError(ValueError):
    """Run configuration is invalid (chunk size, output name, ...)."""


class RunAborted(RuntimeError):
    """Caller requested the run to stop before the next stage."""

    def __init__(self, stage: str):
        super().__init__(f"Run aborted before stage '{stage}'")
        self.stage = stage
