"""Exceptions raised at the edges of the generator.

Model problems are never raised; they are reported as diagnostics.
"""

from typing import List, Optional


class ClassGenError(Exception):
    """Base exception for all generator errors."""

    pass


class ModelLoadError(ClassGenError):
    """Raised when a model document cannot be turned into a model."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class ValidationFailedError(ClassGenError):
    """Raised by the pipeline in strict mode when validation reports errors."""

    def __init__(self, message: str, diagnostics: Optional[List] = None) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics or []
