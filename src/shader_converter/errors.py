"""Exception hierarchy for the conversion pipeline."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for conversion failures."""

    exit_code = 1


class IRLibraryError(ConversionError):
    """Diagnostic raised by the external IR library binding."""

    def __init__(self, diagnostic: str) -> None:
        super().__init__(diagnostic)
        self.diagnostic = diagnostic


class IRLibraryUnavailable(IRLibraryError):
    """The IR library executable cannot be located or launched."""

    exit_code = 3


class ParseFailure(ConversionError):
    """The selected frontend rejected the (normalized) source."""

    def __init__(
        self,
        message: str,
        *,
        diagnostic: str,
        normalized_source: str | None = None,
    ) -> None:
        super().__init__(message)
        self.diagnostic = diagnostic
        self.normalized_source = normalized_source


class ValidationFailure(ConversionError):
    """The parsed module failed semantic validation."""


class UnsupportedTargetDialect(ConversionError):
    """The requested target selector matches no known generator."""

    exit_code = 2

    def __init__(self, target: str) -> None:
        super().__init__(f"Unknown target format: {target}")
        self.target = target


class GenerationFailure(ConversionError):
    """The selected generator rejected a validated module."""
