"""Validation adapter around the IR library validator."""

from __future__ import annotations

from shader_converter.application.ports import (
    IRModule,
    ShaderIRLibrary,
    ValidationInfo,
)
from shader_converter.errors import (
    IRLibraryError,
    IRLibraryUnavailable,
    ValidationFailure,
)


class ShaderValidator:
    """Validate IR modules with every flag and capability enabled."""

    def __init__(self, library: ShaderIRLibrary) -> None:
        self.library = library

    def validate(self, module: IRModule) -> ValidationInfo:
        """Return validation info or raise ``ValidationFailure``."""
        try:
            return self.library.validate(module)
        except IRLibraryUnavailable:
            raise
        except IRLibraryError as exc:
            raise ValidationFailure(f"Validation Error: {exc.diagnostic}") from exc
