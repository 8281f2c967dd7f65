"""Frontend adapter selecting the IR library parser for a source dialect."""

from __future__ import annotations

from collections.abc import Mapping

from shader_converter.application.ports import IRModule, ShaderIRLibrary
from shader_converter.errors import IRLibraryError, IRLibraryUnavailable, ParseFailure
from shader_converter.types import ShaderStage, resolve_source_dialect

NORMALIZED_SOURCE_MARKER = "Normalized source:"


class ShaderFrontend:
    """Parse normalized source into an IR module."""

    def __init__(self, library: ShaderIRLibrary) -> None:
        self.library = library

    def parse(
        self,
        normalized_source: str,
        source_dialect: str,
        stage: ShaderStage,
        defines: Mapping[str, str] | None = None,
    ) -> IRModule:
        """Parse ``normalized_source`` with the frontend for ``source_dialect``.

        Parameters
        ----------
        normalized_source : str
            Source text after normalization.
        source_dialect : str
            Source selector. ``"wgsl"`` picks the WGSL frontend; every other
            value, known or not, picks the permissive GLSL frontend.
        stage : {"vertex", "fragment", "compute"}
            Pipeline stage, required by the GLSL frontend.
        defines : Mapping[str, str] | None, default=None
            Preprocessor defines for the GLSL frontend.

        Returns
        -------
        IRModule
            Parsed, not yet validated, module.

        Raises
        ------
        ParseFailure
            If the frontend rejects the source. For GLSL the message embeds
            the normalized source, which the caller never saw.
        """
        dialect = resolve_source_dialect(source_dialect)
        try:
            return self.library.parse(
                normalized_source, dialect, stage, dict(defines or {})
            )
        except IRLibraryUnavailable:
            raise
        except IRLibraryError as exc:
            if dialect == "wgsl":
                raise ParseFailure(
                    f"WGSL Parse Error: {exc.diagnostic}",
                    diagnostic=exc.diagnostic,
                ) from exc
            raise ParseFailure(
                f"GLSL Parse Error: {exc.diagnostic}\n\n"
                f"{NORMALIZED_SOURCE_MARKER}\n{normalized_source}",
                diagnostic=exc.diagnostic,
                normalized_source=normalized_source,
            ) from exc
