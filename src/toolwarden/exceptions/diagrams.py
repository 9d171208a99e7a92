from __future__ import annotations

from pathlib import Path

from toolwarden.exceptions.base import ToolwardenError


class DiagramError(ToolwardenError):
    """Base exception for diagram extraction and rendering failures.

    Attributes:
        message: Human-readable error message.
        path: The document or diagram file involved, if known.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class DiagramSourceError(DiagramError):
    """Raised when a Markdown source is missing or has no mermaid block."""

    pass


class RenderError(DiagramError):
    """Raised when the renderer is unavailable or exits with an error.

    Attributes:
        message: Human-readable error message.
        path: The diagram file that failed to render.
        output: Output captured from the renderer.
    """

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        output: str = "",
    ) -> None:
        self.output = output
        super().__init__(message, path=path)
