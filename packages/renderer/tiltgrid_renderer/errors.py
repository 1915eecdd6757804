"""Renderer error types. All of them are fatal to a render."""

from __future__ import annotations


class RenderError(Exception):
    """Base class for every error raised while configuring or drawing a render."""


class InvalidColorFormat(RenderError, ValueError):
    def __init__(self, source: object) -> None:
        super().__init__(f"Invalid hex colour: {source!r}")
        self.source = source


class EmptyTable(RenderError, ValueError):
    def __init__(self) -> None:
        super().__init__("Gradient table needs at least one keypoint")


class UnknownTheme(RenderError, LookupError):
    def __init__(self, name: str, known: list[str] | None = None) -> None:
        message = f"Unknown theme: {name}"
        if known:
            message += f" (known: {', '.join(known)})"
        super().__init__(message)
        self.name = name


class InvalidRenderConfig(RenderError, ValueError):
    pass


class FontLoadFailure(RenderError, OSError):
    def __init__(self, path: str, cause: Exception | None = None) -> None:
        super().__init__(f"Unable to load font {path!r}: {cause}")
        self.path = path


class ImageWriteFailure(RenderError, OSError):
    def __init__(self, path: str, cause: Exception | None = None) -> None:
        super().__init__(f"Unable to write image {path!r}: {cause}")
        self.path = path
