"""Debug output for inspecting chunk boundaries."""

from .preview import DebugPreviewer, PreviewReport
from .formatting import format_separator, render_chunk

__all__ = [
    "DebugPreviewer",
    "PreviewReport",
    "format_separator",
    "render_chunk",
]
