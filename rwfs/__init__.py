"""
rwfs - rewrite files chunk by chunk with caller-supplied rules.
"""

__version__ = "1.0.0"

from .core import (
    DELETE_CHUNK,
    ChunkContext,
    ChunkRewriter,
    DebugRange,
    RewriteOptions,
    UpdateRule,
    get_chunks,
    rewrite,
    rewrite_text,
    rwfs,
    split_preserving_separator,
)
from .debug import DebugPreviewer
from .io import FileHandler, RuleLoader

__all__ = [
    "DELETE_CHUNK",
    "ChunkContext",
    "ChunkRewriter",
    "DebugRange",
    "RewriteOptions",
    "UpdateRule",
    "get_chunks",
    "rewrite",
    "rewrite_text",
    "rwfs",
    "split_preserving_separator",
    "DebugPreviewer",
    "FileHandler",
    "RuleLoader",
]
