"""Core chunk-rewrite engine for rwfs."""

from .chunks import ChunkContext, build_context, get_chunks, split_chunks, split_preserving_separator
from .options import DebugRange, RewriteOptions
from .rules import (
    DELETE_CHUNK,
    DeleteChunk,
    MultipleRules,
    NoRules,
    SingleRule,
    UpdateRule,
    evaluate,
    is_deleted,
    resolve_rules,
)
from .rewriter import ChunkRewriter, assemble, invert_chunks, restore_order, rewrite, rewrite_text, rwfs

__all__ = [
    "ChunkContext",
    "build_context",
    "get_chunks",
    "split_chunks",
    "split_preserving_separator",
    "DebugRange",
    "RewriteOptions",
    "DELETE_CHUNK",
    "DeleteChunk",
    "MultipleRules",
    "NoRules",
    "SingleRule",
    "UpdateRule",
    "evaluate",
    "is_deleted",
    "resolve_rules",
    "ChunkRewriter",
    "assemble",
    "invert_chunks",
    "restore_order",
    "rewrite",
    "rewrite_text",
    "rwfs",
]
