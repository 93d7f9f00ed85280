"""Chunk splitting and per-chunk context for rwfs."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

# Inserted before each separator by the separator-preserving split.
# Content that already contains this token gets extra chunk boundaries.
MARKER_TOKEN = "rwfs--"

# Stand-in for literal newlines when splitting with normalize=True.
NEWLINE_PLACEHOLDER = "LF"


def _check_separator(separator: str) -> None:
    if not isinstance(separator, str):
        raise TypeError(f"Separator must be a string, got {type(separator).__name__}")
    if separator == "":
        raise ValueError("Separator must be a non-empty string")


def split_chunks(content: str, separator: str) -> List[str]:
    """Split content on every exact occurrence of separator, dropping the separator."""
    _check_separator(separator)
    return content.split(separator)


def split_preserving_separator(
    content: str,
    separator: str,
    normalize: bool = False,
) -> List[str]:
    """
    Split content while keeping the separator inside the chunks.

    The marker token is placed in front of every separator, so each chunk
    after the first starts with the separator it followed, and
    ``"".join(chunks)`` gives back the (possibly normalized) content.

    Args:
        content: Text to split.
        separator: Literal separator string.
        normalize: Replace literal ``\\n`` characters with ``LF`` before splitting.

    Returns:
        List of chunks in content order.
    """
    _check_separator(separator)
    if normalize:
        content = content.replace("\n", NEWLINE_PLACEHOLDER)
    return content.replace(separator, MARKER_TOKEN + separator).split(MARKER_TOKEN)


# Kept for callers used to the original utility name.
get_chunks = split_preserving_separator


@dataclass(frozen=True)
class ChunkContext:
    """Read-only view of one chunk and its neighbors in processing order."""

    chunk: str
    index: int
    prev_chunk: Optional[str] = None
    next_chunk: Optional[str] = None

    @property
    def is_first(self) -> bool:
        return self.prev_chunk is None

    @property
    def is_last(self) -> bool:
        return self.next_chunk is None


def build_context(chunks: Sequence[str], index: int) -> ChunkContext:
    """Build the context for ``chunks[index]``."""
    return ChunkContext(
        chunk=chunks[index],
        index=index,
        prev_chunk=chunks[index - 1] if index > 0 else None,
        next_chunk=chunks[index + 1] if index < len(chunks) - 1 else None,
    )
