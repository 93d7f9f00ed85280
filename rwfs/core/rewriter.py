"""Rule-driven rewriting of file chunks."""

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from .chunks import split_chunks
from .options import DEFAULT_DEBUG_OUTPUT_LIMIT, DEFAULT_ENCODING, DEFAULT_SEPARATOR, DebugOutputLimit, RewriteOptions
from .rules import Constraint, RuleSet, Update, UpdateResult, evaluate, is_deleted, resolve_rules
from ..debug.preview import DebugPreviewer
from ..io.file_handler import FileHandler

logger = logging.getLogger(__name__)


def invert_chunks(chunks: Sequence[str]) -> List[str]:
    """Return chunks in reverse processing order."""
    return list(reversed(chunks))


def restore_order(
    results: Sequence[UpdateResult],
    invert: bool,
    preserve_inverted_order: bool = False,
) -> List[UpdateResult]:
    """Undo an inversion unless the inverted order should be kept."""
    if invert and not preserve_inverted_order:
        return list(reversed(results))
    return list(results)


def assemble(results: Sequence[UpdateResult], separator: str, remove_empty: bool = False) -> str:
    """
    Join update results into the final text.

    Deleted chunks are always dropped; with ``remove_empty`` any empty
    (falsy) chunk is dropped as well.
    """
    survivors = [result for result in results if not is_deleted(result)]
    if remove_empty:
        survivors = [result for result in survivors if result]
    return separator.join(survivors)


class ChunkRewriter:
    """Rewrites text or files chunk by chunk according to a rule set."""

    def __init__(self, options: Optional[RewriteOptions] = None, file_handler=None, previewer=None):
        self.options = options or RewriteOptions()
        self.file_handler = file_handler or FileHandler()
        self.previewer = previewer or DebugPreviewer()

    def rewrite_text(self, content: str, rules: RuleSet) -> str:
        """Apply the rule set to ``content`` and return the rewritten text."""
        options = self.options
        if options.debug:
            self.previewer.preview(content, options.separator, options.debug_output_limit)

        chunks = split_chunks(content, options.separator)
        if options.invert:
            chunks = invert_chunks(chunks)
        logger.debug(
            "Evaluating %d chunks with %s (invert=%s)",
            len(chunks), type(rules).__name__, options.invert,
        )

        results = evaluate(chunks, rules, options.separator)
        results = restore_order(results, options.invert, options.preserve_inverted_order)

        deleted = sum(1 for result in results if is_deleted(result))
        if deleted:
            logger.debug("Dropping %d deleted chunks", deleted)
        return assemble(results, options.separator, options.remove_empty)

    def rewrite(self, file_path: Union[str, Path], rules: RuleSet) -> None:
        """Read ``file_path``, rewrite its chunks and write the result back."""
        content = self.file_handler.read_text(file_path, self.options.encoding)
        new_content = self.rewrite_text(content, rules)
        self.file_handler.write_text(file_path, new_content, self.options.encoding)
        logger.info(f"Rewrote {file_path}")


def rewrite_text(content: str, rules: RuleSet, options: Optional[RewriteOptions] = None, previewer=None) -> str:
    """Rewrite ``content`` in memory without touching the filesystem."""
    return ChunkRewriter(options, previewer=previewer).rewrite_text(content, rules)


def rewrite(
    path: Union[str, Path],
    constraint: Optional[Constraint] = None,
    update: Optional[Update] = None,
    *,
    updates: Optional[Sequence[Any]] = None,
    bail_on_first_match: bool = False,
    separator: str = DEFAULT_SEPARATOR,
    encoding: str = DEFAULT_ENCODING,
    remove_empty: bool = False,
    debug: bool = False,
    debug_output_limit: DebugOutputLimit = DEFAULT_DEBUG_OUTPUT_LIMIT,
    invert: bool = False,
    preserve_inverted_order: bool = False,
    console=None,
) -> None:
    """
    Rewrite a file in place, chunk by chunk.

    Pass either a single ``constraint``/``update`` pair (optionally with
    ``bail_on_first_match``) or an ordered list of rules as ``updates``.
    With neither, the file is written back unchanged.

    Args:
        path: File to rewrite.
        constraint: Called as ``constraint(context, separator)``; truthy selects the chunk.
        update: Called as ``update(context, separator)``; returns new text or DELETE_CHUNK.
        updates: Ordered rules, each a pair of constraint and update.
        bail_on_first_match: Single-rule mode only; stop after the first matching chunk.
        separator: String used to split and rejoin the content.
        encoding: Encoding used for reading and writing.
        remove_empty: Also drop chunks that end up empty.
        debug: Print a preview of the chunks before rewriting.
        debug_output_limit: Chunk count or ``{start, end}`` range for the preview.
        invert: Process chunks from last to first.
        preserve_inverted_order: Keep the reversed order in the written file.
        console: Rich console used for the debug preview.

    Raises:
        OSError: If the file cannot be read or written.
        UnicodeError: If the content does not match ``encoding``.
    """
    options = RewriteOptions(
        separator=separator,
        encoding=encoding,
        remove_empty=remove_empty,
        debug=debug,
        debug_output_limit=debug_output_limit,
        invert=invert,
        preserve_inverted_order=preserve_inverted_order,
    )
    rules = resolve_rules(
        constraint=constraint,
        update=update,
        updates=updates,
        bail_on_first_match=bail_on_first_match,
    )
    ChunkRewriter(options, previewer=DebugPreviewer(console)).rewrite(path, rules)


rwfs = rewrite
