"""Debug preview of chunk boundaries."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from rich.console import Console
from rich.text import Text

from ..core.chunks import split_preserving_separator
from ..core.options import DEFAULT_DEBUG_OUTPUT_LIMIT, DebugOutputLimit, DebugRange, normalize_debug_output_limit
from .formatting import (
    BANNER_STYLE,
    FOOTER_STYLE,
    HEADER_STYLE,
    NOTICE_STYLE,
    SEPARATOR_STYLE,
    format_separator,
    label,
    render_chunk,
)

logger = logging.getLogger(__name__)


@dataclass
class PreviewReport:
    """What a preview showed. ``start`` and ``end`` are one-based and inclusive."""

    total: int
    start: int
    end: int
    chunks: List[str] = field(default_factory=list)

    @property
    def shown(self) -> int:
        return len(self.chunks)

    @property
    def hidden(self) -> int:
        return self.total - self.shown


class DebugPreviewer:
    """Prints a bounded listing of chunks to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def preview(
        self,
        content: str,
        separator: str,
        limit: DebugOutputLimit = DEFAULT_DEBUG_OUTPUT_LIMIT,
        normalize: bool = False,
    ) -> PreviewReport:
        """
        Print chunk boundaries for ``content``.

        Chunks are split with the separator kept in place so boundaries are
        visible. ``limit`` is either a chunk count taken from the start or a
        DebugRange, clamped into the available chunks.
        """
        chunks = split_preserving_separator(content, separator, normalize=normalize)
        total = len(chunks)
        limit = normalize_debug_output_limit(limit)

        self._print_banner(total, separator)

        if isinstance(limit, DebugRange):
            bounds = limit.clamp(total)
            report = PreviewReport(
                total=total,
                start=bounds.start,
                end=bounds.end,
                chunks=chunks[bounds.start - 1:bounds.end],
            )
            if report.shown < total:
                self.console.print(Text(
                    f"Showing chunks {report.start}-{report.end} of {total} ({report.shown} shown)",
                    style=NOTICE_STYLE,
                ))
        else:
            report = PreviewReport(total=total, start=1, end=min(limit, total), chunks=chunks[:limit])
            if total > limit:
                self.console.print(Text(
                    f"⚠️  Output limited to first {limit} chunks ({total - limit} more chunks not shown)",
                    style=NOTICE_STYLE,
                ))

        for offset, chunk in enumerate(report.chunks):
            self._print_chunk(report.start + offset, chunk, separator)

        if not isinstance(limit, DebugRange) and total > limit:
            self.console.print(Text(f"... and {total - limit} more chunks", style=NOTICE_STYLE))

        logger.debug("Previewed chunks %d-%d of %d", report.start, report.end, total)
        return report

    def _print_banner(self, total: int, separator: str) -> None:
        self.console.print(Text("------ RWFS: DEBUG MODE ------", style=BANNER_STYLE))
        self.console.print(label("Chunks Size", str(total)))
        self.console.print(label("Separator", format_separator(separator), f"bold {SEPARATOR_STYLE}"))

    def _print_chunk(self, number: int, chunk: str, separator: str) -> None:
        self.console.print()
        self.console.print(Text(f"--- Chunk {number} ---", style=HEADER_STYLE))
        self.console.print()
        self.console.print(render_chunk(chunk, separator), soft_wrap=True)
        self.console.print()
        self.console.print(Text(f"--- End Chunk {number} ---", style=FOOTER_STYLE))
        self.console.print()
