"""Rewrite options for rwfs."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "\n"
DEFAULT_ENCODING = "utf-8"
DEFAULT_DEBUG_OUTPUT_LIMIT = 10


def _bound(value: Any) -> Optional[int]:
    """Coerce a range bound to int; anything unusable becomes None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring unusable debug range bound %r", value)
        return None


@dataclass(frozen=True)
class DebugRange:
    """
    Inclusive, one-based range of chunks shown by the debug preview.

    A missing ``start`` means the first chunk; a missing ``end`` means the last.
    """

    start: Optional[int] = None
    end: Optional[int] = None

    def clamp(self, total: int) -> "DebugRange":
        """Clamp both bounds into ``[1, total]``, swapping them if reversed."""
        if total < 1:
            return DebugRange(start=1, end=0)
        start = _bound(self.start)
        end = _bound(self.end)
        start = min(max(1 if start is None else start, 1), total)
        end = min(max(total if end is None else end, 1), total)
        if start > end:
            start, end = end, start
        return DebugRange(start=start, end=end)

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {"start": self.start, "end": self.end}


DebugOutputLimit = Union[int, DebugRange]


def normalize_debug_output_limit(value: Any) -> DebugOutputLimit:
    """
    Coerce a user-supplied limit into an int or a DebugRange.

    Never raises: unusable input falls back to the default chunk count.
    """
    if value is None:
        return DEFAULT_DEBUG_OUTPUT_LIMIT
    if isinstance(value, DebugRange):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return value if value > 0 else DEFAULT_DEBUG_OUTPUT_LIMIT
    if isinstance(value, dict):
        return DebugRange(start=_bound(value.get("start")), end=_bound(value.get("end")))
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return DebugRange(start=_bound(value[0]), end=_bound(value[1]))
    logger.debug("Unusable debug_output_limit %r; showing the first %d chunks", value, DEFAULT_DEBUG_OUTPUT_LIMIT)
    return DEFAULT_DEBUG_OUTPUT_LIMIT


def _flag(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be true or false, got {value!r}")
    return value


@dataclass(frozen=True)
class RewriteOptions:
    """Options for one rewrite call."""

    separator: str = DEFAULT_SEPARATOR
    encoding: str = DEFAULT_ENCODING
    remove_empty: bool = False
    debug: bool = False
    debug_output_limit: DebugOutputLimit = DEFAULT_DEBUG_OUTPUT_LIMIT
    invert: bool = False
    preserve_inverted_order: bool = False

    def __post_init__(self):
        if not isinstance(self.separator, str) or self.separator == "":
            raise ValueError("separator must be a non-empty string")
        if not self.encoding:
            object.__setattr__(self, "encoding", DEFAULT_ENCODING)
        object.__setattr__(
            self, "debug_output_limit", normalize_debug_output_limit(self.debug_output_limit)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert options to a dictionary for serialization."""
        limit = self.debug_output_limit
        return {
            "separator": self.separator,
            "encoding": self.encoding,
            "remove_empty": self.remove_empty,
            "debug": self.debug,
            "debug_output_limit": limit.to_dict() if isinstance(limit, DebugRange) else limit,
            "invert": self.invert,
            "preserve_inverted_order": self.preserve_inverted_order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RewriteOptions":
        """Create options from a dictionary, ignoring unknown keys.

        Raises:
            TypeError: If a flag is not a boolean.
        """
        return cls(
            separator=data.get("separator", DEFAULT_SEPARATOR),
            encoding=data.get("encoding", DEFAULT_ENCODING),
            remove_empty=_flag(data, "remove_empty"),
            debug=_flag(data, "debug"),
            debug_output_limit=data.get("debug_output_limit", DEFAULT_DEBUG_OUTPUT_LIMIT),
            invert=_flag(data, "invert"),
            preserve_inverted_order=_flag(data, "preserve_inverted_order"),
        )
