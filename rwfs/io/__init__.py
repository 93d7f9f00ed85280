"""File I/O and rule file loading."""

from .file_handler import FileHandler
from .rule_loader import RuleLoader, RuleFileError

__all__ = [
    "FileHandler",
    "RuleLoader",
    "RuleFileError",
]
