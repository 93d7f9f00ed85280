"""File handling for rwfs."""

import logging
import yaml
from pathlib import Path
from typing import Any, Union

from ..core.options import DEFAULT_ENCODING

logger = logging.getLogger(__name__)


class FileHandler:
    """Reads and writes whole text files."""

    def read_text(self, file_path: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> str:
        """Read the full content of a text file."""
        path = Path(file_path)
        try:
            # newline="" keeps \r\n intact so unchanged chunks round-trip byte for byte
            with path.open("r", encoding=encoding, newline="") as f:
                return f.read()
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise

    def write_text(
        self,
        file_path: Union[str, Path],
        content: str,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        """
        Replace the content of a text file.

        The content is encoded before the file is opened, so an encoding
        error leaves the existing file untouched.
        """
        path = Path(file_path)
        try:
            data = content.encode(encoding)
            path.write_bytes(data)
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to write {path}: {e}")
            raise

    def read_yaml(self, file_path: Union[str, Path]) -> Any:
        """Read YAML file."""
        path = Path(file_path)
        with path.open('r', encoding='utf-8') as f:
            return yaml.safe_load(f)
