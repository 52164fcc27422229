"""
Reader Errors

Exceptions raised while ingesting ICDAR images and annotation files.

Missing files (``*OpenFailed``) mark the end of a split. Corrupt files
(``ImageDecodeFailed``, ``LabelParseFailed``) are fatal for the whole
assembly.
"""

from pathlib import Path
from typing import Optional, Union


class ICDARReaderError(Exception):
    """Base class for all reader errors."""

    def __init__(self, path: Union[str, Path], message: str):
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")


class OpenFailed(ICDARReaderError):
    """A dataset file could not be opened."""


class ImageOpenFailed(OpenFailed):
    def __init__(self, path: Union[str, Path]):
        super().__init__(path, "Failed to open image")


class LabelOpenFailed(OpenFailed):
    def __init__(self, path: Union[str, Path]):
        super().__init__(path, "Failed to open label file")


class ImageDecodeFailed(ICDARReaderError):
    def __init__(self, path: Union[str, Path], reason: str = ""):
        message = "Failed to decode image"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(path, message)


class LabelParseFailed(ICDARReaderError):
    """An annotation file is present but malformed."""

    def __init__(
        self,
        path: Union[str, Path],
        reason: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ):
        self.reason = reason
        self.line_number = line_number
        self.line = line

        message = f"Failed to parse label file ({reason})"
        if line_number is not None:
            message = f"{message} at line {line_number}: {line!r}"
        super().__init__(path, message)
