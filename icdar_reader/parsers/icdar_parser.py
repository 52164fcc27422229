"""
ICDAR Rectangle Annotation Parser

Parses ICDAR 2013 style box annotations, one box per line:
    left top right bottom "transcription"      (training, space separated)
    left, top, right, bottom, "transcription"  (test, comma separated)

The transcription starts one character after the fourth separator.
"""

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Union

from ..errors import LabelOpenFailed, LabelParseFailed
from .base import BaseParser, Label, Rectangle

logger = logging.getLogger("icdar_reader.parsers")

NUM_COORDS = 4

# ASCII digits only, no "_", "+" or Unicode digits
COORD_RE = re.compile(r"-?[0-9]+")


class Delimiter(str, Enum):
    COMMA = ","
    SPACE = " "

    @classmethod
    def parse(cls, value: Union[str, "Delimiter"]) -> "Delimiter":
        """Accept a Delimiter, its character, or its name ("comma"/"space")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[str(value).upper()]
        except KeyError:
            raise ValueError(
                f"Unknown delimiter: {value!r}. Available: {[d.name.lower() for d in cls]}"
            ) from None


class ICDARRectParser(BaseParser):
    """Parser for ICDAR left/top/right/bottom + text annotations."""

    def __init__(
        self,
        delimiter: Union[str, Delimiter] = Delimiter.SPACE,
        encoding: str = "utf-8-sig",
    ):
        """
        Initialize ICDAR rectangle parser.

        Args:
            delimiter: Field separator, comma or space (default: space)
            encoding: File encoding (default: "utf-8-sig" for BOM handling)
        """
        self.delimiter = Delimiter.parse(delimiter)
        self.encoding = encoding

    def parse_file(self, ann_path: Path) -> Label:
        """
        Parse ICDAR annotation file.

        Args:
            ann_path: Path to annotation file

        Returns:
            Label with one Rectangle per non-empty line

        Raises:
            LabelOpenFailed: The file cannot be opened
            LabelParseFailed: A line is malformed or the file is not valid text
        """
        ann_path = Path(ann_path)
        label = Label()

        try:
            f = open(ann_path, "r", encoding=self.encoding, newline="")
        except OSError as e:
            logger.debug(f"Cannot open {ann_path}: {e}")
            raise LabelOpenFailed(ann_path) from e

        with f:
            try:
                for line_num, line in enumerate(f, 1):
                    line = line.rstrip("\r\n")
                    if not line.strip():
                        continue
                    label.rectangles.append(self._parse_line(ann_path, line_num, line))
            except UnicodeDecodeError as e:
                raise LabelParseFailed(ann_path, f"invalid {self.encoding} text") from e

        return label

    def _parse_line(self, ann_path: Path, line_num: int, line: str) -> Rectangle:
        """Parse a single annotation line."""
        sep = self.delimiter.value
        parts = line.split(sep, NUM_COORDS)

        if len(parts) <= NUM_COORDS:
            raise LabelParseFailed(
                ann_path,
                f"expected {NUM_COORDS} {self.delimiter.name.lower()}-separated "
                f"coordinates followed by text",
                line_num,
                line,
            )

        coords = []
        for raw in parts[:NUM_COORDS]:
            if not COORD_RE.fullmatch(raw.strip()):
                raise LabelParseFailed(
                    ann_path, f"invalid coordinate {raw!r}", line_num, line
                )
            value = int(raw.strip(), 10)
            if value < 0:
                raise LabelParseFailed(
                    ann_path, f"negative coordinate {raw!r}", line_num, line
                )
            coords.append(value)

        # Skips the opening quote (or first character) of the text field
        text = parts[NUM_COORDS][1:]

        left, top, right, bottom = coords
        return Rectangle(left=left, top=top, right=right, bottom=bottom, text=text)
