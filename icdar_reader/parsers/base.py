"""
Base Parser

Abstract base class for annotation parsers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Tuple


@dataclass
class Rectangle:
    """A single axis-aligned text box with its transcription."""
    left: int
    top: int
    right: int
    bottom: int
    text: str

    @property
    def bbox(self) -> Tuple[int, int, int, int]:
        """Box as (left, top, right, bottom)."""
        return self.left, self.top, self.right, self.bottom


@dataclass
class Label:
    """All text boxes of one image, in annotation file order."""
    rectangles: List[Rectangle] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rectangles)

    def __iter__(self) -> Iterator[Rectangle]:
        return iter(self.rectangles)

    def __getitem__(self, index: int) -> Rectangle:
        return self.rectangles[index]


class BaseParser(ABC):
    """Abstract base class for annotation parsers."""

    @abstractmethod
    def parse_file(self, ann_path: Path) -> Label:
        """
        Parse a single annotation file.

        Args:
            ann_path: Path to annotation file

        Returns:
            Label with one Rectangle per annotated region
        """
        pass

    def parse_files(self, ann_paths: List[Path]) -> List[Label]:
        """
        Parse multiple annotation files.

        Args:
            ann_paths: List of annotation file paths

        Returns:
            List of Label objects, in the same order
        """
        return [self.parse_file(p) for p in ann_paths]
