"""
Annotation Parsers

Format-specific parsers for reading text detection annotations.
"""

from .base import BaseParser, Label, Rectangle
from .icdar_parser import Delimiter, ICDARRectParser

__all__ = [
    "BaseParser",
    "Label",
    "Rectangle",
    "Delimiter",
    "ICDARRectParser",
]

# Parser registry
PARSERS = {
    "icdar_rect": ICDARRectParser,
}


def get_parser(parser_type: str) -> type:
    """Get parser class by type name."""
    if parser_type not in PARSERS:
        raise ValueError(f"Unknown parser type: {parser_type}. Available: {list(PARSERS.keys())}")
    return PARSERS[parser_type]
