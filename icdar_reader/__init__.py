"""
ICDAR text detection dataset reader.

Loads paired photographs and ground-truth box annotations into memory:
1. Decode compressed images into flat RGB pixel buffers
2. Parse per-image annotation files into rectangle + text records
3. Assemble both into aligned, size-capped training and test splits
"""

from .dataset import Dataset, DatasetAssembler, read_2013_dataset, read_dataset
from .errors import (
    ICDARReaderError,
    ImageDecodeFailed,
    ImageOpenFailed,
    LabelOpenFailed,
    LabelParseFailed,
)
from .image_decoder import Image, ImageDecoder, PixelRGB, decode_image
from .layouts import (
    ICDAR2013,
    LAYOUTS,
    DatasetLayout,
    SplitLayout,
    get_available_layouts,
    get_layout,
)
from .parsers import Delimiter, ICDARRectParser, Label, Rectangle

__version__ = "1.0.0"

__all__ = [
    "Dataset",
    "DatasetAssembler",
    "read_dataset",
    "read_2013_dataset",
    "ICDARReaderError",
    "ImageOpenFailed",
    "ImageDecodeFailed",
    "LabelOpenFailed",
    "LabelParseFailed",
    "Image",
    "ImageDecoder",
    "PixelRGB",
    "decode_image",
    "ICDAR2013",
    "LAYOUTS",
    "DatasetLayout",
    "SplitLayout",
    "get_available_layouts",
    "get_layout",
    "Delimiter",
    "ICDARRectParser",
    "Label",
    "Rectangle",
]
