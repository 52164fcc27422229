"""
Shared pytest fixtures: small on-disk ICDAR style datasets.
"""

from pathlib import Path
from typing import Callable, Iterable, Optional

import numpy as np
import pytest
from PIL import Image as PILImage

from icdar_reader.layouts import DatasetLayout, SplitLayout
from icdar_reader.parsers import Delimiter


def gradient(width: int, height: int, seed: int = 0) -> np.ndarray:
    """Deterministic (height, width, 3) uint8 test pattern."""
    rows = np.arange(height, dtype=np.uint16)[:, None]
    cols = np.arange(width, dtype=np.uint16)[None, :]
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :, 0] = (rows * 7 + seed) % 256
    img[:, :, 1] = (cols * 13 + seed) % 256
    img[:, :, 2] = (rows + cols + seed * 3) % 256
    return img


def write_png(path: Path, array: np.ndarray) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    PILImage.fromarray(array).save(path)
    return path


def annotation_line(index: int, delimiter: Delimiter) -> str:
    sep = delimiter.value
    if delimiter is Delimiter.COMMA:
        # Test split style: comma followed by a space
        sep = ", "
    return sep.join(str(v) for v in (index, index + 1, index + 10, index + 20)) + f'{sep}"w{index}"'


PNG_LAYOUT = DatasetLayout(
    name="png_test",
    train=SplitLayout(
        image_prefix="",
        label_prefix="gt_",
        first_index=1,
        last_index=10,
        delimiter=Delimiter.SPACE,
        image_ext="png",
    ),
    test=SplitLayout(
        image_prefix="img_",
        label_prefix="gt_img_",
        first_index=1,
        last_index=10,
        delimiter=Delimiter.COMMA,
        image_ext="png",
    ),
)


@pytest.fixture
def png_layout() -> DatasetLayout:
    return PNG_LAYOUT


@pytest.fixture
def make_split() -> Callable[..., Path]:
    """Populate a directory with numbered images and annotation files."""

    def _make(
        directory: Path,
        split: SplitLayout,
        image_indices: Iterable[int],
        label_indices: Optional[Iterable[int]] = None,
        size: tuple = (6, 4),
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        image_indices = list(image_indices)
        if label_indices is None:
            label_indices = image_indices

        width, height = size
        for index in image_indices:
            write_png(directory / split.image_name(index), gradient(width, height, seed=index))

        for index in label_indices:
            lines = [annotation_line(index, split.delimiter), annotation_line(index + 100, split.delimiter)]
            (directory / split.label_name(index)).write_text("\n".join(lines) + "\n")

        return directory

    return _make
