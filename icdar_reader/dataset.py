"""
Dataset assembly: reads numbered image/label pairs of each split into memory.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from tqdm import tqdm

from .errors import OpenFailed
from .image_decoder import Image, ImageDecoder
from .layouts import ICDAR2013, DatasetLayout, SplitLayout, get_layout, get_available_layouts
from .parsers import BaseParser, Label, get_parser

logger = logging.getLogger("icdar_reader.dataset")

Sample = Tuple[Label, Image]


@dataclass
class Dataset:
    """Training and test images with their labels, aligned by position."""
    training_images: List[Image] = field(default_factory=list)
    training_labels: List[Label] = field(default_factory=list)
    test_images: List[Image] = field(default_factory=list)
    test_labels: List[Label] = field(default_factory=list)

    @property
    def training_size(self) -> int:
        return len(self.training_images)

    @property
    def test_size(self) -> int:
        return len(self.test_images)

    def resize_training(self, new_size: int) -> None:
        """Drop training samples beyond new_size. Never grows the split."""
        _truncate(self.training_images, self.training_labels, new_size)

    def resize_test(self, new_size: int) -> None:
        """Drop test samples beyond new_size. Never grows the split."""
        _truncate(self.test_images, self.test_labels, new_size)

    def summary(self) -> Dict[str, int]:
        return {
            "training_images": len(self.training_images),
            "training_rectangles": sum(len(l) for l in self.training_labels),
            "test_images": len(self.test_images),
            "test_rectangles": sum(len(l) for l in self.test_labels),
        }


def _truncate(images: List[Image], labels: List[Label], new_size: int) -> None:
    if new_size < 0:
        raise ValueError(f"Size must be >= 0, got {new_size}")
    if len(images) > new_size:
        del images[new_size:]
        del labels[new_size:]


class DatasetAssembler:
    """Builds a Dataset from a training and a test directory."""

    def __init__(
        self,
        layout: DatasetLayout = ICDAR2013,
        decoder: Optional[ImageDecoder] = None,
        workers: int = 1,
        show_progress: bool = False,
    ):
        """
        Initialize dataset assembler.

        Args:
            layout: File naming conventions for both splits
            decoder: Image decoder (default: opencv backend)
            workers: Number of threads decoding samples of a split
            show_progress: Show a progress bar per split
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.layout = layout
        self.decoder = decoder or ImageDecoder()
        self.workers = workers
        self.show_progress = show_progress

    def assemble(
        self,
        training_dir: Union[str, Path],
        test_dir: Union[str, Path],
        training_limit: int = 0,
        test_limit: int = 0,
    ) -> Dataset:
        """
        Read both splits.

        Args:
            training_dir: Directory with training images and labels
            test_dir: Directory with test images and labels
            training_limit: Max training samples, 0 for the full range
            test_limit: Max test samples, 0 for the full range

        Returns:
            Dataset with aligned images and labels
        """
        dataset = Dataset()

        dataset.training_images, dataset.training_labels = self.load_split(
            training_dir, self.layout.train, training_limit, name="training"
        )
        dataset.test_images, dataset.test_labels = self.load_split(
            test_dir, self.layout.test, test_limit, name="test"
        )

        logger.info(
            f"Loaded {self.layout.name}: {dataset.training_size} training, "
            f"{dataset.test_size} test samples"
        )
        return dataset

    def load_split(
        self,
        directory: Union[str, Path],
        split: SplitLayout,
        limit: int = 0,
        name: str = "split",
    ) -> Tuple[List[Image], List[Label]]:
        """
        Read the samples of one split in ascending index order.

        Reading stops at the first missing label or image file, so a
        directory with fewer files than the configured range yields a
        shorter split. Corrupt files raise.
        """
        directory = Path(directory)
        parser = get_parser(split.parser_type)(delimiter=split.delimiter)
        indices = split.indices(limit)

        images: List[Image] = []
        labels: List[Label] = []

        samples = tqdm(
            self._iter_samples(directory, split, parser, indices),
            total=len(indices),
            desc=f"Loading {name}",
            disable=not self.show_progress,
        )
        try:
            for label, image in samples:
                labels.append(label)
                images.append(image)
        except OpenFailed as e:
            logger.info(f"Stopping {name} split after {len(images)} samples: {e}")
        finally:
            samples.close()

        logger.info(f"Read {len(images)}/{len(indices)} {name} samples from {directory}")
        return images, labels

    def _iter_samples(
        self,
        directory: Path,
        split: SplitLayout,
        parser: BaseParser,
        indices: range,
    ) -> Iterator[Sample]:
        def load(index: int) -> Sample:
            return self._load_sample(directory, split, parser, index)

        if self.workers == 1:
            for index in indices:
                yield load(index)
            return

        # map() yields in submission order and re-raises on the failing item
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            results = executor.map(load, indices)
            try:
                yield from results
            finally:
                executor.shutdown(wait=True, cancel_futures=True)

    def _load_sample(
        self,
        directory: Path,
        split: SplitLayout,
        parser: BaseParser,
        index: int,
    ) -> Sample:
        label_path = directory / split.label_name(index)
        image_path = directory / split.image_name(index)

        label = parser.parse_file(label_path)
        image = self.decoder.decode(image_path)

        logger.debug(
            f"Read {image_path.name} ({image.width}x{image.height}, "
            f"{len(label)} rectangles)"
        )
        return label, image


def read_dataset(
    training_dir: Union[str, Path],
    test_dir: Union[str, Path],
    layout: Union[str, DatasetLayout] = "icdar2013",
    training_limit: int = 0,
    test_limit: int = 0,
    **kwargs,
) -> Dataset:
    """
    Read a dataset with a named or explicit layout.

    Extra keyword arguments are passed to DatasetAssembler.
    """
    if isinstance(layout, str):
        name = layout
        layout = get_layout(name)
        if layout is None:
            raise ValueError(f"Unknown layout: {name}. Available: {get_available_layouts()}")

    assembler = DatasetAssembler(layout=layout, **kwargs)
    return assembler.assemble(training_dir, test_dir, training_limit, test_limit)


def read_2013_dataset(
    training_dir: Union[str, Path],
    test_dir: Union[str, Path],
    training_limit: int = 0,
    test_limit: int = 0,
    **kwargs,
) -> Dataset:
    """Read the ICDAR 2013 focused scene text dataset."""
    return read_dataset(
        training_dir, test_dir, ICDAR2013, training_limit, test_limit, **kwargs
    )

